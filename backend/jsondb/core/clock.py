"""
Timestamp helpers.
"""
from datetime import datetime, timezone


def now_ms() -> int:
    """Current time as integer milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
