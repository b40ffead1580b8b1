"""
Row returned by field-sorted queries.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field


class QueryRow(BaseModel):
    """A query hit: the indexed field value, the document id and the document."""
    key: Any = Field(None, description="Value of the queried field")
    id: str = Field(..., description="Document identity")
    doc: Optional[dict[str, Any]] = Field(None, description="Full document when requested")
