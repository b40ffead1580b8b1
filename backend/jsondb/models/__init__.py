"""
Document models stored in MongoDB.
"""
from jsondb.models.database_record import DatabaseRecord
from jsondb.models.query_row import QueryRow

__all__ = ["DatabaseRecord", "QueryRow"]
