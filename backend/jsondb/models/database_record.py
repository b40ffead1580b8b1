"""
Catalog record model.
"""
from pydantic import BaseModel, Field


class DatabaseRecord(BaseModel):
    """
    One registered JSON database, stored in the catalog collection.
    """
    name: str = Field(..., min_length=1, description="Database name, unique in the catalog")
    created: int = Field(..., description="Registration time in ms since epoch")
