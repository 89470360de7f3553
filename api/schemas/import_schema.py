"""
Import-related Pydantic schemas.

This module contains schemas for employee file import responses.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ImportResultResponse(BaseModel):
    """Result of a completed import."""

    imported: int = Field(..., description="Number of employees inserted")
    filename: Optional[str] = Field(None, description="Uploaded filename")
    message: str = Field(..., description="Human-readable summary")

    class Config:
        json_schema_extra = {
            "example": {
                "imported": 42,
                "filename": "personnel_records.csv",
                "message": "42 records imported successfully!"
            }
        }
