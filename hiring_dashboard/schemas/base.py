"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class CompanyScopedRead(BaseModel):
    """
    Base schema for reading company-scoped data.

    Includes all the auto-generated fields like id, timestamps, etc.
    """

    id: UUID
    company_id: UUID
    created_at: datetime
    updated_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class AppendOnlyRead(BaseModel):
    """Base schema for rows that are written once (events, comments, documents)."""

    id: UUID
    company_id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
