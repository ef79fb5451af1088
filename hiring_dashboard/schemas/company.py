"""
Company Pydantic schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CompanyRead(BaseModel):
    """Schema for reading company data."""

    id: UUID
    name: str
    settings: Dict[str, Any] = Field(default_factory=dict)
    subscription_status: str
    subscription_ends_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompanyUpdate(BaseModel):
    """Schema for updating company settings. Only admins may apply it."""

    name: Optional[str] = Field(default=None, max_length=255)
    settings: Optional[Dict[str, Any]] = None
