"""
Auth and user Pydantic schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hiring_dashboard.schemas.company import CompanyRead


class SignUpRequest(BaseModel):
    """Schema for registering a user together with a new company."""

    email: EmailStr
    password: str
    company_name: str = Field(..., max_length=255)


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str


class UserRead(BaseModel):
    """Schema for reading user data (API response)."""

    id: UUID
    email: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SessionRead(BaseModel):
    """The signed-in user and the companies they can switch between."""

    user: UserRead
    companies: List[CompanyRead]
    selected_company_id: Optional[UUID] = None
    role: Optional[str] = None
    is_admin: bool = False


class LoginResponse(SessionRead):
    """Schema for login/register response."""

    access_token: str
    token_type: str = "bearer"
