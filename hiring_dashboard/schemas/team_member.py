"""
TeamMember Pydantic schemas.
"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr

from hiring_dashboard.schemas.base import CompanyScopedRead


class TeamMemberCreate(BaseModel):
    """Invite an already registered user into the current company."""

    email: EmailStr
    role: Literal["admin", "member"] = "member"


class TeamMemberRead(CompanyScopedRead):
    """Schema for reading team member data."""

    user_id: UUID
    role: str
    email: Optional[str] = None
