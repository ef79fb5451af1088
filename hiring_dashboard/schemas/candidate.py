"""
Candidate Pydantic schemas.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from hiring_dashboard.schemas.base import AppendOnlyRead, CompanyScopedRead


CandidateStatusLiteral = Literal["active", "hired", "rejected", "withdrawn"]


class CandidateCreate(BaseModel):
    """
    Schema for creating a candidate.

    current_stage_id defaults to the company's first stage when omitted.
    """

    job_id: UUID
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    current_stage_id: Optional[UUID] = None
    status: CandidateStatusLiteral = "active"


class CandidateUpdate(BaseModel):
    """
    Schema for updating a candidate profile.

    There is no stage field: stage changes go through the transition
    endpoint so every move is recorded.
    """

    job_id: Optional[UUID] = None
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    status: Optional[CandidateStatusLiteral] = None


class CandidateRead(CompanyScopedRead):
    """Schema for reading candidate data."""

    job_id: UUID
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    current_stage_id: Optional[UUID] = None
    status: str
    created_by: Optional[UUID] = None


class CandidateSummary(BaseModel):
    """Candidate joined with its job title and current stage name."""

    candidate: CandidateRead
    job_title: Optional[str] = None
    stage_name: Optional[str] = None


class StageTransitionRequest(BaseModel):
    """Move a candidate to a stage."""

    stage_id: UUID
    notes: Optional[str] = None


class CandidateStageEventRead(AppendOnlyRead):
    """One entry of a candidate's stage history."""

    candidate_id: UUID
    stage_id: UUID
    from_stage_id: Optional[UUID] = None
    stage_name: str
    sequence_number: int
    notes: Optional[str] = None
    created_by: UUID

    model_config = ConfigDict(from_attributes=True)
