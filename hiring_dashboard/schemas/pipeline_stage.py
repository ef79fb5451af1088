"""
PipelineStage Pydantic schemas.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel, Field

from hiring_dashboard.schemas.base import CompanyScopedRead


class PipelineStageCreate(BaseModel):
    """Schema for appending a pipeline stage."""

    name: str = Field(..., max_length=100)


class PipelineStageRename(BaseModel):
    """Schema for renaming a pipeline stage."""

    name: str = Field(..., max_length=100)


class PipelineStageReorder(BaseModel):
    """Full new ordering of the company's stage ids."""

    stage_ids: List[UUID]


class PipelineStageRead(CompanyScopedRead):
    """Schema for reading pipeline stage data."""

    name: str
    order_index: int


class StageDeletionResult(BaseModel):
    """Outcome of deleting a stage: which candidates lost their pointer."""

    stage_id: UUID
    affected_candidate_ids: List[UUID] = Field(default_factory=list)
