"""
Candidate model.

Represents a person applying to one job, tracked through the pipeline.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import CompanyScopedModel


class CandidateStatus:
    """Overall outcome of a candidate, independent of pipeline stage."""
    ACTIVE = "active"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    ALL = [ACTIVE, HIRED, REJECTED, WITHDRAWN]


class Candidate(CompanyScopedModel):
    """
    Candidate table - an applicant for exactly one job.

    current_stage_id is a denormalized pointer; the full history lives in
    candidate_stages and is only changed through the stage transition
    operation.
    """

    __tablename__ = "candidates"

    job_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("jobs.id"),
        nullable=False,
        index=True,
    )

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    current_stage_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("pipeline_stages.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CandidateStatus.ACTIVE,
        index=True,
    )

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
    )

    # Set on removal; removed candidates are hidden from every query
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
