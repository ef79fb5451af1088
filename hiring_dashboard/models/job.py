"""
Job model.

A job posting candidates apply to.
"""

import uuid
from typing import Optional

from sqlalchemy import JSON, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import CompanyScopedModel


class JobStatus:
    """Lifecycle of a job posting."""
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"

    ALL = [DRAFT, PUBLISHED, CLOSED]


class Job(CompanyScopedModel):
    """
    Job table - a posting with a draft/published/closed lifecycle.

    Only published jobs can be picked as a new candidate's target job.
    """

    __tablename__ = "jobs"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    requirements: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    location: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=JobStatus.DRAFT,
        index=True,
    )

    # {"min": 90000, "max": 120000, "currency": "EUR"}, every key optional
    salary_range: Mapped[Optional[dict]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=True,
    )
