"""
CandidateStageEvent model.

Append-only audit record of a candidate entering a pipeline stage.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import AppendOnlyModel


class CandidateStageEvent(AppendOnlyModel):
    """
    candidate_stages table - one row per stage transition.

    Rows are never updated or deleted. stage_id is not a foreign key: the
    history outlives deleted stages, and stage_name keeps it readable.
    """

    __tablename__ = "candidate_stages"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("candidates.id"),
        nullable=False,
    )

    stage_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    # Stage the candidate was in before this transition
    from_stage_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
    )

    # 1-based position in the candidate's history; orders events that share
    # a timestamp
    sequence_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )

    stage_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_candidate_stages_candidate_created", "candidate_id", "created_at"),
        Index("ix_candidate_stages_candidate_sequence", "candidate_id", "sequence_number"),
    )
