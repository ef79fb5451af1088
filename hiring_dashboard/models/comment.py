"""
Comment model.
"""

import uuid

from sqlalchemy import ForeignKey, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import AppendOnlyModel


class Comment(AppendOnlyModel):
    """
    Comment table - a free-text note on one candidate.

    Comments are immutable once posted.
    """

    __tablename__ = "comments"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("candidates.id"),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_comments_candidate_created", "candidate_id", "created_at"),
    )
