"""
Document model.

Metadata for a file uploaded against a candidate. The bytes live in the
blob store under storage_path.
"""

import uuid

from sqlalchemy import BigInteger, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import AppendOnlyModel


class Document(AppendOnlyModel):
    """
    Document table - one row per stored blob.

    A row exists exactly as long as its blob does: attach uploads before
    inserting, remove deletes the blob before the row.
    """

    __tablename__ = "documents"

    candidate_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("candidates.id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    mime_type: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    storage_path: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        unique=True,
    )

    size_bytes: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
    )

    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
    )
