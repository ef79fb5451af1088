"""
Comment Pydantic schemas.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from hiring_dashboard.schemas.base import AppendOnlyRead


class CommentCreate(BaseModel):
    content: str


class CommentRead(AppendOnlyRead):
    """Comment with the author's email for display."""

    candidate_id: UUID
    content: str
    created_by: UUID
    author_email: Optional[str] = None
