"""
Comment repository - database operations for Comment.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.comment import Comment
from hiring_dashboard.models.user import User
from hiring_dashboard.utils.time import utc_now


class CommentRepository:
    """Repository for Comment database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_with_author(
        self,
        company_id: UUID,
        candidate_id: UUID,
    ) -> List[Tuple[Comment, Optional[str]]]:
        """Comments on a candidate with the author's email, newest first."""
        result = await self.db.execute(
            select(Comment, User.email)
            .outerjoin(User, User.id == Comment.created_by)
            .where(
                Comment.company_id == company_id,
                Comment.candidate_id == candidate_id,
            )
            .order_by(Comment.created_at.desc())
        )
        return [(comment, email) for comment, email in result.all()]

    async def create(
        self,
        company_id: UUID,
        candidate_id: UUID,
        content: str,
        created_by: UUID,
    ) -> Comment:
        comment = Comment(
            company_id=company_id,
            candidate_id=candidate_id,
            content=content,
            created_by=created_by,
            created_at=utc_now(),
        )
        self.db.add(comment)
        await self.db.flush()
        return comment
