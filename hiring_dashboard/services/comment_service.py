"""
Candidate comment service.
"""

from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_member
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.comment_repository import CommentRepository
from hiring_dashboard.repositories.user_repository import UserRepository
from hiring_dashboard.schemas.comment import CommentRead


class CommentService:
    """Service for comments on candidates."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CommentRepository(db)
        self.candidate_repo = CandidateRepository(db)
        self.user_repo = UserRepository(db)

    async def _require_candidate(self, company_id: UUID, candidate_id: UUID) -> None:
        if not await self.candidate_repo.get_by_id(company_id, candidate_id):
            raise NotFoundError("Candidate not found")

    async def list_comments(self, ctx: SessionContext, candidate_id: UUID) -> List[CommentRead]:
        """Comments on a candidate, newest first, with author emails."""
        company_id = ctx.scope()
        await self._require_candidate(company_id, candidate_id)
        rows = await self.repo.list_with_author(company_id, candidate_id)
        return [
            CommentRead.model_validate(comment).model_copy(update={"author_email": email})
            for comment, email in rows
        ]

    async def add_comment(self, ctx: SessionContext, candidate_id: UUID, content: str) -> CommentRead:
        company_id = require_company_member(ctx, action="comment on candidates")
        content = (content or "").strip()
        if not content:
            raise ValidationError("Comment cannot be empty")
        await self._require_candidate(company_id, candidate_id)

        async with atomic(self.db, "add comment"):
            comment = await self.repo.create(company_id, candidate_id, content, ctx.user_id)

        author = await self.user_repo.get_by_id(ctx.user_id)
        return CommentRead.model_validate(comment).model_copy(
            update={"author_email": author.email if author else None}
        )
