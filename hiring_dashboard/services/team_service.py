"""
Team membership service.
"""

import logging
from typing import List, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_admin
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.models.team_member import TeamMember, TeamRoles
from hiring_dashboard.repositories.team_member_repository import TeamMemberRepository
from hiring_dashboard.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Service for managing who belongs to a company."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = TeamMemberRepository(db)
        self.user_repo = UserRepository(db)

    async def list_members(self, ctx: SessionContext) -> List[Tuple[TeamMember, str]]:
        """Members of the selected company with their emails."""
        return await self.repo.list_with_email(ctx.scope())

    async def add_member(
        self,
        ctx: SessionContext,
        email: str,
        role: str = TeamRoles.MEMBER,
    ) -> Tuple[TeamMember, str]:
        """
        Add an already registered user to the company. Admin only.

        Raises:
            AuthorizationError: caller is not an admin
            NotFoundError: no user with that email
            ValidationError: bad role or the user is already a member
        """
        company_id = require_company_admin(ctx, action="manage team members")
        if role not in TeamRoles.ALL:
            raise ValidationError(f"Invalid role: {role}")

        user = await self.user_repo.get_by_email(email)
        if not user:
            raise NotFoundError("User not found. Please ensure they have registered first.")
        if await self.repo.get_by_user(company_id, user.id):
            raise ValidationError("User is already a member of this company")

        async with atomic(self.db, "add team member"):
            member = await self.repo.create(company_id, user.id, role)

        logger.info("Added user %s to company %s as %s", user.id, company_id, role)
        return member, user.email

    async def remove_member(self, ctx: SessionContext, member_id: UUID) -> None:
        """
        Remove a membership. Admin only; the last admin cannot be removed.
        """
        company_id = require_company_admin(ctx, action="manage team members")
        member = await self.repo.get_by_id(company_id, member_id)
        if not member:
            raise NotFoundError("Team member not found")
        if member.role == TeamRoles.ADMIN and await self.repo.count_admins(company_id) <= 1:
            raise ValidationError("Cannot remove the last admin of a company")

        async with atomic(self.db, "remove team member"):
            await self.repo.delete(member)

        logger.info("Removed team member %s from company %s", member_id, company_id)
