"""
TeamMember repository - database operations for TeamMember.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.team_member import TeamMember, TeamRoles
from hiring_dashboard.models.user import User


class TeamMemberRepository:
    """Repository for TeamMember database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_with_email(self, company_id: UUID) -> List[Tuple[TeamMember, str]]:
        """Members of a company with each member's email, oldest first."""
        query = (
            select(TeamMember, User.email)
            .join(User, User.id == TeamMember.user_id)
            .where(TeamMember.company_id == company_id)
            .order_by(TeamMember.created_at.asc())
        )
        result = await self.db.execute(query)
        return [(member, email) for member, email in result.all()]

    async def list_for_user(self, user_id: UUID) -> List[TeamMember]:
        """Every membership row of a user, across companies."""
        result = await self.db.execute(
            select(TeamMember).where(TeamMember.user_id == user_id)
        )
        return list(result.scalars().all())

    async def get_by_id(self, company_id: UUID, member_id: UUID) -> Optional[TeamMember]:
        result = await self.db.execute(
            select(TeamMember).where(
                TeamMember.id == member_id,
                TeamMember.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_by_user(self, company_id: UUID, user_id: UUID) -> Optional[TeamMember]:
        result = await self.db.execute(
            select(TeamMember).where(
                TeamMember.user_id == user_id,
                TeamMember.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def count_admins(self, company_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count(TeamMember.id)).where(
                TeamMember.company_id == company_id,
                TeamMember.role == TeamRoles.ADMIN,
            )
        )
        return result.scalar_one()

    async def create(self, company_id: UUID, user_id: UUID, role: str) -> TeamMember:
        member = TeamMember(company_id=company_id, user_id=user_id, role=role)
        self.db.add(member)
        await self.db.flush()
        await self.db.refresh(member)
        return member

    async def delete(self, member: TeamMember) -> None:
        await self.db.delete(member)
        await self.db.flush()
