"""
Company selection.

Decides which companies a user may switch between and builds the
SessionContext every store operation receives.
"""

from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.errors import AuthorizationError
from hiring_dashboard.models.company import Company
from hiring_dashboard.models.team_member import TeamRoles
from hiring_dashboard.repositories.company_repository import CompanyRepository
from hiring_dashboard.repositories.team_member_repository import TeamMemberRepository


class CompanySelectionService:
    """Service resolving the selectable companies and the session context."""

    def __init__(self, db: AsyncSession):
        self.company_repo = CompanyRepository(db)
        self.member_repo = TeamMemberRepository(db)

    async def _roles(self, user_id: UUID) -> Dict[UUID, str]:
        memberships = await self.member_repo.list_for_user(user_id)
        return {member.company_id: member.role for member in memberships}

    async def _selectable(self, roles: Dict[UUID, str]) -> List[Company]:
        # An admin row anywhere exposes every company
        if TeamRoles.ADMIN in roles.values():
            return await self.company_repo.list_all()
        return await self.company_repo.list_by_ids(list(roles.keys()))

    async def list_selectable_companies(self, user_id: UUID) -> List[Company]:
        """Companies the user may select, sorted by name."""
        return await self._selectable(await self._roles(user_id))

    async def resolve_session(
        self,
        user_id: UUID,
        requested_company_id: Optional[UUID] = None,
    ) -> SessionContext:
        """
        Build the session context for a user.

        Args:
            user_id: Authenticated user
            requested_company_id: Company the client asked for, if any

        Returns:
            SessionContext with the requested company selected, or the
            first selectable company when none was requested

        Raises:
            AuthorizationError: if the requested company is not selectable
        """
        roles = await self._roles(user_id)
        companies = await self._selectable(roles)
        company_ids = [company.id for company in companies]

        if requested_company_id is not None:
            if requested_company_id not in company_ids:
                raise AuthorizationError("You do not have access to this company")
            selected = requested_company_id
        else:
            selected = company_ids[0] if company_ids else None

        return SessionContext(
            user_id=user_id,
            authorized_company_ids=frozenset(company_ids),
            selected_company_id=selected,
            roles=roles,
            is_admin=TeamRoles.ADMIN in roles.values(),
        )
