"""
Explicit per-request session context.

Every store operation receives a SessionContext instead of reading the
current company from navigation state.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional
from uuid import UUID

from hiring_dashboard.errors import AuthorizationError


@dataclass(frozen=True)
class SessionContext:
    """
    Who is acting and which companies they may act on.

    Attributes:
        user_id: Authenticated user
        authorized_company_ids: Companies selectable for this user
        selected_company_id: Company operations default to
        roles: Membership role per company the user belongs to
        is_admin: True if the user holds an admin row in any company
    """

    user_id: UUID
    authorized_company_ids: FrozenSet[UUID]
    selected_company_id: Optional[UUID] = None
    roles: Dict[UUID, str] = field(default_factory=dict)
    is_admin: bool = False

    def scope(self, company_id: Optional[UUID] = None) -> UUID:
        """
        Resolve the company an operation acts on.

        Raises:
            AuthorizationError: nothing selected, or the company is not
                selectable for this user
        """
        target = company_id or self.selected_company_id
        if target is None:
            raise AuthorizationError("No company selected")
        if target not in self.authorized_company_ids:
            raise AuthorizationError("You do not have access to this company")
        return target

    def role_for(self, company_id: UUID) -> Optional[str]:
        """
        Membership role in a company.

        None for companies the user only sees as an admin elsewhere; those
        are read only.
        """
        return self.roles.get(company_id)
