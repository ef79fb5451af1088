"""
Role-based permission helpers.

Company settings, pipeline configuration and team management are admin
only; other writes are open to any member of the company. Companies a
user only sees as an admin elsewhere are read only.
"""

from typing import Optional
from uuid import UUID

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.errors import AuthorizationError
from hiring_dashboard.models.team_member import TeamRoles


def check_is_admin(user_role: Optional[str]) -> bool:
    """Check if role is admin."""
    return user_role == TeamRoles.ADMIN


def require_company_admin(
    ctx: SessionContext,
    company_id: Optional[UUID] = None,
    action: str = "perform this action",
) -> UUID:
    """
    Resolve the scoped company and require the admin role in it.

    Args:
        ctx: Session context of the caller
        company_id: Explicit company, defaults to the selected one
        action: Description of the action being blocked

    Returns:
        The scoped company id

    Raises:
        AuthorizationError: if the caller is not an admin of the company
    """
    scoped = ctx.scope(company_id)
    if not check_is_admin(ctx.role_for(scoped)):
        raise AuthorizationError(f"Only company admins can {action}")
    return scoped


def require_company_member(
    ctx: SessionContext,
    company_id: Optional[UUID] = None,
    action: str = "perform this action",
) -> UUID:
    """
    Resolve the scoped company and require a membership in it.

    Admins of other companies can select and read any company, but only
    members write to it.

    Raises:
        AuthorizationError: if the caller holds no role in the company
    """
    scoped = ctx.scope(company_id)
    if ctx.role_for(scoped) is None:
        raise AuthorizationError(f"Only members of this company can {action}")
    return scoped
