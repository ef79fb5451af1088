"""
TeamMember model.

Links a user to a company with a role.
"""

import uuid

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from hiring_dashboard.models.base_model import CompanyScopedModel


class TeamRoles:
    """Membership roles within a company."""
    ADMIN = "admin"
    MEMBER = "member"

    ALL = [ADMIN, MEMBER]


class TeamMember(CompanyScopedModel):
    """
    TeamMember table - one row per (user, company) membership.

    An admin row in any company makes every company selectable for that
    user; a member row only exposes its own company.
    """

    __tablename__ = "team_members"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TeamRoles.MEMBER,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", name="uq_team_members_user_company"),
    )
