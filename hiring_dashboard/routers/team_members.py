"""
Team members router.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.team_member import TeamMemberCreate, TeamMemberRead
from hiring_dashboard.services.team_service import TeamService

router = APIRouter(prefix="/api/team-members", tags=["team-members"])


def _to_read(member, email: str) -> TeamMemberRead:
    return TeamMemberRead.model_validate(member).model_copy(update={"email": email})


@router.get("", response_model=List[TeamMemberRead])
async def list_team_members(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    rows = await TeamService(db).list_members(ctx)
    return [_to_read(member, email) for member, email in rows]


@router.post("", response_model=TeamMemberRead, status_code=status.HTTP_201_CREATED)
async def add_team_member(
    payload: TeamMemberCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Add a registered user to the company. Admin only."""
    member, email = await TeamService(db).add_member(ctx, payload.email, payload.role)
    return _to_read(member, email)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_team_member(
    member_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    await TeamService(db).remove_member(ctx, member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
