"""
Company router - selectable companies and settings of the current one.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_current_user_id, get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.company import CompanyRead, CompanyUpdate
from hiring_dashboard.services.company_selection_service import CompanySelectionService
from hiring_dashboard.services.company_service import CompanyService

router = APIRouter(prefix="/api/companies", tags=["companies"])


@router.get("", response_model=List[CompanyRead])
async def list_companies(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Companies the user can switch to, sorted by name."""
    return await CompanySelectionService(db).list_selectable_companies(user_id)


@router.get("/current", response_model=CompanyRead)
async def get_current_company(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CompanyService(db).get_company(ctx)


@router.put("/current", response_model=CompanyRead)
async def update_current_company(
    payload: CompanyUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Update the selected company's name or settings. Admin only."""
    return await CompanyService(db).update_company(ctx, name=payload.name, settings=payload.settings)
