"""
Dashboard router.
"""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.dashboard import ActivityItem, DashboardStats
from hiring_dashboard.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await DashboardService(db).get_stats(ctx)


@router.get("/activity", response_model=List[ActivityItem])
async def get_activity(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    per_source: int = Query(5, ge=1, le=50),
    limit: int = Query(10, ge=1, le=100),
):
    return await DashboardService(db).get_recent_activity(ctx, per_source=per_source, limit=limit)
