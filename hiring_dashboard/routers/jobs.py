"""
Job router - API endpoints for job postings.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.job import JobCreate, JobRead, JobUpdate
from hiring_dashboard.services.job_service import JobService

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=List[JobRead])
async def list_jobs(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    status: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """
    List jobs with pagination, newest first.

    Filters: status.
    """
    return await JobService(db).list_jobs(ctx, status=status, limit=limit, offset=offset)


@router.get("/published", response_model=List[JobRead])
async def list_published_jobs(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await JobService(db).list_published_jobs(ctx)


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await JobService(db).create_job(ctx, payload)


@router.get("/{job_id}", response_model=JobRead)
async def get_job(
    job_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await JobService(db).get_job(ctx, job_id)


@router.put("/{job_id}", response_model=JobRead)
async def update_job(
    job_id: UUID,
    payload: JobUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await JobService(db).update_job(ctx, job_id, payload)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Delete a job. Rejected while candidates still apply to it."""
    await JobService(db).delete_job(ctx, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
