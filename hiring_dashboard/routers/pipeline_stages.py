"""
Pipeline stages router - configuring a company's hiring pipeline.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.pipeline_stage import (
    PipelineStageCreate,
    PipelineStageRead,
    PipelineStageRename,
    PipelineStageReorder,
    StageDeletionResult,
)
from hiring_dashboard.services.pipeline_service import PipelineService

router = APIRouter(prefix="/api/pipeline-stages", tags=["pipeline-stages"])


@router.get("", response_model=List[PipelineStageRead])
async def list_stages(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Stages in pipeline order."""
    return await PipelineService(db).list_stages(ctx)


@router.post("", response_model=PipelineStageRead, status_code=status.HTTP_201_CREATED)
async def add_stage(
    payload: PipelineStageCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await PipelineService(db).add_stage(ctx, payload.name)


@router.put("/order", response_model=List[PipelineStageRead])
async def reorder_stages(
    payload: PipelineStageReorder,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Replace the pipeline order. Must list every stage exactly once."""
    return await PipelineService(db).reorder_stages(ctx, payload.stage_ids)


@router.put("/{stage_id}", response_model=PipelineStageRead)
async def rename_stage(
    stage_id: UUID,
    payload: PipelineStageRename,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await PipelineService(db).rename_stage(ctx, stage_id, payload.name)


@router.delete("/{stage_id}", response_model=StageDeletionResult)
async def delete_stage(
    stage_id: UUID,
    force: bool = Query(False),
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a stage.

    Returns 409 while candidates are in the stage, unless force=true or
    the server runs the detach policy.
    """
    return await PipelineService(db).delete_stage(ctx, stage_id, force=force)
