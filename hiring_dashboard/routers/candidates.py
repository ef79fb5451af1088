"""
Candidate router - candidates, their stage moves, comments and documents.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_document_store, get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.schemas.candidate import (
    CandidateCreate,
    CandidateRead,
    CandidateStageEventRead,
    CandidateSummary,
    CandidateUpdate,
    StageTransitionRequest,
)
from hiring_dashboard.schemas.comment import CommentCreate, CommentRead
from hiring_dashboard.schemas.document import DocumentRead
from hiring_dashboard.services.candidate_service import CandidateService
from hiring_dashboard.services.comment_service import CommentService
from hiring_dashboard.services.document_service import DocumentService
from hiring_dashboard.storage.blob_store import BlobStore

router = APIRouter(prefix="/api/candidates", tags=["candidates"])


@router.get("", response_model=List[CandidateSummary])
async def list_candidates(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    job_id: Optional[UUID] = None,
    stage_id: Optional[UUID] = None,
    status: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
):
    """
    List candidates with job title and current stage name.

    Filters: job_id, stage_id, status.
    """
    return await CandidateService(db).list_candidates(
        ctx,
        job_id=job_id,
        stage_id=stage_id,
        status=status,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=CandidateRead, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    payload: CandidateCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CandidateService(db).create_candidate(ctx, payload)


@router.get("/{candidate_id}", response_model=CandidateSummary)
async def get_candidate(
    candidate_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CandidateService(db).get_candidate_summary(ctx, candidate_id)


@router.put("/{candidate_id}", response_model=CandidateRead)
async def update_candidate(
    candidate_id: UUID,
    payload: CandidateUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CandidateService(db).update_candidate(ctx, candidate_id, payload)


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_candidate(
    candidate_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    await CandidateService(db).delete_candidate(ctx, candidate_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{candidate_id}/stage", response_model=CandidateRead)
async def move_candidate(
    candidate_id: UUID,
    payload: StageTransitionRequest,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Move a candidate to a stage and record the move in its history."""
    return await CandidateService(db).transition_candidate_stage(
        ctx, candidate_id, payload.stage_id, payload.notes
    )


@router.get("/{candidate_id}/stage-history", response_model=List[CandidateStageEventRead])
async def stage_history(
    candidate_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    """Stage moves of a candidate, oldest first."""
    return await CandidateService(db).get_stage_history(ctx, candidate_id)


@router.get("/{candidate_id}/comments", response_model=List[CommentRead])
async def list_comments(
    candidate_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CommentService(db).list_comments(ctx, candidate_id)


@router.post("/{candidate_id}/comments", response_model=CommentRead, status_code=status.HTTP_201_CREATED)
async def add_comment(
    candidate_id: UUID,
    payload: CommentCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
):
    return await CommentService(db).add_comment(ctx, candidate_id, payload.content)


@router.get("/{candidate_id}/documents", response_model=List[DocumentRead])
async def list_documents(
    candidate_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_document_store),
):
    return await DocumentService(db, blob_store).list_documents(ctx, candidate_id)


@router.post("/{candidate_id}/documents", response_model=DocumentRead, status_code=status.HTTP_201_CREATED)
async def upload_document(
    candidate_id: UUID,
    file: UploadFile = File(...),
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_document_store),
):
    """Upload a file (multipart form field "file") for a candidate."""
    service = DocumentService(db, blob_store)
    # Never buffer more than one byte past the limit
    data = await file.read(service.max_bytes + 1)
    return await service.attach_document(
        ctx,
        candidate_id,
        data,
        file.filename or "",
        file.content_type or "application/octet-stream",
    )
