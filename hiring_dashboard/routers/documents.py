"""
Documents router - download and removal by document id.
"""

from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.dependencies import get_document_store, get_session_context
from hiring_dashboard.db.session import get_db
from hiring_dashboard.services.document_service import DocumentService
from hiring_dashboard.storage.blob_store import BlobStore

router = APIRouter(prefix="/api/documents", tags=["documents"])


@router.get("/{document_id}/download")
async def download_document(
    document_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_document_store),
):
    document, data = await DocumentService(db, blob_store).download_document(ctx, document_id)
    return Response(
        content=data,
        media_type=document.mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(document.name)}"},
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
    blob_store: BlobStore = Depends(get_document_store),
):
    """Delete the stored file, then its record."""
    await DocumentService(db, blob_store).remove_document(ctx, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
