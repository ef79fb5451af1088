"""
Candidate document service.

Keeps blob storage and document metadata in lockstep: a Document row
exists only while its blob does.
"""

import logging
import os
import uuid
from typing import List, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.config import settings
from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_member
from hiring_dashboard.errors import NotFoundError, TransactionError, ValidationError
from hiring_dashboard.models.document import Document
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.document_repository import DocumentRepository
from hiring_dashboard.storage.blob_store import BlobStore, BlobStoreError

logger = logging.getLogger(__name__)

MAX_FILE_NAME_LENGTH = 255
MAX_MIME_TYPE_LENGTH = 255
MAX_EXTENSION_LENGTH = 16


def build_storage_key(company_id: UUID, candidate_id: UUID, file_name: str) -> str:
    """
    Unique blob key: company/candidate/random name with the original extension.

    Extensions longer than MAX_EXTENSION_LENGTH are dropped.
    """
    extension = os.path.splitext(file_name)[1].lower()
    if len(extension) > MAX_EXTENSION_LENGTH:
        extension = ""
    return f"{company_id}/{candidate_id}/{uuid.uuid4().hex}{extension}"


class DocumentService:
    """Service for documents attached to candidates."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        metadata_retries: int | None = None,
        max_bytes: int | None = None,
    ):
        self.db = db
        self.blob_store = blob_store
        self.repo = DocumentRepository(db)
        self.candidate_repo = CandidateRepository(db)
        self.metadata_retries = (
            settings.DOCUMENT_METADATA_RETRIES if metadata_retries is None else metadata_retries
        )
        self.max_bytes = settings.MAX_DOCUMENT_BYTES if max_bytes is None else max_bytes

    async def _require_candidate(self, company_id: UUID, candidate_id: UUID) -> None:
        if not await self.candidate_repo.get_by_id(company_id, candidate_id):
            raise NotFoundError("Candidate not found")

    async def list_documents(self, ctx: SessionContext, candidate_id: UUID) -> List[Document]:
        """Document metadata for a candidate. Blobs are not checked."""
        company_id = ctx.scope()
        await self._require_candidate(company_id, candidate_id)
        return await self.repo.list_for_candidate(company_id, candidate_id)

    async def attach_document(
        self,
        ctx: SessionContext,
        candidate_id: UUID,
        file_bytes: bytes,
        file_name: str,
        mime_type: str,
    ) -> Document:
        """
        Store a file and record it against a candidate.

        The blob is uploaded first. If recording the metadata keeps failing
        after the configured retries, the blob is deleted again and
        TransactionError is raised.

        Raises:
            NotFoundError: candidate missing or outside the company
            ValidationError: empty file, blank or over-long name or MIME
                type, or file too large
            TransactionError: upload or metadata insert failed
        """
        company_id = require_company_member(ctx, action="attach documents")
        file_name = (file_name or "").strip()
        if not file_name:
            raise ValidationError("File name is required")
        if len(file_name) > MAX_FILE_NAME_LENGTH:
            raise ValidationError(
                f"File name must be at most {MAX_FILE_NAME_LENGTH} characters",
                details={"max_length": MAX_FILE_NAME_LENGTH},
            )
        mime_type = (mime_type or "").strip() or "application/octet-stream"
        if len(mime_type) > MAX_MIME_TYPE_LENGTH:
            raise ValidationError(
                f"MIME type must be at most {MAX_MIME_TYPE_LENGTH} characters",
                details={"max_length": MAX_MIME_TYPE_LENGTH},
            )
        if not file_bytes:
            raise ValidationError("File is empty")
        if len(file_bytes) > self.max_bytes:
            raise ValidationError(
                "File is too large",
                details={"max_bytes": self.max_bytes, "size_bytes": len(file_bytes)},
            )
        await self._require_candidate(company_id, candidate_id)

        key = build_storage_key(company_id, candidate_id, file_name)
        try:
            await self.blob_store.upload(key, file_bytes)
        except BlobStoreError as exc:
            logger.error("Upload of %s failed: %s", key, exc)
            raise TransactionError("Failed to store document") from exc

        attempts = self.metadata_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                document = await self.repo.create(
                    company_id=company_id,
                    candidate_id=candidate_id,
                    name=file_name,
                    mime_type=mime_type,
                    storage_path=key,
                    size_bytes=len(file_bytes),
                    created_by=ctx.user_id,
                )
                await self.db.commit()
            except SQLAlchemyError as exc:
                await self.db.rollback()
                logger.warning(
                    "Recording document %s failed (attempt %d/%d): %s",
                    key, attempt, attempts, exc,
                )
                continue
            logger.info("Attached document %s to candidate %s", document.id, candidate_id)
            return document

        try:
            await self.blob_store.delete(key)
        except BlobStoreError as exc:
            logger.error("Orphaned blob left in storage: %s (%s)", key, exc)
        raise TransactionError("Failed to record document")

    async def _get(self, ctx: SessionContext, document_id: UUID) -> Document:
        document = await self.repo.get_by_id(ctx.scope(), document_id)
        if not document:
            raise NotFoundError("Document not found")
        return document

    async def download_document(self, ctx: SessionContext, document_id: UUID) -> Tuple[Document, bytes]:
        document = await self._get(ctx, document_id)
        try:
            data = await self.blob_store.download(document.storage_path)
        except BlobStoreError as exc:
            logger.error("Download of %s failed: %s", document.storage_path, exc)
            raise TransactionError("Failed to read document") from exc
        return document, data

    async def remove_document(self, ctx: SessionContext, document_id: UUID) -> None:
        """
        Delete a document's blob, then its metadata.

        If the blob cannot be deleted the metadata is left in place.
        """
        require_company_member(ctx, action="remove documents")
        document = await self._get(ctx, document_id)
        key = document.storage_path
        try:
            await self.blob_store.delete(key)
        except BlobStoreError as exc:
            logger.error("Deleting blob %s failed: %s", key, exc)
            raise TransactionError("Failed to delete document") from exc

        try:
            await self.repo.delete(document)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Blob %s deleted but its document row %s remains: %s", key, document_id, exc)
            raise TransactionError("Failed to delete document") from exc
        logger.info("Removed document %s", document_id)
