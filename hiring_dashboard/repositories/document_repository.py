"""
Document repository - database operations for Document metadata.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.document import Document
from hiring_dashboard.utils.time import utc_now


class DocumentRepository:
    """Repository for Document database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_candidate(self, company_id: UUID, candidate_id: UUID) -> List[Document]:
        result = await self.db.execute(
            select(Document)
            .where(
                Document.company_id == company_id,
                Document.candidate_id == candidate_id,
            )
            .order_by(Document.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, company_id: UUID, document_id: UUID) -> Optional[Document]:
        result = await self.db.execute(
            select(Document).where(
                Document.id == document_id,
                Document.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        company_id: UUID,
        candidate_id: UUID,
        name: str,
        mime_type: str,
        storage_path: str,
        size_bytes: int,
        created_by: UUID,
    ) -> Document:
        document = Document(
            company_id=company_id,
            candidate_id=candidate_id,
            name=name,
            mime_type=mime_type,
            storage_path=storage_path,
            size_bytes=size_bytes,
            created_by=created_by,
            created_at=utc_now(),
        )
        self.db.add(document)
        await self.db.flush()
        return document

    async def delete(self, document: Document) -> None:
        await self.db.delete(document)
        await self.db.flush()
