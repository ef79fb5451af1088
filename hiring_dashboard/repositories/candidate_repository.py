"""
Candidate repository - database operations for Candidate.

Soft-deleted candidates are invisible to every lookup and listing.
"""

from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.candidate import Candidate
from hiring_dashboard.models.job import Job
from hiring_dashboard.models.pipeline_stage import PipelineStage
from hiring_dashboard.utils.time import utc_now


CandidateRow = Tuple[Candidate, Optional[str], Optional[str]]


class CandidateRepository:
    """Repository for Candidate database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _live(self, company_id: UUID):
        return select(Candidate).where(
            Candidate.company_id == company_id,
            Candidate.deleted_at.is_(None),
        )

    def _summary_query(self, company_id: UUID):
        # Outer joins: a candidate whose stage was detached still lists
        return (
            select(Candidate, Job.title, PipelineStage.name)
            .outerjoin(Job, Job.id == Candidate.job_id)
            .outerjoin(PipelineStage, PipelineStage.id == Candidate.current_stage_id)
            .where(
                Candidate.company_id == company_id,
                Candidate.deleted_at.is_(None),
            )
        )

    async def list_summaries(
        self,
        company_id: UUID,
        job_id: Optional[UUID] = None,
        stage_id: Optional[UUID] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[CandidateRow]:
        """List candidates with job title and stage name, newest first."""
        query = self._summary_query(company_id)

        if job_id is not None:
            query = query.where(Candidate.job_id == job_id)
        if stage_id is not None:
            query = query.where(Candidate.current_stage_id == stage_id)
        if status is not None:
            query = query.where(Candidate.status == status)

        query = query.order_by(Candidate.created_at.desc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return [(candidate, job_title, stage_name) for candidate, job_title, stage_name in result.all()]

    async def get_summary(self, company_id: UUID, candidate_id: UUID) -> Optional[CandidateRow]:
        result = await self.db.execute(
            self._summary_query(company_id).where(Candidate.id == candidate_id)
        )
        row = result.one_or_none()
        if row is None:
            return None
        candidate, job_title, stage_name = row
        return candidate, job_title, stage_name

    async def get_by_id(self, company_id: UUID, candidate_id: UUID) -> Optional[Candidate]:
        """Get a live candidate by ID for a specific company."""
        result = await self.db.execute(
            self._live(company_id).where(Candidate.id == candidate_id)
        )
        return result.scalar_one_or_none()

    async def list_ids_in_stage(self, company_id: UUID, stage_id: UUID) -> List[UUID]:
        result = await self.db.execute(
            select(Candidate.id).where(
                Candidate.company_id == company_id,
                Candidate.current_stage_id == stage_id,
                Candidate.deleted_at.is_(None),
            ).order_by(Candidate.created_at.asc())
        )
        return list(result.scalars().all())

    async def count(self, company_id: UUID, status: Optional[str] = None) -> int:
        query = select(func.count(Candidate.id)).where(
            Candidate.company_id == company_id,
            Candidate.deleted_at.is_(None),
        )
        if status is not None:
            query = query.where(Candidate.status == status)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def count_for_job(self, company_id: UUID, job_id: UUID) -> int:
        """Candidate rows referencing a job, removed ones included."""
        result = await self.db.execute(
            select(func.count(Candidate.id)).where(
                Candidate.company_id == company_id,
                Candidate.job_id == job_id,
            )
        )
        return result.scalar_one()

    async def list_recent(self, company_id: UUID, limit: int) -> List[Tuple[Candidate, Optional[str]]]:
        """Newest candidates with their job title."""
        result = await self.db.execute(
            select(Candidate, Job.title)
            .outerjoin(Job, Job.id == Candidate.job_id)
            .where(
                Candidate.company_id == company_id,
                Candidate.deleted_at.is_(None),
            )
            .order_by(Candidate.created_at.desc())
            .limit(limit)
        )
        return [(candidate, job_title) for candidate, job_title in result.all()]

    async def create(self, company_id: UUID, created_by: UUID, data: Dict[str, Any]) -> Candidate:
        candidate = Candidate(company_id=company_id, created_by=created_by, **data)
        self.db.add(candidate)
        await self.db.flush()
        await self.db.refresh(candidate)
        return candidate

    async def update(self, candidate: Candidate, data: Dict[str, Any]) -> Candidate:
        for field, value in data.items():
            setattr(candidate, field, value)
        await self.db.flush()
        await self.db.refresh(candidate)
        return candidate

    async def set_stage(self, candidate: Candidate, stage_id: UUID) -> Candidate:
        candidate.current_stage_id = stage_id
        await self.db.flush()
        return candidate

    async def soft_delete(self, candidate: Candidate) -> None:
        candidate.deleted_at = utc_now()
        await self.db.flush()

    async def detach_stage(self, company_id: UUID, stage_id: UUID) -> None:
        """Null the stage pointer of every candidate row in the stage, removed ones included."""
        await self.db.execute(
            update(Candidate)
            .where(
                Candidate.company_id == company_id,
                Candidate.current_stage_id == stage_id,
            )
            .values(current_stage_id=None, updated_at=utc_now())
        )
        await self.db.flush()
