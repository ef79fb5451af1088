"""
Job repository - database operations for Job.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.job import Job


class JobRepository:
    """Repository for Job database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        company_id: UUID,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Job]:
        """List jobs for a company, newest first."""
        query = select(Job).where(Job.company_id == company_id)

        if status is not None:
            query = query.where(Job.status == status)

        query = query.order_by(Job.created_at.desc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, company_id: UUID, job_id: UUID) -> Optional[Job]:
        """Get a job by ID for a specific company."""
        result = await self.db.execute(
            select(Job).where(
                Job.id == job_id,
                Job.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def count(self, company_id: UUID, status: Optional[str] = None) -> int:
        query = select(func.count(Job.id)).where(Job.company_id == company_id)
        if status is not None:
            query = query.where(Job.status == status)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def create(self, company_id: UUID, created_by: UUID, data: Dict[str, Any]) -> Job:
        job = Job(company_id=company_id, created_by=created_by, **data)
        self.db.add(job)
        await self.db.flush()
        await self.db.refresh(job)
        return job

    async def update(self, job: Job, data: Dict[str, Any]) -> Job:
        for field, value in data.items():
            setattr(job, field, value)
        await self.db.flush()
        await self.db.refresh(job)
        return job

    async def delete(self, job: Job) -> None:
        await self.db.delete(job)
        await self.db.flush()
