"""
Job posting service.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_member
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.models.job import Job, JobStatus
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.job_repository import JobRepository
from hiring_dashboard.schemas.job import JobCreate, JobUpdate

logger = logging.getLogger(__name__)


class JobService:
    """Service for job business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = JobRepository(db)
        self.candidate_repo = CandidateRepository(db)

    async def list_jobs(
        self,
        ctx: SessionContext,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Job]:
        """List jobs of the selected company, newest first."""
        if status is not None and status not in JobStatus.ALL:
            raise ValidationError(f"Invalid job status: {status}")
        return await self.repo.list(ctx.scope(), status=status, limit=limit, offset=offset)

    async def list_published_jobs(self, ctx: SessionContext) -> List[Job]:
        """Jobs a new candidate can be attached to."""
        return await self.repo.list(ctx.scope(), status=JobStatus.PUBLISHED)

    async def get_job(self, ctx: SessionContext, job_id: UUID) -> Job:
        job = await self.repo.get_by_id(ctx.scope(), job_id)
        if not job:
            raise NotFoundError("Job not found")
        return job

    async def create_job(self, ctx: SessionContext, data: JobCreate) -> Job:
        company_id = require_company_member(ctx, action="create jobs")
        payload = data.model_dump()
        payload["title"] = payload["title"].strip()
        if not payload["title"]:
            raise ValidationError("Job title is required")

        async with atomic(self.db, "create job"):
            job = await self.repo.create(company_id, ctx.user_id, payload)

        logger.info("Created job %s in company %s", job.id, company_id)
        return job

    async def update_job(self, ctx: SessionContext, job_id: UUID, data: JobUpdate) -> Job:
        require_company_member(ctx, action="edit jobs")
        job = await self.get_job(ctx, job_id)
        payload = data.model_dump(exclude_unset=True)
        if "title" in payload:
            payload["title"] = (payload["title"] or "").strip()
            if not payload["title"]:
                raise ValidationError("Job title is required")
        if "status" in payload and payload["status"] is None:
            raise ValidationError("Job status cannot be empty")

        async with atomic(self.db, "update job"):
            job = await self.repo.update(job, payload)
        return job

    async def delete_job(self, ctx: SessionContext, job_id: UUID) -> None:
        """
        Delete a job.

        Raises:
            ValidationError: while any candidate, removed ones included,
                references the job
        """
        company_id = require_company_member(ctx, action="delete jobs")
        job = await self.get_job(ctx, job_id)
        in_use = await self.candidate_repo.count_for_job(company_id, job_id)
        if in_use:
            raise ValidationError(
                "Job still has candidates; close it instead",
                details={"candidate_count": in_use},
            )

        async with atomic(self.db, "delete job"):
            await self.repo.delete(job)

        logger.info("Deleted job %s in company %s", job_id, company_id)
