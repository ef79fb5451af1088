"""
Candidate service.

Candidate CRUD plus the stage transition operation. A candidate's
current stage only changes through transition_candidate_stage, which
writes the pointer and its audit event in one unit of work.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_member
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.models.candidate import Candidate, CandidateStatus
from hiring_dashboard.models.candidate_stage_event import CandidateStageEvent
from hiring_dashboard.models.job import JobStatus
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.candidate_stage_event_repository import CandidateStageEventRepository
from hiring_dashboard.repositories.job_repository import JobRepository
from hiring_dashboard.repositories.pipeline_stage_repository import PipelineStageRepository
from hiring_dashboard.schemas.candidate import (
    CandidateCreate,
    CandidateRead,
    CandidateSummary,
    CandidateUpdate,
)

logger = logging.getLogger(__name__)


def _to_summary(candidate: Candidate, job_title: Optional[str], stage_name: Optional[str]) -> CandidateSummary:
    return CandidateSummary(
        candidate=CandidateRead.model_validate(candidate),
        job_title=job_title,
        stage_name=stage_name,
    )


class CandidateService:
    """Service for candidate business logic."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CandidateRepository(db)
        self.event_repo = CandidateStageEventRepository(db)
        self.job_repo = JobRepository(db)
        self.stage_repo = PipelineStageRepository(db)

    async def list_candidates(
        self,
        ctx: SessionContext,
        job_id: Optional[UUID] = None,
        stage_id: Optional[UUID] = None,
        status: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[CandidateSummary]:
        """List candidates with job title and stage name, newest first."""
        if status is not None and status not in CandidateStatus.ALL:
            raise ValidationError(f"Invalid candidate status: {status}")
        rows = await self.repo.list_summaries(
            ctx.scope(),
            job_id=job_id,
            stage_id=stage_id,
            status=status,
            limit=limit,
            offset=offset,
        )
        return [_to_summary(*row) for row in rows]

    async def get_candidate(self, ctx: SessionContext, candidate_id: UUID) -> Candidate:
        candidate = await self.repo.get_by_id(ctx.scope(), candidate_id)
        if not candidate:
            raise NotFoundError("Candidate not found")
        return candidate

    async def get_candidate_summary(self, ctx: SessionContext, candidate_id: UUID) -> CandidateSummary:
        row = await self.repo.get_summary(ctx.scope(), candidate_id)
        if not row:
            raise NotFoundError("Candidate not found")
        return _to_summary(*row)

    async def _require_published_job(self, company_id: UUID, job_id: UUID) -> None:
        job = await self.job_repo.get_by_id(company_id, job_id)
        if not job:
            raise ValidationError("Job not found in this company")
        if job.status != JobStatus.PUBLISHED:
            raise ValidationError("Candidates can only be added to published jobs")

    async def create_candidate(self, ctx: SessionContext, data: CandidateCreate) -> Candidate:
        """
        Create a candidate.

        The job must be a published job of the company. Without an explicit
        stage the candidate starts in the first stage of the pipeline. No
        stage event is written on creation.
        """
        company_id = require_company_member(ctx, action="add candidates")
        await self._require_published_job(company_id, data.job_id)

        payload = data.model_dump()
        if data.current_stage_id is not None:
            if not await self.stage_repo.get_by_id(company_id, data.current_stage_id):
                raise ValidationError("Pipeline stage not found in this company")
        else:
            first_stage = await self.stage_repo.get_first(company_id)
            payload["current_stage_id"] = first_stage.id if first_stage else None

        async with atomic(self.db, "create candidate"):
            candidate = await self.repo.create(company_id, ctx.user_id, payload)

        logger.info("Created candidate %s for job %s", candidate.id, data.job_id)
        return candidate

    async def update_candidate(
        self,
        ctx: SessionContext,
        candidate_id: UUID,
        data: CandidateUpdate,
    ) -> Candidate:
        """Update profile fields, status or job. The stage is not editable here."""
        company_id = require_company_member(ctx, action="edit candidates")
        candidate = await self.get_candidate(ctx, candidate_id)
        payload = data.model_dump(exclude_unset=True)

        for field in ("first_name", "last_name", "email", "status", "job_id"):
            if field in payload and payload[field] is None:
                raise ValidationError(f"{field} cannot be empty")
        if "job_id" in payload and payload["job_id"] != candidate.job_id:
            await self._require_published_job(company_id, payload["job_id"])

        async with atomic(self.db, "update candidate"):
            candidate = await self.repo.update(candidate, payload)
        return candidate

    async def delete_candidate(self, ctx: SessionContext, candidate_id: UUID) -> None:
        """Remove a candidate from every listing. Its stage history is kept."""
        require_company_member(ctx, action="remove candidates")
        candidate = await self.get_candidate(ctx, candidate_id)
        async with atomic(self.db, "delete candidate"):
            await self.repo.soft_delete(candidate)
        logger.info("Removed candidate %s", candidate_id)

    async def transition_candidate_stage(
        self,
        ctx: SessionContext,
        candidate_id: UUID,
        target_stage_id: UUID,
        notes: Optional[str] = None,
    ) -> Candidate:
        """
        Move a candidate to a pipeline stage.

        Updates the candidate's current stage and appends a stage event in
        the same transaction: either both are stored or neither is.
        Moving a candidate into the stage it is already in is allowed and
        still recorded.

        Args:
            ctx: Session context; ctx.user_id is recorded as the actor
            candidate_id: Candidate to move
            target_stage_id: Stage of the candidate's company
            notes: Optional free text stored on the event

        Returns:
            The updated candidate

        Raises:
            AuthorizationError: caller is not a member of the company
            NotFoundError: candidate missing or outside the company
            ValidationError: stage missing or of another company
            TransactionError: the writes failed and were rolled back
        """
        company_id = require_company_member(ctx, action="move candidates")
        candidate = await self.repo.get_by_id(company_id, candidate_id)
        if not candidate:
            raise NotFoundError("Candidate not found")

        stage = await self.stage_repo.get_by_id(candidate.company_id, target_stage_id)
        if not stage:
            raise ValidationError("Pipeline stage not found in this company")

        previous_stage_id = candidate.current_stage_id
        notes = notes.strip() if notes else None

        async with atomic(self.db, "move candidate"):
            await self.repo.set_stage(candidate, stage.id)
            await self.event_repo.create(
                company_id=company_id,
                candidate_id=candidate_id,
                stage_id=stage.id,
                stage_name=stage.name,
                created_by=ctx.user_id,
                from_stage_id=previous_stage_id,
                notes=notes or None,
            )

        logger.info(
            "Candidate %s moved from %s to %s by %s",
            candidate_id, previous_stage_id, stage.id, ctx.user_id,
        )
        return candidate

    async def get_stage_history(self, ctx: SessionContext, candidate_id: UUID) -> List[CandidateStageEvent]:
        """Stage events of a candidate, oldest first."""
        candidate = await self.get_candidate(ctx, candidate_id)
        return await self.event_repo.list_for_candidate(candidate.company_id, candidate_id)
