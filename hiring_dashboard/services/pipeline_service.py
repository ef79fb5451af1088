"""
Pipeline configuration service.

Owns the ordered list of stages a company's candidates move through.
Every mutation is admin only.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.config import settings
from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.core.permissions import require_company_admin
from hiring_dashboard.db.session import atomic
from hiring_dashboard.errors import NotFoundError, StageInUseError, ValidationError
from hiring_dashboard.models.pipeline_stage import PipelineStage
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.pipeline_stage_repository import PipelineStageRepository
from hiring_dashboard.schemas.pipeline_stage import StageDeletionResult

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Stage name is required")
    return cleaned


class PipelineService:
    """Service for pipeline stage configuration."""

    def __init__(self, db: AsyncSession, delete_policy: str | None = None):
        self.db = db
        self.repo = PipelineStageRepository(db)
        self.candidate_repo = CandidateRepository(db)
        self.delete_policy = delete_policy or settings.STAGE_DELETE_POLICY

    async def list_stages(self, ctx: SessionContext) -> List[PipelineStage]:
        """Stages of the selected company, ascending by order_index."""
        return await self.repo.list(ctx.scope())

    async def add_stage(self, ctx: SessionContext, name: str) -> PipelineStage:
        """Append a stage at the end of the pipeline."""
        company_id = require_company_admin(ctx, action="configure the pipeline")
        name = _clean_name(name)

        async with atomic(self.db, "add pipeline stage"):
            position = await self.repo.count(company_id)
            stage = await self.repo.create(company_id, name, position)

        logger.info("Added stage %s (%s) at position %d", stage.id, name, position)
        return stage

    async def rename_stage(self, ctx: SessionContext, stage_id: UUID, name: str) -> PipelineStage:
        company_id = require_company_admin(ctx, action="configure the pipeline")
        name = _clean_name(name)
        stage = await self.repo.get_by_id(company_id, stage_id)
        if not stage:
            raise NotFoundError("Pipeline stage not found")

        async with atomic(self.db, "rename pipeline stage"):
            stage.name = name
            await self.db.flush()
        return stage

    async def reorder_stages(self, ctx: SessionContext, new_order: List[UUID]) -> List[PipelineStage]:
        """
        Rewrite order_index from a full ordering of the company's stages.

        Args:
            ctx: Session context
            new_order: Every stage id of the company exactly once

        Raises:
            ValidationError: ids missing, duplicated or foreign; nothing
                is changed
        """
        company_id = require_company_admin(ctx, action="configure the pipeline")
        stages = await self.repo.list(company_id)
        by_id = {stage.id: stage for stage in stages}

        requested = set(new_order)
        if len(new_order) != len(requested):
            raise ValidationError("Stage order contains duplicate ids")
        if requested != set(by_id):
            raise ValidationError(
                "Stage order must list every stage of the pipeline exactly once",
                details={
                    "missing": [str(i) for i in by_id if i not in requested],
                    "unknown": [str(i) for i in new_order if i not in by_id],
                },
            )

        async with atomic(self.db, "reorder pipeline stages"):
            for position, stage_id in enumerate(new_order):
                by_id[stage_id].order_index = position
            await self.db.flush()

        return [by_id[stage_id] for stage_id in new_order]

    async def delete_stage(
        self,
        ctx: SessionContext,
        stage_id: UUID,
        force: bool = False,
    ) -> StageDeletionResult:
        """
        Delete a stage.

        With the "block" policy a stage that candidates are in cannot be
        deleted unless force is given. Otherwise those candidates are left
        without a current stage. Stage history is never modified.

        Raises:
            StageInUseError: blocked because candidates are in the stage
        """
        company_id = require_company_admin(ctx, action="configure the pipeline")
        stage = await self.repo.get_by_id(company_id, stage_id)
        if not stage:
            raise NotFoundError("Pipeline stage not found")

        affected = await self.candidate_repo.list_ids_in_stage(company_id, stage_id)
        if affected and self.delete_policy == "block" and not force:
            raise StageInUseError(
                f"Stage '{stage.name}' still has {len(affected)} candidate(s)",
                details={"affected_candidate_ids": [str(i) for i in affected]},
            )

        async with atomic(self.db, "delete pipeline stage"):
            await self.candidate_repo.detach_stage(company_id, stage_id)
            await self.repo.delete(stage)
            remaining = await self.repo.list(company_id)
            for position, remaining_stage in enumerate(remaining):
                remaining_stage.order_index = position
            await self.db.flush()

        if affected:
            logger.warning(
                "Deleted stage %s; candidates left without a stage: %s",
                stage_id,
                ", ".join(str(i) for i in affected),
            )
        else:
            logger.info("Deleted stage %s", stage_id)

        return StageDeletionResult(stage_id=stage_id, affected_candidate_ids=affected)
