"""
PipelineStage repository - database operations for PipelineStage.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.pipeline_stage import PipelineStage


class PipelineStageRepository:
    """Repository for PipelineStage database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, company_id: UUID) -> List[PipelineStage]:
        """Stages of a company in pipeline order."""
        result = await self.db.execute(
            select(PipelineStage)
            .where(PipelineStage.company_id == company_id)
            .order_by(PipelineStage.order_index.asc(), PipelineStage.created_at.asc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, company_id: UUID, stage_id: UUID) -> Optional[PipelineStage]:
        result = await self.db.execute(
            select(PipelineStage).where(
                PipelineStage.id == stage_id,
                PipelineStage.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_first(self, company_id: UUID) -> Optional[PipelineStage]:
        """The stage new candidates start in."""
        result = await self.db.execute(
            select(PipelineStage)
            .where(PipelineStage.company_id == company_id)
            .order_by(PipelineStage.order_index.asc(), PipelineStage.created_at.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def count(self, company_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count(PipelineStage.id)).where(PipelineStage.company_id == company_id)
        )
        return result.scalar_one()

    async def create(self, company_id: UUID, name: str, order_index: int) -> PipelineStage:
        stage = PipelineStage(company_id=company_id, name=name, order_index=order_index)
        self.db.add(stage)
        await self.db.flush()
        await self.db.refresh(stage)
        return stage

    async def delete(self, stage: PipelineStage) -> None:
        await self.db.delete(stage)
        await self.db.flush()
