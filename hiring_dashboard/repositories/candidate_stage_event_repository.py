"""
CandidateStageEvent repository.

Only inserts and reads: stage events are never updated or deleted.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.models.candidate import Candidate
from hiring_dashboard.models.candidate_stage_event import CandidateStageEvent
from hiring_dashboard.utils.time import utc_now


class CandidateStageEventRepository:
    """Repository for the append-only stage event log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        company_id: UUID,
        candidate_id: UUID,
        stage_id: UUID,
        stage_name: str,
        created_by: UUID,
        from_stage_id: Optional[UUID] = None,
        notes: Optional[str] = None,
    ) -> CandidateStageEvent:
        last = await self.db.execute(
            select(func.coalesce(func.max(CandidateStageEvent.sequence_number), 0))
            .where(CandidateStageEvent.candidate_id == candidate_id)
        )
        event = CandidateStageEvent(
            company_id=company_id,
            candidate_id=candidate_id,
            stage_id=stage_id,
            from_stage_id=from_stage_id,
            stage_name=stage_name,
            notes=notes,
            created_by=created_by,
            sequence_number=last.scalar_one() + 1,
            created_at=utc_now(),
        )
        self.db.add(event)
        await self.db.flush()
        return event

    async def list_for_candidate(self, company_id: UUID, candidate_id: UUID) -> List[CandidateStageEvent]:
        """Stage history of one candidate, oldest first."""
        result = await self.db.execute(
            select(CandidateStageEvent)
            .where(
                CandidateStageEvent.company_id == company_id,
                CandidateStageEvent.candidate_id == candidate_id,
            )
            .order_by(CandidateStageEvent.sequence_number.asc(), CandidateStageEvent.created_at.asc())
        )
        return list(result.scalars().all())

    async def list_recent(self, company_id: UUID, limit: int) -> List[Tuple[CandidateStageEvent, Candidate]]:
        """Newest stage events of live candidates."""
        result = await self.db.execute(
            select(CandidateStageEvent, Candidate)
            .join(Candidate, Candidate.id == CandidateStageEvent.candidate_id)
            .where(
                CandidateStageEvent.company_id == company_id,
                Candidate.deleted_at.is_(None),
            )
            .order_by(CandidateStageEvent.created_at.desc(), CandidateStageEvent.sequence_number.desc())
            .limit(limit)
        )
        return [(event, candidate) for event, candidate in result.all()]
