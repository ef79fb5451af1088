"""
Dashboard service: headline counts and the recent activity feed.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from hiring_dashboard.core.context import SessionContext
from hiring_dashboard.models.candidate import CandidateStatus
from hiring_dashboard.models.job import JobStatus
from hiring_dashboard.repositories.candidate_repository import CandidateRepository
from hiring_dashboard.repositories.candidate_stage_event_repository import CandidateStageEventRepository
from hiring_dashboard.repositories.job_repository import JobRepository
from hiring_dashboard.schemas.dashboard import ActivityItem, DashboardStats
from hiring_dashboard.utils.time import as_utc


class DashboardService:
    def __init__(self, db: AsyncSession):
        self.candidate_repo = CandidateRepository(db)
        self.job_repo = JobRepository(db)
        self.event_repo = CandidateStageEventRepository(db)

    async def get_stats(self, ctx: SessionContext) -> DashboardStats:
        company_id = ctx.scope()
        published = await self.job_repo.count(company_id, status=JobStatus.PUBLISHED)
        return DashboardStats(
            total_candidates=await self.candidate_repo.count(company_id),
            active_jobs=published,
            total_hires=await self.candidate_repo.count(company_id, status=CandidateStatus.HIRED),
            open_positions=published,
        )

    async def get_recent_activity(
        self,
        ctx: SessionContext,
        per_source: int = 5,
        limit: int = 10,
    ) -> List[ActivityItem]:
        """
        Newest candidates and stage moves merged, newest first.

        Takes up to per_source items from each list and returns at most
        limit of the merged feed.
        """
        company_id = ctx.scope()
        items: List[ActivityItem] = []

        for candidate, job_title in await self.candidate_repo.list_recent(company_id, per_source):
            items.append(ActivityItem(
                id=candidate.id,
                type="new_candidate",
                candidate_id=candidate.id,
                candidate_name=candidate.full_name,
                job_title=job_title,
                timestamp=as_utc(candidate.created_at),
            ))

        for event, candidate in await self.event_repo.list_recent(company_id, per_source):
            items.append(ActivityItem(
                id=event.id,
                type="stage_change",
                candidate_id=candidate.id,
                candidate_name=candidate.full_name,
                stage_name=event.stage_name,
                timestamp=as_utc(event.created_at),
            ))

        items.sort(key=lambda item: item.timestamp, reverse=True)
        return items[:limit]
