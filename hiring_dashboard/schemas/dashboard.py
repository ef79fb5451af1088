"""
Dashboard Pydantic schemas.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_candidates: int = 0
    active_jobs: int = 0
    total_hires: int = 0
    open_positions: int = 0


class ActivityItem(BaseModel):
    """One line of the recent activity feed."""

    id: UUID
    type: Literal["new_candidate", "stage_change"]
    candidate_id: UUID
    candidate_name: str
    job_title: Optional[str] = None
    stage_name: Optional[str] = None
    timestamp: datetime
