"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from hiring_dashboard.models.company import Company
from hiring_dashboard.models.user import User
from hiring_dashboard.models.team_member import TeamMember, TeamRoles
from hiring_dashboard.models.job import Job, JobStatus
from hiring_dashboard.models.pipeline_stage import PipelineStage
from hiring_dashboard.models.candidate import Candidate, CandidateStatus
from hiring_dashboard.models.candidate_stage_event import CandidateStageEvent
from hiring_dashboard.models.comment import Comment
from hiring_dashboard.models.document import Document

# Export all models
__all__ = [
    "Company",
    "User",
    "TeamMember",
    "TeamRoles",
    "Job",
    "JobStatus",
    "PipelineStage",
    "Candidate",
    "CandidateStatus",
    "CandidateStageEvent",
    "Comment",
    "Document",
]
