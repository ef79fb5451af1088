"""
Tests for job postings, candidate records, comments and the dashboard.
"""

import pytest
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import func, select

from hiring_dashboard.errors import NotFoundError, ValidationError
from hiring_dashboard.models import Candidate, CandidateStageEvent, CandidateStatus, JobStatus
from hiring_dashboard.schemas.candidate import CandidateCreate, CandidateUpdate
from hiring_dashboard.schemas.job import JobCreate, JobUpdate, SalaryRange
from hiring_dashboard.services.candidate_service import CandidateService
from hiring_dashboard.services.comment_service import CommentService
from hiring_dashboard.services.dashboard_service import DashboardService
from hiring_dashboard.services.job_service import JobService

pytestmark = pytest.mark.unit


def new_candidate(job_id, **overrides):
    data = {
        "job_id": job_id,
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.com",
    }
    data.update(overrides)
    return CandidateCreate(**data)


# Jobs

async def test_create_job_defaults_to_draft(db, acme, acme_ctx):
    job = await JobService(db).create_job(
        acme_ctx,
        JobCreate(title="  Data Engineer ", salary_range=SalaryRange(min=50000, max=70000)),
    )

    assert job.title == "Data Engineer"
    assert job.status == JobStatus.DRAFT
    assert job.salary_range == {"min": 50000, "max": 70000, "currency": None}
    assert job.created_by == acme.admin_id


def test_salary_range_bounds():
    assert SalaryRange(min=10, max=10).currency is None
    with pytest.raises(SchemaValidationError):
        SalaryRange(min=20, max=10)


async def test_list_jobs_newest_first_with_status_filter(db, acme, acme_ctx):
    service = JobService(db)
    draft = await service.create_job(acme_ctx, JobCreate(title="Draft role"))
    published = await service.create_job(acme_ctx, JobCreate(title="Open role", status="published"))

    all_jobs = await service.list_jobs(acme_ctx)
    assert [j.id for j in all_jobs][:2] == [published.id, draft.id]

    published_ids = [j.id for j in await service.list_published_jobs(acme_ctx)]
    assert published.id in published_ids
    assert acme.job_id in published_ids
    assert draft.id not in published_ids

    with pytest.raises(ValidationError):
        await service.list_jobs(acme_ctx, status="archived")


async def test_update_job(db, acme, acme_ctx):
    job = await JobService(db).update_job(acme_ctx, acme.job_id, JobUpdate(status="closed", location="Remote"))

    assert job.status == JobStatus.CLOSED
    assert job.location == "Remote"


async def test_delete_job_blocked_while_candidates_reference_it(db, acme, acme_ctx):
    service = JobService(db)

    with pytest.raises(ValidationError):
        await service.delete_job(acme_ctx, acme.job_id)

    await CandidateService(db).delete_candidate(acme_ctx, acme.candidate_id)
    with pytest.raises(ValidationError):
        await service.delete_job(acme_ctx, acme.job_id)


async def test_delete_unused_job(db, acme, acme_ctx):
    service = JobService(db)
    job = await service.create_job(acme_ctx, JobCreate(title="Short lived"))
    job_id = job.id

    await service.delete_job(acme_ctx, job_id)

    with pytest.raises(NotFoundError):
        await service.get_job(acme_ctx, job_id)


# Candidates

async def test_create_candidate_starts_in_first_stage(db, acme, acme_ctx):
    candidate = await CandidateService(db).create_candidate(acme_ctx, new_candidate(acme.job_id))

    assert candidate.current_stage_id == acme.stage_ids["Applied"]
    assert candidate.status == CandidateStatus.ACTIVE
    assert candidate.company_id == acme.company_id
    assert candidate.created_by == acme.admin_id


async def test_create_candidate_with_explicit_stage(db, acme, acme_ctx):
    candidate = await CandidateService(db).create_candidate(
        acme_ctx, new_candidate(acme.job_id, current_stage_id=acme.stage_ids["Offer"])
    )

    assert candidate.current_stage_id == acme.stage_ids["Offer"]


async def test_create_candidate_rejects_foreign_stage_and_job(db, acme, globex, acme_ctx):
    service = CandidateService(db)

    with pytest.raises(ValidationError):
        await service.create_candidate(
            acme_ctx, new_candidate(acme.job_id, current_stage_id=globex.stage_ids["Applied"])
        )
    with pytest.raises(ValidationError):
        await service.create_candidate(acme_ctx, new_candidate(globex.job_id))


async def test_create_candidate_requires_published_job(db, acme, acme_ctx):
    draft = await JobService(db).create_job(acme_ctx, JobCreate(title="Not yet open"))

    with pytest.raises(ValidationError):
        await CandidateService(db).create_candidate(acme_ctx, new_candidate(draft.id))


async def test_list_candidates_projects_job_title_and_stage_name(db, acme, acme_ctx):
    service = CandidateService(db)
    created = await service.create_candidate(
        acme_ctx, new_candidate(acme.job_id, current_stage_id=acme.stage_ids["Screening"])
    )

    summaries = await service.list_candidates(acme_ctx)

    assert [s.candidate.id for s in summaries] == [created.id, acme.candidate_id]
    assert summaries[0].job_title == "Acme Backend Engineer"
    assert summaries[0].stage_name == "Screening"
    assert summaries[1].stage_name == "Applied"

    in_screening = await service.list_candidates(acme_ctx, stage_id=acme.stage_ids["Screening"])
    assert [s.candidate.id for s in in_screening] == [created.id]

    summary = await service.get_candidate_summary(acme_ctx, acme.candidate_id)
    assert summary.job_title == "Acme Backend Engineer"
    assert summary.stage_name == "Applied"


async def test_update_candidate_changes_profile_not_stage(db, acme, acme_ctx):
    candidate = await CandidateService(db).update_candidate(
        acme_ctx,
        acme.candidate_id,
        CandidateUpdate(phone="+1 555 0100", status="hired"),
    )

    assert candidate.phone == "+1 555 0100"
    assert candidate.status == CandidateStatus.HIRED
    assert candidate.current_stage_id == acme.stage_ids["Applied"]
    assert "current_stage_id" not in CandidateUpdate.model_fields


async def test_deleted_candidate_disappears_but_history_remains(db, acme, acme_ctx):
    service = CandidateService(db)
    await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids["Offer"])

    await service.delete_candidate(acme_ctx, acme.candidate_id)

    assert await service.list_candidates(acme_ctx) == []
    with pytest.raises(NotFoundError):
        await service.get_candidate(acme_ctx, acme.candidate_id)

    row = await db.execute(select(Candidate.deleted_at).where(Candidate.id == acme.candidate_id))
    assert row.scalar_one() is not None
    events = await db.execute(
        select(func.count(CandidateStageEvent.id)).where(CandidateStageEvent.candidate_id == acme.candidate_id)
    )
    assert events.scalar_one() == 1


# Comments

async def test_comments_newest_first_with_author_email(db, acme, acme_ctx, acme_member_ctx):
    service = CommentService(db)
    first = await service.add_comment(acme_ctx, acme.candidate_id, "Great culture fit")
    second = await service.add_comment(acme_member_ctx, acme.candidate_id, "  Strong system design  ")

    comments = await service.list_comments(acme_ctx, acme.candidate_id)

    assert [c.id for c in comments] == [second.id, first.id]
    assert comments[0].content == "Strong system design"
    assert comments[0].author_email == "recruiter@acme.example.com"
    assert comments[1].author_email == acme.admin_email


async def test_blank_comment_rejected(db, acme, acme_ctx):
    with pytest.raises(ValidationError):
        await CommentService(db).add_comment(acme_ctx, acme.candidate_id, "   ")

    assert await CommentService(db).list_comments(acme_ctx, acme.candidate_id) == []


async def test_comment_on_other_company_candidate_not_found(db, acme, globex, acme_ctx):
    with pytest.raises(NotFoundError):
        await CommentService(db).add_comment(acme_ctx, globex.candidate_id, "Hello")


# Dashboard

async def test_dashboard_stats(db, acme, globex, acme_ctx):
    service = CandidateService(db)
    hired = await service.create_candidate(acme_ctx, new_candidate(acme.job_id))
    await service.update_candidate(acme_ctx, hired.id, CandidateUpdate(status="hired"))
    await JobService(db).create_job(acme_ctx, JobCreate(title="Draft role"))

    stats = await DashboardService(db).get_stats(acme_ctx)

    assert stats.total_candidates == 2
    assert stats.total_hires == 1
    assert stats.active_jobs == 1
    assert stats.open_positions == 1


async def test_recent_activity_merges_candidates_and_moves(db, acme, acme_ctx):
    service = CandidateService(db)
    newcomer = await service.create_candidate(acme_ctx, new_candidate(acme.job_id))
    await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids["Screening"])

    activity = await DashboardService(db).get_recent_activity(acme_ctx, limit=3)

    assert [item.type for item in activity] == ["stage_change", "new_candidate", "new_candidate"]
    assert activity[0].stage_name == "Screening"
    assert activity[0].candidate_name == "Ada Acme"
    assert activity[1].candidate_id == newcomer.id
    assert activity[1].job_title == "Acme Backend Engineer"

    assert len(await DashboardService(db).get_recent_activity(acme_ctx, limit=1)) == 1


async def test_recent_activity_takes_five_of_each_and_shows_ten(db, acme, acme_ctx):
    service = CandidateService(db)
    for index in range(5):
        await service.create_candidate(acme_ctx, new_candidate(acme.job_id, email=f"grace{index}@example.com"))
    for name in ["Screening", "Offer", "Applied", "Screening", "Offer", "Applied"]:
        await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids[name])

    activity = await DashboardService(db).get_recent_activity(acme_ctx)

    assert len(activity) == 10
    assert sum(item.type == "new_candidate" for item in activity) == 5
    assert sum(item.type == "stage_change" for item in activity) == 5
