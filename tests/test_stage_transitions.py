"""
Tests for moving candidates between pipeline stages.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from hiring_dashboard.errors import NotFoundError, TransactionError, ValidationError
from hiring_dashboard.models import Candidate, CandidateStageEvent
from hiring_dashboard.repositories.candidate_stage_event_repository import CandidateStageEventRepository
from hiring_dashboard.schemas.candidate import CandidateCreate
from hiring_dashboard.services.candidate_service import CandidateService

pytestmark = pytest.mark.unit


async def current_stage(db, candidate_id):
    result = await db.execute(select(Candidate.current_stage_id).where(Candidate.id == candidate_id))
    return result.scalar_one()


async def event_count(db, candidate_id):
    result = await db.execute(
        select(func.count(CandidateStageEvent.id)).where(CandidateStageEvent.candidate_id == candidate_id)
    )
    return result.scalar_one()


async def test_transition_moves_pointer_and_records_event(db, acme, acme_ctx):
    service = CandidateService(db)
    applied, screening = acme.stage_ids["Applied"], acme.stage_ids["Screening"]

    candidate = await service.transition_candidate_stage(
        acme_ctx, acme.candidate_id, screening, notes="  Strong phone screen  "
    )

    assert candidate.current_stage_id == screening
    history = await service.get_stage_history(acme_ctx, acme.candidate_id)
    assert len(history) == 1
    event = history[0]
    assert event.stage_id == screening
    assert event.from_stage_id == applied
    assert event.stage_name == "Screening"
    assert event.notes == "Strong phone screen"
    assert event.created_by == acme.admin_id
    assert event.company_id == acme.company_id


async def test_acme_scenario_back_and_forth(db, acme, acme_ctx):
    service = CandidateService(db)
    applied, screening = acme.stage_ids["Applied"], acme.stage_ids["Screening"]

    await service.transition_candidate_stage(acme_ctx, acme.candidate_id, screening)
    await service.transition_candidate_stage(acme_ctx, acme.candidate_id, applied)

    assert await current_stage(db, acme.candidate_id) == applied
    history = await service.get_stage_history(acme_ctx, acme.candidate_id)
    assert [event.stage_name for event in history] == ["Screening", "Applied"]
    assert [event.stage_id for event in history] == [screening, applied]


async def test_last_event_matches_current_stage(db, acme, acme_ctx):
    service = CandidateService(db)
    sequence = ["Screening", "Offer", "Applied", "Offer", "Screening"]

    for name in sequence:
        await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids[name])

    history = await service.get_stage_history(acme_ctx, acme.candidate_id)
    assert [event.stage_name for event in history] == sequence
    assert history[-1].stage_id == await current_stage(db, acme.candidate_id)
    timestamps = [event.created_at for event in history]
    assert timestamps == sorted(timestamps)


async def test_reentering_current_stage_is_recorded(db, acme, acme_ctx):
    service = CandidateService(db)
    applied = acme.stage_ids["Applied"]

    await service.transition_candidate_stage(acme_ctx, acme.candidate_id, applied)

    assert await current_stage(db, acme.candidate_id) == applied
    history = await service.get_stage_history(acme_ctx, acme.candidate_id)
    assert len(history) == 1
    assert history[0].from_stage_id == applied


async def test_stage_of_other_company_is_rejected(db, acme, globex, acme_ctx):
    service = CandidateService(db)
    foreign_stage = globex.stage_ids["Screening"]

    with pytest.raises(ValidationError):
        await service.transition_candidate_stage(acme_ctx, acme.candidate_id, foreign_stage)

    assert await current_stage(db, acme.candidate_id) == acme.stage_ids["Applied"]
    assert await event_count(db, acme.candidate_id) == 0


async def test_unknown_candidate_is_not_found(db, acme, acme_ctx):
    service = CandidateService(db)

    with pytest.raises(NotFoundError):
        await service.transition_candidate_stage(acme_ctx, acme.stage_ids["Offer"], acme.stage_ids["Offer"])


async def test_candidate_of_other_company_is_not_found(db, acme, globex, acme_ctx):
    service = CandidateService(db)

    with pytest.raises(NotFoundError):
        await service.transition_candidate_stage(acme_ctx, globex.candidate_id, acme.stage_ids["Offer"])

    assert await current_stage(db, globex.candidate_id) == globex.stage_ids["Applied"]


async def test_failed_event_insert_leaves_pointer_unchanged(db, acme, acme_ctx, monkeypatch):
    async def failing_create(self, *args, **kwargs):
        raise SQLAlchemyError("simulated insert failure")

    monkeypatch.setattr(CandidateStageEventRepository, "create", failing_create)
    service = CandidateService(db)

    with pytest.raises(TransactionError):
        await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids["Offer"])

    assert await current_stage(db, acme.candidate_id) == acme.stage_ids["Applied"]
    assert await event_count(db, acme.candidate_id) == 0


async def test_creating_candidate_writes_no_event(db, acme, acme_ctx):
    service = CandidateService(db)
    candidate = await service.create_candidate(
        acme_ctx,
        CandidateCreate(job_id=acme.job_id, first_name="Grace", last_name="Hopper", email="grace@example.com"),
    )

    assert candidate.current_stage_id == acme.stage_ids["Applied"]
    assert await event_count(db, candidate.id) == 0


async def test_history_order_is_stable_when_timestamps_tie(db, acme, acme_ctx, monkeypatch):
    frozen = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)
    monkeypatch.setattr(
        "hiring_dashboard.repositories.candidate_stage_event_repository.utc_now", lambda: frozen
    )
    service = CandidateService(db)
    order = ["Screening", "Offer", "Applied", "Offer", "Screening"]

    for name in order:
        await service.transition_candidate_stage(acme_ctx, acme.candidate_id, acme.stage_ids[name])

    history = await service.get_stage_history(acme_ctx, acme.candidate_id)
    assert [event.stage_name for event in history] == order
    assert [event.sequence_number for event in history] == [1, 2, 3, 4, 5]
    assert history[-1].stage_id == await current_stage(db, acme.candidate_id)

    recent = await CandidateStageEventRepository(db).list_recent(acme.company_id, limit=1)
    assert recent[0][0].sequence_number == 5
