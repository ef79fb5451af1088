"""
Tests for pipeline stage configuration.
"""

import logging

import pytest
from sqlalchemy import func, select

from hiring_dashboard.errors import AuthorizationError, StageInUseError, ValidationError
from hiring_dashboard.models import Candidate, CandidateStageEvent, PipelineStage
from hiring_dashboard.services.candidate_service import CandidateService
from hiring_dashboard.services.pipeline_service import PipelineService

pytestmark = pytest.mark.unit


async def order_indexes(db, company_id):
    result = await db.execute(
        select(PipelineStage.id, PipelineStage.order_index)
        .where(PipelineStage.company_id == company_id)
    )
    return dict(result.all())


async def test_list_stages_in_pipeline_order(db, acme, acme_member_ctx):
    stages = await PipelineService(db).list_stages(acme_member_ctx)

    assert [stage.name for stage in stages] == ["Applied", "Screening", "Offer"]
    assert [stage.order_index for stage in stages] == [0, 1, 2]


async def test_add_stage_appends_with_trimmed_name(db, acme, acme_ctx):
    service = PipelineService(db)

    stage = await service.add_stage(acme_ctx, "  Hired  ")

    assert stage.name == "Hired"
    assert stage.order_index == 3
    assert [s.name for s in await service.list_stages(acme_ctx)][-1] == "Hired"


@pytest.mark.parametrize("name", ["", "   ", None])
async def test_add_stage_rejects_blank_name(db, acme, acme_ctx, name):
    with pytest.raises(ValidationError):
        await PipelineService(db).add_stage(acme_ctx, name)

    assert len(await order_indexes(db, acme.company_id)) == 3


async def test_members_cannot_configure_pipeline(db, acme, acme_member_ctx):
    service = PipelineService(db)

    with pytest.raises(AuthorizationError):
        await service.add_stage(acme_member_ctx, "Reference check")
    with pytest.raises(AuthorizationError):
        await service.delete_stage(acme_member_ctx, acme.stage_ids["Offer"])


async def test_rename_stage(db, acme, acme_ctx):
    stage = await PipelineService(db).rename_stage(acme_ctx, acme.stage_ids["Offer"], "Offer extended")

    assert stage.name == "Offer extended"
    assert stage.order_index == 2


async def test_reorder_with_permutation_rewrites_order(db, acme, acme_ctx):
    new_order = [acme.stage_ids["Offer"], acme.stage_ids["Applied"], acme.stage_ids["Screening"]]

    stages = await PipelineService(db).reorder_stages(acme_ctx, new_order)

    assert [stage.id for stage in stages] == new_order
    indexes = await order_indexes(db, acme.company_id)
    assert [indexes[stage_id] for stage_id in new_order] == [0, 1, 2]


@pytest.mark.parametrize("case", ["missing", "duplicate", "foreign"])
async def test_reorder_rejects_non_permutation(db, acme, globex, acme_ctx, case):
    applied, screening, offer = acme.ordered_stage_ids
    new_order = {
        "missing": [offer, applied],
        "duplicate": [offer, applied, applied],
        "foreign": [offer, applied, globex.stage_ids["Screening"]],
    }[case]
    before = await order_indexes(db, acme.company_id)

    with pytest.raises(ValidationError):
        await PipelineService(db).reorder_stages(acme_ctx, new_order)

    assert await order_indexes(db, acme.company_id) == before


async def test_delete_unused_stage(db, acme, acme_ctx):
    result = await PipelineService(db).delete_stage(acme_ctx, acme.stage_ids["Offer"])

    assert result.stage_id == acme.stage_ids["Offer"]
    assert result.affected_candidate_ids == []
    assert acme.stage_ids["Offer"] not in await order_indexes(db, acme.company_id)


async def test_delete_compacts_order(db, acme, acme_ctx):
    service = PipelineService(db)

    await service.delete_stage(acme_ctx, acme.stage_ids["Screening"])
    stage = await service.add_stage(acme_ctx, "Interview")

    stages = await service.list_stages(acme_ctx)
    assert [s.name for s in stages] == ["Applied", "Offer", "Interview"]
    assert [s.order_index for s in stages] == [0, 1, 2]
    assert stage.order_index == 2


async def test_delete_blocked_while_candidates_in_stage(db, acme, acme_ctx):
    applied = acme.stage_ids["Applied"]

    with pytest.raises(StageInUseError) as exc_info:
        await PipelineService(db, delete_policy="block").delete_stage(acme_ctx, applied)

    assert exc_info.value.status_code == 409
    assert exc_info.value.details["affected_candidate_ids"] == [str(acme.candidate_id)]
    assert applied in await order_indexes(db, acme.company_id)


async def test_force_delete_detaches_candidates_and_keeps_history(db, acme, acme_ctx, caplog):
    screening = acme.stage_ids["Screening"]
    await CandidateService(db).transition_candidate_stage(acme_ctx, acme.candidate_id, screening)

    with caplog.at_level(logging.WARNING, logger="hiring_dashboard.services.pipeline_service"):
        result = await PipelineService(db, delete_policy="block").delete_stage(acme_ctx, screening, force=True)

    assert result.affected_candidate_ids == [acme.candidate_id]
    assert str(acme.candidate_id) in caplog.text

    pointer = await db.execute(select(Candidate.current_stage_id).where(Candidate.id == acme.candidate_id))
    assert pointer.scalar_one() is None

    events = await db.execute(
        select(func.count(CandidateStageEvent.id)).where(CandidateStageEvent.stage_id == screening)
    )
    assert events.scalar_one() == 1

    history = await CandidateService(db).get_stage_history(acme_ctx, acme.candidate_id)
    assert history[0].stage_name == "Screening"


async def test_detach_policy_does_not_need_force(db, acme, acme_ctx):
    result = await PipelineService(db, delete_policy="detach").delete_stage(
        acme_ctx, acme.stage_ids["Applied"]
    )

    assert result.affected_candidate_ids == [acme.candidate_id]
    summaries = await CandidateService(db).list_candidates(acme_ctx)
    assert summaries[0].stage_name is None
    assert summaries[0].candidate.current_stage_id is None
