# tests/integration/application/test_reconciler.py
"""测试状态回写：映射、幂等性与一致性错误。"""

import pytest

from trans_relay.application import StatusReconciler
from trans_relay.core.exceptions import DataConsistencyError
from trans_relay.core.types import ACCEPTED, TranslationStatus, UploadOutcome


pytestmark = pytest.mark.integration


async def _submitted_batch(uow_factory, slugs: list[str]) -> list[int]:
    """模拟一次已创建作业与批次的提交。"""
    async with uow_factory() as uow:
        records = [await uow.translations.enqueue("jp", slug) for slug in slugs]
        await uow.jobs.add(job_uid="job-1", locale="jp", status=TranslationStatus.PENDING)
        job = await uow.jobs.attach_batch("job-1", "batch-1", TranslationStatus.PENDING)
        await uow.links.add(job.id, [r.id for r in records])
    return [r.id for r in records]


def _outcome(slug: str, code: str = ACCEPTED, batch_uid: str = "batch-1") -> UploadOutcome:
    return UploadOutcome(code=code, locale="jp", slug=slug, batch_uid=batch_uid)


@pytest.mark.asyncio
async def test_accepted_outcomes_advance_job_and_translation(uow_factory):
    await _submitted_batch(uow_factory, ["a.mdx", "b.mdx"])
    reconciler = StatusReconciler(uow_factory)

    advanced = await reconciler.advance(
        [_outcome("a.mdx"), _outcome("b.mdx", code="VALIDATION_ERROR")],
        TranslationStatus.IN_PROGRESS,
    )

    assert advanced == 1
    async with uow_factory() as uow:
        statuses = {r.slug: r.status for r in await uow.translations.list_all()}
        job = await uow.jobs.get_by_batch_uid("batch-1")
    assert statuses == {
        "a.mdx": TranslationStatus.IN_PROGRESS,
        "b.mdx": TranslationStatus.PENDING,
    }
    assert job.status == TranslationStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_reconciling_twice_is_a_no_op(uow_factory):
    await _submitted_batch(uow_factory, ["a.mdx"])
    reconciler = StatusReconciler(uow_factory)

    first = await reconciler.advance([_outcome("a.mdx")], TranslationStatus.IN_PROGRESS)
    second = await reconciler.advance([_outcome("a.mdx")], TranslationStatus.IN_PROGRESS)

    assert (first, second) == (1, 0)


@pytest.mark.asyncio
async def test_never_moves_backwards(uow_factory):
    ids = await _submitted_batch(uow_factory, ["a.mdx"])
    async with uow_factory() as uow:
        await uow.translations.advance_status(ids[0], TranslationStatus.IN_PROGRESS)
        await uow.translations.advance_status(ids[0], TranslationStatus.COMPLETE)

    advanced = await StatusReconciler(uow_factory).advance(
        [_outcome("a.mdx")], TranslationStatus.IN_PROGRESS
    )

    assert advanced == 0
    async with uow_factory() as uow:
        assert (await uow.translations.get_by_id(ids[0])).status == TranslationStatus.COMPLETE


@pytest.mark.asyncio
async def test_pending_request_cannot_jump_to_complete(uow_factory):
    ids = await _submitted_batch(uow_factory, ["a.mdx"])

    advanced = await StatusReconciler(uow_factory).advance(
        [_outcome("a.mdx")], TranslationStatus.COMPLETE
    )

    assert advanced == 0
    async with uow_factory() as uow:
        record = await uow.translations.get_by_id(ids[0])
        job = await uow.jobs.get_by_batch_uid("batch-1")
    assert record.status == TranslationStatus.PENDING
    assert job.status == TranslationStatus.PENDING


@pytest.mark.asyncio
async def test_unknown_batch_raises_after_committing_resolved_outcomes(uow_factory):
    await _submitted_batch(uow_factory, ["a.mdx"])

    with pytest.raises(DataConsistencyError) as exc_info:
        await StatusReconciler(uow_factory).advance(
            [_outcome("a.mdx"), _outcome("x.mdx", batch_uid="batch-unknown")],
            TranslationStatus.IN_PROGRESS,
        )

    assert exc_info.value.unresolved == [
        {"batch_uid": "batch-unknown", "slug": "x.mdx", "reason": "job_not_found"}
    ]
    async with uow_factory() as uow:
        (record,) = await uow.translations.list_all()
    assert record.status == TranslationStatus.IN_PROGRESS


@pytest.mark.asyncio
async def test_unlinked_slug_is_a_consistency_error(uow_factory):
    await _submitted_batch(uow_factory, ["a.mdx"])

    with pytest.raises(DataConsistencyError) as exc_info:
        await StatusReconciler(uow_factory).advance(
            [_outcome("not-in-batch.mdx")], TranslationStatus.IN_PROGRESS
        )

    assert exc_info.value.unresolved[0]["reason"] == "translation_not_linked"
