# tests/unit/application/test_orchestrator_unit.py
"""使用 mock 依赖测试提交流水线的控制流。"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from trans_relay.application import StatusReconciler, SubmissionOrchestrator
from trans_relay.core.exceptions import DataConsistencyError, VendorError
from trans_relay.core.types import (
    ACCEPTED,
    ERROR,
    Page,
    TranslationRecord,
    TranslationStatus,
    UploadOutcome,
)


def _record(id_: int, locale: str, slug: str) -> TranslationRecord:
    return TranslationRecord(id=id_, locale=locale, slug=slug, status=TranslationStatus.PENDING)


@pytest.fixture
def mock_uow() -> AsyncMock:
    uow = AsyncMock()
    uow.__aenter__.return_value = uow
    uow.translations.list_by_status.return_value = []
    return uow


@pytest.fixture
def mock_gateway() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_reconciler() -> AsyncMock:
    return AsyncMock(spec=StatusReconciler)


def _orchestrator(uow, loader, gateway, reconciler) -> SubmissionOrchestrator:
    return SubmissionOrchestrator(
        uow_factory=lambda: uow, loader=loader, gateway=gateway, reconciler=reconciler
    )


@pytest.mark.asyncio
async def test_empty_queue_does_not_contact_vendor(mock_uow, mock_gateway, mock_reconciler):
    loader = MagicMock()

    report = await _orchestrator(mock_uow, loader, mock_gateway, mock_reconciler).run()

    assert report.exit_code == 0
    assert report.outcomes == []
    loader.load.assert_not_called()
    mock_gateway.authenticate.assert_not_awaited()
    mock_reconciler.advance.assert_not_awaited()


@pytest.mark.asyncio
async def test_authentication_failure_cancels_loading_and_propagates(
    mock_uow, mock_gateway, mock_reconciler
):
    mock_uow.translations.list_by_status.return_value = [_record(1, "jp", "a.mdx")]
    mock_gateway.authenticate.side_effect = VendorError("auth failed", code="AUTH")
    tasks: dict[str, asyncio.Task] = {}

    async def slow_load() -> list[Page]:
        await asyncio.sleep(60)
        return []

    def load(list_by_locale):
        tasks.update({locale: asyncio.create_task(slow_load()) for locale in list_by_locale})
        return tasks

    loader = MagicMock()
    loader.load.side_effect = load

    with pytest.raises(VendorError):
        await _orchestrator(mock_uow, loader, mock_gateway, mock_reconciler).run()

    assert tasks["jp"].cancelled()
    mock_gateway.create_job.assert_not_awaited()


@pytest.mark.asyncio
async def test_locale_without_loadable_pages_creates_no_job(
    mock_uow, mock_gateway, mock_reconciler
):
    mock_uow.translations.list_by_status.return_value = [_record(1, "jp", "gone.mdx")]

    async def no_pages() -> list[Page]:
        return []

    loader = MagicMock()
    loader.load.side_effect = lambda m: {"jp": asyncio.ensure_future(no_pages())}

    report = await _orchestrator(mock_uow, loader, mock_gateway, mock_reconciler).run()

    assert report.exit_code == 0
    mock_gateway.authenticate.assert_awaited_once()
    mock_gateway.create_job.assert_not_awaited()
    mock_reconciler.advance.assert_not_awaited()


def _loader_with(pages_by_locale: dict[str, list[Page]]) -> MagicMock:
    async def pages(locale: str) -> list[Page]:
        return pages_by_locale[locale]

    loader = MagicMock()
    loader.load.side_effect = lambda m: {
        locale: asyncio.ensure_future(pages(locale)) for locale in m
    }
    return loader


@pytest.fixture
def two_page_run(mock_uow, mock_gateway) -> MagicMock:
    """jp 语言下两个文档，供应商作业与批次均创建成功。"""
    mock_uow.translations.list_by_status.return_value = [
        _record(1, "jp", "a.mdx"),
        _record(2, "jp", "b.mdx"),
    ]
    mock_gateway.create_job.return_value = "job-1"
    mock_gateway.create_batch.return_value = "batch-1"

    async def upload(locale: str, batch_uid: str, page: Page) -> UploadOutcome:
        return UploadOutcome(code=ACCEPTED, locale=locale, slug=page.slug, batch_uid=batch_uid)

    mock_gateway.upload_file.side_effect = upload
    return _loader_with(
        {"jp": [Page(slug="a.mdx", html="<p>a</p>"), Page(slug="b.mdx", html="<p>b</p>")]}
    )


@pytest.mark.asyncio
async def test_consistency_error_is_recorded_and_fails_the_run(
    mock_uow, mock_gateway, mock_reconciler, two_page_run
):
    unresolved = [{"batch_uid": "batch-1", "slug": "a.mdx", "reason": "job_not_found"}]
    mock_reconciler.advance.side_effect = DataConsistencyError(
        "1 个上传结果无法匹配本地记录", unresolved=unresolved
    )

    report = await _orchestrator(mock_uow, two_page_run, mock_gateway, mock_reconciler).run()

    assert report.consistency_errors == unresolved
    assert report.failed_uploads == []
    assert report.exit_code == 1


@pytest.mark.asyncio
async def test_upload_exception_becomes_error_outcome_for_that_file_only(
    mock_uow, mock_gateway, mock_reconciler, two_page_run
):
    async def upload(locale: str, batch_uid: str, page: Page) -> UploadOutcome:
        if page.slug == "a.mdx":
            raise RuntimeError("connection dropped")
        return UploadOutcome(code=ACCEPTED, locale=locale, slug=page.slug, batch_uid=batch_uid)

    mock_gateway.upload_file.side_effect = upload
    mock_reconciler.advance.return_value = 1

    report = await _orchestrator(mock_uow, two_page_run, mock_gateway, mock_reconciler).run()

    assert {o.slug: o.code for o in report.outcomes} == {"a.mdx": ERROR, "b.mdx": ACCEPTED}
    assert report.failed_locales == {}
    assert report.exit_code == 1
    (successful, status), _ = mock_reconciler.advance.await_args
    assert [o.slug for o in successful] == ["b.mdx"]
    assert status == TranslationStatus.IN_PROGRESS
