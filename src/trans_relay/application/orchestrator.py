# src/trans_relay/application/orchestrator.py
"""
提交流水线。

    认证（全局一次） -> [每个语言并发] 加载内容 -> 创建作业 -> 创建批次 -> 并发上传文件
    -> 回写 ACCEPTED 结果

某个语言的致命错误只中止该语言，其它语言照常进行；
单个文件上传失败只计入失败数，不影响同批次的其它文件。
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from trans_relay.core.exceptions import DataConsistencyError
from trans_relay.core.types import (
    ERROR,
    Page,
    RunReport,
    TranslationRecord,
    TranslationStatus,
    UploadOutcome,
)

if TYPE_CHECKING:
    from trans_relay.application.reconciler import StatusReconciler
    from trans_relay.infrastructure.content import ContentLoader
    from trans_relay.infrastructure.uow import UowFactory
    from trans_relay.infrastructure.vendor import VendorGateway

logger = structlog.get_logger(__name__)


class SubmissionOrchestrator:
    def __init__(
        self,
        uow_factory: "UowFactory",
        loader: "ContentLoader",
        gateway: "VendorGateway",
        reconciler: "StatusReconciler",
    ):
        self._uow_factory = uow_factory
        self._loader = loader
        self._gateway = gateway
        self._reconciler = reconciler

    async def run(self) -> RunReport:
        """
        执行一次完整的提交运行并返回汇总报告。

        认证失败对整个运行是致命的，异常会直接向上抛出。
        """
        report = RunReport()
        queue = await self._pending_queue()
        if not queue:
            logger.info("没有待提交的翻译请求。")
            return report

        logger.info(
            "开始提交翻译队列。",
            locales=sorted(queue),
            total=sum(len(records) for records in queue.values()),
        )
        content = self._loader.load(
            {locale: [r.slug for r in records] for locale, records in queue.items()}
        )

        try:
            await self._gateway.authenticate()
        except Exception:
            logger.error("供应商认证失败，本次运行无法继续。")
            for task in content.values():
                task.cancel()
            await asyncio.gather(*content.values(), return_exceptions=True)
            raise

        locales = list(content)
        results = await asyncio.gather(
            *(
                self._run_locale(locale, content[locale], queue[locale])
                for locale in locales
            ),
            return_exceptions=True,
        )
        for locale, result in zip(locales, results):
            if isinstance(result, BaseException):
                logger.error(
                    "语言流水线中止，该语言的文件本次不会上传。",
                    locale=locale,
                    error=str(result),
                    exc_info=result,
                )
                report.failed_locales[locale] = f"{type(result).__name__}: {result}"
            else:
                report.outcomes.extend(result)

        successful = report.successful_uploads
        if successful:
            try:
                report.reconciled = await self._reconciler.advance(
                    successful, TranslationStatus.IN_PROGRESS
                )
            except DataConsistencyError as e:
                report.consistency_errors = e.unresolved

        self._log_summary(report)
        return report

    async def _pending_queue(self) -> dict[str, list[TranslationRecord]]:
        """读取 PENDING 请求并按语言分组，保持入队顺序。"""
        async with self._uow_factory() as uow:
            pending = await uow.translations.list_by_status(TranslationStatus.PENDING)
        queue: dict[str, list[TranslationRecord]] = {}
        for record in pending:
            queue.setdefault(record.locale, []).append(record)
        return queue

    async def _run_locale(
        self,
        locale: str,
        pages_task: "asyncio.Task[list[Page]]",
        records: list[TranslationRecord],
    ) -> list[UploadOutcome]:
        pages = await pages_task
        if not pages:
            logger.info("该语言没有可上传的文档，跳过。", locale=locale)
            return []

        # 1) 作业：供应商返回成功后立即落库，确保 job_uid 不会丢失
        job_uid = await self._gateway.create_job(locale)
        async with self._uow_factory() as uow:
            await uow.jobs.add(
                job_uid=job_uid, locale=locale, status=TranslationStatus.PENDING
            )
        logger.info("作业已创建。", locale=locale, job_uid=job_uid)

        # 2) 批次：文件列表与加载结果完全一致且保持顺序
        file_uris = [page.slug for page in pages]
        batch_uid = await self._gateway.create_batch(job_uid, file_uris)
        ids_by_slug = {record.slug: record.id for record in records}
        async with self._uow_factory() as uow:
            job = await uow.jobs.attach_batch(
                job_uid, batch_uid, TranslationStatus.PENDING
            )
            await uow.links.add(job.id, [ids_by_slug[uri] for uri in file_uris])
        logger.info("作业/批次记录已创建。", locale=locale, job=job.model_dump(mode="json"))

        # 3) 上传：每个文件独立，单个失败不影响其它文件
        results = await asyncio.gather(
            *(self._gateway.upload_file(locale, batch_uid, page) for page in pages),
            return_exceptions=True,
        )
        outcomes: list[UploadOutcome] = []
        for page, result in zip(pages, results):
            if isinstance(result, BaseException):
                logger.error(
                    "上传文件时发生意外错误。",
                    locale=locale,
                    slug=page.slug,
                    error=str(result),
                    exc_info=result,
                )
                outcomes.append(
                    UploadOutcome(
                        code=ERROR, locale=locale, slug=page.slug, batch_uid=batch_uid
                    )
                )
            else:
                outcomes.append(result)
        return outcomes

    def _log_summary(self, report: RunReport) -> None:
        logger.info(
            f"已成功上传 {len(report.successful_uploads)} / {len(report.outcomes)} 个文件。",
            reconciled=report.reconciled,
        )
        if report.failed_uploads:
            logger.warning(f"{len(report.failed_uploads)} 个页面上传失败。")
            for failed in report.failed_uploads:
                logger.warning("上传失败明细", **failed.model_dump())
        if report.failed_locales:
            logger.error("部分语言未能完成提交。", failed_locales=report.failed_locales)
