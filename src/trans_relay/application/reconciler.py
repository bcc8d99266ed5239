# src/trans_relay/application/reconciler.py
"""
状态回写：把供应商批次 UID 映射回本地作业与翻译请求，并推进其状态。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import structlog

from trans_relay.core.exceptions import DataConsistencyError
from trans_relay.core.types import TranslationStatus, UploadOutcome

if TYPE_CHECKING:
    from trans_relay.infrastructure.uow import UowFactory

logger = structlog.get_logger(__name__)


class StatusReconciler:
    def __init__(self, uow_factory: "UowFactory"):
        self._uow_factory = uow_factory

    async def advance(
        self, outcomes: Sequence[UploadOutcome], new_status: TranslationStatus
    ) -> int:
        """
        对每个 ACCEPTED 结果：batch_uid -> 作业 -> 关联的翻译请求，
        并把二者推进到 `new_status`。非 ACCEPTED 的结果被忽略。

        状态更新是条件更新，已处于或超过目标状态的记录保持不变，
        因此重复执行是安全的。

        返回实际被推进的翻译请求数量。
        无法解析的结果会在已解析部分提交后以 DataConsistencyError 抛出。
        """
        advanced = 0
        unresolved: list[dict[str, str]] = []

        async with self._uow_factory() as uow:
            for outcome in outcomes:
                if not outcome.accepted:
                    continue

                job = await uow.jobs.get_by_batch_uid(outcome.batch_uid)
                if job is None:
                    unresolved.append(
                        {
                            "batch_uid": outcome.batch_uid,
                            "slug": outcome.slug,
                            "reason": "job_not_found",
                        }
                    )
                    continue

                linked = await uow.links.list_translations(job.id)
                translation = next(
                    (
                        t
                        for t in linked
                        if t.slug == outcome.slug and t.locale == outcome.locale
                    ),
                    None,
                )
                if translation is None:
                    unresolved.append(
                        {
                            "batch_uid": outcome.batch_uid,
                            "slug": outcome.slug,
                            "reason": "translation_not_linked",
                        }
                    )
                    continue

                await uow.jobs.advance_status(job.id, new_status)
                if await uow.translations.advance_status(translation.id, new_status):
                    advanced += 1
                else:
                    logger.debug(
                        "翻译请求已处于或超过目标状态，跳过。",
                        translation_id=translation.id,
                        current=translation.status.value,
                        target=new_status.value,
                    )

        if unresolved:
            logger.error(
                "本地记录与供应商状态不一致：无法解析以下上传结果。",
                unresolved=unresolved,
            )
            raise DataConsistencyError(
                f"{len(unresolved)} 个上传结果无法匹配本地记录", unresolved=unresolved
            )

        logger.info(
            "状态回写完成。", advanced=advanced, status=new_status.value
        )
        return advanced
