"""翻译请求与作业关联表的 SQLAlchemy 实现。"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select

from trans_relay.core.types import TranslationRecord
from trans_relay.core.uow import ITranslationJobRepository
from trans_relay.infrastructure.db._schema import RelayTranslation, RelayTranslationJob

from ._base_repo import BaseRepository


class SqlAlchemyTranslationJobRepository(BaseRepository, ITranslationJobRepository):
    """关联仓库实现。"""

    async def add(self, job_id: int, translation_ids: Sequence[int]) -> None:
        self._session.add_all(
            [
                RelayTranslationJob(translation_id=tid, job_id=job_id)
                for tid in translation_ids
            ]
        )
        await self._session.flush()

    async def list_translations(self, job_id: int) -> list[TranslationRecord]:
        stmt = (
            select(RelayTranslation)
            .join(
                RelayTranslationJob,
                RelayTranslationJob.translation_id == RelayTranslation.id,
            )
            .where(RelayTranslationJob.job_id == job_id)
            .order_by(RelayTranslation.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [TranslationRecord.from_orm_model(r) for r in rows]
