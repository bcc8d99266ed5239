"""翻译请求队列仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from sqlalchemy import select, update

from trans_relay.core.types import TranslationRecord, TranslationStatus
from trans_relay.core.uow import ITranslationRepository
from trans_relay.infrastructure.db._schema import RelayTranslation

from ._base_repo import BaseRepository


class SqlAlchemyTranslationRepository(BaseRepository, ITranslationRepository):
    """翻译请求仓库实现。"""

    async def enqueue(self, locale: str, slug: str) -> TranslationRecord:
        stmt = select(RelayTranslation).where(
            RelayTranslation.locale == locale, RelayTranslation.slug == slug
        )
        existing = (await self._session.execute(stmt)).scalar_one_or_none()
        if existing:
            return TranslationRecord.from_orm_model(existing)

        row = RelayTranslation(
            locale=locale, slug=slug, status=TranslationStatus.PENDING
        )
        self._session.add(row)
        await self._session.flush()
        return TranslationRecord.from_orm_model(row)

    async def get_by_id(self, translation_id: int) -> TranslationRecord | None:
        row = await self._session.get(RelayTranslation, translation_id)
        return TranslationRecord.from_orm_model(row) if row else None

    async def list_by_status(
        self, status: TranslationStatus
    ) -> list[TranslationRecord]:
        # 按主键排序即为入队顺序
        stmt = (
            select(RelayTranslation)
            .where(RelayTranslation.status == status)
            .order_by(RelayTranslation.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [TranslationRecord.from_orm_model(r) for r in rows]

    async def list_all(self) -> list[TranslationRecord]:
        stmt = select(RelayTranslation).order_by(RelayTranslation.id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [TranslationRecord.from_orm_model(r) for r in rows]

    async def advance_status(
        self, translation_id: int, status: TranslationStatus
    ) -> bool:
        stmt = (
            update(RelayTranslation)
            .where(
                RelayTranslation.id == translation_id,
                RelayTranslation.status.in_(status.predecessors()),
            )
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
