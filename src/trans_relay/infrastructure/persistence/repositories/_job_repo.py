"""供应商作业/批次仓库的 SQLAlchemy 实现。"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import NoResultFound

from trans_relay.core.types import JobRecord, TranslationStatus
from trans_relay.core.uow import IJobRepository
from trans_relay.infrastructure.db._schema import RelayJob

from ._base_repo import BaseRepository


class SqlAlchemyJobRepository(BaseRepository, IJobRepository):
    """作业仓库实现。所有写操作都以供应商签发的 UID 为键。"""

    async def add(
        self,
        *,
        job_uid: str,
        locale: str,
        status: TranslationStatus,
        batch_uid: str | None = None,
    ) -> JobRecord:
        row = RelayJob(job_uid=job_uid, locale=locale, status=status, batch_uid=batch_uid)
        self._session.add(row)
        await self._session.flush()
        return JobRecord.from_orm_model(row)

    async def attach_batch(
        self, job_uid: str, batch_uid: str, status: TranslationStatus
    ) -> JobRecord:
        stmt = select(RelayJob).where(RelayJob.job_uid == job_uid)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            raise NoResultFound(f"作业记录未找到: job_uid={job_uid}")
        row.batch_uid = batch_uid
        row.status = status
        await self._session.flush()
        return JobRecord.from_orm_model(row)

    async def get_by_batch_uid(self, batch_uid: str) -> JobRecord | None:
        stmt = select(RelayJob).where(RelayJob.batch_uid == batch_uid)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        return JobRecord.from_orm_model(row) if row else None

    async def list_all(self) -> list[JobRecord]:
        stmt = select(RelayJob).order_by(RelayJob.id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [JobRecord.from_orm_model(r) for r in rows]

    async def advance_status(self, job_id: int, status: TranslationStatus) -> bool:
        stmt = (
            update(RelayJob)
            .where(RelayJob.id == job_id, RelayJob.status.in_(status.predecessors()))
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0
