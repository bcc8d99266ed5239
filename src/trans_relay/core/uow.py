# src/trans_relay/core/uow.py
"""
定义了单元工作 (Unit of Work) 与各仓库的抽象接口协议。
应用层只依赖这些协议，而不是具体的 SQLAlchemy 实现。
"""

from __future__ import annotations

from typing import Protocol, Sequence

from .types import JobRecord, TranslationRecord, TranslationStatus


class ITranslationRepository(Protocol):
    async def enqueue(self, locale: str, slug: str) -> TranslationRecord:
        """创建一个 PENDING 请求；若 (locale, slug) 已存在则原样返回。"""
        ...

    async def get_by_id(self, translation_id: int) -> TranslationRecord | None: ...

    async def list_by_status(
        self, status: TranslationStatus
    ) -> list[TranslationRecord]:
        """按入队顺序返回指定状态的请求。"""
        ...

    async def list_all(self) -> list[TranslationRecord]: ...

    async def advance_status(
        self, translation_id: int, status: TranslationStatus
    ) -> bool:
        """
        条件更新状态，仅当当前状态位于目标状态之前时生效。
        返回是否真正发生了更新。
        """
        ...


class IJobRepository(Protocol):
    async def add(
        self,
        *,
        job_uid: str,
        locale: str,
        status: TranslationStatus,
        batch_uid: str | None = None,
    ) -> JobRecord: ...

    async def attach_batch(
        self, job_uid: str, batch_uid: str, status: TranslationStatus
    ) -> JobRecord: ...

    async def get_by_batch_uid(self, batch_uid: str) -> JobRecord | None: ...

    async def list_all(self) -> list[JobRecord]: ...

    async def advance_status(self, job_id: int, status: TranslationStatus) -> bool: ...


class ITranslationJobRepository(Protocol):
    async def add(self, job_id: int, translation_ids: Sequence[int]) -> None: ...

    async def list_translations(self, job_id: int) -> list[TranslationRecord]: ...


class IUnitOfWork(Protocol):
    translations: ITranslationRepository
    jobs: IJobRepository
    links: ITranslationJobRepository

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
