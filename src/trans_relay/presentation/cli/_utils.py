"""
CLI 内部共享的辅助工具。
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from trans_relay.containers import ApplicationContainer
from trans_relay.infrastructure.db import dispose_engine


@asynccontextmanager
async def managed_engine(
    container: ApplicationContainer,
) -> AsyncGenerator[None, None]:
    """在一次 asyncio.run 内使用数据库，结束时释放连接池。"""
    engine = container.persistence.db_engine()
    try:
        yield
    finally:
        await dispose_engine(engine)
        container.persistence.db_engine.reset()
        container.persistence.session_maker.reset()
