# src/trans_relay/infrastructure/db/engine.py
"""
异步引擎工厂。

- SQLite：NullPool，每次会话独立连接，避免跨协程共享句柄；
- PostgreSQL：使用默认的 QueuePool，并开启 pre_ping。
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from trans_relay.config import TransRelayConfig

from .base import metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite+aiosqlite") or url.startswith("sqlite://")


def create_async_db_engine(cfg: TransRelayConfig) -> AsyncEngine:
    """根据配置创建 AsyncEngine。"""
    url = cfg.database.url
    kwargs: dict[str, Any] = {"echo": cfg.database.echo}

    if _is_sqlite(url):
        kwargs["poolclass"] = NullPool
        # 多个语言流水线会并发写入，给 SQLite 写锁留出等待时间
        kwargs["connect_args"] = {"timeout": 30}
    else:
        kwargs["pool_pre_ping"] = True

    return create_async_engine(url, **kwargs)


async def create_all_tables(engine: AsyncEngine) -> None:
    """按 ORM 元数据建表（幂等）。"""
    # 确保模型已注册到 metadata
    from . import _schema  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
