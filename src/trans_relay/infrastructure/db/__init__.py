# src/trans_relay/infrastructure/db/__init__.py
"""
数据库公共 API。仅从本包导入，不直接引用内部模块路径。
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from .engine import create_all_tables, create_async_db_engine
from .session import create_async_sessionmaker


async def dispose_engine(engine: AsyncEngine) -> None:
    """释放底层连接池资源。"""
    await engine.dispose()


__all__ = [
    "create_async_db_engine",
    "create_async_sessionmaker",
    "create_all_tables",
    "dispose_engine",
]
