"""
持久化层容器：数据库引擎、会话工厂与 UoW 工厂。
"""

from dependency_injector import containers, providers
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from trans_relay.config import TransRelayConfig
from trans_relay.infrastructure.db import (
    create_async_db_engine,
    create_async_sessionmaker,
)
from trans_relay.infrastructure.uow import SqlAlchemyUnitOfWork


class PersistenceContainer(containers.DeclarativeContainer):
    config = providers.Dependency(instance_of=TransRelayConfig)

    db_engine: providers.Singleton[AsyncEngine] = providers.Singleton(
        create_async_db_engine,
        cfg=config,
    )

    session_maker: providers.Singleton[async_sessionmaker[AsyncSession]] = (
        providers.Singleton(
            create_async_sessionmaker,
            engine=db_engine,
        )
    )

    # 每次调用都会创建一个新的 UoW；调用方传入 provider 本身作为工厂
    uow: providers.Factory[SqlAlchemyUnitOfWork] = providers.Factory(
        SqlAlchemyUnitOfWork,
        sessionmaker=session_maker,
    )
