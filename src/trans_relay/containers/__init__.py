"""
应用的组合根 (Composition Root)。

`ApplicationContainer` 聚合所有子容器，配置对象作为唯一事实来源向下传递。
"""

from __future__ import annotations

from dependency_injector import containers, providers

from trans_relay.config import TransRelayConfig

from .core import CoreContainer
from .persistence import PersistenceContainer
from .services import ServicesContainer


class ApplicationContainer(containers.DeclarativeContainer):
    """应用的顶层 DI 容器。"""

    # 整块配置对象
    pydantic_config = providers.Dependency(instance_of=TransRelayConfig)
    # 字段级配置（日志）
    config = providers.Configuration()

    core = providers.Container(
        CoreContainer,
        config=config,
    )
    persistence = providers.Container(
        PersistenceContainer,
        config=pydantic_config,
    )
    services = providers.Container(
        ServicesContainer,
        config=pydantic_config,
        uow_factory=persistence.uow.provider,
    )
