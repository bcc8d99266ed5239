"""
核心容器：提供应用范围内的基础服务，目前是日志系统。
"""

from dependency_injector import containers, providers

from trans_relay.observability.logging_config import setup_logging


class CoreContainer(containers.DeclarativeContainer):
    config = providers.Configuration()

    logging = providers.Resource(
        setup_logging,
        log_level=config.logging.level,
        log_format=config.logging.format,
        service=config.service_name,
    )
