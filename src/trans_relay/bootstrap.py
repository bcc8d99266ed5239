# src/trans_relay/bootstrap.py
"""
应用引导程序。

负责：
1. 加载 .env 文件并构造配置；
2. 创建并装配 DI 容器。
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog
from dotenv import load_dotenv

from trans_relay.config import TransRelayConfig
from trans_relay.containers import ApplicationContainer

logger = structlog.get_logger("trans_relay.bootstrap")


def _load_dotenv_files(env_mode: Literal["prod", "dev", "test"]) -> list[Path]:
    """
    根据环境模式加载 .env 文件：
    - 总是先加载 .env（不覆盖已存在的环境变量）；
    - test 模式再加载 .env.test，允许覆盖 .env 中的值。
    """
    cwd = Path.cwd()
    loaded: list[Path] = []

    base_env = cwd / ".env"
    if base_env.is_file():
        load_dotenv(base_env, override=False)
        loaded.append(base_env)

    if env_mode == "test":
        test_env = cwd / ".env.test"
        if test_env.is_file():
            load_dotenv(test_env, override=True)
            loaded.append(test_env)

    logger.debug("已加载 dotenv 文件", files=[str(p) for p in loaded])
    return loaded


def create_app_config(env_mode: Literal["prod", "dev", "test"]) -> TransRelayConfig:
    """加载、验证并返回应用配置对象。"""
    _load_dotenv_files(env_mode)
    config = TransRelayConfig()
    logger.debug(
        "配置实例已创建",
        env_mode=env_mode,
        vendor_api_url=config.vendor.api_url,
        locales=sorted(config.vendor.locale_ids),
    )
    return config


def create_container(
    config: TransRelayConfig, service_name: str
) -> ApplicationContainer:
    """创建并装配 DI 容器。"""
    container = ApplicationContainer()

    # 1. 整块配置对象，作为向下传递的唯一事实来源
    container.pydantic_config.override(config)

    # 2. 字段级配置（日志等）
    container.config.from_pydantic(config)
    container.config.service_name.from_value(service_name)

    # 3. 初始化核心资源（日志）
    container.core.init_resources()

    return container
