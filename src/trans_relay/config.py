# src/trans_relay/config.py
"""
Trans-Relay 配置（Pydantic v2）

- 所有环境变量以 `TRANSRELAY_` 为前缀，嵌套字段以 `__` 分隔，
  例如 `TRANSRELAY_VENDOR__API_URL`。
- 供应商凭据在启动时通过 `require_vendor_settings()` 一次性校验，
  缺失项会以 MissingConfigError 快速失败，而不是在请求深处报错。
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import langcodes
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import make_url

from trans_relay.core.exceptions import MissingConfigError

ENV_PREFIX = "TRANSRELAY_"

# ===================== 子模型 =====================


class DatabaseSettings(BaseModel):
    """本地状态库（运行期异步驱动）"""

    url: str = Field(
        default="sqlite+aiosqlite:///trans_relay.db",
        description="异步 DSN（sqlite+aiosqlite / postgresql+asyncpg）",
    )
    echo: bool = Field(default=False, description="SQLAlchemy echo（调试）")

    @field_validator("url")
    @classmethod
    def _validate_async_driver(cls, v: str) -> str:
        allowed = {"sqlite+aiosqlite", "postgresql+asyncpg"}
        try:
            drv = make_url(v).drivername.lower()
        except Exception as e:
            raise ValueError(f"非法数据库 URL：{v!r}（{e}）") from e
        if drv not in allowed:
            raise ValueError(
                f"不支持的运行期数据库驱动：{drv!r}，仅允许 {', '.join(sorted(allowed))}"
            )
        return v


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    format: Literal["console", "json"] = Field(default="console")


class RetryPolicySettings(BaseModel):
    """只针对 HTTP 429 的有界重试策略。"""

    max_attempts: int = Field(default=3, ge=1)
    initial_backoff: float = Field(default=0.128, ge=0)
    max_backoff: float = Field(default=30.0, gt=0)


class VendorSettings(BaseModel):
    api_url: Optional[str] = Field(default=None)
    user_identifier: Optional[str] = Field(default=None)
    user_secret: Optional[SecretStr] = Field(default=None)
    project_id: Optional[str] = Field(default=None)
    # 内部语言代码 -> 供应商语言代码
    locale_ids: dict[str, str] = Field(default_factory=lambda: {"jp": "ja-JP"})
    timeout: float = Field(default=60.0, gt=0)
    connect_timeout: float = Field(default=5.0, gt=0)

    @field_validator("locale_ids")
    @classmethod
    def _validate_locale_ids(cls, v: dict[str, str]) -> dict[str, str]:
        for locale, vendor_locale in v.items():
            if not langcodes.tag_is_valid(vendor_locale):
                raise ValueError(f"语言 {locale!r} 的供应商语言代码非法: {vendor_locale}")
        return v


class DocsSiteSettings(BaseModel):
    """文档站点：用于从 slug 推导线上页面地址，以及定位本地源文件。"""

    base_url: str = Field(default="https://docs.newrelic.com")
    content_root_prefix: str = Field(default="src/content/")
    extension: str = Field(default=".mdx")
    content_dir: Path = Field(default_factory=Path.cwd)


# ===================== 顶层配置 =====================
class TransRelayConfig(BaseSettings):
    """
    Trans-Relay 核心配置模型。
    """

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    retry_policy: RetryPolicySettings = Field(default_factory=RetryPolicySettings)
    vendor: VendorSettings = Field(default_factory=VendorSettings)
    docs_site: DocsSiteSettings = Field(default_factory=DocsSiteSettings)

    job_name_prefix: str = "Translation Queue"

    def require_vendor_settings(self) -> VendorSettings:
        """校验提交流程所需的供应商配置齐全，否则抛出 MissingConfigError。"""
        missing = [
            f"{ENV_PREFIX}VENDOR__{name.upper()}"
            for name in ("api_url", "user_identifier", "user_secret", "project_id")
            if not getattr(self.vendor, name)
        ]
        if missing:
            raise MissingConfigError(missing)
        return self.vendor

    # --- Pydantic v2 设置 ---
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )
