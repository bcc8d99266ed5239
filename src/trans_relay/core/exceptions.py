# src/trans_relay/core/exceptions.py
"""
本模块定义了 Trans-Relay 项目中所有自定义的、语义化的异常类型。

上层调用者可以根据异常类型决定处理方式：
- 配置类错误在启动阶段快速失败；
- 供应商协议错误只中止所在语言的流水线；
- 数据一致性错误必须大声报告，因为它意味着本地库与供应商状态已经漂移。
"""

from __future__ import annotations

from typing import Any


class TransRelayError(Exception):
    """所有 Trans-Relay 自定义异常的通用基类。"""


class ConfigurationError(TransRelayError):
    """表示在加载、解析或验证配置时发生的错误。"""


class MissingConfigError(ConfigurationError):
    """表示提交流程所需的配置项缺失。"""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"缺少必需的配置项: {', '.join(missing)}")


class UnsupportedLocaleError(ConfigurationError, KeyError):
    """
    表示某个内部语言代码没有对应的供应商语言代码。
    继承自 KeyError 是为了保持与字典查找行为的一致性。
    """

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f"语言 '{locale}' 未配置供应商语言映射")

    def __str__(self) -> str:
        return str(self.args[0])


class VendorError(TransRelayError):
    """
    表示供应商 JSON 接口返回了非 SUCCESS 的响应信封。
    携带原始信封，便于记录日志和排查。
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        http_status: int | None = None,
        envelope: Any = None,
    ):
        super().__init__(message)
        self.code = code
        self.http_status = http_status
        self.envelope = envelope


class DataConsistencyError(TransRelayError):
    """表示无法根据供应商标识找到匹配的本地记录。"""

    def __init__(self, message: str, *, unresolved: list[dict[str, str]]):
        super().__init__(message)
        self.unresolved = unresolved


class DatabaseError(TransRelayError):
    """表示持久化层操作中发生的错误，通常是底层驱动异常的包装。"""
