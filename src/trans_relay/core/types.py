# src/trans_relay/core/types.py
"""
本模块定义了 Trans-Relay 系统的核心数据类型。
这些类型是各层之间数据交换的契约。
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

# 供应商的成功码
ACCEPTED = "ACCEPTED"
SUCCESS = "SUCCESS"
# 本地传输失败时使用的伪结果码
ERROR = "ERROR"

ACCESS_TOKEN_TTL = timedelta(minutes=5)


class TranslationStatus(str, Enum):
    """翻译请求与作业在其生命周期中的状态。只允许向前推进。"""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"

    def predecessors(self) -> tuple["TranslationStatus", ...]:
        """返回可以直接推进到当前状态的状态。PENDING 没有前驱。"""
        return _PREDECESSORS.get(self, ())

    def can_advance_to(self, target: "TranslationStatus") -> bool:
        return self in target.predecessors()


# PENDING -> IN_PROGRESS -> {COMPLETE, FAILED}，不能跳过 IN_PROGRESS
_PREDECESSORS: dict[TranslationStatus, tuple[TranslationStatus, ...]] = {
    TranslationStatus.IN_PROGRESS: (TranslationStatus.PENDING,),
    TranslationStatus.COMPLETE: (TranslationStatus.IN_PROGRESS,),
    TranslationStatus.FAILED: (TranslationStatus.IN_PROGRESS,),
}


class Page(BaseModel):
    """一个已渲染为 HTML 的待上传文档。"""

    slug: str
    html: str


class UploadOutcome(BaseModel):
    """单个文件上传的结果。非 ACCEPTED 的结果码即为失败，但不会抛出异常。"""

    code: str
    locale: str
    slug: str
    batch_uid: str

    @property
    def accepted(self) -> bool:
        return self.code == ACCEPTED


class ContextOutcome(BaseModel):
    """可视化上下文上传的结果（尽力而为）。"""

    code: str
    slug: str

    @property
    def succeeded(self) -> bool:
        return self.code == SUCCESS


class AccessToken(BaseModel):
    """供应商的短期访问令牌，每次运行获取一次。"""

    value: str
    acquired_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def expires_at(self) -> datetime:
        return self.acquired_at + ACCESS_TOKEN_TTL

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


class VendorSuccess(BaseModel):
    """响应信封解码成功。"""

    code: str
    data: dict[str, Any] = Field(default_factory=dict)


class VendorFailure(BaseModel):
    """响应信封表示失败，保留原始内容用于日志。"""

    code: str
    http_status: int
    raw: Any = None


VendorResult = Union[VendorSuccess, VendorFailure]


class TranslationRecord(BaseModel):
    """翻译请求记录的数据传输对象 (DTO)。"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    locale: str
    slug: str
    status: TranslationStatus

    @classmethod
    def from_orm_model(cls, orm_obj: Any) -> "TranslationRecord":
        return cls.model_validate(orm_obj, from_attributes=True)


class JobRecord(BaseModel):
    """作业（及其批次）记录的 DTO。"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    job_uid: str
    batch_uid: str | None = None
    locale: str
    status: TranslationStatus

    @classmethod
    def from_orm_model(cls, orm_obj: Any) -> "JobRecord":
        return cls.model_validate(orm_obj, from_attributes=True)


class RunReport(BaseModel):
    """一次提交运行的汇总结果。"""

    outcomes: list[UploadOutcome] = Field(default_factory=list)
    failed_locales: dict[str, str] = Field(default_factory=dict)
    reconciled: int = 0
    consistency_errors: list[dict[str, str]] = Field(default_factory=list)

    @property
    def successful_uploads(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if o.accepted]

    @property
    def failed_uploads(self) -> list[UploadOutcome]:
        return [o for o in self.outcomes if not o.accepted]

    @property
    def exit_code(self) -> int:
        if self.failed_uploads or self.failed_locales or self.consistency_errors:
            return 1
        return 0
