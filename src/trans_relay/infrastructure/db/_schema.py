# src/trans_relay/infrastructure/db/_schema.py
"""
本地状态库的 SQLAlchemy ORM 模型。

- translations：待翻译请求队列，身份为 (locale, slug)。
- jobs：供应商作业，batch_uid 在批次创建成功后回填，即作业/批次关联。
- translations_jobs：某个作业批次中提交了哪些翻译请求。
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from trans_relay.core.types import TranslationStatus

from .base import Base

status_enum = Enum(
    TranslationStatus,
    name="translation_status",
    native_enum=False,
    values_callable=lambda e: [m.value for m in e],
    length=16,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RelayTranslation(Base):
    __tablename__ = "translations"

    locale: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TranslationStatus] = mapped_column(
        status_enum, nullable=False, default=TranslationStatus.PENDING
    )
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, init=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        default_factory=_utcnow,
        init=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        default_factory=_utcnow,
        init=False,
    )

    __table_args__ = (
        UniqueConstraint("locale", "slug", name="uq_translations_locale_slug"),
        Index("ix_translations_status", "status"),
    )


class RelayJob(Base):
    __tablename__ = "jobs"

    job_uid: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    locale: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[TranslationStatus] = mapped_column(
        status_enum, nullable=False, default=TranslationStatus.PENDING
    )
    batch_uid: Mapped[str | None] = mapped_column(
        Text, nullable=True, unique=True, default=None
    )
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, init=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        default_factory=_utcnow,
        init=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        default_factory=_utcnow,
        init=False,
    )


class RelayTranslationJob(Base):
    __tablename__ = "translations_jobs"

    translation_id: Mapped[int] = mapped_column(
        ForeignKey("translations.id", ondelete="CASCADE"), nullable=False
    )
    job_id: Mapped[int] = mapped_column(
        ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, init=False
    )

    __table_args__ = (
        UniqueConstraint("translation_id", "job_id", name="uq_translations_jobs"),
        Index("ix_translations_jobs_job_id", "job_id"),
    )
