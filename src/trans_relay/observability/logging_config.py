# src/trans_relay/observability/logging_config.py
"""
集中配置日志系统：structlog ⇄ 标准 logging，console 模式由 Rich 渲染。

两种输出：
- console：每条事件渲染为一个 Rich 面板，键值对对齐、长值折行（本地时间）。
- json   ：结构化日志（ISO-8601，UTC），适合 CI 与日志平台。

structlog 通过 ProcessorFormatter 桥接到标准 logging，
因此 httpx / sqlalchemy 等第三方库的日志也走同一套渲染。
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Literal

import structlog
from structlog.typing import Processor

try:
    from rich.console import Console, Group
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text
except ImportError:  # pragma: no cover
    Console = Group = Panel = Table = Text = None  # type: ignore[assignment,misc]

NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "asyncio",
    "markdown_it",
    "aiosqlite",
    "sqlalchemy.engine.Engine",
)


class EventPanelRenderer:
    """
    structlog 处理器：将一条日志事件渲染为 Rich 面板。

    标题为等宽级别标签（可附带 logger 名称），正文为事件消息，
    其余键值对以两列表格列出，时间戳放在面板右下角。
    """

    LEVEL_STYLES: dict[str, tuple[str, str]] = {
        "debug": ("cyan", "DEBUG   "),
        "info": ("green", "INFO    "),
        "warning": ("yellow", "WARNING "),
        "error": ("bold red", "ERROR   "),
        "critical": ("magenta", "CRITICAL"),
    }

    def __init__(
        self,
        *,
        show_timestamp: bool = True,
        show_logger_name: bool = True,
        kv_truncate_at: int = 256,
        kv_key_width: int = 14,
    ) -> None:
        if Console is None:
            raise ImportError(
                "要使用 EventPanelRenderer，请先安装 rich：pip install rich"
            )
        self._console = Console()
        self._show_timestamp = show_timestamp
        self._show_logger_name = show_logger_name
        self._kv_truncate_at = kv_truncate_at
        self._kv_key_width = kv_key_width

    def __call__(
        self, logger: Any, name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        event = str(event_dict.pop("event", "")).strip()
        if not event:
            return ""

        timestamp = event_dict.pop("timestamp", "")
        level = str(event_dict.pop("level", "info")).lower()
        logger_name = event_dict.pop("logger", "unknown")
        event_dict.pop("_record", None)
        event_dict.pop("_from_structlog", None)

        style, label = self.LEVEL_STYLES.get(level, ("dim", level.upper()))
        title = f"[{style}]{label}[/]"
        if self._show_logger_name:
            title += f" [cyan dim]({logger_name})[/]"

        body: list[Any] = [Text(event)]
        if event_dict:
            body.append(self._kv_table(event_dict))

        subtitle = (
            Text(str(timestamp), style="dim")
            if self._show_timestamp and timestamp
            else None
        )
        with self._console.capture() as capture:
            self._console.print(
                Panel(
                    Group(*body),
                    title=Text.from_markup(title),
                    title_align="left",
                    subtitle=subtitle,
                    subtitle_align="right",
                    border_style=style,
                    expand=False,
                )
            )
        return capture.get().rstrip()

    def _kv_table(self, kv: MutableMapping[str, Any]) -> Any:
        table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
        table.add_column(style="dim", justify="right", width=self._kv_key_width)
        table.add_column(style="bright_white", overflow="fold")
        for key, value in sorted(kv.items()):
            value_repr = repr(value)
            if len(value_repr) > self._kv_truncate_at:
                value_repr = value_repr[: self._kv_truncate_at] + "…"
            table.add_row(f"{key} :", Text(value_repr))
        return table


def setup_logging(
    *,
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
    root_level: str | None = None,
    service: str | None = None,
    silence_noisy_libs: bool = True,
) -> None:
    """
    配置全局 structlog 日志系统。

    Args:
        log_level: 应用 logger（trans_relay.*）的最低级别。
        log_format: 'console'（Rich 面板）或 'json'（结构化输出）。
        root_level: 根 logger 级别；默认 WARNING 以降低第三方噪声。
        service: 通过 contextvars 绑定到每条日志的服务名。
        silence_noisy_libs: 是否把常见的噪声 logger 下调到 WARNING。
    """
    timestamper = (
        structlog.processors.TimeStamper(fmt="iso", utc=True)
        if log_format == "json"
        else structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)
    )
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        timestamper,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final_renderer: Processor = (
        EventPanelRenderer()
        if log_format == "console"
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=final_renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            timestamper,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((root_level or "WARNING").upper())

    app_logger = logging.getLogger("trans_relay")
    app_logger.setLevel(log_level.upper())
    app_logger.propagate = True

    structlog.contextvars.clear_contextvars()
    if service:
        structlog.contextvars.bind_contextvars(service=service)

    if silence_noisy_libs:
        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.get_logger("trans_relay.logging_config").debug(
        "日志系统已配置完成。",
        log_format=log_format,
        app_log_level=log_level.upper(),
        service=service,
    )

