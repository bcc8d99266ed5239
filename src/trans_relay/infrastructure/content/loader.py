# src/trans_relay/infrastructure/content/loader.py
"""
内容加载器：按语言分组读取待翻译文档并渲染为 HTML。

文件不存在时视为已被重命名或删除，直接跳过，每个语言只汇总记录一次。
被跳过的文档既不会出现在输出中，也不会被计为失败；
它们在本地队列中保持 PENDING，清理队列不属于本工具的职责。
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Mapping, Sequence

import structlog

from trans_relay.core.types import Page

from .renderer import Renderer, render_to_html

logger = structlog.get_logger(__name__)


class ContentLoader:
    def __init__(self, content_dir: Path, renderer: Renderer = render_to_html):
        self._content_dir = Path(content_dir)
        self._renderer = renderer

    def load(
        self, list_by_locale: Mapping[str, Sequence[str]]
    ) -> dict[str, "asyncio.Task[list[Page]]"]:
        """
        为每个语言启动一个加载任务，返回 语言 -> 任务 的映射。
        必须在运行中的事件循环内调用。每个任务的结果保持输入顺序。
        """
        return {
            locale: asyncio.create_task(
                self._load_locale(locale, list(slugs)), name=f"load-content-{locale}"
            )
            for locale, slugs in list_by_locale.items()
        }

    async def _load_locale(self, locale: str, slugs: list[str]) -> list[Page]:
        pages: list[Page] = []
        skipped: list[str] = []
        for slug in slugs:
            path = self._content_dir / slug
            if not path.is_file():
                skipped.append(slug)
                continue
            html = await asyncio.to_thread(self._read_and_render, path)
            pages.append(Page(slug=slug, html=html))
        if skipped:
            logger.info(
                f"{len(skipped)} 个文档已不存在（可能被重命名或删除），已跳过。",
                locale=locale,
                skipped=skipped,
            )
        logger.debug("语言内容加载完成。", locale=locale, pages=len(pages), queued=len(slugs))
        return pages

    def _read_and_render(self, path: Path) -> str:
        return self._renderer(path.read_text(encoding="utf-8"))
