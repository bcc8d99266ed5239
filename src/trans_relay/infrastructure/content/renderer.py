# src/trans_relay/infrastructure/content/renderer.py
"""默认的文档 → HTML 渲染器，基于 markdown-it-py。"""

from __future__ import annotations

import re
from typing import Callable

from markdown_it import MarkdownIt

Renderer = Callable[[str], str]

_FRONTMATTER = re.compile(r"\A---\s*\n.*?\n---\s*(?:\n|\Z)", re.DOTALL)


def render_to_html(document: str) -> str:
    """
    把 MDX/Markdown 源码渲染为 HTML。

    文件头部的 YAML frontmatter 会被去掉；内联的 HTML/JSX 标签原样保留，
    由供应商按 html 文件类型解析。
    """
    body = _FRONTMATTER.sub("", document, count=1)
    md = MarkdownIt("commonmark", {"html": True}).enable("table")
    return md.render(body)
