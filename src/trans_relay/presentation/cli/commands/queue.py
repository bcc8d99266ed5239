"""
翻译请求队列的查看与入队命令。
"""

import asyncio
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from trans_relay.containers import ApplicationContainer
from trans_relay.core.types import TranslationRecord, TranslationStatus

from .._utils import managed_engine

app = typer.Typer(help="查看和管理待翻译请求队列。", no_args_is_help=True)
console = Console()


@app.command("add")
def add(
    ctx: typer.Context,
    locale: Annotated[str, typer.Argument(help="目标语言（内部代码，如 jp）。")],
    slugs: Annotated[list[str], typer.Argument(help="一个或多个文档路径。")],
) -> None:
    """把文档加入待翻译队列（状态为 PENDING）。"""
    container: ApplicationContainer = ctx.obj

    async def _add() -> list[TranslationRecord]:
        async with managed_engine(container):
            async with container.persistence.uow() as uow:
                return [await uow.translations.enqueue(locale, slug) for slug in slugs]

    records = asyncio.run(_add())
    for record in records:
        console.print(
            f"[green]✅ #{record.id}[/green] {record.locale} {record.slug} "
            f"[dim]({record.status.value})[/dim]"
        )


@app.command("list")
def list_requests(
    ctx: typer.Context,
    status: Annotated[
        Optional[TranslationStatus],
        typer.Option("--status", "-s", help="只显示指定状态。"),
    ] = None,
) -> None:
    """以表格列出翻译请求。"""
    container: ApplicationContainer = ctx.obj

    async def _list() -> list[TranslationRecord]:
        async with managed_engine(container):
            async with container.persistence.uow() as uow:
                if status is None:
                    return await uow.translations.list_all()
                return await uow.translations.list_by_status(status)

    records = asyncio.run(_list())
    if not records:
        console.print("[yellow]队列为空。[/yellow]")
        return

    table = Table(title="翻译请求", header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("语言")
    table.add_column("文档")
    table.add_column("状态")
    for record in records:
        table.add_row(str(record.id), record.locale, record.slug, record.status.value)
    console.print(table)
