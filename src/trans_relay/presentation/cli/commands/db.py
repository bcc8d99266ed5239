import asyncio

import typer
from rich.console import Console

from trans_relay.containers import ApplicationContainer
from trans_relay.infrastructure.db import create_all_tables

from .._utils import managed_engine

app = typer.Typer(help="本地状态库管理。", no_args_is_help=True)
console = Console()


@app.command("init")
def init_db(ctx: typer.Context) -> None:
    """按 ORM 模型创建数据表（已存在的表不受影响）。"""
    container: ApplicationContainer = ctx.obj

    async def _init() -> None:
        async with managed_engine(container):
            await create_all_tables(container.persistence.db_engine())

    asyncio.run(_init())
    console.print("[green]✅ 数据表已就绪。[/green]")
