import asyncio

import typer
from rich.console import Console
from rich.table import Table

from trans_relay.containers import ApplicationContainer
from trans_relay.core.types import JobRecord

from .._utils import managed_engine

app = typer.Typer(help="查看供应商作业与批次记录。", no_args_is_help=True)
console = Console()


@app.command("list")
def list_jobs(ctx: typer.Context) -> None:
    """列出所有已创建的作业及其批次。"""
    container: ApplicationContainer = ctx.obj

    async def _list() -> list[JobRecord]:
        async with managed_engine(container):
            async with container.persistence.uow() as uow:
                return await uow.jobs.list_all()

    jobs = asyncio.run(_list())
    if not jobs:
        console.print("[yellow]尚无作业记录。[/yellow]")
        return

    table = Table(title="作业 / 批次", header_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("语言")
    table.add_column("Job UID")
    table.add_column("Batch UID")
    table.add_column("状态")
    for job in jobs:
        table.add_row(
            str(job.id), job.locale, job.job_uid, job.batch_uid or "-", job.status.value
        )
    console.print(table)
