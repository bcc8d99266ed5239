"""
`submit`：把待翻译队列提交给供应商。退出码 0 表示全部文件上传成功。
"""

import asyncio

import httpx
import structlog
import typer
from rich.console import Console
from rich.table import Table

from trans_relay.containers import ApplicationContainer
from trans_relay.core.exceptions import MissingConfigError
from trans_relay.core.types import RunReport

from .._utils import managed_engine

console = Console()
logger = structlog.get_logger(__name__)


async def _run_submission(container: ApplicationContainer) -> RunReport:
    config = container.pydantic_config()
    timeout = httpx.Timeout(config.vendor.timeout, connect=config.vendor.connect_timeout)
    async with managed_engine(container):
        async with httpx.AsyncClient(timeout=timeout) as client:
            gateway = container.services.vendor_gateway(client=client)
            orchestrator = container.services.orchestrator(gateway=gateway)
            return await orchestrator.run()


def _print_report(report: RunReport) -> None:
    console.print(
        f"[bold]上传结果：[/bold] {len(report.successful_uploads)} / "
        f"{len(report.outcomes)} 个文件成功，已回写 {report.reconciled} 条请求。"
    )
    if report.failed_uploads:
        table = Table(title="上传失败的文件", header_style="bold red")
        table.add_column("语言")
        table.add_column("文件")
        table.add_column("结果码")
        for outcome in report.failed_uploads:
            table.add_row(outcome.locale, outcome.slug, outcome.code)
        console.print(table)
    for locale, reason in report.failed_locales.items():
        console.print(f"[red]❌ 语言 {locale} 未能提交：{reason}[/red]")
    if report.consistency_errors:
        console.print(
            f"[bold red]❌ {len(report.consistency_errors)} 个上传结果无法匹配本地记录。[/bold red]"
        )


def submit(ctx: typer.Context) -> None:
    """提交所有 PENDING 翻译请求，并把成功上传的请求推进到 IN_PROGRESS。"""
    container: ApplicationContainer = ctx.obj
    try:
        container.pydantic_config().require_vendor_settings()
    except MissingConfigError as e:
        logger.error("供应商配置不完整，无法提交。", missing=e.missing)
        raise typer.Exit(code=1)

    try:
        report = asyncio.run(_run_submission(container))
    except Exception as e:
        logger.error("无法向供应商发送数据。", error=str(e), exc_info=True)
        raise typer.Exit(code=1) from e

    _print_report(report)
    raise typer.Exit(code=report.exit_code)
