# src/trans_relay/presentation/cli/main.py
import os
from typing import Literal

import typer
from rich.console import Console
from rich.traceback import install as install_rich_tracebacks

from trans_relay.bootstrap import create_app_config, create_container

from .commands import db, jobs, queue
from .commands.submit import submit

install_rich_tracebacks(show_locals=False, word_wrap=True)

app = typer.Typer(
    name="trans-relay",
    help="📦 Trans-Relay：把待翻译文档提交给翻译供应商。",
    add_completion=False,
    no_args_is_help=True,
)

app.command("submit")(submit)
app.add_typer(queue.app, name="queue")
app.add_typer(jobs.app, name="jobs")
app.add_typer(db.app, name="db")

console = Console()


@app.callback()
def main(ctx: typer.Context) -> None:
    """
    主回调：加载配置、创建 DI 容器并挂到上下文上，供所有子命令使用。
    """
    try:
        env_mode_str = os.getenv("TRANSRELAY_ENV", "dev").lower()
        if env_mode_str not in ("prod", "dev", "test"):
            env_mode_str = "dev"
        env_mode: Literal["prod", "dev", "test"] = env_mode_str  # type: ignore

        config = create_app_config(env_mode=env_mode)
        ctx.obj = create_container(config, service_name="trans-relay-cli")
    except Exception as e:
        console.print(f"[bold red]❌ 启动失败：无法加载配置或初始化容器: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    ctx.call_on_close(ctx.obj.shutdown_resources)


if __name__ == "__main__":
    app()
