"""命令行入口。"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from cit_icons.core.config import JobConfig
from cit_icons.core.exceptions import CitIconsError
from cit_icons.core.progress import ProgressUpdate
from cit_icons.processing.pipeline import process_tree
from cit_icons.utils.logging import setup_logging

app = typer.Typer(help="批量导出 CIT 贴图为 64x64 物品图标。")

LOGGER = logging.getLogger(__name__)


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("导出贴图", total=update.total)
        progress.update(task_id, completed=update.completed)
        if update.message:
            progress.log(update.message)

    return callback


@app.callback()
def main() -> None:
    """CIT 贴图图标导出工具。"""


@app.command("run")
def run_cli(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """清空输出目录并重新导出全部图标。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)

    job = JobConfig()

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
    )

    try:
        with progress:
            result = process_tree(job, progress_callback=_build_progress_callback(progress))
    except CitIconsError as exc:
        LOGGER.error("导出中止：%s", exc)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"处理完成：成功 {len(result.succeeded)} 个，跳过 {len(result.skipped)} 个，失败 {len(result.failed)} 个。"
    )
    typer.echo(f"输出目录：{job.output_root.resolve()}")


if __name__ == "__main__":
    app()
