"""导出流水线：准备输出目录、深度优先遍历并逐个处理文件。"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from cit_icons.core.config import JobConfig
from cit_icons.core.exceptions import InvalidConfigurationError
from cit_icons.core.models import BatchResult, FileOutcome
from cit_icons.core.output_manager import OutputManager
from cit_icons.core.overlay import OverlayClaims
from cit_icons.core.progress import ProgressUpdate
from cit_icons.core.scanner import walk_source_tree
from cit_icons.processing.worker import process_entry

LOGGER = logging.getLogger(__name__)


ProgressCallback = Optional[Callable[[ProgressUpdate], None]]


def process_tree(config: JobConfig, progress_callback: ProgressCallback = None) -> BatchResult:
    """导出入口：重建输出目录后按固定顺序串行处理每个文件。

    每个文件的写入都在处理下一个文件之前完成，结束日志只会在全部写入
    之后输出。输出目录准备失败时抛出 OutputSetupError。
    """

    config.validate()
    input_root = config.input_root
    if not input_root.is_dir():
        raise InvalidConfigurationError(f"输入目录不存在: {input_root}")

    output_manager = OutputManager(config.output_root)
    output_manager.prepare()

    LOGGER.info("开始扫描输入路径：%s", input_root)
    entries = list(walk_source_tree(input_root))
    total = len(entries)
    LOGGER.info("发现 %d 个候选文件", total)

    successes: list[FileOutcome] = []
    skipped: list[FileOutcome] = []
    failed: list[FileOutcome] = []

    claims = OverlayClaims()
    _emit_progress(progress_callback, 0, total, "开始处理")

    for completed, entry in enumerate(entries, start=1):
        outcome = process_entry(entry, claims, config, output_manager)
        _record_outcome(outcome, successes, skipped, failed)
        _emit_progress(progress_callback, completed, total)

    LOGGER.info(
        "处理完成：成功 %d 个，跳过 %d 个，失败 %d 个",
        len(successes),
        len(skipped),
        len(failed),
    )
    _emit_progress(progress_callback, total, total, "处理完成", status="done")
    return BatchResult(succeeded=successes, skipped=skipped, failed=failed)


def _record_outcome(
    outcome: FileOutcome,
    successes: list[FileOutcome],
    skipped: list[FileOutcome],
    failed: list[FileOutcome],
) -> None:
    if outcome.status.startswith("processed"):
        successes.append(outcome)
    elif outcome.status.startswith("skip"):
        skipped.append(outcome)
    else:
        failed.append(outcome)


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str] = None,
    status: str = "running",
) -> None:
    if not callback:
        return
    callback(ProgressUpdate(total=total, completed=completed, message=message, status=status))
