"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class OutputCategory(Enum):
    """输出分类，值即输出子目录名。"""

    ITEM = "item"
    CHARM = "charm"


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """遍历阶段得到的单个文件条目。"""

    file_name: str
    directory: Path
    parent_name: str
    root: Path

    @property
    def source_path(self) -> Path:
        return self.directory / self.file_name

    @property
    def relative_path(self) -> Path:
        """相对遍历根目录的路径，分类只看输入树内部的目录层级。"""

        return self.source_path.relative_to(self.root)


@dataclass(slots=True)
class FileOutcome:
    """记录单个文件的处理结果（用于汇总/日志）。"""

    source_path: Path
    status: str
    output_path: Optional[Path] = None
    message: Optional[str] = None


@dataclass(slots=True)
class BatchResult:
    """一次完整遍历的产出。"""

    succeeded: list[FileOutcome]
    skipped: list[FileOutcome]
    failed: list[FileOutcome]

    def all_outcomes(self) -> list[FileOutcome]:
        """返回所有结果记录。"""

        return [*self.succeeded, *self.skipped, *self.failed]
