"""纹理目录的深度优先遍历。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from cit_icons.core.models import SourceEntry


def _sorted_children(path: Path) -> list[Path]:
    """同级条目按名称固定排序，文件与目录交错出现。"""

    return sorted(path.iterdir(), key=lambda child: child.name)


def walk_source_tree(root: Path) -> Iterator[SourceEntry]:
    """深度优先遍历 ``root``，逐个产出文件条目。

    每个子目录会在其下一个同级条目之前被完整遍历。根目录下文件的
    ``parent_name`` 为根目录自身的名称（例如 ``cit``）。
    """

    resolved_root = root.resolve()
    yield from _walk(resolved_root, resolved_root, resolved_root.name)


def _walk(root: Path, current: Path, parent_name: str) -> Iterator[SourceEntry]:
    for child in _sorted_children(current):
        if child.is_dir():
            yield from _walk(root, child, child.name)
        elif child.is_file():
            yield SourceEntry(file_name=child.name, directory=current, parent_name=parent_name, root=root)
