"""overlay 与底图处理顺序的状态记录。"""

from __future__ import annotations

from typing import Iterator


class OverlayClaims:
    """记录已被 overlay 文件认领的底图名称（不含扩展名）。

    生命周期限定在一次遍历内；只允许插入。被认领的底图不再走普通缩放，
    否则会用未染色的结果覆盖合成图。
    """

    def __init__(self) -> None:
        self._claimed: set[str] = set()

    def claim(self, base_name: str) -> None:
        self._claimed.add(base_name)

    def is_claimed(self, base_name: str) -> bool:
        return base_name in self._claimed

    def __contains__(self, base_name: object) -> bool:
        return base_name in self._claimed

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._claimed))

    def __len__(self) -> int:
        return len(self._claimed)
