"""导出任务的配置模型与固定常量。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from cit_icons.core.exceptions import InvalidConfigurationError

OUTPUT_SIZE: Tuple[int, int] = (64, 64)

# 预览渲染使用的标准“棕色”染料。
TINT_COLOR: Tuple[int, int, int, int] = (160, 101, 64, 255)

DEFAULT_INPUT_ROOT = Path("./input/rp/assets/minecraft/optifine/cit")
DEFAULT_OUTPUT_ROOT = Path("./output")

ITEM_FOLDER = "item"
CHARM_FOLDER = "charm"


@dataclass(slots=True)
class JobConfig:
    """单次导出任务的配置集合。"""

    input_root: Path = DEFAULT_INPUT_ROOT
    output_root: Path = DEFAULT_OUTPUT_ROOT
    output_size: Tuple[int, int] = OUTPUT_SIZE
    tint_color: Tuple[int, int, int, int] = TINT_COLOR

    def validate(self) -> None:
        """检查常量组合是否合法。"""

        width, height = self.output_size
        if width <= 0 or height <= 0:
            raise InvalidConfigurationError(f"输出尺寸必须大于 0: {self.output_size}")

        if len(self.tint_color) != 4 or any(not 0 <= channel <= 255 for channel in self.tint_color):
            raise InvalidConfigurationError(f"染料颜色必须为 RGBA 四元组: {self.tint_color}")
