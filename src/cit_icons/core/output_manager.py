"""输出目录准备与图像写入模块。"""

from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
from pathlib import Path

from PIL import Image

from cit_icons.core.exceptions import CitIconsError, OutputSetupError
from cit_icons.core.models import OutputCategory

LOGGER = logging.getLogger(__name__)

OUTPUT_FORMAT = "PNG"
OUTPUT_SUFFIX = ".png"


class ImageWriteError(CitIconsError):
    """输出写入失败。"""


class OutputManager:
    """负责重建输出目录、计算输出路径与原子写入 PNG。"""

    def __init__(self, output_root: Path) -> None:
        self.output_root = output_root.resolve()

    def category_dir(self, category: OutputCategory) -> Path:
        return self.output_root / category.value

    def prepare(self) -> None:
        """删除并重建输出根目录及各分类子目录。

        任何失败都会抛出 OutputSetupError，不做恢复。
        """

        try:
            if self.output_root.exists():
                LOGGER.info("清空输出目录：%s", self.output_root)
                shutil.rmtree(self.output_root)
            self.output_root.mkdir(parents=True)
            for category in OutputCategory:
                self.category_dir(category).mkdir()
        except OSError as exc:
            raise OutputSetupError(f"无法准备输出目录: {self.output_root}") from exc

    def destination_for(self, category: OutputCategory, output_name: str) -> Path:
        return self.category_dir(category) / f"{output_name}{OUTPUT_SUFFIX}"

    def save_image(self, image: Image.Image, destination: Path) -> None:
        """编码为 PNG 后原子地写入目标路径。

        先在内存中完成编码，再写入同目录下的临时文件并替换目标，
        因此目标文件要么是完整的新内容，要么保持原样。
        """

        payload = encode_png(image)

        fd, temp_name = tempfile.mkstemp(prefix=".", suffix=OUTPUT_SUFFIX, dir=destination.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(temp_name, destination)
        except OSError as exc:
            Path(temp_name).unlink(missing_ok=True)
            raise ImageWriteError(f"写入文件失败: {destination}") from exc

        LOGGER.debug("已写入 %s", destination)


def encode_png(image: Image.Image) -> bytes:
    """将图像编码为 PNG 字节串。"""

    image_to_save = image if image.mode in {"RGB", "RGBA"} else image.convert("RGBA")
    buffer = io.BytesIO()
    try:
        image_to_save.save(buffer, format=OUTPUT_FORMAT, optimize=True)
    except (OSError, ValueError) as exc:
        raise ImageWriteError("PNG 编码失败") from exc
    return buffer.getvalue()
