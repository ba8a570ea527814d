"""图片加载与模式归一化实现。"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from cit_icons.core.exceptions import CitIconsError

LOGGER = logging.getLogger(__name__)


class ImageLoadingError(CitIconsError):
    """图片加载失败。"""


def load_image(path: Path) -> Image.Image:
    """加载单张贴图并统一转换为 RGBA。

    返回值为新的 Image 对象，调用者负责关闭。
    """

    try:
        with Image.open(path) as img:
            img.load()
            if img.mode != "RGBA":
                # 调色板/灰度贴图需要保留透明度信息。
                return img.convert("RGBA")
            return img.copy()
    except (UnidentifiedImageError, OSError, SyntaxError, Image.DecompressionBombError) as exc:
        LOGGER.debug("无法识别图像文件 %s: %s", path, exc)
        raise ImageLoadingError(f"无法加载图像: {path}") from exc
