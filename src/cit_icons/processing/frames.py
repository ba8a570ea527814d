"""动画帧截取与最近邻缩放。"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

from PIL import Image

from cit_icons.core.exceptions import CitIconsError
from cit_icons.processing.image_loader import load_image


class FrameExtractionError(CitIconsError):
    """无法从图像中截取首帧。"""


def extract_first_frame(image: Image.Image) -> Image.Image:
    """截取左上角边长为宽度的正方形区域。

    动画贴图是纵向排列的 W×W 帧条，取顶部正方形即得到第 0 帧；
    高度不超过宽度的静态贴图按原样保留。
    """

    width, height = image.size
    if width <= 0 or height <= 0:
        raise FrameExtractionError(f"图像尺寸无效: {image.size}")

    return image.crop((0, 0, width, min(height, width)))


def resize_frame(frame: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """仅使用最近邻插值缩放，保持像素画的硬边缘。"""

    return frame.resize(size, Image.Resampling.NEAREST)


def prepare_frame(path: Path, size: Tuple[int, int]) -> Image.Image:
    """加载贴图、截取首帧并缩放到输出尺寸。"""

    image = load_image(path)
    try:
        frame = extract_first_frame(image)
        return resize_frame(frame, size)
    finally:
        image.close()
