"""染色合成：由可染色底图、固定染料色与静态 overlay 合成物品图标。"""

from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image

from cit_icons.core.exceptions import CitIconsError


class DyeCompositeError(CitIconsError):
    """染色合成失败。"""


def _to_unit_array(image: Image.Image) -> np.ndarray:
    return np.asarray(image.convert("RGBA"), dtype=np.float64) / 255.0


def _from_unit_array(array: np.ndarray) -> Image.Image:
    clipped = np.clip(np.rint(array * 255.0), 0, 255).astype(np.uint8)
    return Image.fromarray(clipped)


def _check_sizes(backdrop: Image.Image, source: Image.Image) -> None:
    if backdrop.size != source.size:
        raise DyeCompositeError(f"图层尺寸不一致: {backdrop.size} != {source.size}")


def destination_in(destination: Image.Image, source: Image.Image) -> Image.Image:
    """Porter-Duff destination-in：保留目标颜色，透明度乘以源图层的透明度。"""

    _check_sizes(destination, source)
    dst = _to_unit_array(destination)
    src_alpha = _to_unit_array(source)[..., 3]

    result = dst.copy()
    result[..., 3] = dst[..., 3] * src_alpha
    return _from_unit_array(result)


def multiply_blend(backdrop: Image.Image, source: Image.Image) -> Image.Image:
    """按 W3C 合成规范将 ``source`` 以 multiply 模式叠加到 ``backdrop`` 上。"""

    _check_sizes(backdrop, source)
    dst = _to_unit_array(backdrop)
    src = _to_unit_array(source)

    alpha_b = dst[..., 3:4]
    alpha_s = src[..., 3:4]
    color_b = dst[..., :3]
    color_s = src[..., :3]

    alpha_o = alpha_s + alpha_b * (1.0 - alpha_s)
    premultiplied = (
        alpha_s * (1.0 - alpha_b) * color_s
        + alpha_b * (1.0 - alpha_s) * color_b
        + alpha_s * alpha_b * (color_s * color_b)
    )
    color_o = np.divide(premultiplied, alpha_o, out=np.zeros_like(premultiplied), where=alpha_o > 0)

    return _from_unit_array(np.concatenate([color_o, alpha_o], axis=-1))


def build_tint_mask(dyeable_part: Image.Image, tint_color: Tuple[int, int, int, int]) -> Image.Image:
    """生成纯色画布，并只在底图不透明处保留染料色。"""

    canvas = Image.new("RGBA", dyeable_part.size, tint_color)
    return destination_in(canvas, dyeable_part)


def dye(dyeable_part: Image.Image, tint_color: Tuple[int, int, int, int]) -> Image.Image:
    """以 multiply 方式为底图染色，保留底图的明暗细节。"""

    tint_mask = build_tint_mask(dyeable_part, tint_color)
    return multiply_blend(dyeable_part, tint_mask)


def compose_dyed_icon(
    dyeable_part: Image.Image,
    static_part: Image.Image,
    tint_color: Tuple[int, int, int, int],
) -> Image.Image:
    """染色底图在下、静态 overlay 在上，顺序与游戏内一致，不可颠倒。"""

    _check_sizes(dyeable_part, static_part)
    dyed_part = dye(dyeable_part, tint_color)
    return Image.alpha_composite(dyed_part, static_part.convert("RGBA"))
