"""单个文件的处理单元：过滤、overlay 判定、合成与写入。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from cit_icons.core.config import JobConfig
from cit_icons.core.models import FileOutcome, OutputCategory, SourceEntry
from cit_icons.core.naming import (
    PNG_EXTENSION,
    classify,
    derive_output_name,
    is_overlay,
    is_png,
    overlay_base_name,
    should_skip,
    strip_extension,
)
from cit_icons.core.output_manager import ImageWriteError, OutputManager
from cit_icons.core.overlay import OverlayClaims
from cit_icons.processing.dyeing import DyeCompositeError, compose_dyed_icon
from cit_icons.processing.frames import FrameExtractionError, prepare_frame
from cit_icons.processing.image_loader import ImageLoadingError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class EntryPlan:
    """描述通过过滤后的单个文件要如何产出。"""

    entry: SourceEntry
    category: OutputCategory
    output_name: str
    base_path: Optional[Path] = None

    @property
    def is_composite(self) -> bool:
        return self.base_path is not None


def plan_entry(entry: SourceEntry, claims: OverlayClaims) -> FileOutcome | EntryPlan:
    """判定文件是否需要产出；需要跳过时直接返回跳过结果。

    overlay 规则先于认领检查执行：overlay 文件会认领其底图名称，
    已被认领的底图在之后遇到时跳过。
    """

    source_path = entry.source_path
    if not is_png(entry.file_name):
        return FileOutcome(source_path=source_path, status="skip-extension")

    stem = strip_extension(entry.file_name)
    if should_skip(stem):
        return FileOutcome(source_path=source_path, status="skip-denylist")

    base_path: Optional[Path] = None
    if is_overlay(stem):
        base_name = overlay_base_name(stem)
        base_path = entry.directory / f"{base_name}.{PNG_EXTENSION}"
        if not base_path.is_file():
            return FileOutcome(
                source_path=source_path,
                status="skip-orphan-overlay",
                message=f"缺少底图: {base_path.name}",
            )
        claims.claim(base_name)
    elif claims.is_claimed(stem):
        return FileOutcome(source_path=source_path, status="skip-claimed")

    return EntryPlan(
        entry=entry,
        category=classify(entry.relative_path),
        output_name=derive_output_name(stem, entry.parent_name, overlay=base_path is not None),
        base_path=base_path,
    )


def process_entry(
    entry: SourceEntry,
    claims: OverlayClaims,
    config: JobConfig,
    output_manager: OutputManager,
) -> FileOutcome:
    """处理单个文件；解码、合成或写入失败只影响当前文件。"""

    planned = plan_entry(entry, claims)
    if isinstance(planned, FileOutcome):
        return planned

    destination = output_manager.destination_for(planned.category, planned.output_name)

    try:
        image = _render(planned, config)
    except ImageLoadingError as exc:
        return _failure(entry, "error-load", exc)
    except FrameExtractionError as exc:
        return _failure(entry, "error-frame", exc)
    except (DyeCompositeError, ValueError) as exc:
        return _failure(entry, "error-composite", exc)
    except Exception as exc:  # noqa: BLE001
        return _failure(entry, "error-render", exc)

    try:
        output_manager.save_image(image, destination)
    except ImageWriteError as exc:
        return _failure(entry, "error-write", exc)
    finally:
        image.close()

    status = "processed-composite" if planned.is_composite else "processed"
    return FileOutcome(source_path=entry.source_path, status=status, output_path=destination)


def _render(plan: EntryPlan, config: JobConfig) -> Image.Image:
    static_part = prepare_frame(plan.entry.source_path, config.output_size)
    if plan.base_path is None:
        return static_part

    try:
        dyeable_part = prepare_frame(plan.base_path, config.output_size)
        try:
            return compose_dyed_icon(dyeable_part, static_part, config.tint_color)
        finally:
            dyeable_part.close()
    finally:
        static_part.close()


def _failure(entry: SourceEntry, status: str, exc: Exception) -> FileOutcome:
    LOGGER.error(
        "处理文件出错：%s，路径 %s，所在目录 %s：%s",
        entry.file_name,
        entry.directory,
        entry.parent_name,
        exc,
    )
    return FileOutcome(source_path=entry.source_path, status=status, message=str(exc))
