"""文件名过滤、分类与输出命名规则。

所有与命名约定相关的规则都以有序规则表的形式声明，由 ``_matches`` 与
``_apply`` 统一分发，便于单独测试与扩展。
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Optional, Sequence

from cit_icons.core.models import OutputCategory

PNG_EXTENSION = "png"
OVERLAY_SUFFIX = "_overlay"
CHARM_SEGMENT = "charm"

# 非首位时保持小写的冠词/介词。
LOWERCASE_WORDS = frozenset({"of", "the"})

# 与 R3 Casino 药水包的约定一致：文件统一叫 potion，真实名称在父目录上。
POTION_NAME = "potion"


@dataclass(frozen=True, slots=True)
class MatchRule:
    """名称匹配规则：``kind`` 为 suffix 或 infix。"""

    kind: str
    token: str


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """名称改写规则。

    ``only_overlay`` 为真时仅作用于 overlay 文件；``repeat`` 为真的规则会
    反复执行直到名称不再变化，叠加的后缀与顺序无关。
    """

    action: str
    token: str = ""
    only_overlay: bool = False
    repeat: bool = False


# 渲染状态类的辅助贴图（装填帧、冷却、盔甲层等）不是独立物品。
SKIP_RULES: tuple[MatchRule, ...] = (
    MatchRule("suffix", "_e"),
    MatchRule("suffix", "_blocking"),
    MatchRule("infix", "_pulling_"),
    MatchRule("infix", "_loading_"),
    MatchRule("suffix", "_loaded"),
    MatchRule("suffix", "_arrow"),
    MatchRule("infix", "_armor"),
    MatchRule("suffix", "_cooldown"),
)

NAME_RULES: tuple[RewriteRule, ...] = (
    RewriteRule("strip-suffix", OVERLAY_SUFFIX, only_overlay=True),
    RewriteRule("parent-if-equals", POTION_NAME),
    RewriteRule("strip-suffix", "_standby", repeat=True),
    RewriteRule("strip-suffix", "_icon", repeat=True),
    RewriteRule("strip-suffix", "_full", repeat=True),
)


def _matches(name: str, rule: MatchRule) -> bool:
    if rule.kind == "suffix":
        return name.endswith(rule.token)
    if rule.kind == "infix":
        return rule.token in name
    raise ValueError(f"未知的匹配类型: {rule.kind}")


def _apply(name: str, rule: RewriteRule, parent_name: str) -> str:
    if rule.action == "strip-suffix":
        return name[: -len(rule.token)] if name.endswith(rule.token) else name
    if rule.action == "parent-if-equals":
        return parent_name if name == rule.token else name
    raise ValueError(f"未知的改写动作: {rule.action}")


def get_extension(file_name: str) -> str:
    """返回最后一个点号之后的部分；没有点号时返回整个名称。"""

    return file_name.rsplit(".", 1)[-1]


def is_png(file_name: str) -> bool:
    """扩展名大小写敏感，只接受 ``png``。"""

    return "." in file_name and get_extension(file_name) == PNG_EXTENSION


def strip_extension(file_name: str) -> str:
    suffix = f".{PNG_EXTENSION}"
    return file_name[: -len(suffix)] if file_name.endswith(suffix) else file_name


def first_match(name: str, rules: Sequence[MatchRule] = SKIP_RULES) -> Optional[MatchRule]:
    """返回第一条命中的规则，未命中时返回 None。"""

    for rule in rules:
        if _matches(name, rule):
            return rule
    return None


def should_skip(stem: str) -> bool:
    """不含扩展名的文件名命中任一过滤规则时返回 True。"""

    return first_match(stem) is not None


def is_overlay(stem: str) -> bool:
    return stem.endswith(OVERLAY_SUFFIX)


def overlay_base_name(stem: str) -> str:
    """去掉 ``_overlay`` 后缀，得到底图的文件名（不含扩展名）。"""

    return stem[: -len(OVERLAY_SUFFIX)] if is_overlay(stem) else stem


def classify(path: PurePath | str) -> OutputCategory:
    """路径中任一目录层级名为 ``charm`` 时归为 CHARM，否则为 ITEM。"""

    directories = PurePath(path).parent.parts
    if CHARM_SEGMENT in directories:
        return OutputCategory.CHARM
    return OutputCategory.ITEM


def normalize_name(identifier: str) -> str:
    """按下划线分词并将每段首字母大写，分隔符保留。

    首段总是大写；之后的 ``of``/``the`` 保持原样。
    """

    pieces = identifier.split("_")
    return "_".join(_capitalize_piece(piece, index) for index, piece in enumerate(pieces))


def _capitalize_piece(piece: str, index: int) -> str:
    if not piece:
        return piece
    if index != 0 and piece in LOWERCASE_WORDS:
        return piece
    return piece[0].upper() + piece[1:]


def derive_output_name(
    stem: str,
    parent_name: str,
    *,
    overlay: bool = False,
    rules: Sequence[RewriteRule] = NAME_RULES,
    normalizer: Callable[[str], str] = normalize_name,
) -> str:
    """依次应用改写规则后做大小写规范化，得到输出文件名（不含扩展名）。"""

    name = stem
    for rule in rules:
        if rule.only_overlay and not overlay:
            continue
        name = _apply(name, rule, parent_name)

    repeated = [rule for rule in rules if rule.repeat and (overlay or not rule.only_overlay)]
    previous = None
    while name != previous:
        previous = name
        for rule in repeated:
            name = _apply(name, rule, parent_name)
    return normalizer(name)
