"""命名规则、过滤规则与 overlay 认领逻辑的单元测试。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from cit_icons.core.models import FileOutcome, OutputCategory, SourceEntry
from cit_icons.core.naming import (
    MatchRule,
    classify,
    derive_output_name,
    first_match,
    is_png,
    normalize_name,
    should_skip,
)
from cit_icons.core.overlay import OverlayClaims
from cit_icons.processing.worker import EntryPlan, plan_entry


@pytest.mark.parametrize(
    ("identifier", "expected"),
    [
        ("the_ring_of_fire", "The_Ring_of_Fire"),
        ("sword_of_the_king", "Sword_of_the_King"),
        ("of_mice", "Of_Mice"),
        ("iron_sword", "Iron_Sword"),
        ("a__b", "A__B"),
        ("", ""),
        ("x", "X"),
        ("mIxed_CASE", "MIxed_CASE"),
    ],
)
def test_normalize_name(identifier: str, expected: str) -> None:
    assert normalize_name(identifier) == expected


@pytest.mark.parametrize(
    "stem",
    [
        "sword_cooldown",
        "shield_blocking",
        "crossbow_loaded",
        "crossbow_arrow",
        "bow_pulling_0",
        "crossbow_loading_1",
        "elytra_e",
        "diamond_armor",
        "diamond_armor_helmet",
    ],
)
def test_should_skip_denylisted_names(stem: str) -> None:
    assert should_skip(stem) is True


@pytest.mark.parametrize("stem", ["sword", "torch_overlay", "eel", "armorer_badge", "cooldown_gem", "pulling_rope"])
def test_should_skip_keeps_regular_names(stem: str) -> None:
    assert should_skip(stem) is False


def test_first_match_reports_rule() -> None:
    assert first_match("bow_pulling_2") == MatchRule("infix", "_pulling_")
    assert first_match("bow") is None


def test_unknown_rule_kind_is_rejected() -> None:
    with pytest.raises(ValueError):
        first_match("bow", rules=(MatchRule("prefix", "b"),))


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        ("torch.png", True),
        ("torch.PNG", False),
        ("torch.png.bak", False),
        ("torch.properties", False),
        ("png", False),
    ],
)
def test_is_png_is_case_sensitive(file_name: str, expected: bool) -> None:
    assert is_png(file_name) is expected


def test_classify_charm_and_item() -> None:
    assert classify("input/rp/assets/minecraft/optifine/cit/charm/foo/bar.png") is OutputCategory.CHARM
    assert classify("input/rp/assets/minecraft/optifine/cit/item/bar.png") is OutputCategory.ITEM
    assert classify(Path("cit/charm/bar.png")) is OutputCategory.CHARM
    # 只有文件名叫 charm 不算。
    assert classify("cit/item/charm.png") is OutputCategory.ITEM
    assert classify("cit/charms/bar.png") is OutputCategory.ITEM


@pytest.mark.parametrize(
    ("stem", "parent", "overlay", "expected"),
    [
        ("iron_sword_icon", "weapons", False, "Iron_Sword"),
        ("potion", "healing_draught", False, "Healing_Draught"),
        ("potion", "potion_of_the_deep", False, "Potion_of_the_Deep"),
        ("blade_standby", "weapons", False, "Blade"),
        ("lantern_full", "misc", False, "Lantern"),
        ("gem_icon_standby", "misc", False, "Gem"),
        ("gem_standby_icon", "misc", False, "Gem"),
        ("gem_icon_full", "misc", False, "Gem"),
        ("gem_full_standby_icon", "misc", False, "Gem"),
        ("lantern_icon_overlay", "misc", True, "Lantern"),
        ("torch_overlay", "misc", True, "Torch"),
        ("potion_overlay", "elixir", True, "Elixir"),
        ("torch_overlay", "misc", False, "Torch_Overlay"),
    ],
)
def test_derive_output_name(stem: str, parent: str, overlay: bool, expected: str) -> None:
    assert derive_output_name(stem, parent, overlay=overlay) == expected


def _png(path: Path) -> Path:
    Image.new("RGBA", (16, 16), (255, 255, 255, 255)).save(path)
    return path


def test_overlay_claims_base_before_base_is_seen(tmp_path: Path) -> None:
    _png(tmp_path / "torch.png")
    _png(tmp_path / "torch_overlay.png")
    claims = OverlayClaims()

    overlay_plan = plan_entry(SourceEntry("torch_overlay.png", tmp_path, "misc", tmp_path), claims)
    assert isinstance(overlay_plan, EntryPlan)
    assert overlay_plan.is_composite
    assert overlay_plan.base_path == tmp_path / "torch.png"
    assert overlay_plan.output_name == "Torch"
    assert "torch" in claims

    base_plan = plan_entry(SourceEntry("torch.png", tmp_path, "misc", tmp_path), claims)
    assert isinstance(base_plan, FileOutcome)
    assert base_plan.status == "skip-claimed"


def test_base_seen_first_is_planned_as_plain_resize(tmp_path: Path) -> None:
    _png(tmp_path / "torch.png")
    _png(tmp_path / "torch_overlay.png")
    claims = OverlayClaims()

    base_plan = plan_entry(SourceEntry("torch.png", tmp_path, "misc", tmp_path), claims)
    assert isinstance(base_plan, EntryPlan)
    assert not base_plan.is_composite
    assert len(claims) == 0


def test_orphan_overlay_is_skipped_without_claim(tmp_path: Path) -> None:
    _png(tmp_path / "x_overlay.png")
    claims = OverlayClaims()

    outcome = plan_entry(SourceEntry("x_overlay.png", tmp_path, "misc", tmp_path), claims)

    assert isinstance(outcome, FileOutcome)
    assert outcome.status == "skip-orphan-overlay"
    assert not claims.is_claimed("x")


def test_overlay_sibling_must_be_png(tmp_path: Path) -> None:
    (tmp_path / "x.jpg").write_bytes(b"")
    _png(tmp_path / "x_overlay.png")

    outcome = plan_entry(SourceEntry("x_overlay.png", tmp_path, "misc", tmp_path), OverlayClaims())

    assert isinstance(outcome, FileOutcome)
    assert outcome.status == "skip-orphan-overlay"


def test_claims_are_scoped_per_instance() -> None:
    first = OverlayClaims()
    second = OverlayClaims()
    first.claim("torch")

    assert first.is_claimed("torch")
    assert not second.is_claimed("torch")
    assert list(first) == ["torch"]
