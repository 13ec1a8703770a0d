import pytest

from legion_sim.config import _deep_merge, env_overrides, load_configs, load_context
from legion_sim.errors import InvalidConfigError
from legion_sim.types import AttackType, CoverType

def test_deep_merge_simple():
    a = {"attacker": {"red_dice": 2, "pierce_x": 1}, "defender": {"armor": True}}
    b = {"attacker": {"pierce_x": 3}, "defender": {"cover": "light"}}
    c = _deep_merge(a, b)
    assert c["attacker"]["red_dice"] == 2 and c["attacker"]["pierce_x"] == 3
    assert c["defender"]["armor"] is True and c["defender"]["cover"] == "light"

def test_env_overrides_parsing(monkeypatch):
    monkeypatch.setenv("LEGION_SIM__ATTACKER__RED_DICE", "4")
    monkeypatch.setenv("LEGION_SIM__DEFENDER__IMPERVIOUS", "true")
    monkeypatch.setenv("LEGION_SIM__ATTACK_TYPE", "melee")
    d = env_overrides()
    assert d["attacker"]["red_dice"] == 4
    assert d["defender"]["impervious"] is True
    assert d["attack_type"] == "melee"

def test_presets_merge_in_order(tmp_path):
    base = tmp_path / "base.yaml"
    base.write_text("attacker:\n  red_dice: 2\n  surge_chart: hit\ndefender:\n  cover: heavy\n")
    extra = tmp_path / "extra.json"
    extra.write_text('{"attacker": {"red_dice": 5}, "attack_type": "all"}')
    cfg = load_configs([str(base), str(extra)])
    assert cfg["attacker"] == {"red_dice": 5, "surge_chart": "hit"}

    ctx = load_context([str(base), str(extra)], env_prefix=None)
    assert ctx.attacker.red_dice == 5
    assert ctx.defender.cover is CoverType.HEAVY
    assert ctx.attack_type is AttackType.ALL

def test_env_then_explicit_overrides(tmp_path, monkeypatch):
    preset = tmp_path / "p.yaml"
    preset.write_text("attacker:\n  red_dice: 1\n")
    monkeypatch.setenv("TEST_LS__ATTACKER__RED_DICE", "3")
    monkeypatch.setenv("TEST_LS__ATTACKER__PIERCE_X", "1")
    ctx = load_context([str(preset)], env_prefix="TEST_LS__", overrides={"attacker": {"pierce_x": 2}})
    assert ctx.attacker.red_dice == 3
    assert ctx.attacker.pierce_x == 2

def test_bad_presets_raise(tmp_path):
    broken = tmp_path / "broken.yaml"
    broken.write_text("attacker: [unclosed\n")
    with pytest.raises(InvalidConfigError):
        load_configs([str(broken)])
    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n")
    with pytest.raises(InvalidConfigError):
        load_configs([str(listing)])
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("attacker:\n  laser_dice: 2\n")
    with pytest.raises(InvalidConfigError):
        load_context([str(unknown)], env_prefix=None)

def test_empty_preset_is_default_context(tmp_path):
    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    ctx = load_context([str(empty)], env_prefix=None)
    assert ctx.attacker.dice_count == 0
    assert ctx.attack_type is AttackType.RANGED
