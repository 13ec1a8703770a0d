import pytest

from legion_sim.errors import InvalidConfigError, SimulationError
from legion_sim.models import AttackContext, AttackerConfig, DefenderConfig
from legion_sim.types import AttackSurge, AttackType, CoverType, DefenseColor, Policy


def test_enum_fields_accept_raw_values():
    atk = AttackerConfig(surge_chart="CRIT", reroll_policy="averages")
    assert atk.surge_chart is AttackSurge.CRIT
    assert atk.reroll_policy is Policy.AVERAGES

    dfn = DefenderConfig(die_color="red", cover="heavy")
    assert dfn.die_color is DefenseColor.RED
    assert dfn.cover is CoverType.HEAVY
    assert DefenderConfig(cover=1).cover is CoverType.LIGHT


def test_invalid_values_raise_one_error_type():
    with pytest.raises(InvalidConfigError):
        AttackerConfig(red_dice=-1)
    with pytest.raises(InvalidConfigError):
        AttackerConfig(marksman=1)
    with pytest.raises(InvalidConfigError):
        AttackerConfig(pierce_x=True)
    with pytest.raises(InvalidConfigError):
        DefenderConfig(die_color="black")
    with pytest.raises(InvalidConfigError):
        AttackContext(attack_type="artillery")

    err = InvalidConfigError("x")
    assert isinstance(err, SimulationError) and isinstance(err, ValueError)


def test_from_dict_rejects_unknown_fields():
    with pytest.raises(InvalidConfigError):
        AttackerConfig.from_dict({"red_dice": 1, "laser_dice": 2})
    with pytest.raises(InvalidConfigError):
        AttackContext.from_dict({"attacker": {}, "terrain": "forest"})


def test_context_dict_roundtrip():
    ctx = AttackContext.from_dict({
        "attacker": {"red_dice": 2, "surge_chart": "hit", "points": 90},
        "defender": {"die_color": "red", "cover": "light", "points": 60},
        "attack_type": "melee",
    })
    assert ctx.attack_type is AttackType.MELEE
    assert AttackContext.from_dict(ctx.to_dict()) == ctx
    assert ctx.to_dict()["defender"]["cover"] == 1


def test_gated_keywords_read_as_zero():
    ctx = AttackContext(
        attacker=AttackerConfig(blast=True, sharpshooter_x=2, duelist=True),
        defender=DefenderConfig(cover=CoverType.HEAVY, guardian_x=2, parry=True),
        attack_type=AttackType.MELEE,
    )
    assert ctx.attacker_kw("blast") is False
    assert ctx.attacker_kw("sharpshooter_x") == 0
    assert ctx.attacker_kw("duelist") is True
    assert ctx.defender_kw("cover") is CoverType.NONE
    assert ctx.defender_kw("guardian_x") == 0
    assert ctx.defender_kw("parry") is True
    # the raw record is untouched
    assert ctx.defender.cover is CoverType.HEAVY


def test_all_attack_type_opens_every_gate():
    ctx = AttackContext(
        attacker=AttackerConfig(blast=True, duelist=True, suppressive=True),
        defender=DefenderConfig(parry=True, backup=True),
        attack_type=AttackType.ALL,
    )
    assert ctx.attacker_kw("blast") and ctx.attacker_kw("duelist") and ctx.attacker_kw("suppressive")
    assert ctx.defender_kw("parry") and ctx.defender_kw("backup")


def test_high_velocity_blocks_dodge_only_at_range():
    atk = AttackerConfig(high_velocity=True)
    dfn = DefenderConfig(dodge_tokens=1)
    assert not AttackContext(atk, dfn, AttackType.RANGED).defender_can_dodge
    assert AttackContext(atk, dfn, AttackType.MELEE).defender_can_dodge
    assert not AttackContext(AttackerConfig(), DefenderConfig(), AttackType.MELEE).defender_can_dodge


def test_from_dict_rejects_non_mapping_records():
    for bad in ({"attacker": "abc"}, {"attacker": 5}, {"defender": [1]}):
        with pytest.raises(InvalidConfigError):
            AttackContext.from_dict(bad)
    with pytest.raises(InvalidConfigError):
        AttackContext.from_dict(["attacker"])
    assert AttackContext.from_dict({"attacker": None}) == AttackContext()
