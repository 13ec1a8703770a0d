import random

from legion_sim.dice import RolledDie
from legion_sim.models import AttackContext, AttackerConfig, DefenderConfig
from legion_sim.pipeline.modifiers import apply_attack_modifiers
from legion_sim.simulators.attack import resolve_attack
from legion_sim.types import AttackColor, AttackFace, AttackType

H, C, B, S = AttackFace.HIT, AttackFace.CRIT, AttackFace.BLANK, AttackFace.SURGE


def pool(*faces):
    return tuple(RolledDie(AttackColor.RED, f) for f in faces)


def make_ctx(attack_type=AttackType.RANGED, defender=None, **attacker):
    return AttackContext(AttackerConfig(**attacker), defender or DefenderConfig(), attack_type)


def test_impact_turns_hits_into_crits_before_armor():
    ctx = make_ctx(defender=DefenderConfig(armor=True), impact_x=1)
    out = apply_attack_modifiers(pool(H, H, H), ctx, aim_remaining=0)
    assert (out.hits, out.crits) == (0, 1)
    assert out.cancelled["armor"] == 2


def test_impact_needs_an_armored_target():
    out = apply_attack_modifiers(pool(H, H), make_ctx(impact_x=2), aim_remaining=0)
    assert (out.hits, out.crits) == (2, 0)


def test_armor_x_cancels_up_to_x_hits():
    ctx = make_ctx(defender=DefenderConfig(armor_x=2))
    out = apply_attack_modifiers(pool(H, H, H, C), ctx, aim_remaining=0)
    assert (out.hits, out.crits) == (1, 1)


def test_shielded_cancels_crits_first():
    ctx = make_ctx(defender=DefenderConfig(shielded_x=2))
    out = apply_attack_modifiers(pool(H, H, C), ctx, aim_remaining=0)
    assert (out.hits, out.crits) == (1, 0)
    assert out.cancelled["shielded"] == 2


def test_backup_only_at_range():
    dfn = DefenderConfig(backup=True)
    ranged = apply_attack_modifiers(pool(H, H, H, C), make_ctx(defender=dfn), aim_remaining=0)
    assert (ranged.hits, ranged.crits) == (1, 1)
    melee = apply_attack_modifiers(pool(H, H, H, C), make_ctx(AttackType.MELEE, dfn), aim_remaining=0)
    assert (melee.hits, melee.crits) == (3, 1)


def test_guardian_takes_hits_but_not_crits():
    ctx = make_ctx(defender=DefenderConfig(guardian_x=3))
    out = apply_attack_modifiers(pool(H, H, C), ctx, aim_remaining=0)
    assert (out.hits, out.crits, out.guardian_hits) == (0, 1, 2)


def test_melee_bonus_hits():
    out = apply_attack_modifiers(pool(B), make_ctx(AttackType.MELEE, melee_bonus_hits=2), aim_remaining=0)
    assert out.hits == 2 and out.blanks == 1
    out = apply_attack_modifiers(pool(B), make_ctx(melee_bonus_hits=2), aim_remaining=0)
    assert out.hits == 0


def test_lethal_uses_only_remaining_aim():
    ctx = make_ctx(lethal_x=2, pierce_x=1)
    for spent in range(3):
        out = apply_attack_modifiers(pool(H), ctx, aim_remaining=2 - spent, aim_spent=spent)
        assert out.pierce == 1 + min(2, 2 - spent)


def test_duelist_rides_on_spent_aim_or_takes_one():
    ctx = make_ctx(AttackType.MELEE, duelist=True, lethal_x=1)
    spent = apply_attack_modifiers(pool(H), ctx, aim_remaining=1, aim_spent=1)
    assert spent.pierce == 2 and spent.aim_remaining == 0
    unspent = apply_attack_modifiers(pool(H), ctx, aim_remaining=1, aim_spent=0)
    assert unspent.pierce == 1 and unspent.aim_remaining == 0
    ranged = apply_attack_modifiers(pool(H), make_ctx(duelist=True), aim_remaining=1, aim_spent=1)
    assert ranged.pierce == 0


def test_lethal_never_double_spends_aim_end_to_end():
    ctx = make_ctx(white_dice=3, aim_tokens=2, lethal_x=2)
    for seed in range(200):
        trial = resolve_attack(ctx, random.Random(seed), debug=True)
        aim_spent = trial.trace["rerolls"]["aim_spent"]
        assert trial.trace["modifiers"]["pierce"] == min(2, 2 - aim_spent)
