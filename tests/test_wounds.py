from legion_sim.models import AttackContext, AttackerConfig, DefenderConfig
from legion_sim.pipeline.defense import DefenseOutcome
from legion_sim.pipeline.modifiers import ModifiedAttack
from legion_sim.pipeline.wounds import effective_pierce, resolve_wounds, suppression_for
from legion_sim.types import AttackType


def make_ctx(attack_type=AttackType.RANGED, attacker=None, **defender):
    return AttackContext(attacker or AttackerConfig(), DefenderConfig(**defender), attack_type)


def test_pierce_cancels_blocks():
    attack = ModifiedAttack(hits=3, crits=1, pierce=2)
    defense = DefenseOutcome(hits=3, crits=1, blocks=3)
    out = resolve_wounds(attack, defense, make_ctx())
    assert out.blocks_surviving == 1
    assert out.total_wounds == 3
    # main wounds are reported before Pierce
    assert out.main_wounds == 1


def test_immune_pierce():
    attack = ModifiedAttack(hits=2, crits=0, pierce=2)
    defense = DefenseOutcome(hits=2, crits=0, blocks=2)
    assert resolve_wounds(attack, defense, make_ctx(immune_pierce=True)).total_wounds == 0
    assert resolve_wounds(attack, defense, make_ctx(AttackType.MELEE, immune_melee_pierce=True)).total_wounds == 0
    assert resolve_wounds(attack, defense, make_ctx(immune_melee_pierce=True)).total_wounds == 2


def test_makashi_costs_one_pierce_and_removes_immunity():
    attack = ModifiedAttack(hits=4, crits=0, pierce=2)
    defense = DefenseOutcome(hits=4, crits=0, blocks=3)
    immune = make_ctx(AttackType.MELEE, immune_pierce=True, immune_melee_pierce=True)
    not_immune = make_ctx(AttackType.MELEE)
    override = make_ctx(
        AttackType.MELEE,
        AttackerConfig(makashi_mastery=True),
        immune_pierce=True,
        immune_melee_pierce=True,
    )
    assert resolve_wounds(attack, defense, immune).total_wounds == 1
    assert resolve_wounds(attack, defense, not_immune).total_wounds == 3
    assert resolve_wounds(attack, defense, override).total_wounds == 2
    assert effective_pierce(attack, override) == (1, False)


def test_guardian_blocks_feed_total():
    attack = ModifiedAttack(hits=1, crits=0, guardian_hits=2, pierce=0)
    defense = DefenseOutcome(hits=1, crits=0, guardian_hits=2, blocks=0, guardian_blocks=1)
    out = resolve_wounds(attack, defense, make_ctx(guardian_x=2))
    assert out.total_wounds == 2
    assert out.guardian_wounds == 1 and out.main_wounds == 1


def test_suppression():
    assert suppression_for(make_ctx()) == 1
    assert suppression_for(make_ctx(attacker=AttackerConfig(suppressive=True))) == 2
    assert suppression_for(make_ctx(AttackType.OVERRUN, AttackerConfig(suppressive=True))) == 0


def test_deflect_reflects_one_wound_with_a_block():
    attack = ModifiedAttack(hits=2, crits=0)
    defense = DefenseOutcome(hits=2, crits=0, blocks=1, surges_rolled=2)
    ctx = make_ctx(deflect=True, dodge_tokens=1)
    assert resolve_wounds(attack, defense, ctx).deflect_wounds == 1
    shien = make_ctx(deflect=True, shien_mastery=True, dodge_tokens=1)
    assert resolve_wounds(attack, defense, shien).deflect_wounds == 2
    no_dodge = make_ctx(deflect=True)
    assert resolve_wounds(attack, defense, no_dodge).deflect_wounds == 0
    immune = make_ctx(attacker=AttackerConfig(immune_deflect=True), deflect=True, dodge_tokens=1)
    assert resolve_wounds(attack, defense, immune).deflect_wounds == 0
    melee = make_ctx(AttackType.MELEE, deflect=True, dodge_tokens=1)
    assert resolve_wounds(attack, defense, melee).deflect_wounds == 0


def test_djem_so_reflects_on_a_blank():
    ctx = make_ctx(AttackType.MELEE, djem_so_mastery=True)
    defense = DefenseOutcome(hits=1, crits=0)
    assert resolve_wounds(ModifiedAttack(hits=1, crits=0, blanks=1), defense, ctx).djem_so_wounds == 1
    assert resolve_wounds(ModifiedAttack(hits=1, crits=0, blanks=0), defense, ctx).djem_so_wounds == 0
    ranged = make_ctx(djem_so_mastery=True)
    assert resolve_wounds(ModifiedAttack(hits=1, crits=0, blanks=1), defense, ranged).djem_so_wounds == 0
