from legion_sim.keywords import (
    ATTACKER_GATES,
    DEFENDER_GATES,
    Gate,
    closed_keywords,
    gate_open,
    keyword_gate,
    relevant_keywords,
)
from legion_sim.types import AttackType


def test_gate_table():
    assert gate_open(Gate.ANY, AttackType.OVERRUN)
    assert gate_open(Gate.RANGED, AttackType.ALL)
    assert not gate_open(Gate.RANGED, AttackType.MELEE)
    assert not gate_open(Gate.MELEE, AttackType.OVERRUN)
    assert not gate_open(Gate.NOT_OVERRUN, AttackType.OVERRUN)


def test_ungated_keywords_default_to_any():
    assert keyword_gate("attacker", "pierce_x") is Gate.ANY
    assert keyword_gate("defender", "armor") is Gate.ANY
    assert keyword_gate("defender", "cover") is Gate.RANGED


def test_relevant_keywords_for_melee():
    attacker = relevant_keywords(AttackType.MELEE, "attacker")
    defender = relevant_keywords(AttackType.MELEE, "defender")
    assert "duelist" in attacker and "makashi_mastery" in attacker
    assert "blast" not in attacker and "high_velocity" not in attacker
    assert "parry" in defender and "djem_so_mastery" in defender
    assert "cover" not in defender and "deflect" not in defender
    assert attacker == sorted(attacker)


def test_all_keeps_everything_and_overrun_drops_suppressive():
    assert set(relevant_keywords(AttackType.ALL, "attacker")) == set(ATTACKER_GATES)
    assert set(relevant_keywords(AttackType.ALL, "defender")) == set(DEFENDER_GATES)
    assert closed_keywords(AttackType.ALL) == frozenset()

    closed = closed_keywords(AttackType.OVERRUN)
    assert ("attacker", "suppressive") in closed
    assert ("defender", "surge_to_block") in closed
    assert ("attacker", "pierce_x") not in closed
