"""Static attack-type applicability of every gated keyword.

A keyword whose gate is closed for the current attack type is fully inert,
including any tokens it would otherwise consume. Keywords not listed here are
active for every attack type.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, List, Tuple

from .types import AttackType


class Gate(str, Enum):
    ANY = "any"
    RANGED = "ranged"
    MELEE = "melee"
    NOT_OVERRUN = "not_overrun"


_OPEN_FOR: Dict[Gate, FrozenSet[AttackType]] = {
    Gate.ANY: frozenset(AttackType),
    Gate.RANGED: frozenset({AttackType.ALL, AttackType.RANGED}),
    Gate.MELEE: frozenset({AttackType.ALL, AttackType.MELEE}),
    Gate.NOT_OVERRUN: frozenset({AttackType.ALL, AttackType.RANGED, AttackType.MELEE}),
}

ATTACKER_GATES: Dict[str, Gate] = {
    "melee_surge_to_hit": Gate.MELEE,
    "jar_kai_mastery": Gate.MELEE,
    "melee_bonus_hits": Gate.MELEE,
    "duelist": Gate.MELEE,
    "makashi_mastery": Gate.MELEE,
    "immune_deflect": Gate.RANGED,
    "high_velocity": Gate.RANGED,
    "sharpshooter_x": Gate.RANGED,
    "blast": Gate.RANGED,
    "death_from_above": Gate.RANGED,
    "suppressive": Gate.NOT_OVERRUN,
}

DEFENDER_GATES: Dict[str, Gate] = {
    "parry": Gate.MELEE,
    "djem_so_mastery": Gate.MELEE,
    "immune_melee_pierce": Gate.MELEE,
    "deflect": Gate.RANGED,
    "shien_mastery": Gate.RANGED,
    "backup": Gate.RANGED,
    "guardian_x": Gate.RANGED,
    "cover": Gate.RANGED,
    "cover_x": Gate.RANGED,
    "smoke_tokens": Gate.RANGED,
    "suppressed": Gate.RANGED,
    "low_profile": Gate.RANGED,
    "immune_blast": Gate.RANGED,
    "surge_to_block": Gate.NOT_OVERRUN,
}

_SIDES: Dict[str, Dict[str, Gate]] = {"attacker": ATTACKER_GATES, "defender": DEFENDER_GATES}


def gate_open(gate: Gate, attack_type: AttackType) -> bool:
    return attack_type in _OPEN_FOR[gate]


def keyword_gate(side: str, name: str) -> Gate:
    return _SIDES[side].get(name, Gate.ANY)


def closed_keywords(attack_type: AttackType) -> FrozenSet[Tuple[str, str]]:
    """(side, name) pairs that are inert for ``attack_type``."""

    return frozenset(
        (side, name)
        for side, table in _SIDES.items()
        for name, gate in table.items()
        if not gate_open(gate, attack_type)
    )


def relevant_keywords(attack_type: AttackType, side: str = "attacker") -> List[str]:
    """Gated keyword names on ``side`` that matter for ``attack_type``."""

    return sorted(name for name, gate in _SIDES[side].items() if gate_open(gate, attack_type))


__all__ = [
    "Gate",
    "ATTACKER_GATES",
    "DEFENDER_GATES",
    "gate_open",
    "keyword_gate",
    "closed_keywords",
    "relevant_keywords",
]
