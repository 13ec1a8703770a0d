"""Closed enumerations shared across the attack pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any, Type, TypeVar

E = TypeVar("E", bound=Enum)


class AttackType(str, Enum):
    ALL = "all"
    RANGED = "ranged"
    MELEE = "melee"
    OVERRUN = "overrun"


class AttackFace(str, Enum):
    BLANK = "blank"
    HIT = "hit"
    CRIT = "crit"
    SURGE = "surge"


class DefenseFace(str, Enum):
    BLANK = "blank"
    BLOCK = "block"
    SURGE = "surge"


class AttackColor(str, Enum):
    WHITE = "white"
    BLACK = "black"
    RED = "red"


class DefenseColor(str, Enum):
    WHITE = "white"
    RED = "red"


class AttackSurge(str, Enum):
    """Surge conversion chart printed on an attacker's unit card."""

    NONE = "none"
    HIT = "hit"
    CRIT = "crit"


class DefenseSurge(str, Enum):
    NONE = "none"
    BLOCK = "block"


class CoverType(int, Enum):
    NONE = 0
    LIGHT = 1
    HEAVY = 2


class Policy(str, Enum):
    """How token spending weighs a guaranteed upgrade against a reroll."""

    DETERMINISTIC = "deterministic"
    AVERAGES = "averages"


# Worst-performing first; used for tie-breaks and "remove the worst die".
ATTACK_COLOR_ORDER = (AttackColor.WHITE, AttackColor.BLACK, AttackColor.RED)
DEFENSE_COLOR_ORDER = (DefenseColor.WHITE, DefenseColor.RED)


def coerce_enum(enum_cls: Type[E], value: Any) -> E:
    """Accept an enum member or its raw value; raise ``ValueError`` otherwise."""

    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        value = value.strip().lower()
        if enum_cls is CoverType:
            for member in enum_cls:
                if member.name.lower() == value:
                    return member
    return enum_cls(value)


__all__ = [
    "AttackType",
    "AttackFace",
    "DefenseFace",
    "AttackColor",
    "DefenseColor",
    "AttackSurge",
    "DefenseSurge",
    "CoverType",
    "Policy",
    "ATTACK_COLOR_ORDER",
    "DEFENSE_COLOR_ORDER",
    "coerce_enum",
]
