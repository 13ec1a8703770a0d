"""Die faces, probabilities and the color upgrade lattice.

Attack dice are eight sided and defense dice six sided; the face tables below
are the physical dice, so probabilities are simply face counts over sides.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union
import random

from .types import (
    ATTACK_COLOR_ORDER,
    DEFENSE_COLOR_ORDER,
    AttackColor,
    AttackFace,
    DefenseColor,
    DefenseFace,
)

B, H, C, S = AttackFace.BLANK, AttackFace.HIT, AttackFace.CRIT, AttackFace.SURGE

ATTACK_FACES: Dict[AttackColor, Tuple[AttackFace, ...]] = {
    AttackColor.WHITE: (B, B, B, B, B, H, C, S),
    AttackColor.BLACK: (B, B, B, H, H, H, C, S),
    AttackColor.RED: (B, H, H, H, H, H, C, S),
}

DEFENSE_FACES: Dict[DefenseColor, Tuple[DefenseFace, ...]] = {
    DefenseColor.WHITE: (
        DefenseFace.BLANK,
        DefenseFace.BLANK,
        DefenseFace.BLANK,
        DefenseFace.BLANK,
        DefenseFace.BLOCK,
        DefenseFace.SURGE,
    ),
    DefenseColor.RED: (
        DefenseFace.BLANK,
        DefenseFace.BLANK,
        DefenseFace.BLOCK,
        DefenseFace.BLOCK,
        DefenseFace.BLOCK,
        DefenseFace.SURGE,
    ),
}

Color = Union[AttackColor, DefenseColor]
Face = Union[AttackFace, DefenseFace]


@dataclass(frozen=True)
class RolledDie:
    """One die in a pool. Rerolls and conversions build a new instance."""

    color: Color
    face: Face

    def with_face(self, face: Face) -> "RolledDie":
        return RolledDie(color=self.color, face=face)


def _faces_for(color: Color) -> Tuple[Face, ...]:
    if isinstance(color, AttackColor):
        return ATTACK_FACES[color]
    if isinstance(color, DefenseColor):
        return DEFENSE_FACES[color]
    raise ValueError(f"unknown die color {color!r}")


def face_probability(color: Color, face: Face) -> float:
    faces = _faces_for(color)
    return faces.count(face) / len(faces)


def roll(rng: random.Random, color: Color) -> RolledDie:
    faces = _faces_for(color)
    return RolledDie(color=color, face=faces[rng.randrange(len(faces))])


def roll_attack(rng: random.Random, color: AttackColor) -> RolledDie:
    return roll(rng, color)


def roll_defense(rng: random.Random, color: DefenseColor) -> RolledDie:
    return roll(rng, color)


def _tiers(color: Color) -> Tuple[Color, ...]:
    return ATTACK_COLOR_ORDER if isinstance(color, AttackColor) else DEFENSE_COLOR_ORDER


def color_rank(color: Color) -> int:
    """Position in the tier list, 0 being the worst-performing color."""

    return _tiers(color).index(color)


def upgrade(color: Color, steps: int = 1) -> Color:
    tiers = _tiers(color)
    return tiers[min(len(tiers) - 1, tiers.index(color) + max(0, steps))]


def downgrade(color: Color, steps: int = 1) -> Color:
    tiers = _tiers(color)
    return tiers[max(0, tiers.index(color) - max(0, steps))]


__all__ = [
    "ATTACK_FACES",
    "DEFENSE_FACES",
    "RolledDie",
    "face_probability",
    "roll",
    "roll_attack",
    "roll_defense",
    "color_rank",
    "upgrade",
    "downgrade",
]
