"""Cover value and the cover roll.

Improvements are summed with the terrain value and capped at heavy cover
before Sharpshooter is subtracted; the order matters when both apply.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import random

from ..dice import RolledDie, face_probability, roll_defense
from ..models import AttackContext
from ..types import CoverType, DefenseColor, DefenseFace

MAX_COVER = int(CoverType.HEAVY)


@dataclass(frozen=True)
class CoverOutcome:
    value: int
    cancelled: int = 0
    rolled: Tuple[RolledDie, ...] = ()


def effective_cover(ctx: AttackContext) -> int:
    """Effective cover 0..2; always 0 outside ranged attacks."""

    base = int(ctx.defender_kw("cover"))
    if ctx.attacker_kw("blast") and not ctx.defender_kw("immune_blast"):
        return 0
    if ctx.attacker_kw("death_from_above"):
        return 0
    improvements = (
        int(ctx.defender_kw("suppressed"))
        + ctx.defender_kw("cover_x")
        + ctx.defender_kw("smoke_tokens")
    )
    value = min(MAX_COVER, base + improvements)
    return max(0, value - ctx.attacker_kw("sharpshooter_x"))


def cancel_faces(value: int) -> Tuple[DefenseFace, ...]:
    if value >= MAX_COVER:
        return (DefenseFace.BLOCK, DefenseFace.SURGE)
    if value > 0:
        return (DefenseFace.BLOCK,)
    return ()


def cover_cancel_chance(value: int) -> float:
    """Chance that one cover die cancels a hit."""

    return sum(face_probability(DefenseColor.WHITE, face) for face in cancel_faces(value))


def resolve_cover(hits: int, ctx: AttackContext, rng: random.Random) -> CoverOutcome:
    value = effective_cover(ctx)
    if value == 0 or hits <= 0:
        return CoverOutcome(value=value)
    dice_count = hits
    guaranteed = 0
    if ctx.defender_kw("low_profile"):
        dice_count -= 1
        guaranteed = 1
    rolled = tuple(roll_defense(rng, DefenseColor.WHITE) for _ in range(dice_count))
    faces = cancel_faces(value)
    cancels = guaranteed + sum(1 for die in rolled if die.face in faces)
    return CoverOutcome(value=value, cancelled=min(hits, cancels), rolled=rolled)


__all__ = [
    "CoverOutcome",
    "MAX_COVER",
    "effective_cover",
    "cancel_faces",
    "cover_cancel_chance",
    "resolve_cover",
]
