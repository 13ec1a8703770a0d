from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
import random

from ..dice import RolledDie, color_rank, roll_attack
from ..models import AttackContext
from ..types import AttackFace, Policy
from .decision import BLANK_FACES, decide
from .surges import convert_attack_surges

AIM_DICE_PER_TOKEN = 2

# An unconverted surge is rerolled after a true blank.
_FACE_RANK: Dict[AttackFace, int] = {
    AttackFace.BLANK: 0,
    AttackFace.SURGE: 1,
    AttackFace.HIT: 2,
    AttackFace.CRIT: 3,
}


@dataclass(frozen=True)
class RerollOutcome:
    pool: Tuple[RolledDie, ...]
    aim_spent: int = 0
    aim_saved: int = 0
    observation_spent: int = 0


def reroll_candidates(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> List[int]:
    """Indices of dice that would end up blank, worst first."""

    projected = convert_attack_surges(pool, ctx).pool
    bad = [i for i, die in enumerate(projected) if die.face in BLANK_FACES]
    return sorted(bad, key=lambda i: (_FACE_RANK[projected[i].face], color_rank(pool[i].color), i))


def reroll_dice(
    pool: Tuple[RolledDie, ...], indices: Iterable[int], rng: random.Random
) -> Tuple[RolledDie, ...]:
    dice = list(pool)
    for idx in indices:
        dice[idx] = roll_attack(rng, dice[idx].color)
    return tuple(dice)


def apply_rerolls(
    pool: Tuple[RolledDie, ...],
    ctx: AttackContext,
    rng: random.Random,
    policy: Optional[Policy] = None,
) -> RerollOutcome:
    """Spend observation then aim tokens on rerolls.

    Aim tokens not spent here are reported as saved; they are the only
    token input of the Marksman stage and whatever remains afterwards feeds
    Duelist and Lethal.
    """
    atk = ctx.attacker
    policy = policy or atk.reroll_policy

    observation_spent = 0
    for _ in range(atk.observation_tokens):
        candidates = reroll_candidates(pool, ctx)
        if not candidates:
            break
        pool = reroll_dice(pool, candidates[:1], rng)
        observation_spent += 1

    aim_spent = 0
    per_token = AIM_DICE_PER_TOKEN + atk.precise_x
    for _ in range(atk.aim_tokens):
        candidates = reroll_candidates(pool, ctx)
        if not candidates:
            break
        chosen = tuple(candidates[:per_token])
        if ctx.attacker_kw("marksman"):
            projected = convert_attack_surges(pool, ctx).pool
            if decide(projected, ctx, policy, reroll=chosen).convert:
                break
        pool = reroll_dice(pool, chosen, rng)
        aim_spent += 1

    return RerollOutcome(
        pool=pool,
        aim_spent=aim_spent,
        aim_saved=atk.aim_tokens - aim_spent,
        observation_spent=observation_spent,
    )


__all__ = ["RerollOutcome", "AIM_DICE_PER_TOKEN", "reroll_candidates", "reroll_dice", "apply_rerolls"]
