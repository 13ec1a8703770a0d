"""Dodge, cover and the defense roll.

Dodge tokens and cover cancel attack results first; the defender then rolls
one die per surviving hit or crit plus any bonus dice, and resolves its
surges. A Guardian rolls its own dice for the hits it took over.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import random

from ..dice import RolledDie, roll_defense, upgrade
from ..models import AttackContext
from ..types import DefenseFace
from .cover import CoverOutcome, resolve_cover
from .modifiers import ModifiedAttack
from .surges import convert_defense_surges, convert_guardian_surges


@dataclass(frozen=True)
class DefenseOutcome:
    hits: int
    crits: int
    guardian_hits: int = 0
    blocks: int = 0
    guardian_blocks: int = 0
    surges_rolled: int = 0
    dodge_spent: int = 0
    cover: CoverOutcome = CoverOutcome(value=0)
    dice: Tuple[RolledDie, ...] = ()
    guardian_dice: Tuple[RolledDie, ...] = ()


def bonus_defense_dice(attack: ModifiedAttack, ctx: AttackContext) -> int:
    dfn = ctx.defender
    bonus = min(dfn.danger_sense_x, dfn.suppression_tokens)
    if dfn.impervious and not ctx.attacker_kw("makashi_mastery"):
        bonus += attack.pierce
    return bonus


def _blocks(dice: Tuple[RolledDie, ...]) -> int:
    return sum(1 for d in dice if d.face is DefenseFace.BLOCK)


def spend_dodge(hits: int, crits: int, ctx: AttackContext) -> Tuple[int, int, int]:
    """Cancel one result per dodge token.

    Without Outmaneuver only hits can be dodged. With it, crits go first:
    cover can still cancel a hit later, never a crit.
    """
    spent = 0
    if ctx.defender_can_dodge:
        for _ in range(ctx.defender.dodge_tokens):
            if crits and ctx.defender.outmaneuver:
                crits -= 1
            elif hits:
                hits -= 1
            else:
                break
            spent += 1
    return hits, crits, spent


def resolve_defense(
    attack: ModifiedAttack, ctx: AttackContext, rng: random.Random
) -> DefenseOutcome:
    dfn = ctx.defender
    hits, crits, dodge_spent = spend_dodge(attack.hits, attack.crits, ctx)

    cover = resolve_cover(hits, ctx, rng)
    hits -= cover.cancelled

    color = upgrade(dfn.die_color, dfn.defense_upgrades)
    count = hits + crits + bonus_defense_dice(attack, ctx)
    rolled = tuple(roll_defense(rng, color) for _ in range(count))
    surges = convert_defense_surges(rolled, ctx)

    guardian_dice: Tuple[RolledDie, ...] = ()
    if attack.guardian_hits:
        guardian_rolled = tuple(
            roll_defense(rng, dfn.guardian_die_color) for _ in range(attack.guardian_hits)
        )
        guardian_dice = convert_guardian_surges(guardian_rolled, ctx).pool

    return DefenseOutcome(
        hits=hits,
        crits=crits,
        guardian_hits=attack.guardian_hits,
        blocks=_blocks(surges.pool),
        guardian_blocks=_blocks(guardian_dice),
        surges_rolled=surges.surges_rolled,
        dodge_spent=dodge_spent,
        cover=cover,
        dice=surges.pool,
        guardian_dice=guardian_dice,
    )


__all__ = ["DefenseOutcome", "bonus_defense_dice", "spend_dodge", "resolve_defense"]
