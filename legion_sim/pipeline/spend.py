"""Token-funded upgrades applied after surge conversion.

Both Marksman (saved aim tokens) and Jar'Kai Mastery (the attacker's dodge
tokens) upgrade one die per token, asking the decision engine again after
every upgrade. The first "no target" ends the loop and the rest of the tokens
are simply not spent.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..dice import RolledDie
from ..models import AttackContext
from ..types import AttackFace, Policy
from .decision import decide


@dataclass(frozen=True)
class SpendOutcome:
    pool: Tuple[RolledDie, ...]
    spent: int = 0
    upgrades: Tuple[Tuple[int, AttackFace], ...] = ()


def spend_tokens(
    pool: Tuple[RolledDie, ...],
    ctx: AttackContext,
    tokens: int,
    policy: Policy,
) -> SpendOutcome:
    upgrades = []
    while len(upgrades) < tokens:
        decision = decide(pool, ctx, policy)
        if not decision.convert:
            break
        idx = decision.index
        pool = pool[:idx] + (pool[idx].with_face(decision.target),) + pool[idx + 1:]
        upgrades.append((idx, decision.target))
    return SpendOutcome(pool=pool, spent=len(upgrades), upgrades=tuple(upgrades))


def spend_marksman(
    pool: Tuple[RolledDie, ...], ctx: AttackContext, saved_aim: int
) -> SpendOutcome:
    if not ctx.attacker_kw("marksman"):
        return SpendOutcome(pool=pool)
    return spend_tokens(pool, ctx, saved_aim, ctx.attacker.reroll_policy)


def spend_jar_kai(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> SpendOutcome:
    if not ctx.attacker_kw("jar_kai_mastery"):
        return SpendOutcome(pool=pool)
    return spend_tokens(pool, ctx, ctx.attacker.dodge_tokens, Policy.DETERMINISTIC)


__all__ = ["SpendOutcome", "spend_tokens", "spend_marksman", "spend_jar_kai"]
