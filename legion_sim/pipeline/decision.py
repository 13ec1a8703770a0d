"""Expected-value decision shared by the reroll and token-spending stages.

``decide`` looks at the current pool and answers one question: which die, if
any, should a token upgrade by one step (Blank->Hit or Hit->Crit)? Under the
averages policy the upgrade is weighed against rerolling a set of dice, with
both expectations taken from the literal face tables.

Values are measured in expected results that reach the defense roll: a hit
that the defender's Armor would cancel is worth nothing, a crit is always
worth one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..dice import RolledDie, color_rank, face_probability
from ..models import AttackContext
from ..types import AttackFace, AttackSurge, Policy
from .cover import cover_cancel_chance, effective_cover

BLANK_FACES = (AttackFace.BLANK, AttackFace.SURGE)


@dataclass(frozen=True)
class Decision:
    index: Optional[int] = None
    target: Optional[AttackFace] = None
    conversion_ev: float = 0.0
    reroll_ev: float = 0.0

    @property
    def convert(self) -> bool:
        return self.index is not None


NO_TARGET = Decision()


def surviving_hits(hits: int, ctx: AttackContext) -> int:
    """Hits (and Impact crits) left once the defender's Armor has acted."""

    defender = ctx.defender
    if not defender.armored:
        return hits
    impacted = min(ctx.attacker.impact_x, hits)
    plain = hits - impacted
    cancelled = plain if defender.armor else min(defender.armor_x, plain)
    return impacted + plain - cancelled


def hit_value(hits: int, ctx: AttackContext) -> float:
    """Marginal value of one more hit on top of ``hits`` existing ones."""

    return float(surviving_hits(hits + 1, ctx) - surviving_hits(hits, ctx))


def crit_gain(hits: int, ctx: AttackContext) -> float:
    """Value gained by turning one of ``hits`` hits into a crit."""

    if hits <= 0:
        return 0.0
    lost_to_armor = 1.0 - hit_value(hits - 1, ctx)
    dodged = 0.0
    if ctx.defender_can_dodge and not ctx.defender.outmaneuver:
        dodged = min(1.0, ctx.defender.dodge_tokens / hits)
    covered = cover_cancel_chance(effective_cover(ctx))
    return 1.0 - (1.0 - lost_to_armor) * (1.0 - dodged) * (1.0 - covered)


def surge_value(hits: int, ctx: AttackContext) -> float:
    """Value of a freshly rolled surge, given the attacker's conversions."""

    atk = ctx.attacker
    if atk.surge_to_crit or atk.surge_chart is AttackSurge.CRIT or atk.critical_x > 0:
        return 1.0
    if (
        atk.surge_chart is AttackSurge.HIT
        or ctx.attacker_kw("melee_surge_to_hit")
        or atk.surge_tokens > 0
    ):
        return hit_value(hits, ctx)
    return 0.0


def _count(pool: Iterable[RolledDie], faces: Tuple[AttackFace, ...]) -> int:
    return sum(1 for d in pool if d.face in faces)


def die_value(die: RolledDie, hits: int, ctx: AttackContext) -> float:
    if die.face is AttackFace.CRIT:
        return 1.0
    if die.face is AttackFace.HIT:
        return hit_value(hits - 1, ctx)
    return 0.0


def reroll_ev(pool: Tuple[RolledDie, ...], indices: Iterable[int], ctx: AttackContext) -> float:
    """Expected gain from rerolling the dice at ``indices``."""

    hits = _count(pool, (AttackFace.HIT,))
    hv = hit_value(hits, ctx)
    sv = surge_value(hits, ctx)
    total = 0.0
    for idx in indices:
        die = pool[idx]
        fresh = (
            face_probability(die.color, AttackFace.HIT) * hv
            + face_probability(die.color, AttackFace.CRIT)
            + face_probability(die.color, AttackFace.SURGE) * sv
        )
        total += fresh - die_value(die, hits, ctx)
    return total


def _preferred(pool: Tuple[RolledDie, ...], faces: Tuple[AttackFace, ...]) -> Optional[int]:
    candidates = [i for i, d in enumerate(pool) if d.face in faces]
    if not candidates:
        return None
    return min(candidates, key=lambda i: (color_rank(pool[i].color), i))


def best_target(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> Decision:
    hits = _count(pool, (AttackFace.HIT,))
    gain = crit_gain(hits, ctx)
    if gain > 0:
        idx = _preferred(pool, (AttackFace.HIT,))
        if idx is not None:
            return Decision(index=idx, target=AttackFace.CRIT, conversion_ev=gain)
    value = hit_value(hits, ctx)
    if value > 0:
        idx = _preferred(pool, BLANK_FACES)
        if idx is not None:
            return Decision(index=idx, target=AttackFace.HIT, conversion_ev=value)
    return NO_TARGET


def decide(
    pool: Tuple[RolledDie, ...],
    ctx: AttackContext,
    policy: Policy,
    reroll: Tuple[int, ...] = (),
) -> Decision:
    """Pick the die a token should upgrade, or report that none should be.

    ``reroll`` names the dice the token would reroll instead; it only matters
    under ``Policy.AVERAGES``.
    """
    choice = best_target(pool, ctx)
    if not choice.convert:
        return NO_TARGET
    if policy is Policy.DETERMINISTIC or not reroll:
        return choice
    alternative = reroll_ev(pool, reroll, ctx)
    if choice.conversion_ev >= alternative:
        return Decision(choice.index, choice.target, choice.conversion_ev, alternative)
    return Decision(conversion_ev=choice.conversion_ev, reroll_ev=alternative)


__all__ = [
    "Decision",
    "NO_TARGET",
    "surviving_hits",
    "hit_value",
    "crit_gain",
    "surge_value",
    "reroll_ev",
    "best_target",
    "decide",
]
