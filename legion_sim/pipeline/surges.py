"""Surge conversion shared by the attack and defense rolls.

Sources are tried in a fixed priority order. A partial source converts up to
its own limit and lets the remainder fall through; an exhaustive source
converts every remaining surge and ends the pass. Whatever is left after the
last source behaves as a blank downstream.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from ..dice import Face, RolledDie
from ..models import AttackContext
from ..types import AttackFace, AttackSurge, DefenseFace, DefenseSurge


@dataclass(frozen=True)
class SurgeSource:
    name: str
    active: Callable[[AttackContext], bool]
    result: Face
    # None converts every remaining surge.
    limit: Optional[Callable[[AttackContext], int]] = None
    exhaustive: bool = False
    spends_tokens: bool = False


@dataclass(frozen=True)
class SurgeOutcome:
    pool: Tuple[RolledDie, ...]
    surges_rolled: int
    tokens_spent: int = 0
    converted: Dict[str, int] = field(default_factory=dict)

    @property
    def surges_left(self) -> int:
        return sum(1 for d in self.pool if d.face in (AttackFace.SURGE, DefenseFace.SURGE))


def convert_surges(
    pool: Tuple[RolledDie, ...],
    ctx: AttackContext,
    sources: Tuple[SurgeSource, ...],
    surge_face: Face,
) -> SurgeOutcome:
    dice = list(pool)
    remaining = [i for i, d in enumerate(dice) if d.face == surge_face]
    rolled = len(remaining)
    converted: Dict[str, int] = {}
    tokens_spent = 0
    for source in sources:
        if not remaining:
            break
        if not source.active(ctx):
            continue
        n = len(remaining) if source.limit is None else min(source.limit(ctx), len(remaining))
        for idx in remaining[:n]:
            dice[idx] = dice[idx].with_face(source.result)
        remaining = remaining[n:]
        if n:
            converted[source.name] = n
        if source.spends_tokens:
            tokens_spent += n
        if source.exhaustive:
            break
    return SurgeOutcome(
        pool=tuple(dice),
        surges_rolled=rolled,
        tokens_spent=tokens_spent,
        converted=converted,
    )


ATTACK_SURGE_SOURCES: Tuple[SurgeSource, ...] = (
    SurgeSource(
        "critical_x",
        active=lambda ctx: ctx.attacker.critical_x > 0,
        result=AttackFace.CRIT,
        limit=lambda ctx: ctx.attacker.critical_x,
    ),
    SurgeSource(
        "surge_to_crit",
        active=lambda ctx: ctx.attacker.surge_to_crit,
        result=AttackFace.CRIT,
        exhaustive=True,
    ),
    SurgeSource(
        "chart_crit",
        active=lambda ctx: ctx.attacker.surge_chart is AttackSurge.CRIT,
        result=AttackFace.CRIT,
        exhaustive=True,
    ),
    SurgeSource(
        "chart_hit",
        active=lambda ctx: ctx.attacker.surge_chart is AttackSurge.HIT,
        result=AttackFace.HIT,
        exhaustive=True,
    ),
    SurgeSource(
        "melee_surge_to_hit",
        active=lambda ctx: ctx.attacker_kw("melee_surge_to_hit"),
        result=AttackFace.HIT,
        exhaustive=True,
    ),
    SurgeSource(
        "surge_tokens",
        active=lambda ctx: ctx.attacker.surge_tokens > 0,
        result=AttackFace.HIT,
        limit=lambda ctx: ctx.attacker.surge_tokens,
        spends_tokens=True,
    ),
)

DEFENSE_SURGE_SOURCES: Tuple[SurgeSource, ...] = (
    SurgeSource(
        "deflect",
        active=lambda ctx: ctx.defender_kw("deflect") and ctx.defender_can_dodge,
        result=DefenseFace.BLOCK,
        exhaustive=True,
    ),
    SurgeSource(
        "block",
        active=lambda ctx: ctx.defender.block and ctx.defender_can_dodge,
        result=DefenseFace.BLOCK,
        exhaustive=True,
    ),
    SurgeSource(
        "chart_block",
        active=lambda ctx: ctx.defender.surge_chart is DefenseSurge.BLOCK,
        result=DefenseFace.BLOCK,
        exhaustive=True,
    ),
    SurgeSource(
        "surge_to_block",
        active=lambda ctx: ctx.defender_kw("surge_to_block"),
        result=DefenseFace.BLOCK,
        exhaustive=True,
    ),
    SurgeSource(
        "surge_tokens",
        active=lambda ctx: ctx.defender.surge_tokens > 0,
        result=DefenseFace.BLOCK,
        limit=lambda ctx: ctx.defender.surge_tokens,
        spends_tokens=True,
    ),
)

GUARDIAN_SURGE_SOURCES: Tuple[SurgeSource, ...] = (
    SurgeSource(
        "guardian_chart_block",
        active=lambda ctx: ctx.defender.guardian_surge_chart is DefenseSurge.BLOCK,
        result=DefenseFace.BLOCK,
        exhaustive=True,
    ),
)


def convert_attack_surges(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> SurgeOutcome:
    return convert_surges(pool, ctx, ATTACK_SURGE_SOURCES, AttackFace.SURGE)


def convert_defense_surges(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> SurgeOutcome:
    return convert_surges(pool, ctx, DEFENSE_SURGE_SOURCES, DefenseFace.SURGE)


def convert_guardian_surges(pool: Tuple[RolledDie, ...], ctx: AttackContext) -> SurgeOutcome:
    return convert_surges(pool, ctx, GUARDIAN_SURGE_SOURCES, DefenseFace.SURGE)


__all__ = [
    "SurgeSource",
    "SurgeOutcome",
    "convert_surges",
    "ATTACK_SURGE_SOURCES",
    "DEFENSE_SURGE_SOURCES",
    "GUARDIAN_SURGE_SOURCES",
    "convert_attack_surges",
    "convert_defense_surges",
    "convert_guardian_surges",
]
