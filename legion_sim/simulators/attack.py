"""Single-attack resolution.

This module runs one trial of the attack pipeline: form and roll the attack
pool, reroll, convert surges, spend Marksman and Jar'Kai tokens, apply the
result modifiers, roll defense and compare.  The driver is
:func:`resolve_attack`; :class:`AttackResolver` keeps an optional per-stage
trace for debugging.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional
import random

from ..models import AttackContext, TrialResult
from ..pipeline.defense import resolve_defense
from ..pipeline.modifiers import apply_attack_modifiers
from ..pipeline.pool import build_pool
from ..pipeline.rerolls import apply_rerolls
from ..pipeline.spend import spend_jar_kai, spend_marksman
from ..pipeline.surges import convert_attack_surges
from ..pipeline.wounds import resolve_wounds


def _faces(pool) -> List[str]:
    return [f"{d.color.value}:{d.face.value}" for d in pool]


class AttackResolver:
    def __init__(self, ctx: AttackContext, rng: random.Random, debug: bool = False):
        self.ctx = ctx
        self.rng = rng
        self.debug = debug
        self.trace: Optional[Dict[str, Any]] = {} if debug else None

    # ----- Public API -----

    def resolve(self) -> TrialResult:
        ctx = self.ctx
        pool = build_pool(ctx, self.rng)
        if self.trace is not None:
            self._record("roll", faces=_faces(pool))
        if not pool:
            return TrialResult(trace=self.trace)

        rerolled = apply_rerolls(pool, ctx, self.rng)
        if self.trace is not None:
            self._record(
                "rerolls",
                faces=_faces(rerolled.pool),
                aim_spent=rerolled.aim_spent,
                aim_saved=rerolled.aim_saved,
                observation_spent=rerolled.observation_spent,
            )

        surges = convert_attack_surges(rerolled.pool, ctx)
        if self.trace is not None:
            self._record(
                "attack_surges",
                faces=_faces(surges.pool),
                converted=dict(surges.converted),
                tokens_spent=surges.tokens_spent,
            )

        marksman = spend_marksman(surges.pool, ctx, rerolled.aim_saved)
        jar_kai = spend_jar_kai(marksman.pool, ctx)
        if self.trace is not None:
            self._record(
                "spend",
                faces=_faces(jar_kai.pool),
                aim_saved=rerolled.aim_saved,
                marksman_spent=marksman.spent,
                jar_kai_spent=jar_kai.spent,
            )

        attack = apply_attack_modifiers(
            jar_kai.pool,
            ctx,
            aim_remaining=rerolled.aim_saved - marksman.spent,
            aim_spent=rerolled.aim_spent + marksman.spent,
        )
        if self.trace is not None:
            self._record(
                "modifiers",
                hits=attack.hits,
                crits=attack.crits,
                guardian_hits=attack.guardian_hits,
                pierce=attack.pierce,
                aim_remaining=attack.aim_remaining,
                cancelled=dict(attack.cancelled),
            )

        defense = resolve_defense(attack, ctx, self.rng)
        if self.trace is not None:
            self._record(
                "defense",
                hits=defense.hits,
                crits=defense.crits,
                dodge_spent=defense.dodge_spent,
                cover=defense.cover.value,
                cover_cancelled=defense.cover.cancelled,
                faces=_faces(defense.dice),
                guardian_faces=_faces(defense.guardian_dice),
            )

        wounds = resolve_wounds(attack, defense, ctx)
        if self.trace is not None:
            self._record("wounds", pierce=wounds.pierce, blocks_surviving=wounds.blocks_surviving)
        return TrialResult(
            total_wounds=wounds.total_wounds,
            guardian_wounds=wounds.guardian_wounds,
            main_wounds=wounds.main_wounds,
            deflect_wounds=wounds.deflect_wounds,
            djem_so_wounds=wounds.djem_so_wounds,
            suppression=wounds.suppression,
            trace=self.trace,
        )

    # ----- Utility -----

    def _record(self, stage: str, **data: Any) -> None:
        # only reached with tracing on
        self.trace[stage] = data


def resolve_attack(
    ctx: AttackContext, rng: Optional[random.Random] = None, debug: bool = False
) -> TrialResult:
    resolver = AttackResolver(ctx, rng or random.Random(), debug=debug)
    return resolver.resolve()


__all__ = ["AttackResolver", "resolve_attack"]
