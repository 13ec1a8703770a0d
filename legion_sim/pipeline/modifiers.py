from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from ..dice import RolledDie
from ..models import AttackContext
from ..types import AttackFace
from .decision import BLANK_FACES

BACKUP_HITS = 2


@dataclass(frozen=True)
class ModifiedAttack:
    hits: int
    crits: int
    blanks: int = 0
    guardian_hits: int = 0
    pierce: int = 0
    aim_remaining: int = 0
    cancelled: Dict[str, int] = field(default_factory=dict)


def apply_attack_modifiers(
    pool: Tuple[RolledDie, ...],
    ctx: AttackContext,
    aim_remaining: int,
    aim_spent: int = 0,
) -> ModifiedAttack:
    """Attacker and defender result modifiers, in their fixed order.

    ``aim_remaining`` is what is left of the aim pool after rerolls and
    Marksman; ``aim_spent`` is how many aim tokens those stages used.
    """
    atk, dfn = ctx.attacker, ctx.defender
    hits = sum(1 for d in pool if d.face is AttackFace.HIT)
    crits = sum(1 for d in pool if d.face is AttackFace.CRIT)
    blanks = sum(1 for d in pool if d.face in BLANK_FACES)
    cancelled: Dict[str, int] = {}

    hits += ctx.attacker_kw("melee_bonus_hits")

    if dfn.armored:
        impacted = min(atk.impact_x, hits)
        hits -= impacted
        crits += impacted

    if dfn.armor:
        cancelled["armor"] = hits
        hits = 0
    elif dfn.armor_x:
        cancelled["armor"] = min(dfn.armor_x, hits)
        hits -= cancelled["armor"]

    if dfn.shielded_x:
        shielded_crits = min(dfn.shielded_x, crits)
        shielded_hits = min(dfn.shielded_x - shielded_crits, hits)
        crits -= shielded_crits
        hits -= shielded_hits
        cancelled["shielded"] = shielded_crits + shielded_hits

    if ctx.defender_kw("backup"):
        cancelled["backup"] = min(BACKUP_HITS, hits)
        hits -= cancelled["backup"]

    guardian_hits = min(ctx.defender_kw("guardian_x"), hits)
    hits -= guardian_hits

    pierce = atk.pierce_x
    if ctx.attacker_kw("duelist"):
        if aim_spent > 0:
            pierce += 1
        elif aim_remaining > 0:
            aim_remaining -= 1
            pierce += 1
    lethal = min(atk.lethal_x, aim_remaining)
    aim_remaining -= lethal
    pierce += lethal

    return ModifiedAttack(
        hits=hits,
        crits=crits,
        blanks=blanks,
        guardian_hits=guardian_hits,
        pierce=pierce,
        aim_remaining=aim_remaining,
        cancelled=cancelled,
    )


__all__ = ["ModifiedAttack", "BACKUP_HITS", "apply_attack_modifiers"]
