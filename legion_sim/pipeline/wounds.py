from __future__ import annotations

from dataclasses import dataclass

from ..models import AttackContext
from ..types import AttackType
from .defense import DefenseOutcome
from .modifiers import ModifiedAttack

DJEM_SO_BLANKS = 1


@dataclass(frozen=True)
class WoundOutcome:
    total_wounds: int
    guardian_wounds: int
    main_wounds: int
    deflect_wounds: int
    djem_so_wounds: int
    suppression: int
    pierce: int
    blocks_surviving: int


def effective_pierce(attack: ModifiedAttack, ctx: AttackContext):
    """Return ``(pierce, immune)`` after Makashi Mastery has been applied.

    The override first costs one Pierce, then switches off both flavors of
    Pierce immunity. Keep this order.
    """
    pierce = attack.pierce
    immune = ctx.defender.immune_pierce
    immune_melee = ctx.defender_kw("immune_melee_pierce")
    if ctx.attacker_kw("makashi_mastery"):
        pierce = max(0, pierce - 1)
        immune = False
        immune_melee = False
    return pierce, immune or immune_melee


def suppression_for(ctx: AttackContext) -> int:
    if ctx.attack_type is AttackType.OVERRUN:
        return 0
    return 1 + int(ctx.attacker_kw("suppressive"))


def reflected_wounds(attack: ModifiedAttack, defense: DefenseOutcome, ctx: AttackContext):
    """Wounds the attacker suffers back: ``(deflect, djem_so)``."""

    if ctx.attacker_kw("immune_deflect"):
        return 0, 0
    deflect = 0
    if ctx.defender_kw("deflect") and ctx.defender_can_dodge:
        if ctx.defender_kw("shien_mastery"):
            deflect = defense.surges_rolled
        elif defense.blocks >= 1:
            deflect = 1
    djem_so = int(bool(ctx.defender_kw("djem_so_mastery")) and attack.blanks >= DJEM_SO_BLANKS)
    return deflect, djem_so


def resolve_wounds(
    attack: ModifiedAttack, defense: DefenseOutcome, ctx: AttackContext
) -> WoundOutcome:
    pierce, immune = effective_pierce(attack, ctx)
    blocks = defense.blocks + defense.guardian_blocks
    surviving = blocks if immune else max(0, blocks - pierce)

    landed = defense.hits + defense.crits + defense.guardian_hits
    deflect, djem_so = reflected_wounds(attack, defense, ctx)
    return WoundOutcome(
        total_wounds=max(0, landed - surviving),
        guardian_wounds=max(0, defense.guardian_hits - defense.guardian_blocks),
        main_wounds=max(0, defense.hits + defense.crits - defense.blocks),
        deflect_wounds=deflect,
        djem_so_wounds=djem_so,
        suppression=suppression_for(ctx),
        pierce=pierce,
        blocks_surviving=surviving,
    )


__all__ = [
    "WoundOutcome",
    "DJEM_SO_BLANKS",
    "effective_pierce",
    "suppression_for",
    "reflected_wounds",
    "resolve_wounds",
]
