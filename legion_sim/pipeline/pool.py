from __future__ import annotations

from typing import List, Tuple
import random

from ..dice import RolledDie, roll_attack
from ..models import AttackContext
from ..types import ATTACK_COLOR_ORDER, AttackColor


def pool_colors(ctx: AttackContext) -> Tuple[AttackColor, ...]:
    """Colors of the attack pool, red first, after pool-size keywords."""

    atk = ctx.attacker
    counts = {
        AttackColor.RED: atk.red_dice,
        AttackColor.BLACK: atk.black_dice,
        AttackColor.WHITE: atk.white_dice,
    }
    if atk.spray:
        counts = {color: n * ctx.defender.minis_in_los for color, n in counts.items()}
    if ctx.defender_kw("parry"):
        for color in ATTACK_COLOR_ORDER:
            if counts[color] > 0:
                counts[color] -= 1
                break
    colors: List[AttackColor] = []
    for color in (AttackColor.RED, AttackColor.BLACK, AttackColor.WHITE):
        colors.extend([color] * counts[color])
    return tuple(colors)


def build_pool(ctx: AttackContext, rng: random.Random) -> Tuple[RolledDie, ...]:
    """Roll the attack pool. Tuple positions are the dice's arena indices."""

    return tuple(roll_attack(rng, color) for color in pool_colors(ctx))


__all__ = ["pool_colors", "build_pool"]
