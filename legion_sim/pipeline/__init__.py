"""Attack resolution stages, leaf first.

pool -> rerolls -> surges (attack) -> spend (Marksman, Jar'Kai)
-> modifiers -> defense (cover, surges (defense)) -> wounds
"""

from .pool import build_pool, pool_colors
from .rerolls import RerollOutcome, apply_rerolls
from .surges import SurgeOutcome, convert_attack_surges, convert_defense_surges
from .spend import SpendOutcome, spend_jar_kai, spend_marksman
from .modifiers import ModifiedAttack, apply_attack_modifiers
from .cover import CoverOutcome, effective_cover, resolve_cover
from .defense import DefenseOutcome, resolve_defense
from .wounds import WoundOutcome, resolve_wounds
from .decision import Decision, decide

__all__ = [
    "build_pool",
    "pool_colors",
    "RerollOutcome",
    "apply_rerolls",
    "SurgeOutcome",
    "convert_attack_surges",
    "convert_defense_surges",
    "SpendOutcome",
    "spend_marksman",
    "spend_jar_kai",
    "ModifiedAttack",
    "apply_attack_modifiers",
    "CoverOutcome",
    "effective_cover",
    "resolve_cover",
    "DefenseOutcome",
    "resolve_defense",
    "WoundOutcome",
    "resolve_wounds",
    "Decision",
    "decide",
]
