"""Trial resolution and the Monte Carlo driver."""

from .attack import AttackResolver, resolve_attack
from .monte_carlo import SimulationResult, simulate

__all__ = ["AttackResolver", "resolve_attack", "SimulationResult", "simulate"]
