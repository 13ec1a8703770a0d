"""Legion Sim: Monte Carlo wound distributions for one dice-pool attack."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "AttackerConfig",
    "DefenderConfig",
    "AttackContext",
    "TrialResult",
    "AttackType",
    "CoverType",
    "Policy",
    "SimulationResult",
    "simulate",
    "resolve_attack",
    "load_context",
    "SimulationWorker",
    "SimulationError",
    "InvalidConfigError",
    "__version__",
]

_EXPORTS = {
    "AttackerConfig": ("models", "AttackerConfig"),
    "DefenderConfig": ("models", "DefenderConfig"),
    "AttackContext": ("models", "AttackContext"),
    "TrialResult": ("models", "TrialResult"),
    "AttackType": ("types", "AttackType"),
    "CoverType": ("types", "CoverType"),
    "Policy": ("types", "Policy"),
    "SimulationResult": ("simulators.monte_carlo", "SimulationResult"),
    "simulate": ("simulators.monte_carlo", "simulate"),
    "resolve_attack": ("simulators.attack", "resolve_attack"),
    "load_context": ("config", "load_context"),
    "SimulationWorker": ("worker", "SimulationWorker"),
    "SimulationError": ("errors", "SimulationError"),
    "InvalidConfigError": ("errors", "InvalidConfigError"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
