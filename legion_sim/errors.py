from __future__ import annotations


class SimulationError(Exception):
    """Raised instead of returning a result whenever a run cannot complete."""


class InvalidConfigError(SimulationError, ValueError):
    """A configuration field is out of its domain (negative, unknown enum...)."""


__all__ = ["SimulationError", "InvalidConfigError"]
