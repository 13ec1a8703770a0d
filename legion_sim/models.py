"""Attacker/defender configuration records and per-trial results.

Every field is independently settable: no flag implies another's value.
Integer fields are non-negative magnitudes or counts, boolean fields are
keyword flags and the enum fields are closed chart/strategy selections.
Construction validates and coerces (``"red"`` -> ``DefenseColor.RED``), so a
pipeline never sees an out-of-domain value.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple, Type

from .errors import InvalidConfigError
from .keywords import closed_keywords
from .types import (
    AttackSurge,
    AttackType,
    CoverType,
    DefenseColor,
    DefenseSurge,
    Policy,
    coerce_enum,
)


def _validate_record(record: Any, enum_fields: Dict[str, Type[Enum]]) -> None:
    name = type(record).__name__
    for f in fields(record):
        value = getattr(record, f.name)
        if f.name in enum_fields:
            try:
                coerced = coerce_enum(enum_fields[f.name], value)
            except (TypeError, ValueError):
                raise InvalidConfigError(f"{name}.{f.name}: unknown value {value!r}") from None
            object.__setattr__(record, f.name, coerced)
        elif isinstance(f.default, bool):
            if not isinstance(value, bool):
                raise InvalidConfigError(f"{name}.{f.name}: expected a boolean, got {value!r}")
        elif isinstance(f.default, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfigError(f"{name}.{f.name}: expected an integer, got {value!r}")
            if value < 0:
                raise InvalidConfigError(f"{name}.{f.name}: must be non-negative, got {value}")


def _from_mapping(cls, data: Dict[str, Any]):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidConfigError(f"{cls.__name__}: unknown field(s) {', '.join(unknown)}")
    return cls(**data)


def _plain(record: Any) -> Dict[str, Any]:
    out = asdict(record)
    for key, value in out.items():
        if isinstance(value, Enum):
            out[key] = value.value
    return out


@dataclass(frozen=True)
class AttackerConfig:
    # Pool
    red_dice: int = 0
    black_dice: int = 0
    white_dice: int = 0
    spray: bool = False
    # Surge conversion
    surge_chart: AttackSurge = AttackSurge.NONE
    critical_x: int = 0
    surge_to_crit: bool = False
    melee_surge_to_hit: bool = False
    surge_tokens: int = 0
    # Rerolls and token spending
    aim_tokens: int = 0
    observation_tokens: int = 0
    precise_x: int = 0
    reroll_policy: Policy = Policy.DETERMINISTIC
    marksman: bool = False
    jar_kai_mastery: bool = False
    dodge_tokens: int = 0
    # Result modifiers
    melee_bonus_hits: int = 0
    impact_x: int = 0
    pierce_x: int = 0
    lethal_x: int = 0
    duelist: bool = False
    makashi_mastery: bool = False
    sharpshooter_x: int = 0
    blast: bool = False
    death_from_above: bool = False
    high_velocity: bool = False
    immune_deflect: bool = False
    suppressive: bool = False
    points: int = 0

    _ENUMS = {"surge_chart": AttackSurge, "reroll_policy": Policy}

    def __post_init__(self) -> None:
        _validate_record(self, self._ENUMS)

    @property
    def dice_count(self) -> int:
        return self.red_dice + self.black_dice + self.white_dice

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttackerConfig":
        return _from_mapping(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


@dataclass(frozen=True)
class DefenderConfig:
    # Defense dice
    die_color: DefenseColor = DefenseColor.WHITE
    defense_upgrades: int = 0
    surge_chart: DefenseSurge = DefenseSurge.NONE
    surge_tokens: int = 0
    danger_sense_x: int = 0
    suppression_tokens: int = 0
    impervious: bool = False
    # Dodge family
    dodge_tokens: int = 0
    outmaneuver: bool = False
    deflect: bool = False
    shien_mastery: bool = False
    block: bool = False
    surge_to_block: bool = False
    djem_so_mastery: bool = False
    # Result cancellation
    armor: bool = False
    armor_x: int = 0
    shielded_x: int = 0
    backup: bool = False
    guardian_x: int = 0
    guardian_die_color: DefenseColor = DefenseColor.WHITE
    guardian_surge_chart: DefenseSurge = DefenseSurge.NONE
    immune_pierce: bool = False
    immune_melee_pierce: bool = False
    parry: bool = False
    # Cover
    cover: CoverType = CoverType.NONE
    cover_x: int = 0
    smoke_tokens: int = 0
    suppressed: bool = False
    low_profile: bool = False
    immune_blast: bool = False
    minis_in_los: int = 1
    points: int = 0

    _ENUMS = {
        "die_color": DefenseColor,
        "surge_chart": DefenseSurge,
        "guardian_die_color": DefenseColor,
        "guardian_surge_chart": DefenseSurge,
        "cover": CoverType,
    }

    def __post_init__(self) -> None:
        _validate_record(self, self._ENUMS)

    @property
    def armored(self) -> bool:
        return self.armor or self.armor_x > 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DefenderConfig":
        return _from_mapping(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return _plain(self)


@dataclass(frozen=True)
class AttackContext:
    """Read-only input to one resolution: both sides plus the attack type."""

    attacker: AttackerConfig = field(default_factory=AttackerConfig)
    defender: DefenderConfig = field(default_factory=DefenderConfig)
    attack_type: AttackType = AttackType.RANGED
    _closed: FrozenSet[Tuple[str, str]] = field(
        default=frozenset(), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.attacker, AttackerConfig):
            raise InvalidConfigError(f"attacker must be an AttackerConfig, got {type(self.attacker).__name__}")
        if not isinstance(self.defender, DefenderConfig):
            raise InvalidConfigError(f"defender must be a DefenderConfig, got {type(self.defender).__name__}")
        try:
            attack_type = coerce_enum(AttackType, self.attack_type)
        except (TypeError, ValueError):
            raise InvalidConfigError(f"unknown attack type {self.attack_type!r}") from None
        object.__setattr__(self, "attack_type", attack_type)
        object.__setattr__(self, "_closed", closed_keywords(attack_type))

    def attacker_kw(self, name: str) -> Any:
        """Attacker keyword value, or its zero when gated off for this attack."""

        value = getattr(self.attacker, name)
        if ("attacker", name) in self._closed:
            return type(value)(0)
        return value

    def defender_kw(self, name: str) -> Any:
        value = getattr(self.defender, name)
        if ("defender", name) in self._closed:
            if isinstance(value, CoverType):
                return CoverType.NONE
            return type(value)(0)
        return value

    @property
    def defender_can_dodge(self) -> bool:
        """The defender holds a dodge token and the attack allows spending it."""

        return self.defender.dodge_tokens > 0 and not self.attacker_kw("high_velocity")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AttackContext":
        if not isinstance(data, dict):
            raise InvalidConfigError(f"AttackContext: expected a mapping, got {type(data).__name__}")
        unknown = sorted(set(data) - {"attacker", "defender", "attack_type"})
        if unknown:
            raise InvalidConfigError(f"AttackContext: unknown field(s) {', '.join(unknown)}")
        sides = {}
        for side in ("attacker", "defender"):
            record = data.get(side)
            if record is None:
                record = {}
            if not isinstance(record, dict):
                raise InvalidConfigError(f"AttackContext.{side}: expected a mapping, got {type(record).__name__}")
            sides[side] = record
        return cls(
            attacker=AttackerConfig.from_dict(sides["attacker"]),
            defender=DefenderConfig.from_dict(sides["defender"]),
            attack_type=data.get("attack_type", AttackType.RANGED),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "attacker": self.attacker.to_dict(),
            "defender": self.defender.to_dict(),
            "attack_type": self.attack_type.value,
        }


@dataclass(frozen=True)
class TrialResult:
    total_wounds: int = 0
    guardian_wounds: int = 0
    main_wounds: int = 0
    deflect_wounds: int = 0
    djem_so_wounds: int = 0
    suppression: int = 0
    trace: Optional[Dict[str, Any]] = field(default=None, compare=False)


WOUND_SERIES = ("total_wounds", "guardian_wounds", "main_wounds", "deflect_wounds", "djem_so_wounds")


__all__ = [
    "AttackerConfig",
    "DefenderConfig",
    "AttackContext",
    "TrialResult",
    "WOUND_SERIES",
]
