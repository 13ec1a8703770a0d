"""Summary statistics and distributions over integer wound series.

Everything is computed from a histogram (count per wound value), so shards of
a run can be merged by adding their histograms before summarising.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
import math


@dataclass(frozen=True)
class StatsSummary:
    mean: float = 0.0
    median: float = 0.0
    mode: int = 0
    min: int = 0
    max: int = 0
    std_dev: float = 0.0


@dataclass(frozen=True)
class DistributionEntry:
    wounds: int
    count: int
    probability: float
    # P(wounds >= this value)
    cumulative: float


@dataclass(frozen=True)
class SeriesResult:
    stats: StatsSummary = StatsSummary()
    distribution: Tuple[DistributionEntry, ...] = ()


@dataclass(frozen=True)
class EfficiencyRatios:
    wounds_per_point: float = 0.0
    points_per_wound: float = 0.0
    # Mean wounds scaled by defender cost over attacker cost.
    relative_efficiency: float = 0.0


def histogram(values: Iterable[int]) -> List[int]:
    counts: List[int] = []
    for v in values:
        if v >= len(counts):
            counts.extend([0] * (v + 1 - len(counts)))
        counts[v] += 1
    return counts


def merge_histograms(*hists: Sequence[int]) -> List[int]:
    size = max((len(h) for h in hists), default=0)
    merged = [0] * size
    for h in hists:
        for v, c in enumerate(h):
            merged[v] += c
    return merged


def _value_at(counts: Sequence[int], position: int) -> int:
    """Value of the ``position``-th (0-based) element in sorted order."""

    seen = 0
    for v, c in enumerate(counts):
        seen += c
        if position < seen:
            return v
    raise IndexError(position)


def summarize(counts: Sequence[int]) -> StatsSummary:
    n = sum(counts)
    if n == 0:
        return StatsSummary()
    mean = sum(v * c for v, c in enumerate(counts)) / n
    if n % 2:
        median = float(_value_at(counts, n // 2))
    else:
        median = (_value_at(counts, n // 2 - 1) + _value_at(counts, n // 2)) / 2
    mode, best = 0, -1
    for v, c in enumerate(counts):
        if c > best:
            mode, best = v, c
    present = [v for v, c in enumerate(counts) if c]
    variance = sum(c * (v - mean) ** 2 for v, c in enumerate(counts)) / n
    return StatsSummary(
        mean=mean,
        median=median,
        mode=mode,
        min=present[0],
        max=present[-1],
        std_dev=math.sqrt(variance),
    )


def distribution(counts: Sequence[int]) -> Tuple[DistributionEntry, ...]:
    """One entry per wound value from 0 to the maximum observed, no gaps."""

    n = sum(counts)
    if n == 0:
        return ()
    top = max(v for v, c in enumerate(counts) if c)
    entries: List[DistributionEntry] = []
    at_least = 0
    for v in range(top, -1, -1):
        at_least += counts[v]
        entries.append(
            DistributionEntry(
                wounds=v,
                count=counts[v],
                probability=counts[v] / n,
                cumulative=at_least / n,
            )
        )
    entries.reverse()
    return tuple(entries)


def series_result(counts: Sequence[int]) -> SeriesResult:
    return SeriesResult(stats=summarize(counts), distribution=distribution(counts))


def efficiency(mean_wounds: float, attacker_points: int, defender_points: int) -> EfficiencyRatios:
    def ratio(num: float, den: float) -> float:
        if not den or not num:
            return 0.0
        return num / den

    return EfficiencyRatios(
        wounds_per_point=ratio(mean_wounds, attacker_points),
        points_per_wound=ratio(attacker_points, mean_wounds),
        relative_efficiency=ratio(mean_wounds * defender_points, attacker_points),
    )


__all__ = [
    "StatsSummary",
    "DistributionEntry",
    "SeriesResult",
    "EfficiencyRatios",
    "histogram",
    "merge_histograms",
    "summarize",
    "distribution",
    "series_result",
    "efficiency",
]
