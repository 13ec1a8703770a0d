"""Monte Carlo driver: repeat the attack pipeline and aggregate wound series.

Trials are independent, so a run can be split into shards with their own
seeds (derived from the master seed) and merged afterwards; the merge only
adds histograms, which keeps every statistic identical to a sequential run
over the same trials.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple
import logging
import random
import time

from ..errors import InvalidConfigError, SimulationError
from ..models import WOUND_SERIES, AttackContext
from ..stats import (
    EfficiencyRatios,
    SeriesResult,
    efficiency,
    histogram,
    merge_histograms,
    series_result,
)
from .attack import resolve_attack

logger = logging.getLogger(__name__)

Histograms = Dict[str, List[int]]


@dataclass(frozen=True)
class SimulationResult:
    iterations: int = 0
    total_wounds: SeriesResult = SeriesResult()
    guardian_wounds: SeriesResult = SeriesResult()
    main_wounds: SeriesResult = SeriesResult()
    deflect_wounds: SeriesResult = SeriesResult()
    djem_so_wounds: SeriesResult = SeriesResult()
    efficiency: EfficiencyRatios = EfficiencyRatios()
    suppression: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _run_shard(ctx: AttackContext, iterations: int, seed: int) -> Tuple[Histograms, int]:
    rng = random.Random(seed)
    series = {name: [0] * iterations for name in WOUND_SERIES}
    suppression = 0
    for i in range(iterations):
        trial = resolve_attack(ctx, rng)
        for name in WOUND_SERIES:
            series[name][i] = getattr(trial, name)
        if i == 0:
            suppression = trial.suppression
    return {name: histogram(values) for name, values in series.items()}, suppression


def _shard_sizes(iterations: int, workers: int) -> List[int]:
    workers = max(1, min(workers, iterations))
    base, extra = divmod(iterations, workers)
    return [base + (1 if i < extra else 0) for i in range(workers)]


def _check_inputs(ctx: Any, iterations: Any) -> None:
    if not isinstance(ctx, AttackContext):
        raise InvalidConfigError(f"expected an AttackContext, got {type(ctx).__name__}")
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise InvalidConfigError(f"iterations must be a non-negative integer, got {iterations!r}")


def simulate(
    ctx: AttackContext,
    iterations: int,
    seed: Optional[int] = None,
    workers: int = 1,
    use_processes: bool = True,
) -> SimulationResult:
    """Run ``iterations`` independent trials and summarise them.

    A fixed ``seed`` (with the same ``workers``) reproduces the result bit
    for bit; ``seed=None`` draws fresh entropy. Any failure surfaces as
    :class:`SimulationError`, never as a partial result.
    """
    _check_inputs(ctx, iterations)
    if iterations == 0:
        return SimulationResult()

    started = time.perf_counter()
    master = random.Random(seed)
    sizes = _shard_sizes(iterations, workers)
    seeds = [master.getrandbits(64) for _ in sizes]
    try:
        if len(sizes) == 1:
            shards = [_run_shard(ctx, sizes[0], seeds[0])]
        else:
            executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
            with executor_cls(max_workers=len(sizes)) as executor:
                futures = [
                    executor.submit(_run_shard, ctx, size, shard_seed)
                    for size, shard_seed in zip(sizes, seeds)
                ]
                shards = [f.result() for f in futures]
    except SimulationError:
        raise
    except Exception as exc:
        raise SimulationError(f"simulation failed: {exc}") from exc

    merged = {name: merge_histograms(*(hists[name] for hists, _ in shards)) for name in WOUND_SERIES}
    series = {name: series_result(counts) for name, counts in merged.items()}
    result = SimulationResult(
        iterations=iterations,
        efficiency=efficiency(
            series["total_wounds"].stats.mean,
            ctx.attacker.points,
            ctx.defender.points,
        ),
        suppression=shards[0][1],
        **series,
    )
    logger.debug(
        "simulated %d trials in %d shard(s) in %.1f ms (mean wounds %.3f)",
        iterations,
        len(sizes),
        (time.perf_counter() - started) * 1000.0,
        result.total_wounds.stats.mean,
    )
    return result


__all__ = ["SimulationResult", "simulate"]
