from __future__ import annotations
import argparse, json, logging, sys, time
from typing import Any, Dict, List

from .config import DEFAULT_ENV_PREFIX, load_context
from .errors import SimulationError
from .keywords import relevant_keywords
from .simulators.monte_carlo import SimulationResult, simulate
from .types import AttackType


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="python -m legion_sim.cli",
        description="Legion attack simulator CLI"
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd")

    # simulate
    sm = sub.add_parser("simulate", help="Run one Monte Carlo simulation and print a summary")
    _add_common_args(sm)
    sm.add_argument("--seed", type=int, default=None)
    sm.add_argument("--json", action="store_true", help="Print the full result as JSON")
    sm.add_argument("--out", type=str, default=None, help="Save the full result JSON")

    # keywords
    kw = sub.add_parser("keywords", help="List gated keywords that apply to an attack type")
    kw.add_argument("attack_type", choices=[t.value for t in AttackType])

    # bench
    bn = sub.add_parser("bench", help="Run several seeds to measure spread and throughput")
    _add_common_args(bn)
    bn.add_argument("--seeds", type=int, default=8, help="Number of seeds")
    bn.add_argument("--out", type=str, default=None, help="Save benchmark JSON")

    args = p.parse_args(argv)
    if getattr(args, "cmd", None) is None:
        p.print_help()
        sys.exit(2)
    return args


def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML/JSON presets (merged in order)")
    ap.add_argument("--env-prefix", type=str, default=DEFAULT_ENV_PREFIX, help="Env prefix for overrides")
    ap.add_argument("--attack-type", choices=[t.value for t in AttackType], default=None,
                    help="Override the preset's attack type")
    ap.add_argument("--iterations", type=int, default=10_000)
    ap.add_argument("--workers", type=int, default=1, help="Shard trials across processes")


def _context(args: argparse.Namespace):
    overrides: Dict[str, Any] = {}
    if args.attack_type:
        overrides["attack_type"] = args.attack_type
    return load_context(args.config, env_prefix=args.env_prefix, overrides=overrides)


def format_summary(result: SimulationResult) -> str:
    lines = [f"iterations: {result.iterations}"]
    for name in ("total_wounds", "main_wounds", "guardian_wounds", "deflect_wounds", "djem_so_wounds"):
        st = getattr(result, name).stats
        lines.append(
            f"{name:16s} mean={st.mean:.3f} median={st.median:g} mode={st.mode} "
            f"min={st.min} max={st.max} sd={st.std_dev:.3f}"
        )
    lines.append("wounds  P(=w)    P(>=w)")
    for entry in result.total_wounds.distribution:
        lines.append(f"{entry.wounds:6d}  {entry.probability:.4f}  {entry.cumulative:.4f}")
    eff = result.efficiency
    lines.append(
        f"efficiency: wounds/pt={eff.wounds_per_point:.4f} pts/wound={eff.points_per_wound:.2f} "
        f"relative={eff.relative_efficiency:.3f}"
    )
    lines.append(f"suppression: {result.suppression}")
    return "\n".join(lines)


def _bench(args: argparse.Namespace) -> Dict[str, Any]:
    ctx = _context(args)
    seeds = int(args.seeds)
    means: List[float] = []
    t0 = time.perf_counter()
    for s in range(seeds):
        res = simulate(ctx, args.iterations, seed=s, workers=args.workers)
        means.append(res.total_wounds.stats.mean)
    elapsed = max(1e-9, time.perf_counter() - t0)

    avg = sum(means) / len(means) if means else 0.0
    return {
        "seeds": seeds,
        "iterations": args.iterations,
        "mean_wounds": avg,
        "spread": (max(means) - min(means)) if means else 0.0,
        "trials_per_sec": seeds * args.iterations / elapsed,
    }


def main(argv: List[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "keywords":
        kind = AttackType(args.attack_type)
        print(json.dumps({
            "attack_type": kind.value,
            "attacker": relevant_keywords(kind, "attacker"),
            "defender": relevant_keywords(kind, "defender"),
        }, indent=2))
        return 0

    try:
        if args.cmd == "simulate":
            res = simulate(_context(args), args.iterations, seed=args.seed, workers=args.workers)
            if args.out:
                with open(args.out, "w", encoding="utf-8") as f:
                    json.dump(res.to_dict(), f, indent=2)
            if args.json:
                print(json.dumps(res.to_dict(), indent=2))
            else:
                print(format_summary(res))
            return 0

        if args.cmd == "bench":
            out = _bench(args)
            if args.out:
                with open(args.out, "w", encoding="utf-8") as f:
                    json.dump(out, f, indent=2)
            print(out)
            return 0
    except SimulationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
