"""Command-line entry point for Ricker-Sim.

Usage:
    ricker-sim                              # reference run, 10 000 replicates
    ricker-sim --n-sims 500 --seed 42
    ricker-sim --no-env-stoch --mu 0 --max-years 5
    ricker-sim --log-summaries --zero-log-policy raise
    python -m ricker_sim --workers 4 -v

Exit codes:
    0  report printed
    1  log summaries undefined (zero abundance, --zero-log-policy raise)
    2  invalid parameters (nothing printed to stdout)
    3  abundance overflowed int64 during the simulation
"""

from __future__ import annotations

import argparse
import logging
import sys
import warnings
from typing import List, Optional

from ricker_sim import __version__
from ricker_sim.config import SimulationParameters, validate_parameters
from ricker_sim.model import run_ensemble
from ricker_sim.report import print_report
from ricker_sim.summary import (
    DegenerateSummaryError,
    DegenerateSummaryWarning,
    summarize,
)
from ricker_sim.types import ZeroLogPolicy
from ricker_sim.utils import timer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DEGENERATE = 1
EXIT_INVALID = 2
EXIT_OVERFLOW = 3


def build_parser() -> argparse.ArgumentParser:
    d = SimulationParameters()
    parser = argparse.ArgumentParser(
        prog="ricker-sim",
        description="Monte Carlo ensemble of a stochastic Ricker population model",
    )
    parser.add_argument("--mu", type=float, default=d.mu,
                        help=f"Intrinsic growth rate, log scale (default: {d.mu})")
    parser.add_argument("--sigma", type=float, default=d.sigma,
                        help=f"Interannual SD of growth rate (default: {d.sigma})")
    parser.add_argument("--N0", type=float, default=d.N0,
                        help=f"Abundance in year 0 (default: {d.N0:g})")
    parser.add_argument("--K", type=float, default=d.K,
                        help=f"Carrying capacity (default: {d.K:g})")
    parser.add_argument("--max-years", type=int, default=d.max_years,
                        help=f"Years to simulate (default: {d.max_years})")
    parser.add_argument("--n-sims", "-S", type=int, default=d.n_sims,
                        help=f"Number of replicate simulations (default: {d.n_sims})")
    parser.add_argument("--env-stoch", action=argparse.BooleanOptionalAction,
                        default=d.env_stoch,
                        help="Include environmental stochasticity")
    parser.add_argument("--log-summaries", action=argparse.BooleanOptionalAction,
                        default=d.log_summaries,
                        help="Summarize ln(N) instead of N")
    parser.add_argument("--zero-log-policy",
                        choices=[p.value for p in ZeroLogPolicy],
                        default=d.zero_log_policy,
                        help="Handling of ln(0) in log summaries "
                             f"(default: {d.zero_log_policy})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Master RNG seed (default: fresh entropy)")
    parser.add_argument("--workers", type=int, default=d.parallel_workers,
                        help="Worker threads for the replicate loop")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log progress and timings to stderr")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def params_from_args(args: argparse.Namespace) -> SimulationParameters:
    """Build (unvalidated) SimulationParameters from parsed arguments."""
    return SimulationParameters(
        mu=args.mu,
        sigma=args.sigma,
        N0=args.N0,
        K=args.K,
        max_years=args.max_years,
        env_stoch=args.env_stoch,
        n_sims=args.n_sims,
        log_summaries=args.log_summaries,
        seed=args.seed,
        parallel_workers=args.workers,
        zero_log_policy=args.zero_log_policy,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    params = params_from_args(args)
    try:
        validate_parameters(params)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID

    try:
        with timer("ensemble"):
            ensemble = run_ensemble(params)
    except OverflowError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_OVERFLOW

    try:
        with timer("summary"), warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", DegenerateSummaryWarning)
            summary = summarize(
                ensemble, params.log_summaries, params.zero_log_policy
            )
    except DegenerateSummaryError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_DEGENERATE
    for w in caught:
        logger.warning("%s", w.message)

    print_report(params, summary)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
