"""Trajectory simulation and the replicate ensemble.

Single trajectory:
  - Year 0: N(0) = round(N0)
  - Each following year: draw r from N(t−1) (growth.sample_growth_rate),
    N(t) = max(round(N(t−1) × exp(r)), 0)
  - The rounded value feeds the next year; rounding is part of the
    dynamics, not a display step
  - N = 0 is absorbing: 0 × exp(r) rounds back to 0

Ensemble:
  - S independent trajectories, one PCG64 stream per replicate
    (rng.create_replicate_rngs)
  - Optional ThreadPoolExecutor over contiguous replicate chunks; the
    output is identical for any worker count
  - Stored as a (S, max_years + 1) int64 array, replicate × year
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from ricker_sim.config import SimulationParameters, validate_parameters
from ricker_sim.growth import iterate_year, sample_growth_rate
from ricker_sim.rng import create_replicate_rngs
from ricker_sim.types import ABUNDANCE_DTYPE
from ricker_sim.utils import round_half_up

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════
# SINGLE TRAJECTORY
# ═══════════════════════════════════════════════════════════════════════

def simulate_trajectory(
    params: SimulationParameters,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Run one simulation of one population.

    Args:
        params: Validated SimulationParameters.
        rng: Generator for the yearly growth-rate draws. Required when
            params.env_stoch is True; never touched otherwise.

    Returns:
        int64 array of length max_years + 1 with N(0)..N(max_years).

    Raises:
        OverflowError: If N × exp(r) is not representable in some year.
    """
    if params.env_stoch and rng is None:
        raise ValueError("rng is required when env_stoch=True")

    N = np.empty(params.n_points, dtype=ABUNDANCE_DTYPE)
    N[0] = round_half_up(params.N0)

    with np.errstate(over='ignore', invalid='ignore'):
        for year in range(1, params.n_points):
            prev = float(N[year - 1])
            r = sample_growth_rate(
                params.mu, params.sigma, prev, params.K, params.env_stoch, rng
            )
            if prev == 0:
                # Extinction is absorbing whatever r is, even if exp(r) overflows.
                N[year] = 0
                continue
            nxt = iterate_year(r, prev)
            if not np.isfinite(nxt) or nxt >= np.iinfo(ABUNDANCE_DTYPE).max:
                raise OverflowError(
                    f"abundance overflow in year {year}: "
                    f"N={prev:.0f}, r={r:.4g}"
                )
            N[year] = max(round_half_up(nxt), 0)

    return N


# ═══════════════════════════════════════════════════════════════════════
# ENSEMBLE
# ═══════════════════════════════════════════════════════════════════════

def _chunk_bounds(n_items: int, n_chunks: int) -> List[tuple]:
    """Split range(n_items) into n_chunks contiguous (start, stop) pairs."""
    n_chunks = max(1, min(n_chunks, n_items))
    edges = np.linspace(0, n_items, n_chunks + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:])]


def _simulate_block(
    params: SimulationParameters,
    rngs: Sequence[np.random.Generator],
    out: np.ndarray,
    start: int,
    stop: int,
) -> int:
    """Fill out[start:stop] with trajectories. Returns rows written."""
    for i in range(start, stop):
        out[i] = simulate_trajectory(params, rngs[i] if rngs else None)
    return stop - start


def run_ensemble(
    params: SimulationParameters,
    seed: Optional[int] = None,
    workers: Optional[int] = None,
) -> np.ndarray:
    """Run params.n_sims independent trajectories.

    Validation happens before any simulation work, so invalid
    parameters never produce partial output.

    Args:
        params: SimulationParameters (validated here).
        seed: Master seed; defaults to params.seed (None = OS entropy).
        workers: Worker threads; defaults to params.parallel_workers.

    Returns:
        Read-only int64 array of shape (n_sims, max_years + 1), rows in
        replicate order.
    """
    validate_parameters(params)
    if seed is None:
        seed = params.seed
    if workers is None:
        workers = params.parallel_workers
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    S = params.n_sims
    # Deterministic runs consume no entropy, so skip building streams.
    rngs = create_replicate_rngs(seed, S) if params.env_stoch else []
    ensemble = np.empty((S, params.n_points), dtype=ABUNDANCE_DTYPE)

    chunks = _chunk_bounds(S, workers)
    logger.debug(
        "Running ensemble: %d replicates × %d years on %d worker(s)",
        S, params.max_years, len(chunks),
    )

    if len(chunks) == 1:
        step = max(1, S // 10)
        for start in range(0, S, step):
            stop = min(start + step, S)
            _simulate_block(params, rngs, ensemble, start, stop)
            logger.debug("  Completed %d/%d", stop, S)
    else:
        with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            futures = [
                pool.submit(_simulate_block, params, rngs, ensemble, a, b)
                for a, b in chunks
            ]
            done = 0
            for fut in futures:
                # .result() re-raises a worker's exception and aborts the run
                done += fut.result()
                logger.debug("  Completed %d/%d", done, S)

    ensemble.flags.writeable = False
    return ensemble
