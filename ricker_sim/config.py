"""Configuration for Ricker-Sim.

A single immutable parameter set describes one ensemble run. Defaults
reproduce the reference experiment:

    mu=1.1, sigma=0.5, N0=10, K=500, 10 years, stochastic, 10 000 replicates

Values are supplied programmatically or through the command line
(ricker_sim.cli); there is no configuration file layer.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional

from ricker_sim.types import ZeroLogPolicy


# ═══════════════════════════════════════════════════════════════════════
# PARAMETER DATACLASS
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SimulationParameters:
    """Model and run-control parameters for one ensemble.

    Model:
        mu:            Intrinsic growth rate on the log scale.
        sigma:         Interannual SD of the growth rate (log scale).
        N0:            Abundance in year 0 (rounded before use).
        K:             Carrying capacity.
        max_years:     Number of years simulated after year 0.
        env_stoch:     Draw the yearly growth rate from Normal(mu, sigma).
                       False makes sigma irrelevant.

    Ensemble:
        n_sims:        Number of replicate trajectories (S).
        log_summaries: Summarize ln(N) instead of N.

    Run control:
        seed:             Master seed for the replicate streams
                          (None = fresh OS entropy).
        parallel_workers: Worker threads for the replicate loop.
        zero_log_policy:  What to do when ln(0) enters a log summary
                          ('propagate', 'warn', 'raise').
    """
    mu: float = 1.1
    sigma: float = 0.5
    N0: float = 10.0
    K: float = 500.0
    max_years: int = 10
    env_stoch: bool = True
    n_sims: int = 10000
    log_summaries: bool = False

    seed: Optional[int] = None
    parallel_workers: int = 1
    zero_log_policy: str = ZeroLogPolicy.WARN.value

    @property
    def n_points(self) -> int:
        """Length of every trajectory (year 0 through max_years)."""
        return self.max_years + 1


# ═══════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════

def validate_parameters(params: SimulationParameters) -> None:
    """Validate parameter constraints. Raises ValueError on failure.

    Every message starts with the offending field name so the CLI can
    report it verbatim.
    """
    for name in ('mu', 'sigma', 'N0', 'K'):
        value = getattr(params, name)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")

    if params.K <= 0:
        raise ValueError(f"K must be positive, got {params.K}")
    if params.N0 < 0:
        raise ValueError(f"N0 must be >= 0, got {params.N0}")
    if params.sigma < 0:
        raise ValueError(f"sigma must be >= 0, got {params.sigma}")

    for name in ('max_years', 'n_sims', 'parallel_workers'):
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(
                f"{name} must be an integer, got {type(value).__name__}"
            )
    if params.max_years < 0:
        raise ValueError(f"max_years must be >= 0, got {params.max_years}")
    if params.n_sims < 1:
        raise ValueError(f"n_sims must be >= 1, got {params.n_sims}")
    if params.parallel_workers < 1:
        raise ValueError(
            f"parallel_workers must be >= 1, got {params.parallel_workers}"
        )

    if params.seed is not None and params.seed < 0:
        raise ValueError(f"seed must be non-negative, got {params.seed}")

    valid_policies = {p.value for p in ZeroLogPolicy}
    if params.zero_log_policy not in valid_policies:
        raise ValueError(
            f"zero_log_policy must be one of {sorted(valid_policies)}, "
            f"got '{params.zero_log_policy}'"
        )


def default_parameters() -> SimulationParameters:
    """Return a SimulationParameters with all default values."""
    params = SimulationParameters()
    validate_parameters(params)
    return params


def with_overrides(params: SimulationParameters, **changes) -> SimulationParameters:
    """Return a validated copy of params with the given fields replaced.

    Raises:
        TypeError: If a name is not a SimulationParameters field.
        ValueError: If the resulting parameter set is invalid.
    """
    valid_fields = {f.name for f in dataclasses.fields(SimulationParameters)}
    unknown = sorted(set(changes) - valid_fields)
    if unknown:
        raise TypeError(f"Unknown parameter(s): {', '.join(unknown)}")
    updated = dataclasses.replace(params, **changes)
    validate_parameters(updated)
    return updated
