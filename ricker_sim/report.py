"""Console report for one ensemble run.

Layout:

    10000 simulations with mu=1.1, sigma=0.5, envStoch=true

    Means across simulations by year:
    10 29 ...

    Variances across simulations by year:
    0 140 ...

Values are rounded half-up for display only; the SummarySeries keeps
full precision.
"""

from __future__ import annotations

import sys
from typing import Iterable, Optional, TextIO

import numpy as np

from ricker_sim.config import SimulationParameters
from ricker_sim.types import SummarySeries
from ricker_sim.utils import round_half_up_array


def format_number(value: float) -> str:
    """Format a number for display: half-up integer, or nan/inf/-inf."""
    if np.isnan(value):
        return "nan"
    if np.isinf(value):
        return "inf" if value > 0 else "-inf"
    return str(int(value))


def format_series(values: Iterable[float]) -> str:
    """Space-separated half-up rounded values."""
    rounded = round_half_up_array(np.asarray(list(values), dtype=np.float64))
    return " ".join(format_number(v) for v in rounded)


def format_header(params: SimulationParameters) -> str:
    env = "true" if params.env_stoch else "false"
    return (
        f"{params.n_sims} simulations with mu={params.mu}, "
        f"sigma={params.sigma}, envStoch={env}"
    )


def format_report(params: SimulationParameters, summary: SummarySeries) -> str:
    """Build the full report text (no trailing newline)."""
    lines = [
        format_header(params),
        "",
        "Means across simulations by year:",
        format_series(summary.mean),
        "",
        "Variances across simulations by year:",
        format_series(summary.variance),
    ]
    return "\n".join(lines)


def print_report(
    params: SimulationParameters,
    summary: SummarySeries,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the report to stream (default stdout)."""
    print(format_report(params, summary), file=stream or sys.stdout)
