"""Yearly growth-rate draw and abundance update.

Ricker dynamics on the log scale:

    r(t)   = mu(t) × (1 − N(t) / K)
    N(t+1) = N(t) × exp(r(t))

with environmental stochasticity acting on the intrinsic rate,

    mu(t) ~ Normal(mu, sigma)   (independent every year and replicate)

so exp(mu(t)) is log-normal. Without stochasticity mu(t) = mu.
r(t) < 0 whenever N(t) > K, pulling the population back toward K.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def sample_growth_rate(
    mu: float,
    sigma: float,
    abundance: float,
    K: float,
    stochastic: bool,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """Draw one realized per-capita log growth rate for one year.

    Args:
        mu: Mean intrinsic growth rate (log scale).
        sigma: SD of the intrinsic growth rate across years.
        abundance: Abundance at the start of the year.
        K: Carrying capacity. Must be non-zero (validated by the caller).
        stochastic: Draw mu(t) from Normal(mu, sigma) if True.
        rng: Generator consumed when stochastic; unused otherwise.

    Returns:
        r = mu(t) × (1 − abundance / K).

    Raises:
        ValueError: If stochastic is True and no rng is given.
    """
    if stochastic:
        if rng is None:
            raise ValueError("rng is required when stochastic=True")
        realized_mu = float(rng.normal(mu, sigma))
    else:
        realized_mu = mu
    return realized_mu * (1.0 - abundance / K)


def iterate_year(r: float, abundance: float) -> float:
    """Advance abundance by one year: N × exp(r). No rounding."""
    return abundance * float(np.exp(r))
