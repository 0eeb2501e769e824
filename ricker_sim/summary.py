"""Per-year summary statistics across an ensemble.

For each year i (column of the replicate × year array):

    mean[i]     = (1/S) Σ_s x[s, i]
    variance[i] = (1/S) Σ_s (mean[i] − x[s, i])²

where x = N, or x = ln N on the log scale. The variance is the
population (biased) estimator, dividing by S and not S − 1.

ln(0) = −inf: an extinct replicate drives that year's log mean to −inf
and its log variance to NaN. ZeroLogPolicy decides whether this passes
silently, warns, or raises.
"""

from __future__ import annotations

import logging
import warnings
from typing import List, Sequence, Union

import numpy as np

from ricker_sim.types import SummarySeries, ZeroLogPolicy

logger = logging.getLogger(__name__)


class DegenerateSummaryWarning(UserWarning):
    """Log-scale summary includes ln(0) and is non-finite."""


class DegenerateSummaryError(ArithmeticError):
    """Log-scale summary requested for years containing zero abundance."""

    def __init__(self, years: Sequence[int]):
        self.years = list(years)
        super().__init__(
            f"log summaries undefined: zero abundance in year(s) "
            f"{_format_years(self.years)}"
        )


def _format_years(years: Sequence[int], limit: int = 10) -> str:
    shown = ", ".join(str(y) for y in years[:limit])
    if len(years) > limit:
        shown += f", ... ({len(years)} total)"
    return shown


def _as_ensemble(ensemble) -> np.ndarray:
    arr = np.asarray(ensemble)
    if arr.ndim != 2:
        raise ValueError(
            f"ensemble must be 2-D (replicate × year), got {arr.ndim}-D"
        )
    if arr.shape[0] == 0:
        raise ValueError("ensemble must contain at least one trajectory")
    return arr


def zero_abundance_years(ensemble) -> List[int]:
    """Year indices in which at least one replicate has N = 0."""
    arr = _as_ensemble(ensemble)
    return [int(i) for i in np.flatnonzero((arr == 0).any(axis=0))]


def _check_zero_log(arr: np.ndarray, policy: Union[str, ZeroLogPolicy]) -> None:
    policy = ZeroLogPolicy(policy)
    if policy is ZeroLogPolicy.PROPAGATE:
        return
    years = zero_abundance_years(arr)
    if not years:
        return
    if policy is ZeroLogPolicy.RAISE:
        raise DegenerateSummaryError(years)
    msg = (
        f"zero abundance in year(s) {_format_years(years)}; "
        f"log-scale mean is -inf and variance NaN there"
    )
    warnings.warn(msg, DegenerateSummaryWarning, stacklevel=3)


def _values(arr: np.ndarray, use_log: bool) -> np.ndarray:
    values = arr.astype(np.float64)
    if use_log:
        with np.errstate(divide='ignore'):
            values = np.log(values)
    return values


def mean_across_ensemble(
    ensemble,
    use_log: bool = False,
    zero_log_policy: Union[str, ZeroLogPolicy] = ZeroLogPolicy.PROPAGATE,
) -> np.ndarray:
    """Arithmetic mean across replicates for each year.

    Args:
        ensemble: (S, n_years) array-like of abundances, S >= 1.
        use_log: Average ln(N) instead of N.
        zero_log_policy: Handling of ln(0) when use_log is True.

    Returns:
        float64 array of length n_years.
    """
    arr = _as_ensemble(ensemble)
    if use_log:
        _check_zero_log(arr, zero_log_policy)
    return _values(arr, use_log).sum(axis=0) / arr.shape[0]


def variance_across_ensemble(
    ensemble,
    means,
    use_log: bool = False,
    zero_log_policy: Union[str, ZeroLogPolicy] = ZeroLogPolicy.PROPAGATE,
) -> np.ndarray:
    """Population variance across replicates around the given means.

    Args:
        ensemble: (S, n_years) array-like of abundances, S >= 1.
        means: Per-year means from mean_across_ensemble (same scale).
        use_log: Use ln(N) instead of N.
        zero_log_policy: Handling of ln(0) when use_log is True.

    Returns:
        float64 array aligned with means.
    """
    arr = _as_ensemble(ensemble)
    means = np.asarray(means, dtype=np.float64)
    if arr.shape[1] < means.shape[0]:
        raise ValueError(
            f"ensemble has {arr.shape[1]} years, means has {means.shape[0]}"
        )
    if use_log:
        _check_zero_log(arr, zero_log_policy)
    values = _values(arr[:, :means.shape[0]], use_log)
    with np.errstate(invalid='ignore'):
        sq_err = (means[np.newaxis, :] - values) ** 2
        return sq_err.sum(axis=0) / arr.shape[0]


def summarize(
    ensemble,
    use_log: bool = False,
    zero_log_policy: Union[str, ZeroLogPolicy] = ZeroLogPolicy.WARN,
) -> SummarySeries:
    """Mean and variance series for an ensemble.

    The zero-abundance check runs once, before either statistic.
    """
    arr = _as_ensemble(ensemble)
    logger.debug("Summarizing %d replicates × %d years (log scale: %s)",
                 arr.shape[0], arr.shape[1], use_log)
    if use_log:
        _check_zero_log(arr, zero_log_policy)
    mean = mean_across_ensemble(arr, use_log, ZeroLogPolicy.PROPAGATE)
    variance = variance_across_ensemble(arr, mean, use_log, ZeroLogPolicy.PROPAGATE)
    return SummarySeries(mean=mean, variance=variance, log_scale=use_log)
