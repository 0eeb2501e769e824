"""Core data types for Ricker-Sim.

Representation:
  - Trajectory: 1-D int64 array, one abundance per year 0..max_years
  - Ensemble:   2-D int64 array, shape (n_sims, max_years + 1),
                rows are replicates, columns are years
  - SummarySeries: per-year mean and variance across the ensemble
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


ABUNDANCE_DTYPE = np.int64


class ZeroLogPolicy(str, Enum):
    """Handling of ln(0) when summaries are computed on the log scale.

    PROPAGATE: -inf enters the arithmetic silently (mean -inf, variance NaN).
    WARN:      same values, plus a DegenerateSummaryWarning.
    RAISE:     DegenerateSummaryError before any value is returned.
    """
    PROPAGATE = "propagate"
    WARN = "warn"
    RAISE = "raise"


@dataclass(frozen=True)
class SummarySeries:
    """Per-year ensemble statistics, index-aligned with the year axis."""
    mean: np.ndarray
    variance: np.ndarray
    log_scale: bool = False

    def __post_init__(self):
        # Own read-only copies, so the frozen series cannot change underneath.
        for name in ("mean", "variance"):
            arr = np.array(getattr(self, name), dtype=np.float64)
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)
        if self.mean.shape != self.variance.shape:
            raise ValueError(
                f"mean and variance must be aligned, got shapes "
                f"{self.mean.shape} and {self.variance.shape}"
            )

    @property
    def n_points(self) -> int:
        """Number of years covered (max_years + 1)."""
        return int(self.mean.shape[0])
