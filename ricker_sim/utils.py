"""Utility functions for Ricker-Sim.

General-purpose helpers: rounding, timing.
"""

from __future__ import annotations

import logging
import math
import time
from contextlib import contextmanager
from typing import Generator

import numpy as np

logger = logging.getLogger(__name__)


def round_half_up(x: float) -> int:
    """Round to the nearest integer, ties away from -inf (floor(x + 0.5)).

    Python's round() uses banker's rounding (round(10.5) == 10); the model
    rounds halves up so that 10.5 becomes 11.

    Raises:
        OverflowError: If x is infinite.
        ValueError: If x is NaN.
    """
    return int(math.floor(x + 0.5))


def round_half_up_array(values: np.ndarray) -> np.ndarray:
    """Vectorized round_half_up; NaN and ±inf pass through unchanged."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


@contextmanager
def timer(label: str = "") -> Generator[None, None, None]:
    """Context-manager timer. Logs elapsed time at DEBUG on exit."""
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    logger.debug("[%s] %.3fs", label or "elapsed", elapsed)
