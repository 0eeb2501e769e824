"""Tests for ricker_sim.types and ricker_sim.utils."""

import logging

import numpy as np
import pytest

from ricker_sim.types import ABUNDANCE_DTYPE, SummarySeries, ZeroLogPolicy
from ricker_sim.utils import round_half_up_array, timer


class TestZeroLogPolicy:
    def test_values(self):
        assert ZeroLogPolicy.PROPAGATE == "propagate"
        assert ZeroLogPolicy.WARN == "warn"
        assert ZeroLogPolicy.RAISE == "raise"

    def test_count(self):
        assert len(ZeroLogPolicy) == 3

    def test_lookup_by_value(self):
        assert ZeroLogPolicy("raise") is ZeroLogPolicy.RAISE


class TestSummarySeries:
    def test_log_scale_flag(self):
        s = SummarySeries(mean=np.zeros(2), variance=np.ones(2), log_scale=True)
        assert s.log_scale is True
        assert s.n_points == 2

    def test_arrays_are_read_only(self):
        s = SummarySeries(mean=np.zeros(3), variance=np.ones(3))
        with pytest.raises(ValueError):
            s.mean[0] = 1.0
        with pytest.raises(ValueError):
            s.variance[0] = 1.0

    def test_caller_array_not_aliased(self):
        mean = np.zeros(3)
        s = SummarySeries(mean=mean, variance=np.ones(3))
        mean[0] = 5.0
        assert s.mean[0] == 0.0
        assert mean.flags.writeable

    def test_abundance_dtype(self):
        assert np.dtype(ABUNDANCE_DTYPE) == np.int64


class TestUtils:
    def test_round_half_up_array_passes_non_finite(self):
        out = round_half_up_array(np.array([1.5, np.nan, -np.inf]))
        assert out[0] == 2.0
        assert np.isnan(out[1])
        assert np.isneginf(out[2])

    def test_timer_logs_elapsed(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="ricker_sim.utils"):
            with timer("ensemble"):
                pass
        assert any("[ensemble]" in rec.getMessage() for rec in caplog.records)
