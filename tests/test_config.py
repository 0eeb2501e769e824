"""Tests for ricker_sim.config: parameter defaults and validation."""

import dataclasses

import pytest

from ricker_sim.config import (
    SimulationParameters,
    default_parameters,
    validate_parameters,
    with_overrides,
)


# ── default_parameters tests ─────────────────────────────────────────

class TestDefaultParameters:
    def test_creates_valid_parameters(self):
        params = default_parameters()
        assert isinstance(params, SimulationParameters)

    def test_reference_values(self):
        params = default_parameters()
        assert params.mu == 1.1
        assert params.sigma == 0.5
        assert params.N0 == 10
        assert params.K == 500
        assert params.max_years == 10
        assert params.env_stoch is True
        assert params.n_sims == 10000
        assert params.log_summaries is False

    def test_run_control_defaults(self):
        params = default_parameters()
        assert params.seed is None
        assert params.parallel_workers == 1
        assert params.zero_log_policy == "warn"

    def test_n_points(self):
        assert default_parameters().n_points == 11

    def test_immutable(self):
        params = default_parameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.mu = 2.0


# ── Validation tests ──────────────────────────────────────────────────

class TestValidation:
    @pytest.mark.parametrize("K", [0.0, -1.0])
    def test_K_must_be_positive(self, K):
        with pytest.raises(ValueError, match="^K must be positive"):
            validate_parameters(SimulationParameters(K=K))

    def test_negative_N0(self):
        with pytest.raises(ValueError, match="^N0"):
            validate_parameters(SimulationParameters(N0=-1.0))

    def test_zero_N0_is_valid(self):
        validate_parameters(SimulationParameters(N0=0.0))  # should not raise

    def test_negative_max_years(self):
        with pytest.raises(ValueError, match="^max_years"):
            validate_parameters(SimulationParameters(max_years=-1))

    def test_zero_max_years_is_valid(self):
        validate_parameters(SimulationParameters(max_years=0))

    def test_n_sims_at_least_one(self):
        with pytest.raises(ValueError, match="^n_sims"):
            validate_parameters(SimulationParameters(n_sims=0))

    def test_negative_sigma(self):
        with pytest.raises(ValueError, match="^sigma"):
            validate_parameters(SimulationParameters(sigma=-0.1))

    def test_non_finite_mu(self):
        with pytest.raises(ValueError, match="^mu must be finite"):
            validate_parameters(SimulationParameters(mu=float("nan")))

    def test_non_integer_max_years(self):
        with pytest.raises(ValueError, match="^max_years must be an integer"):
            validate_parameters(SimulationParameters(max_years=2.5))

    def test_workers_at_least_one(self):
        with pytest.raises(ValueError, match="^parallel_workers"):
            validate_parameters(SimulationParameters(parallel_workers=0))

    def test_negative_seed(self):
        with pytest.raises(ValueError, match="^seed"):
            validate_parameters(SimulationParameters(seed=-5))

    def test_unknown_zero_log_policy(self):
        with pytest.raises(ValueError, match="^zero_log_policy"):
            validate_parameters(SimulationParameters(zero_log_policy="ignore"))


# ── with_overrides tests ─────────────────────────────────────────────

class TestWithOverrides:
    def test_replaces_fields(self):
        base = default_parameters()
        params = with_overrides(base, mu=0.0, n_sims=5)
        assert params.mu == 0.0
        assert params.n_sims == 5
        assert params.K == base.K  # unchanged

    def test_original_untouched(self):
        base = default_parameters()
        with_overrides(base, mu=0.0)
        assert base.mu == 1.1

    def test_unknown_field(self):
        with pytest.raises(TypeError, match="carrying_capacity"):
            with_overrides(default_parameters(), carrying_capacity=10)

    def test_result_is_validated(self):
        with pytest.raises(ValueError, match="^K"):
            with_overrides(default_parameters(), K=0.0)
