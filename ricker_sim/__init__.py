"""Ricker-Sim: Monte Carlo ensembles of a stochastic Ricker population model.

A single-species, discrete-time model with:
  - Ricker density dependence, N(t+1) = N(t) × exp(r(t))
  - Log-normal environmental stochasticity on the yearly growth rate
  - Integer abundances, rounded every year, absorbing extinction at 0
  - Independent replicate trajectories summarized per year (mean, variance)
"""

__version__ = "0.1.0"
