"""
Interpolation methods for discount curves.

Provides:
- LinearInterpolator: Linear interpolation on zero rates, flat extrapolation
- LogLinearInterpolator: Linear interpolation on log discount factors
  (piecewise flat forwards), extrapolated with the last forward

Both work with year fractions as x-coordinates. Interpolators are refit
from scratch whenever curve nodes change, so they hold no curve state
between fits.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np


class Interpolator(ABC):
    """Abstract base class for curve interpolation."""

    @abstractmethod
    def fit(self, times: np.ndarray, discount_factors: np.ndarray) -> None:
        """
        Fit the interpolator to curve nodes.

        Args:
            times: Array of year fractions (first node at t=0)
            discount_factors: Discount factors at those times
        """

    @abstractmethod
    def discount_factor(self, t: float) -> float:
        """Interpolated discount factor at time t."""

    def __call__(self, t: float) -> float:
        return self.discount_factor(t)

    @staticmethod
    def _sorted_nodes(times: np.ndarray, discount_factors: np.ndarray):
        if len(times) != len(discount_factors):
            raise ValueError("Times and discount factors must have same length")
        if len(times) < 2:
            raise ValueError("Need at least 2 points for interpolation")
        dfs = np.asarray(discount_factors, dtype=np.float64)
        if np.any(dfs <= 0):
            raise ValueError("Discount factors must be positive")
        idx = np.argsort(times)
        return np.asarray(times, dtype=np.float64)[idx], dfs[idx]

    @staticmethod
    def _bracket(times: np.ndarray, t: float) -> int:
        idx = np.searchsorted(times, t, side='right') - 1
        return int(max(0, min(idx, len(times) - 2)))


class LinearInterpolator(Interpolator):
    """
    Linear interpolation on continuously compounded zero rates.

    The zero rate at t=0 is taken equal to the first pillar's rate.
    Extrapolates flat beyond the last node.
    """

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.zero_rates: Optional[np.ndarray] = None

    def fit(self, times: np.ndarray, discount_factors: np.ndarray) -> None:
        times, dfs = self._sorted_nodes(times, discount_factors)
        zero_rates = np.zeros_like(dfs)
        positive = times > 0
        zero_rates[positive] = -np.log(dfs[positive]) / times[positive]
        if not positive[0]:
            zero_rates[0] = zero_rates[1]
        self.times = times
        self.zero_rates = zero_rates

    def zero_rate(self, t: float) -> float:
        if self.times is None:
            raise RuntimeError("Interpolator not fitted")

        if t <= self.times[0]:
            return float(self.zero_rates[0])
        if t >= self.times[-1]:
            return float(self.zero_rates[-1])

        idx = self._bracket(self.times, t)
        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.zero_rates[idx], self.zero_rates[idx + 1]
        w = (t - t0) / (t1 - t0) if t1 != t0 else 0.0
        return float(v0 + w * (v1 - v0))

    def discount_factor(self, t: float) -> float:
        return float(np.exp(-self.zero_rate(t) * t))


class LogLinearInterpolator(Interpolator):
    """
    Log-linear interpolation on discount factors.

    Interpolates linearly in log(discount factor) space,
    which corresponds to piecewise constant forward rates.
    """

    def __init__(self):
        self.times: Optional[np.ndarray] = None
        self.log_df: Optional[np.ndarray] = None

    def fit(self, times: np.ndarray, discount_factors: np.ndarray) -> None:
        times, dfs = self._sorted_nodes(times, discount_factors)
        self.times = times
        self.log_df = np.log(dfs)

    def interpolate(self, t: float) -> float:
        """Log of the discount factor at time t."""
        if self.times is None or self.log_df is None:
            raise RuntimeError("Interpolator not fitted")

        if t <= self.times[0]:
            return float(self.log_df[0])

        # Linear extrapolation in log space beyond the last node
        idx = self._bracket(self.times, t)
        t0, t1 = self.times[idx], self.times[idx + 1]
        v0, v1 = self.log_df[idx], self.log_df[idx + 1]
        w = (t - t0) / (t1 - t0) if t1 != t0 else 0.0
        return float(v0 + w * (v1 - v0))

    def discount_factor(self, t: float) -> float:
        return float(np.exp(self.interpolate(t)))


def create_interpolator(method: str) -> Interpolator:
    """
    Factory function to create an interpolator by name.

    Args:
        method: One of "linear", "log_linear"

    Returns:
        Interpolator instance
    """
    method = method.lower().replace("-", "_").replace(" ", "_")

    if method in ("linear", "lin", "linear_zero"):
        return LinearInterpolator()
    elif method in ("log_linear", "loglinear"):
        return LogLinearInterpolator()
    else:
        raise ValueError(f"Unknown interpolation method: {method}")


__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "create_interpolator",
]
