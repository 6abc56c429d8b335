"""
Forward rate curve representation.

The ForwardRateCurve provides:
- Discount factor P(0,t)
- Zero rate z(t)
- Forward rate f(d1, d2) under any day count and compounding

Nodes are (date, discount factor) pairs anchored at the evaluation date,
where the discount factor is 1. Calibration helpers only read the curve;
the bootstrap driver is the only writer of node values.
"""

from datetime import date
from typing import List, Optional, Tuple, Union

import numpy as np

from ..conventions import Compounding, DayCount, year_fraction
from ..dates import Period, add_period
from ..errors import DateOrderError
from .interpolation import Interpolator, create_interpolator


class ForwardRateCurve:
    """
    Discount curve with interpolation between dated nodes.

    Attributes:
        anchor_date: Evaluation date (time 0)
        day_count: Day count of the curve time axis
        interpolation_method: Name of interpolation method
        currency: Currency code

    Conventions:
        - Zero rates are continuously compounded
        - Times are year fractions from anchor date
        - Discount factor at the anchor date is 1.0
    """

    def __init__(
        self,
        anchor_date: date,
        day_count: DayCount = DayCount.ACT_365,
        interpolation_method: str = "log_linear",
        currency: str = "USD"
    ):
        self.anchor_date = anchor_date
        self.day_count = day_count
        self.interpolation_method = interpolation_method
        self.currency = currency

        self._dates: List[date] = [anchor_date]
        self._dfs: List[float] = [1.0]
        self._interpolator: Optional[Interpolator] = None
        self._is_fitted = False

    def time(self, d: date) -> float:
        """Year fraction from anchor date on the curve's day count."""
        return year_fraction(self.anchor_date, d, self.day_count)

    def add_node(self, d: date, discount_factor: float) -> int:
        """
        Add (or replace) a discount factor node.

        Returns:
            Index of the node
        """
        if d <= self.anchor_date:
            raise DateOrderError(
                f"Node date {d} must be after curve anchor date {self.anchor_date}"
            )
        if not discount_factor > 0:
            raise ValueError(f"Invalid discount factor: {discount_factor}")

        self._is_fitted = False
        for i, existing in enumerate(self._dates):
            if existing == d:
                self._dfs[i] = float(discount_factor)
                return i
            if existing > d:
                self._dates.insert(i, d)
                self._dfs.insert(i, float(discount_factor))
                return i
        self._dates.append(d)
        self._dfs.append(float(discount_factor))
        return len(self._dates) - 1

    def set_node_value(self, index: int, discount_factor: float) -> None:
        """Overwrite the discount factor of an existing node (index 0 is fixed)."""
        if index <= 0 or index >= len(self._dates):
            raise IndexError(f"Invalid node index: {index}")
        if not discount_factor > 0:
            raise ValueError(f"Invalid discount factor: {discount_factor}")
        self._dfs[index] = float(discount_factor)
        self._is_fitted = False

    def node_index(self, d: date) -> int:
        try:
            return self._dates.index(d)
        except ValueError:
            raise KeyError(f"No curve node at {d}") from None

    def build(self) -> None:
        """Fit the interpolator to the current nodes."""
        if len(self._dates) < 2:
            raise ValueError("Need at least 2 nodes to build curve")

        times = np.array([self.time(d) for d in self._dates])
        self._interpolator = create_interpolator(self.interpolation_method)
        self._interpolator.fit(times, np.array(self._dfs))
        self._is_fitted = True

    def _ensure_fitted(self) -> None:
        if not self._is_fitted or self._interpolator is None:
            if len(self._dates) >= 2:
                self.build()
            else:
                raise RuntimeError("Curve not fitted - add nodes before querying")

    def _to_time(self, t: Union[float, date]) -> float:
        if isinstance(t, date):
            return self.time(t)
        return float(t)

    def discount(self, t: Union[float, date]) -> float:
        """
        Get discount factor P(0,t).

        Args:
            t: Year fraction or date

        Returns:
            Discount factor
        """
        t = self._to_time(t)
        if t <= 0:
            return 1.0

        self._ensure_fitted()
        return self._interpolator.discount_factor(t)

    def zero_rate(
        self,
        t: Union[float, date],
        compounding: Compounding = Compounding.CONTINUOUS
    ) -> float:
        """
        Get zero rate z(t) from the anchor date.

        For t at or before the anchor, the rate of the first node is returned.
        """
        t = self._to_time(t)
        if t <= 0:
            t = self.time(self._dates[1]) if len(self._dates) > 1 else 0.0
            if t <= 0:
                return 0.0
        return _rate_from_compound(1.0 / self.discount(t), t, compounding)

    def forward_rate(
        self,
        d1: Union[float, date],
        d2: Union[float, date],
        day_count: Optional[DayCount] = None,
        compounding: Compounding = Compounding.SIMPLE
    ) -> float:
        """
        Get forward rate between d1 and d2.

        Args:
            d1: Start (date or year fraction)
            d2: End (date or year fraction)
            day_count: Accrual day count for dates (defaults to curve day count)
            compounding: Compounding convention of the returned rate

        Returns:
            Forward rate
        """
        if isinstance(d1, date) and isinstance(d2, date):
            if d2 <= d1:
                raise DateOrderError(f"Forward end {d2} must be after start {d1}")
            tau = year_fraction(d1, d2, day_count or self.day_count)
        else:
            tau = self._to_time(d2) - self._to_time(d1)
            if tau <= 0:
                raise DateOrderError("t2 must be greater than t1")

        compound = self.discount(d1) / self.discount(d2)
        return _rate_from_compound(compound, tau, compounding)

    @property
    def node_dates(self) -> List[date]:
        return list(self._dates)

    def nodes(self) -> List[Tuple[date, float]]:
        """List of (date, discount_factor) pairs, anchor first."""
        return list(zip(self._dates, self._dfs))

    def get_node_times(self) -> np.ndarray:
        return np.array([self.time(d) for d in self._dates])

    def get_node_dfs(self) -> np.ndarray:
        return np.array(self._dfs)

    def bump_node(self, node_index: int, bp: float) -> "ForwardRateCurve":
        """
        Create a new curve with a single node's zero rate bumped.

        Args:
            node_index: Index of node to bump (0 is the anchor and cannot move)
            bp: Bump size in basis points

        Returns:
            New bumped curve
        """
        if node_index <= 0 or node_index >= len(self._dates):
            raise IndexError(f"Invalid node index: {node_index}")

        bumped = self.copy()
        t = self.time(self._dates[node_index])
        bumped._dfs[node_index] = self._dfs[node_index] * np.exp(-bp / 10000.0 * t)
        return bumped

    def copy(self) -> "ForwardRateCurve":
        new_curve = ForwardRateCurve(
            anchor_date=self.anchor_date,
            day_count=self.day_count,
            interpolation_method=self.interpolation_method,
            currency=self.currency
        )
        new_curve._dates = list(self._dates)
        new_curve._dfs = list(self._dfs)
        return new_curve

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return (f"ForwardRateCurve(anchor={self.anchor_date}, currency={self.currency}, "
                f"nodes={len(self._dates)}, method={self.interpolation_method})")


def _rate_from_compound(compound: float, tau: float, compounding: Compounding) -> float:
    if compounding == Compounding.SIMPLE:
        return (compound - 1.0) / tau
    if compounding == Compounding.CONTINUOUS:
        return float(np.log(compound) / tau)
    n = compounding.periods_per_year
    return n * (compound ** (1.0 / (n * tau)) - 1.0)


def create_flat_curve(
    anchor_date: date,
    rate: float,
    day_count: DayCount = DayCount.ACT_365,
    max_tenor_years: int = 50,
    currency: str = "USD"
) -> ForwardRateCurve:
    """
    Create a flat curve.

    Args:
        anchor_date: Valuation date
        rate: Flat continuously compounded rate on the day count
        day_count: Curve time axis
        max_tenor_years: Last node tenor
        currency: Currency code

    Returns:
        Log-linear curve with DF(t) = exp(-rate * t) everywhere
    """
    curve = ForwardRateCurve(anchor_date, day_count, "log_linear", currency)

    for tenor in ("1Y", "5Y", f"{max_tenor_years}Y"):
        d = add_period(anchor_date, Period.parse(tenor))
        curve.add_node(d, float(np.exp(-rate * curve.time(d))))

    curve.build()
    return curve


__all__ = [
    "ForwardRateCurve",
    "create_flat_curve",
]
