"""
Interest rate index descriptions.

Indexes are pure descriptions (tenor, calendar, conventions, day count).
Forecasting takes the curve explicitly, so one index can be shared by
helpers projecting on different curves.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Union

from .conventions import BusinessDayConvention, Compounding, DayCount, Frequency
from .dates import Calendar, Period, TimeUnit, add_period


@dataclass(frozen=True)
class IborIndex:
    """
    Term ibor-style index.

    Attributes:
        name: Index name (e.g., "USDLibor3M")
        tenor: Index tenor
        fixing_days: Business days between fixing and value date
        calendar: Fixing calendar
        convention: Business day convention of the maturity date
        end_of_month: End-of-month rule for the maturity date
        day_count: Accrual day count
        currency: Currency code
    """
    name: str
    tenor: Period
    fixing_days: int = 2
    calendar: Calendar = Calendar()
    convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING
    end_of_month: bool = False
    day_count: DayCount = DayCount.ACT_360
    currency: str = "USD"

    def __post_init__(self):
        if isinstance(self.tenor, str):
            object.__setattr__(self, "tenor", Period.parse(self.tenor))
        if self.fixing_days < 0:
            raise ValueError(f"fixing_days must be non-negative, got {self.fixing_days}")

    @classmethod
    def usd_libor(cls, tenor: Union[Period, str] = "3M", calendar: Optional[Calendar] = None) -> "IborIndex":
        tenor = Period.coerce(tenor)
        return cls(
            name=f"USDLibor{tenor}",
            tenor=tenor,
            fixing_days=2,
            calendar=calendar or Calendar.weekends_only(),
            convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            end_of_month=tenor.unit in (TimeUnit.MONTHS, TimeUnit.YEARS),
            day_count=DayCount.ACT_360,
            currency="USD",
        )

    @classmethod
    def euribor(cls, tenor: Union[Period, str] = "6M", calendar: Optional[Calendar] = None) -> "IborIndex":
        tenor = Period.coerce(tenor)
        return cls(
            name=f"Euribor{tenor}",
            tenor=tenor,
            fixing_days=2,
            calendar=calendar or Calendar.weekends_only(),
            convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            end_of_month=tenor.unit in (TimeUnit.MONTHS, TimeUnit.YEARS),
            day_count=DayCount.ACT_360,
            currency="EUR",
        )

    def fixing_date(self, value_date: date) -> date:
        return self.calendar.advance(value_date, -self.fixing_days)

    def value_date(self, fixing_date: date) -> date:
        return self.calendar.advance(fixing_date, self.fixing_days)

    def maturity_date(self, value_date: date) -> date:
        return self.calendar.advance(value_date, self.tenor, self.convention, self.end_of_month)

    def forecast_fixing(self, curve, fixing_date: date) -> float:
        """Simple forward rate for the given fixing, read off the curve."""
        start = self.value_date(fixing_date)
        end = self.maturity_date(start)
        return curve.forward_rate(start, end, self.day_count, Compounding.SIMPLE)


@dataclass(frozen=True)
class BMAIndex:
    """
    BMA / SIFMA municipal swap index.

    Resets weekly on reset_weekday (Wednesday by default). With
    reset_weekday=None resets step by tenor from the accrual start.
    """
    name: str = "BMA"
    tenor: Period = Period(1, TimeUnit.WEEKS)
    calendar: Calendar = Calendar()
    day_count: DayCount = DayCount.ACT_ACT
    reset_weekday: Optional[int] = 2
    fixing_days: int = 1

    def __post_init__(self):
        if isinstance(self.tenor, str):
            object.__setattr__(self, "tenor", Period.parse(self.tenor))

    @classmethod
    def usd(cls, calendar: Optional[Calendar] = None) -> "BMAIndex":
        return cls(calendar=calendar or Calendar.weekends_only())

    def value_date(self, fixing_date: date) -> date:
        return self.calendar.advance(fixing_date, self.fixing_days)

    def reset_dates(self, start: date, end: date) -> List[date]:
        """Reset dates covering [start, end]: first is on/before start, last on/after end."""
        first = start
        if self.reset_weekday is not None:
            first = start - timedelta(days=(start.weekday() - self.reset_weekday) % 7)
        dates = [first]
        k = 1
        while dates[-1] < end:
            dates.append(self.calendar.adjust(add_period(first, self.tenor * k)))
            k += 1
        return dates

    def forecast_rate(self, curve, start: date, end: date) -> float:
        return curve.forward_rate(start, end, self.day_count, Compounding.SIMPLE)

    def average_rate(self, curve, accrual_start: date, accrual_end: date) -> float:
        """Day-weighted average of the forecast resets over an accrual period."""
        resets = self.reset_dates(accrual_start, accrual_end)
        weighted = 0.0
        total_days = 0
        for reset_start, reset_end in zip(resets[:-1], resets[1:]):
            lo = max(reset_start, accrual_start)
            hi = min(reset_end, accrual_end)
            days = (hi - lo).days
            if days <= 0:
                continue
            weighted += days * self.forecast_rate(curve, reset_start, reset_end)
            total_days += days
        return weighted / total_days


@dataclass(frozen=True)
class SwapIndex:
    """
    Description of a standard fixed-vs-ibor swap.

    Attributes:
        name: Index name
        tenor: Swap tenor
        settlement_days: Business days from evaluation to swap start
        calendar: Swap calendar
        fixed_frequency: Fixed leg coupon frequency
        fixed_convention: Fixed leg business day convention
        fixed_day_count: Fixed leg day count
        ibor_index: Floating leg index
    """
    name: str
    tenor: Period
    settlement_days: int
    calendar: Calendar
    fixed_frequency: Frequency
    fixed_convention: BusinessDayConvention
    fixed_day_count: DayCount
    ibor_index: IborIndex
    currency: str = "USD"

    def __post_init__(self):
        if isinstance(self.tenor, str):
            object.__setattr__(self, "tenor", Period.parse(self.tenor))

    @classmethod
    def usd_swap(cls, tenor: Union[Period, str], ibor_index: Optional[IborIndex] = None) -> "SwapIndex":
        tenor = Period.coerce(tenor)
        ibor_index = ibor_index or IborIndex.usd_libor("3M")
        return cls(
            name=f"USDSwap{tenor}",
            tenor=tenor,
            settlement_days=2,
            calendar=ibor_index.calendar,
            fixed_frequency=Frequency.SEMI_ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=ibor_index,
            currency="USD",
        )

    @classmethod
    def euribor_swap(cls, tenor: Union[Period, str], ibor_index: Optional[IborIndex] = None) -> "SwapIndex":
        tenor = Period.coerce(tenor)
        ibor_index = ibor_index or IborIndex.euribor("6M")
        return cls(
            name=f"EuriborSwap{tenor}",
            tenor=tenor,
            settlement_days=2,
            calendar=ibor_index.calendar,
            fixed_frequency=Frequency.ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=ibor_index,
            currency="EUR",
        )


__all__ = [
    "IborIndex",
    "BMAIndex",
    "SwapIndex",
]
