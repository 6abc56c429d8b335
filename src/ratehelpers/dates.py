"""
Date utilities for rates calculations.

Provides:
- Period parsing and unadjusted period arithmetic
- Calendar: business-day adjustment and advancing
- Schedule generation for swap legs
- IMM / ASX futures dates
"""

import calendar as _calendar
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple, Union

from .conventions import (
    BusinessDayConvention,
    Frequency,
    adjust_business_day,
    is_business_day,
)
from .errors import DateOrderError


class TimeUnit(Enum):
    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"


@dataclass(frozen=True)
class Period:
    """
    A length of time such as 2D, 1W, 3M or 5Y.

    Attributes:
        length: Signed number of units
        unit: Time unit
    """
    length: int
    unit: TimeUnit

    # Tenor regex pattern: optional sign + number + unit (D/W/M/Y)
    TENOR_PATTERN = re.compile(r'^(-?\d+)([DWMY])$', re.IGNORECASE)

    @classmethod
    def parse(cls, tenor: str) -> "Period":
        """
        Parse a tenor string.

        Raises:
            ValueError: If tenor format is invalid
        """
        match = cls.TENOR_PATTERN.match(tenor.upper().strip())
        if not match:
            raise ValueError(f"Invalid tenor format: {tenor}. Expected format like '3M', '2Y'")
        return cls(int(match.group(1)), TimeUnit(match.group(2).upper()))

    @classmethod
    def coerce(cls, value: Union["Period", str]) -> "Period":
        if isinstance(value, Period):
            return value
        return cls.parse(value)

    @classmethod
    def from_months(cls, months: int) -> "Period":
        return cls(months, TimeUnit.MONTHS)

    @classmethod
    def from_frequency(cls, frequency: Frequency) -> "Period":
        if frequency == Frequency.WEEKLY:
            return cls(1, TimeUnit.WEEKS)
        return cls(12 // frequency.value, TimeUnit.MONTHS)

    def normalized(self) -> "Period":
        """Years expressed as months and weeks as days, for comparisons."""
        if self.unit == TimeUnit.YEARS:
            return Period(self.length * 12, TimeUnit.MONTHS)
        if self.unit == TimeUnit.WEEKS:
            return Period(self.length * 7, TimeUnit.DAYS)
        return self

    def equivalent(self, other: "Period") -> bool:
        return self.normalized() == other.normalized()

    @property
    def months(self) -> int:
        """Length in months (month and year periods only)."""
        p = self.normalized()
        if p.unit != TimeUnit.MONTHS:
            raise ValueError(f"{self} is not a month-based period")
        return p.length

    def __neg__(self) -> "Period":
        return Period(-self.length, self.unit)

    def __mul__(self, n: int) -> "Period":
        return Period(self.length * n, self.unit)

    __rmul__ = __mul__

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


def add_period(start: date, period: Union[Period, str]) -> date:
    """
    Add a period to a date without any business-day adjustment.

    Month and year arithmetic clips to the last day of the target month.
    """
    period = Period.coerce(period)
    n = period.length

    if period.unit == TimeUnit.DAYS:
        return start + timedelta(days=n)
    if period.unit == TimeUnit.WEEKS:
        return start + timedelta(weeks=n)

    months = n if period.unit == TimeUnit.MONTHS else 12 * n
    year, month0 = divmod(start.month - 1 + months, 12)
    year += start.year
    month = month0 + 1
    day = min(start.day, _calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class Calendar:
    """
    Holiday calendar.

    Attributes:
        name: Calendar name
        holidays: Set of non-business dates
        weekend: Weekday numbers of the weekend (Mon=0); empty for a null calendar
    """
    name: str = "WeekendsOnly"
    holidays: FrozenSet[date] = field(default_factory=frozenset)
    weekend: Tuple[int, ...] = (5, 6)

    @classmethod
    def weekends_only(cls, holidays=()) -> "Calendar":
        return cls("WeekendsOnly", frozenset(holidays))

    @classmethod
    def null(cls) -> "Calendar":
        """Calendar where every day is a business day."""
        return cls("Null", frozenset(), ())

    def is_business_day(self, d: date) -> bool:
        return is_business_day(d, self.holidays, self.weekend)

    def adjust(
        self,
        d: date,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING
    ) -> date:
        return adjust_business_day(d, convention, self.holidays, self.weekend)

    def end_of_month(self, d: date) -> date:
        """Last business day of the month of d."""
        last = date(d.year, d.month, _calendar.monthrange(d.year, d.month)[1])
        return self.adjust(last, BusinessDayConvention.PRECEDING)

    def is_end_of_month(self, d: date) -> bool:
        return d.month != self.adjust(d + timedelta(days=1)).month

    def advance(
        self,
        d: date,
        period: Union[Period, str, int],
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False
    ) -> date:
        """
        Advance a date by a period.

        Day periods count business days (an int is taken as business days);
        other periods are added on the calendar and then adjusted. With
        end_of_month set, a start on the last business day of its month rolls
        to the last business day of the target month.
        """
        if isinstance(period, int):
            period = Period(period, TimeUnit.DAYS)
        period = Period.coerce(period)
        n = period.length

        if period.unit == TimeUnit.DAYS:
            if n == 0:
                return self.adjust(d, convention)
            step = timedelta(days=1 if n > 0 else -1)
            result = d
            remaining = abs(n)
            while remaining > 0:
                result += step
                while not self.is_business_day(result):
                    result += step
                remaining -= 1
            return result

        if period.unit == TimeUnit.WEEKS:
            return self.adjust(add_period(d, period), convention)

        result = add_period(d, period)
        if end_of_month and self.is_end_of_month(d):
            return self.end_of_month(result)
        return self.adjust(result, convention)

    def business_days_between(self, start: date, end: date) -> int:
        """Number of business days in (start, end]."""
        count = 0
        current = start
        while current < end:
            current += timedelta(days=1)
            if self.is_business_day(current):
                count += 1
        return count


def generate_schedule(
    effective: date,
    termination: date,
    tenor: Union[Period, str],
    calendar: Calendar,
    convention: BusinessDayConvention = BusinessDayConvention.MODIFIED_FOLLOWING,
    termination_convention: Optional[BusinessDayConvention] = None,
    end_of_month: bool = False,
    backward: bool = True
) -> List[date]:
    """
    Generate adjusted schedule dates between effective and termination.

    Args:
        effective: Schedule start (accrual start)
        termination: Schedule end (unadjusted maturity)
        tenor: Coupon period
        calendar: Calendar used for adjustment
        convention: Adjustment for all dates but the last
        termination_convention: Adjustment for the last date (defaults to convention)
        end_of_month: Roll interior dates to month end when the anchor date is a month end
        backward: Generate from termination backwards (short front stub)

    Returns:
        Adjusted dates, first is the effective date and last the termination date
    """
    tenor = Period.coerce(tenor)
    if termination <= effective:
        raise DateOrderError(
            f"Schedule termination {termination} must be after effective date {effective}"
        )
    if tenor.length <= 0:
        raise ValueError(f"Schedule tenor must be positive, got {tenor}")
    if termination_convention is None:
        termination_convention = convention

    anchor = termination if backward else effective
    roll_eom = (
        end_of_month
        and tenor.unit in (TimeUnit.MONTHS, TimeUnit.YEARS)
        and calendar.is_end_of_month(anchor)
    )

    # Unadjusted dates are generated as anchor +/- k * tenor to avoid day drift
    interior: List[date] = []
    k = 1
    while True:
        step = tenor * (-k if backward else k)
        d = add_period(anchor, step)
        if roll_eom:
            d = date(d.year, d.month, _calendar.monthrange(d.year, d.month)[1])
        if (backward and d <= effective) or (not backward and d >= termination):
            break
        interior.append(d)
        k += 1
    if backward:
        interior.reverse()

    adjusted = [calendar.adjust(effective, convention)]
    for d in interior:
        adjusted.append(calendar.adjust(d, convention))
    adjusted.append(calendar.adjust(termination, termination_convention))

    schedule: List[date] = []
    for d in adjusted:
        if not schedule or d > schedule[-1]:
            schedule.append(d)
    return schedule


# --- Futures dates ---------------------------------------------------------

_MAIN_CYCLE = (3, 6, 9, 12)


def is_imm_date(d: date, main_cycle: bool = True) -> bool:
    """Third Wednesday of the month (of Mar/Jun/Sep/Dec with main_cycle)."""
    if d.weekday() != 2 or not 15 <= d.day <= 21:
        return False
    return not main_cycle or d.month in _MAIN_CYCLE


def next_imm_date(d: date, main_cycle: bool = True) -> date:
    """First IMM date strictly after d."""
    return _next_nth_weekday(d, weekday=2, first_day=15, main_cycle=main_cycle)


def is_asx_date(d: date, main_cycle: bool = True) -> bool:
    """Second Friday of the month (of Mar/Jun/Sep/Dec with main_cycle)."""
    if d.weekday() != 4 or not 8 <= d.day <= 14:
        return False
    return not main_cycle or d.month in _MAIN_CYCLE


def next_asx_date(d: date, main_cycle: bool = True) -> date:
    """First ASX date strictly after d."""
    return _next_nth_weekday(d, weekday=4, first_day=8, main_cycle=main_cycle)


def next_weekday(d: date, weekday: int) -> date:
    """First date strictly after d falling on weekday (Mon=0)."""
    return d + timedelta(days=(weekday - d.weekday() - 1) % 7 + 1)


def _next_nth_weekday(d: date, weekday: int, first_day: int, main_cycle: bool) -> date:
    year, month = d.year, d.month
    while True:
        if not main_cycle or month in _MAIN_CYCLE:
            first = date(year, month, first_day)
            candidate = first + timedelta(days=(weekday - first.weekday()) % 7)
            if candidate > d:
                return candidate
        month += 1
        if month > 12:
            month = 1
            year += 1


__all__ = [
    "TimeUnit",
    "Period",
    "Calendar",
    "add_period",
    "generate_schedule",
    "is_imm_date",
    "next_imm_date",
    "is_asx_date",
    "next_asx_date",
    "next_weekday",
]
