"""
Day count conventions and business day adjustments for rates instruments.

Supported Day Counts:
- ACT/360: Actual days / 360 (money markets, futures, ibor legs)
- ACT/365F: Actual days / 365 (curve time axis)
- ACT/ACT: ISDA actual/actual (BMA legs)
- 30/360: 30 days per month / 360 (fixed swap legs)

Business Day Conventions:
- Following, Modified Following, Preceding, Modified Preceding, Unadjusted
"""

import calendar
from datetime import date, timedelta
from enum import Enum
from typing import AbstractSet, Optional, Tuple


class DayCount(Enum):
    """Day count convention enumeration."""
    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365F"
    ACT_ACT = "ACT/ACT"
    THIRTY_360 = "30/360"

    @classmethod
    def from_string(cls, s: str) -> "DayCount":
        """Parse day count from string representation."""
        mapping = {
            "ACT/360": cls.ACT_360,
            "ACT360": cls.ACT_360,
            "ACT/365": cls.ACT_365,
            "ACT/365F": cls.ACT_365,
            "ACT365": cls.ACT_365,
            "ACT/ACT": cls.ACT_ACT,
            "ACTACT": cls.ACT_ACT,
            "30/360": cls.THIRTY_360,
            "30360": cls.THIRTY_360,
        }
        key = s.upper().replace(" ", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown day count convention: {s}")

    def year_fraction(self, start: date, end: date) -> float:
        return year_fraction(start, end, self)


class BusinessDayConvention(Enum):
    """Business day adjustment convention."""
    FOLLOWING = "Following"
    MODIFIED_FOLLOWING = "ModifiedFollowing"
    PRECEDING = "Preceding"
    MODIFIED_PRECEDING = "ModifiedPreceding"
    UNADJUSTED = "Unadjusted"


class Compounding(Enum):
    """Interest rate compounding convention."""
    SIMPLE = "Simple"
    CONTINUOUS = "Continuous"
    ANNUAL = "Annual"
    SEMI_ANNUAL = "SemiAnnual"
    QUARTERLY = "Quarterly"

    @property
    def periods_per_year(self) -> Optional[int]:
        return {
            Compounding.ANNUAL: 1,
            Compounding.SEMI_ANNUAL: 2,
            Compounding.QUARTERLY: 4,
        }.get(self)


class Frequency(Enum):
    """Coupon frequency; the value is the number of payments per year."""
    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12
    WEEKLY = 52

    @classmethod
    def from_string(cls, s: str) -> "Frequency":
        mapping = {
            "ANNUAL": cls.ANNUAL,
            "A": cls.ANNUAL,
            "SEMI": cls.SEMI_ANNUAL,
            "SEMIANNUAL": cls.SEMI_ANNUAL,
            "S": cls.SEMI_ANNUAL,
            "QUARTERLY": cls.QUARTERLY,
            "Q": cls.QUARTERLY,
            "MONTHLY": cls.MONTHLY,
            "M": cls.MONTHLY,
            "WEEKLY": cls.WEEKLY,
            "W": cls.WEEKLY,
        }
        key = s.upper().replace(" ", "").replace("-", "").replace("_", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown frequency: {s}")


def year_fraction(start: date, end: date, day_count: DayCount) -> float:
    """
    Calculate year fraction between two dates using specified day count convention.

    Args:
        start: Start date
        end: End date
        day_count: Day count convention

    Returns:
        Year fraction as float (0.0 when end is not after start)
    """
    if start >= end:
        return 0.0

    actual_days = (end - start).days

    if day_count == DayCount.ACT_360:
        return actual_days / 360.0

    elif day_count == DayCount.ACT_365:
        return actual_days / 365.0

    elif day_count == DayCount.ACT_ACT:
        if start.year == end.year:
            return actual_days / _days_in_year(start.year)
        total = (date(start.year + 1, 1, 1) - start).days / _days_in_year(start.year)
        total += end.year - start.year - 1
        total += (end - date(end.year, 1, 1)).days / _days_in_year(end.year)
        return total

    elif day_count == DayCount.THIRTY_360:
        # 30/360 bond basis
        d1 = min(start.day, 30)
        d2 = end.day
        if d2 == 31 and d1 == 30:
            d2 = 30
        return (360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)) / 360.0

    else:
        raise ValueError(f"Unknown day count: {day_count}")


def is_business_day(
    d: date,
    holidays: Optional[AbstractSet[date]] = None,
    weekend: Tuple[int, ...] = (5, 6)
) -> bool:
    """
    Check if a date is a business day.

    Args:
        d: Date to check
        holidays: Optional set of holiday dates
        weekend: Weekday numbers treated as non-business days (Mon=0)

    Returns:
        True if business day, False otherwise
    """
    if d.weekday() in weekend:
        return False
    if holidays and d in holidays:
        return False
    return True


def adjust_business_day(
    d: date,
    convention: BusinessDayConvention,
    holidays: Optional[AbstractSet[date]] = None,
    weekend: Tuple[int, ...] = (5, 6)
) -> date:
    """
    Adjust a date according to business day convention.

    Args:
        d: Date to adjust
        convention: Business day adjustment rule
        holidays: Optional set of holiday dates
        weekend: Weekday numbers treated as non-business days

    Returns:
        Adjusted date
    """
    if convention == BusinessDayConvention.UNADJUSTED:
        return d

    if is_business_day(d, holidays, weekend):
        return d

    one_day = timedelta(days=1)

    if convention in (BusinessDayConvention.FOLLOWING, BusinessDayConvention.MODIFIED_FOLLOWING):
        adjusted = d
        while not is_business_day(adjusted, holidays, weekend):
            adjusted += one_day
        if convention == BusinessDayConvention.MODIFIED_FOLLOWING and adjusted.month != d.month:
            return adjust_business_day(d, BusinessDayConvention.PRECEDING, holidays, weekend)
        return adjusted

    if convention in (BusinessDayConvention.PRECEDING, BusinessDayConvention.MODIFIED_PRECEDING):
        adjusted = d
        while not is_business_day(adjusted, holidays, weekend):
            adjusted -= one_day
        if convention == BusinessDayConvention.MODIFIED_PRECEDING and adjusted.month != d.month:
            return adjust_business_day(d, BusinessDayConvention.FOLLOWING, holidays, weekend)
        return adjusted

    raise ValueError(f"Unknown business day convention: {convention}")


def _days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


__all__ = [
    "DayCount",
    "BusinessDayConvention",
    "Compounding",
    "Frequency",
    "year_fraction",
    "is_business_day",
    "adjust_business_day",
]
