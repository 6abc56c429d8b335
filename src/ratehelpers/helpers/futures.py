"""
Rate helper for bootstrapping over ibor futures prices.

Implied price = 100 * (1 - futures rate), where the futures rate is the
curve's simple forward over [ibor start, ibor end] plus the convexity
adjustment. A larger adjustment therefore gives a lower implied price.
"""

from datetime import date
from enum import Enum
from typing import Optional

from ..conventions import BusinessDayConvention, Compounding, DayCount, year_fraction
from ..dates import (
    Calendar,
    Period,
    is_asx_date,
    is_imm_date,
    next_asx_date,
    next_imm_date,
)
from ..errors import DateOrderError, InconsistentInstrumentError
from ..indexes import IborIndex
from ..quotes import Quote, QuoteLike, as_quote
from .base import CalibrationHelper
from .visitor import HelperKind


class FuturesType(Enum):
    """Futures contract family; drives start date validation and default end."""
    IMM = "IMM"
    ASX = "ASX"
    CUSTOM = "Custom"


class FuturesHelper(CalibrationHelper):
    """
    Ibor futures price helper.

    The ibor period is given in exactly one of three ways:
    - length_in_months (with calendar, convention, end_of_month, day_count)
    - ibor_end_date (with day_count)
    - index (the index's tenor, calendar and conventions)
    With none of them, IMM and ASX futures end on the third following
    IMM/ASX date.

    Args:
        price: Futures price quote (e.g. 94.75)
        ibor_start_date: Start of the underlying ibor period
        convexity_adjustment: Literal rate or live Quote (zero if None)
        futures_type: IMM, ASX or CUSTOM
    """
    kind = HelperKind.FUTURES

    def __init__(
        self,
        price: QuoteLike,
        ibor_start_date: date,
        *,
        length_in_months: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        convention: Optional[BusinessDayConvention] = None,
        end_of_month: Optional[bool] = None,
        day_count: Optional[DayCount] = None,
        ibor_end_date: Optional[date] = None,
        index: Optional[IborIndex] = None,
        convexity_adjustment: Optional[QuoteLike] = None,
        futures_type: FuturesType = FuturesType.IMM
    ):
        super().__init__(price)
        self.futures_type = futures_type
        self._convexity_adjustment: Optional[Quote] = as_quote(convexity_adjustment)

        self._check_start_date(ibor_start_date)

        if index is not None:
            if ibor_end_date is not None:
                raise InconsistentInstrumentError("give either an index or an ibor end date, not both")
            if length_in_months is not None and not Period.from_months(length_in_months).equivalent(index.tenor):
                raise InconsistentInstrumentError(
                    f"length {length_in_months}M disagrees with index {index.name} tenor {index.tenor}"
                )
            if day_count is not None and day_count != index.day_count:
                raise InconsistentInstrumentError(
                    f"day count {day_count.value} disagrees with index {index.name} "
                    f"day count {index.day_count.value}"
                )
            maturity = index.maturity_date(ibor_start_date)
            day_count = index.day_count
        elif length_in_months is not None:
            if ibor_end_date is not None:
                raise InconsistentInstrumentError("give either a length in months or an ibor end date, not both")
            if length_in_months <= 0:
                raise InconsistentInstrumentError(f"length in months must be positive, got {length_in_months}")
            calendar = calendar or Calendar.weekends_only()
            maturity = calendar.advance(
                ibor_start_date,
                Period.from_months(length_in_months),
                convention or BusinessDayConvention.MODIFIED_FOLLOWING,
                bool(end_of_month),
            )
        elif ibor_end_date is not None:
            if ibor_end_date <= ibor_start_date:
                raise DateOrderError(
                    f"ibor end date ({ibor_end_date}) must be after ibor start date ({ibor_start_date})"
                )
            maturity = ibor_end_date
        else:
            maturity = self._default_end_date(ibor_start_date)

        self.day_count = day_count or DayCount.ACT_360
        if maturity <= ibor_start_date:
            raise DateOrderError(
                f"ibor end date ({maturity}) must be after ibor start date ({ibor_start_date})"
            )
        self._year_fraction = year_fraction(ibor_start_date, maturity, self.day_count)
        self._set_dates(ibor_start_date, maturity, maturity, maturity)

    def _check_start_date(self, start: date) -> None:
        if self.futures_type == FuturesType.IMM and not is_imm_date(start, main_cycle=False):
            raise InconsistentInstrumentError(f"{start} is not a valid IMM date")
        if self.futures_type == FuturesType.ASX and not is_asx_date(start, main_cycle=False):
            raise InconsistentInstrumentError(f"{start} is not a valid ASX date")

    def _default_end_date(self, start: date) -> date:
        if self.futures_type == FuturesType.IMM:
            next_date = next_imm_date
        elif self.futures_type == FuturesType.ASX:
            next_date = next_asx_date
        else:
            raise InconsistentInstrumentError(
                "custom futures need an ibor end date, a length in months or an index"
            )
        end = start
        for _ in range(3):
            end = next_date(end, main_cycle=False)
        return end

    @property
    def year_fraction(self) -> float:
        return self._year_fraction

    def convexity_adjustment(self) -> float:
        if self._convexity_adjustment is None:
            return 0.0
        return self._convexity_adjustment.value()

    def implied_quote(self) -> float:
        curve = self.term_structure
        forward = curve.forward_rate(
            self.earliest_date, self.maturity_date, self.day_count, Compounding.SIMPLE
        )
        futures_rate = forward + self.convexity_adjustment()
        return 100.0 * (1.0 - futures_rate)

    def accept(self, visitor):
        return visitor.visit_futures_helper(self)


__all__ = [
    "FuturesType",
    "FuturesHelper",
]
