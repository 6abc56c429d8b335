"""
Rate helpers for bootstrapping over deposit and FRA rates.

Both instruments quote the simple forward rate of an ibor-style period,
so the implied quote is the index fixing forecast off the curve under
construction. They differ only in when the period starts.
"""

from datetime import date
from typing import Optional, Union

from ..conventions import BusinessDayConvention, DayCount
from ..dates import Calendar, Period
from ..errors import InconsistentInstrumentError
from ..indexes import IborIndex
from ..quotes import QuoteLike
from .base import Pillar, RelativeDateHelper, resolve_ibor_index, resolve_pillar
from .visitor import HelperKind


class DepositHelper(RelativeDateHelper):
    """
    Deposit rate helper.

    Give either the deposit conventions (tenor, fixing_days, calendar,
    convention, end_of_month, day_count) or an IborIndex carrying them.
    Explicit fields given alongside an index must agree with it.

    Dates:
        earliest = adjusted evaluation date + fixing days
        maturity = pillar = index maturity of earliest
    """
    kind = HelperKind.DEPOSIT

    def __init__(
        self,
        rate: QuoteLike,
        *,
        evaluation_date: date,
        tenor: Optional[Union[Period, str]] = None,
        fixing_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        convention: Optional[BusinessDayConvention] = None,
        end_of_month: Optional[bool] = None,
        day_count: Optional[DayCount] = None,
        index: Optional[IborIndex] = None
    ):
        super().__init__(rate, evaluation_date)
        self._index = resolve_ibor_index(
            index,
            name="DepositIndex",
            tenor=tenor,
            fixing_days=fixing_days,
            calendar=calendar,
            convention=convention,
            end_of_month=end_of_month,
            day_count=day_count,
        )
        self._fixing_date: Optional[date] = None
        self._initialize_dates()

    def _initialize_dates(self) -> None:
        index = self._index
        reference = index.calendar.adjust(self._evaluation_date)
        earliest = index.calendar.advance(reference, index.fixing_days)
        maturity = index.maturity_date(earliest)
        self._fixing_date = index.fixing_date(earliest)
        self._set_dates(earliest, maturity, maturity, maturity)

    @property
    def index(self) -> IborIndex:
        return self._index

    @property
    def fixing_date(self) -> date:
        return self._fixing_date

    def implied_quote(self) -> float:
        return self._index.forecast_fixing(self.term_structure, self._fixing_date)

    def accept(self, visitor):
        return visitor.visit_deposit_helper(self)


class FraHelper(RelativeDateHelper):
    """
    FRA rate helper.

    The forward period starts period_to_start after spot (evaluation date
    plus fixing days) and lasts one index tenor. Accepted styles:
    - months_to_start, months_to_end
    - period_to_start (or months_to_start), length_in_months
    - period_to_start (or months_to_start), index
    Equivalent inputs resolve to the same fixing and pillar dates.

    Args:
        pillar: Pillar policy (last relevant date by default)
        custom_pillar_date: Pillar for Pillar.CUSTOM_DATE
    """
    kind = HelperKind.FRA

    def __init__(
        self,
        rate: QuoteLike,
        *,
        evaluation_date: date,
        months_to_start: Optional[int] = None,
        months_to_end: Optional[int] = None,
        period_to_start: Optional[Union[Period, str]] = None,
        length_in_months: Optional[int] = None,
        fixing_days: Optional[int] = None,
        calendar: Optional[Calendar] = None,
        convention: Optional[BusinessDayConvention] = None,
        end_of_month: Optional[bool] = None,
        day_count: Optional[DayCount] = None,
        index: Optional[IborIndex] = None,
        pillar: Pillar = Pillar.LAST_RELEVANT_DATE,
        custom_pillar_date: Optional[date] = None
    ):
        super().__init__(rate, evaluation_date)

        if period_to_start is not None:
            period_to_start = Period.coerce(period_to_start)
            if months_to_start is not None and not Period.from_months(months_to_start).equivalent(period_to_start):
                raise InconsistentInstrumentError(
                    f"months_to_start {months_to_start} disagrees with period_to_start {period_to_start}"
                )
        elif months_to_start is not None:
            period_to_start = Period.from_months(months_to_start)
        else:
            raise InconsistentInstrumentError("FRA needs months_to_start or period_to_start")

        length = length_in_months
        if months_to_end is not None:
            if months_to_start is None:
                raise InconsistentInstrumentError("months_to_end requires months_to_start")
            if months_to_end <= months_to_start:
                raise InconsistentInstrumentError(
                    f"months_to_end ({months_to_end}) must be greater than "
                    f"months_to_start ({months_to_start})"
                )
            length = months_to_end - months_to_start
            if length_in_months is not None and length_in_months != length:
                raise InconsistentInstrumentError(
                    f"length_in_months {length_in_months} disagrees with "
                    f"{months_to_start}x{months_to_end}"
                )
        if length is not None and length <= 0:
            raise InconsistentInstrumentError(f"FRA length must be positive, got {length} months")

        self._period_to_start = period_to_start
        self._index = resolve_ibor_index(
            index,
            name="FraIndex",
            tenor=None if length is None else Period.from_months(length),
            fixing_days=fixing_days,
            calendar=calendar,
            convention=convention,
            end_of_month=end_of_month,
            day_count=day_count,
        )
        self.pillar_choice = pillar
        self._custom_pillar_date = custom_pillar_date
        self._fixing_date: Optional[date] = None
        self._initialize_dates()

    def _initialize_dates(self) -> None:
        index = self._index
        calendar = index.calendar
        reference = calendar.adjust(self._evaluation_date)
        spot = calendar.advance(reference, index.fixing_days)
        earliest = calendar.advance(
            spot, self._period_to_start, index.convention, index.end_of_month
        )
        maturity = index.maturity_date(earliest)
        self._fixing_date = index.fixing_date(earliest)

        pillar = resolve_pillar(
            self.pillar_choice, earliest, maturity, maturity, self._custom_pillar_date
        )
        self._set_dates(earliest, maturity, maturity, pillar)

    @property
    def index(self) -> IborIndex:
        return self._index

    @property
    def period_to_start(self) -> Period:
        return self._period_to_start

    @property
    def fixing_date(self) -> date:
        return self._fixing_date

    def implied_quote(self) -> float:
        return self._index.forecast_fixing(self.term_structure, self._fixing_date)

    def accept(self, visitor):
        return visitor.visit_fra_helper(self)


__all__ = [
    "DepositHelper",
    "FraHelper",
]
