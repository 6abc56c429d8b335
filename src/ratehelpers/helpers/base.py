"""
Calibration helper contract.

A helper owns an observed quote, resolves the date at which its instrument
constrains the curve (the pillar), and computes the quote implied by
whatever curve is currently linked to it. The bootstrap driver links the
curve under construction and solves each pillar's node until implied and
observed quotes agree.

Only instrument-intrinsic values (dates, accrual fractions, schedules) are
cached on a helper. Nothing read from the curve is, since the driver moves
curve nodes between calls.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from enum import Enum
from typing import Optional

from ..conventions import BusinessDayConvention, DayCount
from ..curves.handle import CurveHandle
from ..dates import Calendar, Period
from ..errors import InconsistentInstrumentError, InvalidPillarError
from ..indexes import IborIndex
from ..quotes import Quote, QuoteLike, as_quote
from .visitor import HelperKind

logger = logging.getLogger(__name__)


class Pillar(Enum):
    """Choice of the date used as a helper's curve node."""
    MATURITY_DATE = "MaturityDate"
    LAST_RELEVANT_DATE = "LastRelevantDate"
    CUSTOM_DATE = "CustomDate"


def resolve_pillar(
    choice: Pillar,
    earliest_date: date,
    maturity_date: date,
    latest_relevant_date: date,
    custom_date: Optional[date] = None
) -> date:
    """
    Resolve the pillar date of an instrument.

    Args:
        choice: Pillar policy
        earliest_date: First date the instrument depends on the curve
        maturity_date: Instrument maturity
        latest_relevant_date: Last date the instrument depends on the curve
        custom_date: Caller-supplied pillar for Pillar.CUSTOM_DATE

    Raises:
        InvalidPillarError: custom date missing or outside
            [earliest_date, latest_relevant_date]
    """
    if choice == Pillar.MATURITY_DATE:
        return maturity_date
    if choice == Pillar.LAST_RELEVANT_DATE:
        return latest_relevant_date
    if choice == Pillar.CUSTOM_DATE:
        if custom_date is None:
            raise InvalidPillarError("custom pillar date required for Pillar.CUSTOM_DATE")
        if custom_date < earliest_date:
            raise InvalidPillarError(
                f"pillar date ({custom_date}) must be after or equal to "
                f"earliest date ({earliest_date})"
            )
        if custom_date > latest_relevant_date:
            raise InvalidPillarError(
                f"pillar date ({custom_date}) must be before or equal to "
                f"latest relevant date ({latest_relevant_date})"
            )
        return custom_date
    raise InvalidPillarError(f"unknown pillar choice: {choice}")


def resolve_ibor_index(
    index: Optional[IborIndex],
    *,
    name: str,
    tenor=None,
    fixing_days: Optional[int] = None,
    calendar: Optional[Calendar] = None,
    convention: Optional[BusinessDayConvention] = None,
    end_of_month: Optional[bool] = None,
    day_count: Optional[DayCount] = None
) -> IborIndex:
    """
    Return the index an instrument projects on.

    With an index, every explicitly given field must agree with it. Without
    one, an index is built from the explicit fields (tenor is mandatory).
    """
    if tenor is not None:
        tenor = Period.coerce(tenor)

    if index is not None:
        explicit = {
            "fixing_days": fixing_days,
            "calendar": calendar,
            "convention": convention,
            "end_of_month": end_of_month,
            "day_count": day_count,
        }
        if tenor is not None and not tenor.equivalent(index.tenor):
            raise InconsistentInstrumentError(
                f"tenor {tenor} disagrees with index {index.name} tenor {index.tenor}"
            )
        for field_name, value in explicit.items():
            if value is not None and value != getattr(index, field_name):
                raise InconsistentInstrumentError(
                    f"{field_name} {value!r} disagrees with index {index.name} "
                    f"({getattr(index, field_name)!r})"
                )
        return index

    if tenor is None:
        raise InconsistentInstrumentError(f"{name}: either a tenor or an index is required")

    return IborIndex(
        name=name,
        tenor=tenor,
        fixing_days=2 if fixing_days is None else fixing_days,
        calendar=calendar or Calendar.weekends_only(),
        convention=convention or BusinessDayConvention.MODIFIED_FOLLOWING,
        end_of_month=bool(end_of_month),
        day_count=day_count or DayCount.ACT_360,
    )


class CalibrationHelper(ABC):
    """
    Abstract base for curve calibration helpers.

    Attributes:
        kind: Instrument family tag
        quote: Observed market quote
        earliest_date: First date the instrument depends on the curve
        maturity_date: Instrument maturity
        latest_relevant_date: Last date the instrument depends on the curve
        pillar_date: Date of the curve node this helper constrains
        latest_date: Latest date the curve must cover for this helper
    """
    kind: HelperKind

    def __init__(self, quote: QuoteLike):
        self._quote = as_quote(quote)
        if self._quote is None:
            raise InconsistentInstrumentError(f"{type(self).__name__} requires a quote")
        self._term_structure = CurveHandle(description="term structure")

        self._earliest_date: Optional[date] = None
        self._maturity_date: Optional[date] = None
        self._latest_relevant_date: Optional[date] = None
        self._pillar_date: Optional[date] = None
        self._latest_date: Optional[date] = None

    # Quote
    @property
    def quote(self) -> Quote:
        return self._quote

    def quote_value(self) -> float:
        return self._quote.value()

    def quote_error(self) -> float:
        """Observed minus implied quote on the linked curve."""
        return self.quote_value() - self.implied_quote()

    @abstractmethod
    def implied_quote(self) -> float:
        """Quote implied by the linked curve."""

    # Curve
    def set_term_structure(self, curve) -> None:
        """Rebind the handle to the curve under construction."""
        if curve is None:
            raise ValueError("null term structure given")
        self._term_structure.link_to(curve)

    @property
    def term_structure(self):
        """The linked curve; raises CurveNotSetError if unbound."""
        return self._term_structure.current_link()

    # Dates
    def _set_dates(
        self,
        earliest_date: date,
        maturity_date: date,
        latest_relevant_date: date,
        pillar_date: date
    ) -> None:
        self._earliest_date = earliest_date
        self._maturity_date = maturity_date
        self._latest_relevant_date = latest_relevant_date
        self._pillar_date = pillar_date
        self._latest_date = pillar_date

    @property
    def earliest_date(self) -> date:
        return self._earliest_date

    @property
    def maturity_date(self) -> date:
        return self._maturity_date

    @property
    def latest_relevant_date(self) -> date:
        return self._latest_relevant_date

    @property
    def pillar_date(self) -> date:
        return self._pillar_date

    @property
    def latest_date(self) -> date:
        return self._latest_date

    # Visitability
    def accept(self, visitor):
        return visitor.visit_calibration_helper(self)

    def __repr__(self) -> str:
        quote = self._quote.value() if self._quote.is_valid() else None
        return f"{type(self).__name__}(quote={quote}, pillar={self._pillar_date})"


class RelativeDateHelper(CalibrationHelper):
    """
    Helper whose dates are measured from the evaluation date.

    Dates are recomputed explicitly: by reset_dates, or when
    set_term_structure binds a curve anchored on another evaluation date.
    """

    def __init__(self, quote: QuoteLike, evaluation_date: date):
        super().__init__(quote)
        self._evaluation_date = evaluation_date

    @property
    def evaluation_date(self) -> date:
        return self._evaluation_date

    def set_term_structure(self, curve) -> None:
        super().set_term_structure(curve)
        if curve.anchor_date != self._evaluation_date:
            self.reset_dates(curve.anchor_date)

    def reset_dates(self, evaluation_date: Optional[date] = None) -> None:
        """Recompute all cached dates, optionally for a new evaluation date."""
        previous = self._evaluation_date
        if evaluation_date is not None:
            self._evaluation_date = evaluation_date
        self._initialize_dates()
        logger.debug(
            "%s dates reset: evaluation %s -> %s, pillar %s",
            type(self).__name__, previous, self._evaluation_date, self._pillar_date
        )

    @abstractmethod
    def _initialize_dates(self) -> None:
        """Compute earliest/maturity/latest relevant/pillar dates."""


__all__ = [
    "Pillar",
    "resolve_pillar",
    "resolve_ibor_index",
    "CalibrationHelper",
    "RelativeDateHelper",
]
