"""
Rate helper for bootstrapping over FX swap forward points.

The curve under construction is the discount curve of one currency of the
pair; the collateral curve (exogenous, held by the helper) is the other. Forward
points follow from covered interest parity over [earliest, maturity].
"""

from datetime import date
from typing import Union

from ..conventions import BusinessDayConvention
from ..curves.handle import CurveHandle
from ..dates import Calendar, Period
from ..errors import InconsistentInstrumentError
from ..quotes import Quote, QuoteLike, as_quote
from .base import RelativeDateHelper
from .visitor import HelperKind


class FxSwapHelper(RelativeDateHelper):
    """
    FX swap rate helper quoted in forward points.

    Args:
        forward_points: Forward minus spot, in price units of the pair
        spot_fx: Spot rate (units of quote currency per unit of base)
        tenor: Swap tenor from the spot date
        fixing_days: Business days from evaluation to spot
        calendar: Joint calendar of the pair
        convention: Adjustment of the far date
        end_of_month: End-of-month rule for the far date
        is_fx_base_currency_collateral_currency: Whether the base currency
            of the pair is the collateral currency
        collateral_curve: Discount curve of the collateral currency
    """
    kind = HelperKind.FX_SWAP

    def __init__(
        self,
        forward_points: QuoteLike,
        *,
        evaluation_date: date,
        spot_fx: QuoteLike,
        tenor: Union[Period, str],
        fixing_days: int,
        calendar: Calendar,
        convention: BusinessDayConvention = BusinessDayConvention.FOLLOWING,
        end_of_month: bool = False,
        is_fx_base_currency_collateral_currency: bool = True,
        collateral_curve=None
    ):
        super().__init__(forward_points, evaluation_date)
        self._spot: Quote = as_quote(spot_fx)
        if self._spot is None:
            raise InconsistentInstrumentError("FX swap helper requires a spot FX quote")
        self._tenor = Period.coerce(tenor)
        self._fixing_days = fixing_days
        self._calendar = calendar
        self._convention = convention
        self._end_of_month = end_of_month
        self._base_is_collateral = is_fx_base_currency_collateral_currency
        self._collateral_handle = CurveHandle(
            collateral_curve, description="collateral term structure", owning=True
        )
        self._initialize_dates()

    def _initialize_dates(self) -> None:
        reference = self._calendar.adjust(self._evaluation_date)
        earliest = self._calendar.advance(
            reference, self._fixing_days, BusinessDayConvention.FOLLOWING
        )
        maturity = self._calendar.advance(
            earliest, self._tenor, self._convention, self._end_of_month
        )
        self._set_dates(earliest, maturity, maturity, maturity)

    def implied_quote(self) -> float:
        collateral = self._collateral_handle.current_link()
        curve = self.term_structure

        ratio = curve.discount(self.earliest_date) / curve.discount(self.maturity_date)
        collateral_ratio = (
            collateral.discount(self.earliest_date) / collateral.discount(self.maturity_date)
        )
        spot = self._spot.value()
        if self._base_is_collateral:
            return (ratio / collateral_ratio - 1.0) * spot
        return (collateral_ratio / ratio - 1.0) * spot

    def link_collateral_curve(self, curve) -> None:
        """Rebind the collateral curve (None unlinks it)."""
        self._collateral_handle.link_to(curve)

    @property
    def spot(self) -> float:
        return self._spot.value()

    @property
    def tenor(self) -> Period:
        return self._tenor

    @property
    def fixing_days(self) -> int:
        return self._fixing_days

    @property
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    def business_day_convention(self) -> BusinessDayConvention:
        return self._convention

    @property
    def end_of_month(self) -> bool:
        return self._end_of_month

    @property
    def is_fx_base_currency_collateral_currency(self) -> bool:
        return self._base_is_collateral

    def accept(self, visitor):
        return visitor.visit_fx_swap_helper(self)


__all__ = ["FxSwapHelper"]
