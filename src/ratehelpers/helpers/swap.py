"""
Rate helpers for bootstrapping over swap rates and BMA swap ratios.

SwapHelper:
    implied quote = fair fixed rate - spread, the fair rate projecting the
    floating leg on the curve under construction and discounting on the
    exogenous discounting curve when one is given (dual-curve bootstrap),
    else on the curve under construction.

BMASwapHelper:
    implied quote = fair libor fraction, the ibor gearing that makes the
    BMA leg (projected on the curve under construction) and the ibor leg
    worth the same. The quote is a dimensionless ratio near 1.
"""

from datetime import date
from typing import Optional, Union

from ..conventions import BusinessDayConvention, DayCount, Frequency
from ..curves.handle import CurveHandle
from ..dates import Calendar, Period, add_period, next_weekday
from ..errors import InconsistentInstrumentError
from ..indexes import BMAIndex, IborIndex, SwapIndex
from ..instruments.swap import BMASwap, VanillaSwap, make_bma_swap, make_vanilla_swap
from ..quotes import Quote, QuoteLike, as_quote
from .base import Pillar, RelativeDateHelper, resolve_pillar
from .visitor import HelperKind


class SwapHelper(RelativeDateHelper):
    """
    Vanilla swap rate helper.

    Give either a SwapIndex or the explicit legs (tenor, fixed_frequency,
    fixed_convention, fixed_day_count, ibor_index, optionally calendar and
    settlement_days). Explicit fields given alongside a SwapIndex must agree
    with it.

    Args:
        spread: Literal or Quote subtracted from the fair rate (zero if None)
        forward_start: Shift of the swap start from spot
        discounting_curve: Exogenous discounting curve (kept alive by the helper)
        settlement_days: Defaults to the ibor index fixing days
        pillar: Pillar policy (last relevant date by default)
        custom_pillar_date: Pillar for Pillar.CUSTOM_DATE
    """
    kind = HelperKind.SWAP

    def __init__(
        self,
        rate: QuoteLike,
        *,
        evaluation_date: date,
        swap_index: Optional[SwapIndex] = None,
        tenor: Optional[Union[Period, str]] = None,
        calendar: Optional[Calendar] = None,
        fixed_frequency: Optional[Frequency] = None,
        fixed_convention: Optional[BusinessDayConvention] = None,
        fixed_day_count: Optional[DayCount] = None,
        ibor_index: Optional[IborIndex] = None,
        spread: Optional[QuoteLike] = None,
        forward_start: Union[Period, str] = "0D",
        discounting_curve=None,
        settlement_days: Optional[int] = None,
        pillar: Pillar = Pillar.LAST_RELEVANT_DATE,
        custom_pillar_date: Optional[date] = None
    ):
        super().__init__(rate, evaluation_date)
        if tenor is not None:
            tenor = Period.coerce(tenor)

        if swap_index is not None:
            explicit = {
                "calendar": calendar,
                "fixed_frequency": fixed_frequency,
                "fixed_convention": fixed_convention,
                "fixed_day_count": fixed_day_count,
                "ibor_index": ibor_index,
                "settlement_days": settlement_days,
            }
            if tenor is not None and not tenor.equivalent(swap_index.tenor):
                raise InconsistentInstrumentError(
                    f"tenor {tenor} disagrees with swap index {swap_index.name} tenor {swap_index.tenor}"
                )
            for field_name, value in explicit.items():
                if value is not None and value != getattr(swap_index, field_name):
                    raise InconsistentInstrumentError(
                        f"{field_name} {value!r} disagrees with swap index {swap_index.name}"
                    )
            tenor = swap_index.tenor
            calendar = swap_index.calendar
            fixed_frequency = swap_index.fixed_frequency
            fixed_convention = swap_index.fixed_convention
            fixed_day_count = swap_index.fixed_day_count
            ibor_index = swap_index.ibor_index
            settlement_days = swap_index.settlement_days
        else:
            required = {
                "tenor": tenor,
                "fixed_frequency": fixed_frequency,
                "fixed_convention": fixed_convention,
                "fixed_day_count": fixed_day_count,
                "ibor_index": ibor_index,
            }
            missing = [name for name, value in required.items() if value is None]
            if missing:
                raise InconsistentInstrumentError(
                    f"swap helper needs a swap index or {', '.join(missing)}"
                )

        self._tenor = tenor
        self.calendar = calendar or ibor_index.calendar
        self.fixed_frequency = fixed_frequency
        self.fixed_convention = fixed_convention
        self.fixed_day_count = fixed_day_count
        self.ibor_index = ibor_index
        self.settlement_days = ibor_index.fixing_days if settlement_days is None else settlement_days
        self._forward_start = Period.coerce(forward_start)
        self._spread: Optional[Quote] = as_quote(spread)

        self._exogenous_discounting = discounting_curve is not None
        self._discount_handle = CurveHandle(
            discounting_curve, description="discounting term structure", owning=True
        )

        self.pillar_choice = pillar
        self._custom_pillar_date = custom_pillar_date
        self._swap: Optional[VanillaSwap] = None
        self._initialize_dates()

    def _build_swap(self) -> VanillaSwap:
        return make_vanilla_swap(
            self._evaluation_date,
            self._tenor,
            self.ibor_index,
            fixed_frequency=self.fixed_frequency,
            fixed_convention=self.fixed_convention,
            fixed_day_count=self.fixed_day_count,
            calendar=self.calendar,
            forward_start=self._forward_start,
            settlement_days=self.settlement_days,
        )

    def _initialize_dates(self) -> None:
        self._swap = self._build_swap()
        earliest = self._swap.start_date
        maturity = self._swap.maturity_date
        latest_relevant = max(maturity, self._swap.last_fixing_end_date)
        pillar = resolve_pillar(
            self.pillar_choice, earliest, maturity, latest_relevant, self._custom_pillar_date
        )
        self._set_dates(earliest, maturity, latest_relevant, pillar)

    def set_term_structure(self, curve) -> None:
        super().set_term_structure(curve)
        self._swap = None

    @property
    def swap(self) -> VanillaSwap:
        """Calibration swap, rebuilt on first use after a reset or relink."""
        if self._swap is None:
            self._swap = self._build_swap()
        return self._swap

    @property
    def tenor(self) -> Period:
        return self._tenor

    @property
    def forward_start(self) -> Period:
        return self._forward_start

    def spread(self) -> float:
        return 0.0 if self._spread is None else self._spread.value()

    @property
    def discounting_curve(self):
        """Exogenous discounting curve, or None for same-curve discounting."""
        if not self._exogenous_discounting:
            return None
        return self._discount_handle.current_link()

    def implied_quote(self) -> float:
        forwarding = self.term_structure
        discounting = self.discounting_curve or forwarding
        return self.swap.fair_rate(forwarding, discounting) - self.spread()

    def accept(self, visitor):
        return visitor.visit_swap_helper(self)


class BMASwapHelper(RelativeDateHelper):
    """
    BMA swap helper quoted as a fraction of the ibor rate.

    The curve under construction projects the BMA index. The ibor leg is
    projected, and both legs discounted, on ibor_forwarding_curve when given
    (held by the helper), else on the curve under construction.
    """
    kind = HelperKind.BMA_SWAP

    def __init__(
        self,
        libor_fraction: QuoteLike,
        *,
        evaluation_date: date,
        tenor: Union[Period, str],
        settlement_days: int,
        calendar: Calendar,
        bma_period: Union[Period, str],
        bma_convention: BusinessDayConvention,
        bma_day_count: DayCount,
        bma_index: BMAIndex,
        ibor_index: IborIndex,
        ibor_forwarding_curve=None
    ):
        super().__init__(libor_fraction, evaluation_date)
        self._tenor = Period.coerce(tenor)
        self.settlement_days = settlement_days
        self.calendar = calendar
        self.bma_period = Period.coerce(bma_period)
        self.bma_convention = bma_convention
        self.bma_day_count = bma_day_count
        self.bma_index = bma_index
        self.ibor_index = ibor_index

        self._exogenous_forwarding = ibor_forwarding_curve is not None
        self._ibor_handle = CurveHandle(
            ibor_forwarding_curve, description="ibor forwarding term structure", owning=True
        )

        self._swap: Optional[BMASwap] = None
        self._initialize_dates()

    def _build_swap(self) -> BMASwap:
        reference = self.calendar.adjust(self._evaluation_date)
        start = self.calendar.advance(
            reference, self.settlement_days, BusinessDayConvention.FOLLOWING
        )
        return make_bma_swap(
            start,
            add_period(start, self._tenor),
            bma_period=self.bma_period,
            bma_convention=self.bma_convention,
            bma_day_count=self.bma_day_count,
            bma_index=self.bma_index,
            ibor_index=self.ibor_index,
        )

    def _initialize_dates(self) -> None:
        self._swap = self._build_swap()
        earliest = self._swap.start_date
        maturity = self._swap.maturity_date

        # Last BMA reset runs to the value date after the next Wednesday
        adjusted = self.calendar.adjust(maturity, BusinessDayConvention.FOLLOWING)
        wednesday = self.bma_index.calendar.adjust(next_weekday(adjusted, 2))
        latest = self.bma_index.value_date(wednesday)
        self._set_dates(earliest, maturity, latest, latest)

    def set_term_structure(self, curve) -> None:
        super().set_term_structure(curve)
        self._swap = None

    @property
    def swap(self) -> BMASwap:
        if self._swap is None:
            self._swap = self._build_swap()
        return self._swap

    @property
    def tenor(self) -> Period:
        return self._tenor

    @property
    def ibor_forwarding_curve(self):
        if not self._exogenous_forwarding:
            return None
        return self._ibor_handle.current_link()

    def implied_quote(self) -> float:
        bma_curve = self.term_structure
        forwarding = self.ibor_forwarding_curve or bma_curve
        return self.swap.fair_libor_fraction(bma_curve, forwarding, forwarding)

    def accept(self, visitor):
        return visitor.visit_bma_swap_helper(self)


__all__ = [
    "SwapHelper",
    "BMASwapHelper",
]
