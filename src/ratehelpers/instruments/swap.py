"""
Calibration swaps.

Swaps here are date structures only: legs of coupons with accrual and
fixing dates. Every valuation method takes the curves it needs as
arguments, so the same swap can be priced on any curve the bootstrap
driver is currently moving.

Pricing formulas (per unit notional, payment at accrual end):
    fixed BPS      = sum(tau_i * DF(T_i))
    floating NPV   = sum(L_i * tau_i * DF(T_i)),  L_i forecast off the forwarding curve
    fair rate      = floating NPV / fixed BPS
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Union

from ..conventions import BusinessDayConvention, Compounding, DayCount, Frequency, year_fraction
from ..dates import Calendar, Period, add_period, generate_schedule
from ..indexes import BMAIndex, IborIndex

logger = logging.getLogger(__name__)


@dataclass
class FixedCoupon:
    """A fixed leg coupon."""
    accrual_start: date
    accrual_end: date
    payment_date: date
    accrual_period: float


@dataclass
class IborCoupon:
    """A floating coupon on an ibor index."""
    accrual_start: date
    accrual_end: date
    payment_date: date
    accrual_period: float
    fixing_date: date
    value_date: date
    fixing_end_date: date

    def forecast_rate(self, index: IborIndex, forwarding_curve) -> float:
        return forwarding_curve.forward_rate(
            self.value_date, self.fixing_end_date, index.day_count, Compounding.SIMPLE
        )


@dataclass
class BMACoupon:
    """A floating coupon paying the average BMA rate over its accrual period."""
    accrual_start: date
    accrual_end: date
    payment_date: date
    accrual_period: float


def fixed_leg(schedule: List[date], day_count: DayCount) -> List[FixedCoupon]:
    return [
        FixedCoupon(start, end, end, year_fraction(start, end, day_count))
        for start, end in zip(schedule[:-1], schedule[1:])
    ]


def ibor_leg(schedule: List[date], index: IborIndex, day_count: Optional[DayCount] = None) -> List[IborCoupon]:
    day_count = day_count or index.day_count
    coupons = []
    for start, end in zip(schedule[:-1], schedule[1:]):
        fixing = index.fixing_date(start)
        value = index.value_date(fixing)
        coupons.append(IborCoupon(
            accrual_start=start,
            accrual_end=end,
            payment_date=end,
            accrual_period=year_fraction(start, end, day_count),
            fixing_date=fixing,
            value_date=value,
            fixing_end_date=index.maturity_date(value),
        ))
    return coupons


def bma_leg(schedule: List[date], day_count: DayCount) -> List[BMACoupon]:
    return [
        BMACoupon(start, end, end, year_fraction(start, end, day_count))
        for start, end in zip(schedule[:-1], schedule[1:])
    ]


def _annuity(coupons, discount_curve) -> float:
    return sum(c.accrual_period * discount_curve.discount(c.payment_date) for c in coupons)


class VanillaSwap:
    """
    Fixed vs ibor swap, payer of the fixed leg.

    Attributes:
        fixed_leg: Fixed coupons
        floating_leg: Ibor coupons
        ibor_index: Floating leg index
        fixed_rate: Fixed coupon rate
        spread: Spread over the ibor fixing
    """

    def __init__(
        self,
        fixed_leg: List[FixedCoupon],
        floating_leg: List[IborCoupon],
        ibor_index: IborIndex,
        fixed_rate: float = 0.0,
        spread: float = 0.0
    ):
        if not fixed_leg or not floating_leg:
            raise ValueError("Both swap legs need at least one coupon")
        self.fixed_leg = fixed_leg
        self.floating_leg = floating_leg
        self.ibor_index = ibor_index
        self.fixed_rate = fixed_rate
        self.spread = spread

    @property
    def start_date(self) -> date:
        return min(self.fixed_leg[0].accrual_start, self.floating_leg[0].accrual_start)

    @property
    def maturity_date(self) -> date:
        return max(self.fixed_leg[-1].accrual_end, self.floating_leg[-1].accrual_end)

    @property
    def last_fixing_end_date(self) -> date:
        return self.floating_leg[-1].fixing_end_date

    def fixed_leg_bps(self, discount_curve) -> float:
        """Fixed leg value of a unit rate."""
        return _annuity(self.fixed_leg, discount_curve)

    def floating_leg_bps(self, discount_curve) -> float:
        """Floating leg value of a unit spread."""
        return _annuity(self.floating_leg, discount_curve)

    def floating_leg_npv(self, forwarding_curve, discount_curve) -> float:
        """Floating leg value without spread."""
        return sum(
            c.forecast_rate(self.ibor_index, forwarding_curve)
            * c.accrual_period
            * discount_curve.discount(c.payment_date)
            for c in self.floating_leg
        )

    def fair_rate(self, forwarding_curve, discount_curve=None) -> float:
        """Fixed rate making the swap (without spread) worth zero."""
        discount_curve = discount_curve or forwarding_curve
        return self.floating_leg_npv(forwarding_curve, discount_curve) / self.fixed_leg_bps(discount_curve)

    def npv(self, forwarding_curve, discount_curve=None) -> float:
        """Value to the fixed rate payer."""
        discount_curve = discount_curve or forwarding_curve
        floating = (
            self.floating_leg_npv(forwarding_curve, discount_curve)
            + self.spread * self.floating_leg_bps(discount_curve)
        )
        return floating - self.fixed_rate * self.fixed_leg_bps(discount_curve)

    def __repr__(self) -> str:
        return (f"VanillaSwap(start={self.start_date}, maturity={self.maturity_date}, "
                f"fixed={len(self.fixed_leg)}, floating={len(self.floating_leg)})")


def make_vanilla_swap(
    evaluation_date: date,
    tenor: Union[Period, str],
    ibor_index: IborIndex,
    *,
    fixed_frequency: Frequency,
    fixed_convention: BusinessDayConvention,
    fixed_day_count: DayCount,
    calendar: Optional[Calendar] = None,
    forward_start: Union[Period, str] = Period.parse("0D"),
    settlement_days: Optional[int] = None,
    fixed_rate: float = 0.0
) -> VanillaSwap:
    """
    Build a spot or forward starting swap.

    start = spot (adjusted evaluation date + settlement days) + forward_start,
    adjusted Following (Preceding for a negative forward start); both legs run
    backward from the unadjusted start + tenor.
    """
    tenor = Period.coerce(tenor)
    forward_start = Period.coerce(forward_start)
    calendar = calendar or ibor_index.calendar
    if settlement_days is None:
        settlement_days = ibor_index.fixing_days

    reference = calendar.adjust(evaluation_date)
    spot = calendar.advance(reference, settlement_days)
    start_convention = (
        BusinessDayConvention.PRECEDING if forward_start.length < 0
        else BusinessDayConvention.FOLLOWING
    )
    start = calendar.adjust(add_period(spot, forward_start), start_convention)
    end = add_period(start, tenor)

    fixed_schedule = generate_schedule(
        start, end, Period.from_frequency(fixed_frequency), calendar,
        fixed_convention, fixed_convention, end_of_month=False, backward=True
    )
    floating_schedule = generate_schedule(
        start, end, ibor_index.tenor, calendar,
        ibor_index.convention, ibor_index.convention, end_of_month=False, backward=True
    )

    swap = VanillaSwap(
        fixed_leg(fixed_schedule, fixed_day_count),
        ibor_leg(floating_schedule, ibor_index),
        ibor_index,
        fixed_rate=fixed_rate,
    )
    logger.debug("Built %s %s swap: %r", tenor, ibor_index.name, swap)
    return swap


class BMASwap:
    """
    BMA leg vs a fraction of an ibor leg.

    Attributes:
        libor_leg: Ibor coupons
        ibor_index: Ibor leg index
        bma_leg: BMA coupons
        bma_index: BMA index
        libor_fraction: Gearing of the ibor leg
    """

    def __init__(
        self,
        libor_leg: List[IborCoupon],
        ibor_index: IborIndex,
        bma_leg: List[BMACoupon],
        bma_index: BMAIndex,
        libor_fraction: float = 1.0
    ):
        if not libor_leg or not bma_leg:
            raise ValueError("Both swap legs need at least one coupon")
        self.libor_leg = libor_leg
        self.ibor_index = ibor_index
        self.bma_leg = bma_leg
        self.bma_index = bma_index
        self.libor_fraction = libor_fraction

    @property
    def start_date(self) -> date:
        return min(self.libor_leg[0].accrual_start, self.bma_leg[0].accrual_start)

    @property
    def maturity_date(self) -> date:
        return max(self.libor_leg[-1].accrual_end, self.bma_leg[-1].accrual_end)

    def libor_leg_npv(self, forwarding_curve, discount_curve) -> float:
        """Ibor leg value including the libor fraction."""
        return self.libor_fraction * sum(
            c.forecast_rate(self.ibor_index, forwarding_curve)
            * c.accrual_period
            * discount_curve.discount(c.payment_date)
            for c in self.libor_leg
        )

    def bma_leg_npv(self, bma_curve, discount_curve) -> float:
        return sum(
            self.bma_index.average_rate(bma_curve, c.accrual_start, c.accrual_end)
            * c.accrual_period
            * discount_curve.discount(c.payment_date)
            for c in self.bma_leg
        )

    def fair_libor_fraction(self, bma_curve, forwarding_curve, discount_curve=None) -> float:
        """Ibor gearing making both legs equal in value."""
        discount_curve = discount_curve or forwarding_curve
        unit_libor = self.libor_leg_npv(forwarding_curve, discount_curve) / self.libor_fraction
        return self.bma_leg_npv(bma_curve, discount_curve) / unit_libor

    def __repr__(self) -> str:
        return (f"BMASwap(start={self.start_date}, maturity={self.maturity_date}, "
                f"libor={len(self.libor_leg)}, bma={len(self.bma_leg)})")


def make_bma_swap(
    start: date,
    maturity: date,
    *,
    bma_period: Union[Period, str],
    bma_convention: BusinessDayConvention,
    bma_day_count: DayCount,
    bma_index: BMAIndex,
    ibor_index: IborIndex,
    libor_fraction: float = 1.0
) -> BMASwap:
    """Build a BMA swap with both legs generated backward from maturity."""
    bma_schedule = generate_schedule(
        start, maturity, Period.coerce(bma_period), bma_index.calendar,
        bma_convention, bma_convention, backward=True
    )
    libor_schedule = generate_schedule(
        start, maturity, ibor_index.tenor, ibor_index.calendar,
        ibor_index.convention, ibor_index.convention,
        end_of_month=ibor_index.end_of_month, backward=True
    )
    swap = BMASwap(
        ibor_leg(libor_schedule, ibor_index),
        ibor_index,
        bma_leg(bma_schedule, bma_day_count),
        bma_index,
        libor_fraction=libor_fraction,
    )
    logger.debug("Built BMA swap: %r", swap)
    return swap


__all__ = [
    "FixedCoupon",
    "IborCoupon",
    "BMACoupon",
    "VanillaSwap",
    "BMASwap",
    "make_vanilla_swap",
    "make_bma_swap",
    "fixed_leg",
    "ibor_leg",
    "bma_leg",
]
