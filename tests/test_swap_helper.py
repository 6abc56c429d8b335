"""
Unit tests for the swap rate helper.
"""

import gc
from datetime import date
import numpy as np
import pytest

from ratehelpers.conventions import BusinessDayConvention, DayCount, Frequency
from ratehelpers.curves import create_flat_curve
from ratehelpers.dates import Calendar, add_period
from ratehelpers.errors import CurveNotSetError, InconsistentInstrumentError, InvalidPillarError
from ratehelpers.helpers import Pillar, SwapHelper
from ratehelpers.indexes import IborIndex, SwapIndex


EVALUATION_DATE = date(2024, 1, 15)


@pytest.fixture
def null_ibor():
    """3M index on a calendar without holidays, so fixing periods match accrual periods."""
    return IborIndex("Test3M", "3M", fixing_days=2, calendar=Calendar.null())


@pytest.fixture
def annual_swap(null_ibor):
    return SwapHelper(
        0.025,
        evaluation_date=EVALUATION_DATE,
        tenor="5Y",
        calendar=Calendar.null(),
        fixed_frequency=Frequency.ANNUAL,
        fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
        fixed_day_count=DayCount.THIRTY_360,
        ibor_index=null_ibor,
    )


@pytest.fixture
def flat_curve():
    return create_flat_curve(EVALUATION_DATE, rate=0.03)


def annual_dates(start, years):
    return [add_period(start, f"{k}Y") for k in range(1, years + 1)]


class TestSwapDates:
    """Tests for swap helper dates."""

    def test_spot_swap_dates(self, annual_swap):
        assert annual_swap.earliest_date == date(2024, 1, 17)
        assert annual_swap.maturity_date == date(2029, 1, 17)
        assert annual_swap.latest_relevant_date == date(2029, 1, 17)
        assert annual_swap.pillar_date == date(2029, 1, 17)

    def test_forward_start(self, null_ibor):
        helper = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            tenor="5Y",
            calendar=Calendar.null(),
            fixed_frequency=Frequency.ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=null_ibor,
            forward_start="1Y",
        )
        assert helper.earliest_date == date(2025, 1, 17)
        assert helper.pillar_date == date(2030, 1, 17)

    def test_latest_relevant_covers_last_fixing(self):
        helper = SwapHelper(0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"))
        assert helper.latest_relevant_date >= helper.maturity_date
        assert helper.latest_relevant_date == max(helper.maturity_date, helper.swap.last_fixing_end_date)

    def test_maturity_pillar(self):
        helper = SwapHelper(
            0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"),
            pillar=Pillar.MATURITY_DATE
        )
        assert helper.pillar_date == helper.maturity_date

    def test_invalid_custom_pillar(self):
        with pytest.raises(InvalidPillarError):
            SwapHelper(
                0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"),
                pillar=Pillar.CUSTOM_DATE, custom_pillar_date=date(2024, 1, 16)
            )

    def test_reset_dates_rebuilds_swap(self, annual_swap):
        old_swap = annual_swap.swap
        annual_swap.reset_dates(date(2024, 1, 19))

        assert annual_swap.earliest_date == date(2024, 1, 21)
        assert annual_swap.pillar_date == date(2029, 1, 21)
        assert annual_swap.swap is not old_swap
        assert annual_swap.swap.start_date == date(2024, 1, 21)

    def test_swap_is_memoized_until_relinked(self, annual_swap, flat_curve):
        swap = annual_swap.swap
        assert annual_swap.swap is swap

        annual_swap.set_term_structure(flat_curve)
        rebuilt = annual_swap.swap
        assert rebuilt is not swap
        assert annual_swap.swap is rebuilt
        assert rebuilt.start_date == swap.start_date


class TestSwapConstruction:
    """Tests for swap index vs explicit construction."""

    def test_swap_index_matches_explicit_fields(self, flat_curve):
        indexed = SwapHelper(0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"))
        explicit = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            tenor="5Y",
            calendar=Calendar.weekends_only(),
            fixed_frequency=Frequency.SEMI_ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=IborIndex.usd_libor("3M"),
            settlement_days=2,
        )
        indexed.set_term_structure(flat_curve)
        explicit.set_term_structure(flat_curve)

        assert indexed.pillar_date == explicit.pillar_date
        assert indexed.implied_quote() == explicit.implied_quote()

    def test_swap_index_conflict(self):
        with pytest.raises(InconsistentInstrumentError):
            SwapHelper(
                0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"),
                fixed_frequency=Frequency.ANNUAL
            )
        with pytest.raises(InconsistentInstrumentError):
            SwapHelper(0.025, evaluation_date=EVALUATION_DATE, swap_index=SwapIndex.usd_swap("5Y"), tenor="10Y")

    def test_missing_fields(self):
        with pytest.raises(InconsistentInstrumentError, match="fixed_frequency"):
            SwapHelper(0.025, evaluation_date=EVALUATION_DATE, tenor="5Y")


class TestSwapImpliedQuote:
    """Tests for the implied swap rate."""

    def test_flat_curve_par_rate(self, annual_swap, flat_curve):
        annual_swap.set_term_structure(flat_curve)

        start = date(2024, 1, 17)
        payments = annual_dates(start, 5)
        annuity = sum(flat_curve.discount(d) for d in payments)
        expected = (flat_curve.discount(start) - flat_curve.discount(payments[-1])) / annuity

        assert abs(annual_swap.implied_quote() - expected) < 1e-13

    def test_spread_is_subtracted(self, null_ibor, annual_swap, flat_curve):
        with_spread = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            tenor="5Y",
            calendar=Calendar.null(),
            fixed_frequency=Frequency.ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=null_ibor,
            spread=0.001,
        )
        annual_swap.set_term_structure(flat_curve)
        with_spread.set_term_structure(flat_curve)

        assert with_spread.spread() == 0.001
        assert abs(annual_swap.implied_quote() - with_spread.implied_quote() - 0.001) < 1e-15

    def test_exogenous_discounting(self, null_ibor, flat_curve):
        discounting = create_flat_curve(EVALUATION_DATE, rate=0.01)
        helper = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            tenor="5Y",
            calendar=Calendar.null(),
            fixed_frequency=Frequency.ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=null_ibor,
            discounting_curve=discounting,
        )
        helper.set_term_structure(flat_curve)
        assert helper.discounting_curve is discounting

        # Each quarterly projection pays exp(0.03 * days / 365) - 1 on the 1% curve
        start = date(2024, 1, 17)
        quarters = [add_period(start, f"{3 * k}M") for k in range(21)]
        floating = sum(
            (np.exp(0.03 * (end - begin).days / 365) - 1.0) * discounting.discount(end)
            for begin, end in zip(quarters[:-1], quarters[1:])
        )
        annuity = sum(discounting.discount(d) for d in annual_dates(start, 5))

        assert abs(helper.implied_quote() - floating / annuity) < 1e-13

    def test_helper_keeps_discounting_curve_alive(self, null_ibor, flat_curve):
        discounting = create_flat_curve(EVALUATION_DATE, rate=0.01)
        helper = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            tenor="5Y",
            calendar=Calendar.null(),
            fixed_frequency=Frequency.ANNUAL,
            fixed_convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            fixed_day_count=DayCount.THIRTY_360,
            ibor_index=null_ibor,
            discounting_curve=discounting,
        )
        helper.set_term_structure(flat_curve)
        expected = helper.implied_quote()
        del discounting
        gc.collect()

        assert helper.discounting_curve is not None
        assert helper.implied_quote() == expected

    def test_inline_discounting_curve(self, flat_curve):
        helper = SwapHelper(
            0.025,
            evaluation_date=EVALUATION_DATE,
            swap_index=SwapIndex.usd_swap("5Y"),
            discounting_curve=create_flat_curve(EVALUATION_DATE, rate=0.01),
        )
        helper.set_term_structure(flat_curve)
        gc.collect()
        assert helper.implied_quote() > 0.0

    def test_unlinked(self, annual_swap):
        with pytest.raises(CurveNotSetError):
            annual_swap.implied_quote()
