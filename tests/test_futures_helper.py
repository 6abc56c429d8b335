"""
Unit tests for the futures rate helper.
"""

from datetime import date
import pytest

from ratehelpers.conventions import DayCount
from ratehelpers.curves import create_flat_curve
from ratehelpers.errors import CurveNotSetError, DateOrderError, InconsistentInstrumentError
from ratehelpers.helpers import FuturesHelper, FuturesType
from ratehelpers.indexes import IborIndex
from ratehelpers.quotes import SimpleQuote


@pytest.fixture
def flat_curve():
    return create_flat_curve(date(2024, 1, 15), rate=0.03)


class TestFuturesDates:
    """Tests for futures period resolution."""

    def test_length_in_months(self):
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3)
        assert helper.earliest_date == date(2024, 3, 20)
        assert helper.maturity_date == date(2024, 6, 20)
        assert helper.pillar_date == date(2024, 6, 20)
        assert helper.day_count == DayCount.ACT_360
        assert abs(helper.year_fraction - 92 / 360) < 1e-15

    def test_construction_forms_agree(self):
        """Length, explicit end date and index describe the same ibor period."""
        by_length = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3)
        by_end_date = FuturesHelper(
            95.0, date(2024, 3, 20), ibor_end_date=date(2024, 6, 20), day_count=DayCount.ACT_360
        )
        by_index = FuturesHelper(95.0, date(2024, 3, 20), index=IborIndex.usd_libor("3M"))

        for helper in (by_end_date, by_index):
            assert helper.maturity_date == by_length.maturity_date
            assert helper.pillar_date == by_length.pillar_date
            assert helper.year_fraction == by_length.year_fraction

    def test_default_end_is_third_following_imm_date(self):
        helper = FuturesHelper(95.0, date(2024, 3, 20))
        assert helper.maturity_date == date(2024, 6, 19)

    def test_asx_futures(self):
        helper = FuturesHelper(95.0, date(2024, 3, 8), length_in_months=3, futures_type=FuturesType.ASX)
        # 8 June 2024 is a Saturday
        assert helper.maturity_date == date(2024, 6, 10)

    def test_custom_futures_with_end_date(self):
        helper = FuturesHelper(
            95.0, date(2024, 2, 1), ibor_end_date=date(2024, 5, 1), futures_type=FuturesType.CUSTOM
        )
        assert helper.maturity_date == date(2024, 5, 1)

    def test_invalid_imm_start(self):
        with pytest.raises(InconsistentInstrumentError):
            FuturesHelper(95.0, date(2024, 3, 21), length_in_months=3)

    def test_custom_futures_needs_an_end(self):
        with pytest.raises(InconsistentInstrumentError):
            FuturesHelper(95.0, date(2024, 2, 1), futures_type=FuturesType.CUSTOM)

    def test_end_before_start(self):
        with pytest.raises(DateOrderError):
            FuturesHelper(
                95.0, date(2024, 2, 1), ibor_end_date=date(2024, 1, 1), futures_type=FuturesType.CUSTOM
            )

    def test_index_conflicts_with_length(self):
        with pytest.raises(InconsistentInstrumentError):
            FuturesHelper(95.0, date(2024, 3, 20), length_in_months=6, index=IborIndex.usd_libor("3M"))

    def test_missing_quote(self):
        with pytest.raises(InconsistentInstrumentError):
            FuturesHelper(None, date(2024, 3, 20), length_in_months=3)


class TestFuturesImpliedQuote:
    """Tests for the implied futures price."""

    def test_flat_curve_price(self, flat_curve):
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3)
        helper.set_term_structure(flat_curve)

        forward = (flat_curve.discount(date(2024, 3, 20)) / flat_curve.discount(date(2024, 6, 20)) - 1.0) / (92 / 360)
        assert abs(helper.implied_quote() - 100.0 * (1.0 - forward)) < 1e-10

    def test_zero_adjustment_is_forward_price(self, flat_curve):
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3, convexity_adjustment=0.0)
        helper.set_term_structure(flat_curve)

        forward = flat_curve.forward_rate(date(2024, 3, 20), date(2024, 6, 20), DayCount.ACT_360)
        assert helper.implied_quote() == 100.0 * (1.0 - forward)

    def test_convexity_adjustment_lowers_price(self, flat_curve):
        adjustment = SimpleQuote(0.0)
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3, convexity_adjustment=adjustment)
        helper.set_term_structure(flat_curve)

        base = helper.implied_quote()
        adjustment.set_value(0.001)
        adjusted = helper.implied_quote()

        assert adjusted < base
        assert abs((base - adjusted) - 0.1) < 1e-10
        assert helper.convexity_adjustment() == 0.001

    def test_quote_error(self, flat_curve):
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3)
        helper.set_term_structure(flat_curve)
        assert abs(helper.quote_error() - (95.0 - helper.implied_quote())) < 1e-12

    def test_unlinked_curve(self):
        helper = FuturesHelper(95.0, date(2024, 3, 20), length_in_months=3)
        with pytest.raises(CurveNotSetError):
            helper.implied_quote()
        with pytest.raises(ValueError):
            helper.set_term_structure(None)
