"""
Unit tests for quotes and indexes.
"""

from datetime import date
import pytest

from ratehelpers.conventions import BusinessDayConvention, DayCount, Frequency
from ratehelpers.curves import create_flat_curve
from ratehelpers.dates import Calendar, Period
from ratehelpers.indexes import BMAIndex, IborIndex, SwapIndex
from ratehelpers.quotes import LiteralQuote, SimpleQuote, as_quote


@pytest.fixture
def flat_curve():
    return create_flat_curve(date(2024, 1, 15), rate=0.03)


class TestQuotes:
    """Tests for quote objects."""

    def test_simple_quote_lifecycle(self):
        quote = SimpleQuote()
        assert not quote.is_valid()
        with pytest.raises(ValueError):
            quote.value()

        assert quote.set_value(0.02) == 0.0
        assert abs(quote.set_value(0.025) - 0.005) < 1e-15
        assert quote.value() == 0.025

        quote.reset()
        assert not quote.is_valid()

    def test_as_quote(self):
        literal = as_quote(0.02)
        assert isinstance(literal, LiteralQuote)
        assert literal.value() == 0.02

        live = SimpleQuote(0.01)
        assert as_quote(live) is live
        assert as_quote(None) is None


class TestIborIndex:
    """Tests for ibor index dates and forecasting."""

    def test_usd_libor_preset(self):
        index = IborIndex.usd_libor("3M")
        assert index.name == "USDLibor3M"
        assert index.tenor == Period.parse("3M")
        assert index.fixing_days == 2
        assert index.end_of_month
        assert index.day_count == DayCount.ACT_360

    def test_string_tenor_is_parsed(self):
        index = IborIndex("Test6M", "6M")
        assert index.tenor == Period.parse("6M")
        assert index.convention == BusinessDayConvention.MODIFIED_FOLLOWING

    def test_negative_fixing_days(self):
        with pytest.raises(ValueError):
            IborIndex("Bad", "3M", fixing_days=-1)

    def test_fixing_value_maturity_dates(self):
        index = IborIndex.usd_libor("3M")
        assert index.fixing_date(date(2024, 1, 17)) == date(2024, 1, 15)
        assert index.value_date(date(2024, 1, 15)) == date(2024, 1, 17)
        assert index.maturity_date(date(2024, 1, 17)) == date(2024, 4, 17)

    def test_forecast_fixing(self, flat_curve):
        index = IborIndex.usd_libor("3M")
        expected = flat_curve.forward_rate(date(2024, 1, 17), date(2024, 4, 17), DayCount.ACT_360)
        assert abs(index.forecast_fixing(flat_curve, date(2024, 1, 15)) - expected) < 1e-15


class TestBMAIndex:
    """Tests for the BMA index."""

    def test_weekly_wednesday_resets(self):
        index = BMAIndex.usd()
        resets = index.reset_dates(date(2024, 1, 18), date(2024, 2, 1))
        assert resets == [
            date(2024, 1, 17),
            date(2024, 1, 24),
            date(2024, 1, 31),
            date(2024, 2, 7),
        ]

    def test_resets_from_start_without_weekday(self):
        index = BMAIndex(tenor="3M", calendar=Calendar.null(), reset_weekday=None)
        resets = index.reset_dates(date(2024, 1, 15), date(2024, 7, 15))
        assert resets == [date(2024, 1, 15), date(2024, 4, 15), date(2024, 7, 15)]

    def test_average_rate_on_flat_curve(self, flat_curve):
        index = BMAIndex.usd()
        weekly = index.forecast_rate(flat_curve, date(2024, 1, 17), date(2024, 1, 24))
        average = index.average_rate(flat_curve, date(2024, 1, 18), date(2024, 2, 1))
        assert abs(average - weekly) < 1e-14


class TestSwapIndex:
    """Tests for swap index presets."""

    def test_usd_swap(self):
        index = SwapIndex.usd_swap("5Y")
        assert index.tenor == Period.parse("5Y")
        assert index.settlement_days == 2
        assert index.fixed_frequency == Frequency.SEMI_ANNUAL
        assert index.fixed_day_count == DayCount.THIRTY_360
        assert index.ibor_index == IborIndex.usd_libor("3M")

    def test_euribor_swap(self):
        index = SwapIndex.euribor_swap("10Y")
        assert index.fixed_frequency == Frequency.ANNUAL
        assert index.ibor_index.tenor == Period.parse("6M")
        assert index.currency == "EUR"
