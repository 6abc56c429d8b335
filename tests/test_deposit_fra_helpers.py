"""
Unit tests for deposit and FRA rate helpers.
"""

from datetime import date
import numpy as np
import pytest

from ratehelpers.conventions import BusinessDayConvention, DayCount
from ratehelpers.curves import create_flat_curve
from ratehelpers.dates import Calendar
from ratehelpers.errors import InconsistentInstrumentError, InvalidPillarError
from ratehelpers.helpers import DepositHelper, FraHelper, Pillar, resolve_pillar
from ratehelpers.indexes import IborIndex


EVALUATION_DATE = date(2024, 1, 15)


@pytest.fixture
def flat_curve():
    return create_flat_curve(EVALUATION_DATE, rate=0.03)


def flat_simple_forward(rate: float, days: int) -> float:
    """Simple ACT/360 forward over a period of days on a flat ACT/365F curve."""
    return (np.exp(rate * days / 365) - 1.0) / (days / 360)


class TestResolvePillar:
    """Tests for the pillar resolver."""

    def test_policies(self):
        earliest, maturity, latest = date(2024, 1, 17), date(2024, 4, 17), date(2024, 4, 19)
        assert resolve_pillar(Pillar.MATURITY_DATE, earliest, maturity, latest) == maturity
        assert resolve_pillar(Pillar.LAST_RELEVANT_DATE, earliest, maturity, latest) == latest
        assert resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, latest, date(2024, 3, 1)) == date(2024, 3, 1)

    def test_custom_bounds_are_inclusive(self):
        earliest, maturity = date(2024, 1, 17), date(2024, 4, 17)
        assert resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, maturity, earliest) == earliest
        assert resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, maturity, maturity) == maturity

    def test_invalid_custom_dates(self):
        earliest, maturity = date(2024, 1, 17), date(2024, 4, 17)
        with pytest.raises(InvalidPillarError):
            resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, maturity)
        with pytest.raises(InvalidPillarError):
            resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, maturity, date(2024, 1, 16))
        with pytest.raises(InvalidPillarError):
            resolve_pillar(Pillar.CUSTOM_DATE, earliest, maturity, maturity, date(2024, 4, 18))


class TestDepositHelper:
    """Tests for DepositHelper."""

    def test_dates(self):
        helper = DepositHelper(0.02, evaluation_date=EVALUATION_DATE, tenor="3M")
        assert helper.earliest_date == date(2024, 1, 17)
        assert helper.fixing_date == date(2024, 1, 15)
        assert helper.maturity_date == date(2024, 4, 17)
        assert helper.pillar_date == date(2024, 4, 17)
        assert helper.latest_date == helper.pillar_date

    def test_weekend_evaluation_date(self):
        helper = DepositHelper(0.02, evaluation_date=date(2024, 1, 13), tenor="3M")
        assert helper.earliest_date == date(2024, 1, 17)

    def test_flat_curve_rate(self, flat_curve):
        helper = DepositHelper(0.02, evaluation_date=EVALUATION_DATE, tenor="3M", day_count=DayCount.ACT_360)
        helper.set_term_structure(flat_curve)
        assert abs(helper.implied_quote() - flat_simple_forward(0.03, 91)) < 1e-12

    def test_explicit_fields_match_index(self, flat_curve):
        explicit = DepositHelper(
            0.02,
            evaluation_date=EVALUATION_DATE,
            tenor="3M",
            fixing_days=2,
            calendar=Calendar.weekends_only(),
            convention=BusinessDayConvention.MODIFIED_FOLLOWING,
            end_of_month=True,
            day_count=DayCount.ACT_360,
        )
        indexed = DepositHelper(0.02, evaluation_date=EVALUATION_DATE, index=IborIndex.usd_libor("3M"))
        explicit.set_term_structure(flat_curve)
        indexed.set_term_structure(flat_curve)

        assert explicit.pillar_date == indexed.pillar_date
        assert explicit.fixing_date == indexed.fixing_date
        assert explicit.implied_quote() == indexed.implied_quote()

    def test_index_conflicts(self):
        with pytest.raises(InconsistentInstrumentError):
            DepositHelper(0.02, evaluation_date=EVALUATION_DATE, tenor="6M", index=IborIndex.usd_libor("3M"))
        with pytest.raises(InconsistentInstrumentError):
            DepositHelper(
                0.02, evaluation_date=EVALUATION_DATE, day_count=DayCount.ACT_365,
                index=IborIndex.usd_libor("3M")
            )

    def test_tenor_or_index_required(self):
        with pytest.raises(InconsistentInstrumentError):
            DepositHelper(0.02, evaluation_date=EVALUATION_DATE)

    def test_reset_dates(self):
        helper = DepositHelper(0.02, evaluation_date=EVALUATION_DATE, tenor="3M")
        helper.reset_dates(date(2024, 1, 19))

        assert helper.evaluation_date == date(2024, 1, 19)
        assert helper.fixing_date == date(2024, 1, 19)
        assert helper.earliest_date == date(2024, 1, 23)
        assert helper.pillar_date == date(2024, 4, 23)

    def test_linking_curve_on_new_date_resets(self):
        helper = DepositHelper(0.02, evaluation_date=EVALUATION_DATE, tenor="3M")
        curve = create_flat_curve(date(2024, 1, 19), rate=0.03)
        helper.set_term_structure(curve)

        assert helper.evaluation_date == date(2024, 1, 19)
        assert helper.pillar_date == date(2024, 4, 23)
        assert abs(helper.implied_quote() - flat_simple_forward(0.03, 91)) < 1e-12


class TestFraHelper:
    """Tests for FraHelper."""

    def test_dates(self):
        helper = FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6)
        assert helper.earliest_date == date(2024, 4, 17)
        assert helper.fixing_date == date(2024, 4, 15)
        assert helper.maturity_date == date(2024, 7, 17)
        assert helper.pillar_date == date(2024, 7, 17)

    def test_flat_curve_rate(self, flat_curve):
        helper = FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6)
        helper.set_term_structure(flat_curve)
        assert abs(helper.implied_quote() - flat_simple_forward(0.03, 91)) < 1e-12

    def test_equivalent_constructors(self, flat_curve):
        helpers = [
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6),
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, period_to_start="3M", length_in_months=3),
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, index=IborIndex.usd_libor("3M")),
        ]
        for helper in helpers:
            helper.set_term_structure(flat_curve)

        first = helpers[0]
        for helper in helpers[1:]:
            assert helper.pillar_date == first.pillar_date
            assert helper.fixing_date == first.fixing_date
            assert helper.implied_quote() == first.implied_quote()

    def test_inconsistent_inputs(self):
        with pytest.raises(InconsistentInstrumentError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=6, months_to_end=3)
        with pytest.raises(InconsistentInstrumentError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, period_to_start="6M",
                      length_in_months=3)
        with pytest.raises(InconsistentInstrumentError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, length_in_months=3)
        with pytest.raises(InconsistentInstrumentError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6,
                      index=IborIndex.usd_libor("6M"))

    def test_pillar_choices(self):
        maturity = FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6,
                             pillar=Pillar.MATURITY_DATE)
        custom = FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6,
                           pillar=Pillar.CUSTOM_DATE, custom_pillar_date=date(2024, 6, 3))
        assert maturity.pillar_date == date(2024, 7, 17)
        assert custom.pillar_date == date(2024, 6, 3)
        assert custom.latest_date == date(2024, 6, 3)
        assert custom.maturity_date == date(2024, 7, 17)

    def test_invalid_custom_pillar(self):
        with pytest.raises(InvalidPillarError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6,
                      pillar=Pillar.CUSTOM_DATE, custom_pillar_date=date(2024, 7, 18))
        with pytest.raises(InvalidPillarError):
            FraHelper(0.021, evaluation_date=EVALUATION_DATE, months_to_start=3, months_to_end=6,
                      pillar=Pillar.CUSTOM_DATE)
