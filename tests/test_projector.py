"""Tests for the retirement projector."""

import math

import pytest

from nestegg.retirement.projector import (
    WITHDRAWAL_RATE_PCT,
    project_retirement,
    project_snapshot,
)
from nestegg.utils.numeric import format_number


def project(**overrides):
    params = dict(
        total_value=100000.0,
        expected_contribution=10000.0,
        current_age=30,
        target_retirement_age=65,
        target_growth_rate=7.0,
        annual_expenses=40000.0,
    )
    params.update(overrides)
    return project_retirement(**params)


class TestProjection:
    """Tests for compound growth projection."""

    def test_thirty_five_years_at_seven_percent(self):
        """Contribution is added up front and the sum compounds yearly."""
        projection = project()

        assert projection.new_value == 110000.0
        assert projection.years_to_grow == 35
        assert projection.growth_multiplier == pytest.approx(1.07)
        assert projection.future_value == pytest.approx(110000 * 1.07 ** 35)
        assert projection.future_value == pytest.approx(1174425, rel=1e-4)

    def test_future_value_digits(self):
        """Growth is an integer power, so the printed digits are stable."""
        projection = project(total_value=1000.0, expected_contribution=0.0)
        assert format_number(projection.future_value) == "10676.581484615435"

    def test_four_percent_rule_target(self):
        """Target portfolio is annual expenses over the withdrawal rate."""
        projection = project()

        assert WITHDRAWAL_RATE_PCT == 4.0
        assert projection.withdrawal_rate == 4.0
        assert projection.target_portfolio_value == pytest.approx(1000000.0)

    def test_percent_of_target(self):
        """Progress is the grown value over the target, in percent."""
        projection = project()
        expected = (110000 * 1.07 ** 35) / (40000 / 0.04) * 100
        assert projection.percent_of_target == pytest.approx(expected)

    def test_zero_years(self):
        """Retiring now leaves the value ungrown."""
        projection = project(current_age=65)

        assert projection.years_to_grow == 0
        assert projection.future_value == pytest.approx(110000.0)

    def test_negative_years_shrink(self):
        """A retirement age in the past discounts the value."""
        projection = project(current_age=70)

        assert projection.years_to_grow == -5
        assert projection.future_value == pytest.approx(110000 * 1.07 ** -5)
        assert projection.future_value < projection.new_value

    def test_zero_growth(self):
        """No growth keeps the contributed value."""
        projection = project(target_growth_rate=0.0)
        assert projection.future_value == pytest.approx(110000.0)

    def test_custom_withdrawal_rate(self):
        """The withdrawal rate can be overridden."""
        projection = project(withdrawal_rate=5.0)
        assert projection.target_portfolio_value == pytest.approx(800000.0)

    def test_to_dict(self):
        """Projection serializes every field."""
        data = project().to_dict()

        assert data["years_to_grow"] == 35
        assert data["target_retirement_age"] == 65
        assert set(data) >= {"future_value", "target_portfolio_value", "percent_of_target"}


class TestDegenerateInputs:
    """Numeric edge cases are returned, not raised."""

    def test_zero_expenses_gives_infinite_percent(self):
        """No expenses means a zero target and an infinite percentage."""
        projection = project(annual_expenses=0.0)

        assert projection.target_portfolio_value == 0.0
        assert math.isinf(projection.percent_of_target)
        assert projection.percent_of_target > 0

    def test_zero_expenses_and_zero_value_is_nan(self):
        """Zero over zero is undefined."""
        projection = project(total_value=0.0, expected_contribution=0.0, annual_expenses=0.0)
        assert math.isnan(projection.percent_of_target)

    def test_overflowing_growth_is_infinite(self):
        """Growth beyond float range gives inf instead of OverflowError."""
        projection = project(target_growth_rate=1000.0, target_retirement_age=1030)

        assert math.isinf(projection.future_value)
        assert math.isinf(projection.percent_of_target)


class TestProjectSnapshot:
    """Tests for projecting a loaded snapshot."""

    def test_uses_snapshot_values(self, snapshot):
        """Current value comes from valuing the snapshot's holdings."""
        projection = project_snapshot(snapshot)

        assert projection.total_value == pytest.approx(1000.0)
        assert projection.new_value == pytest.approx(2000.0)
        assert projection.years_to_grow == 35
        assert projection.future_value == pytest.approx(2000 * 1.07 ** 35)

    def test_logs_projection_event(self, snapshot, caplog):
        """A structured projection event is logged."""
        with caplog.at_level("INFO", logger="nestegg"):
            project_snapshot(snapshot)

        events = [r for r in caplog.records if getattr(r, "event_type", None) == "projection"]
        assert len(events) == 1
        assert events[0].years_to_grow == 35
