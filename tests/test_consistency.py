"""Tests for the consistency rule evaluator.

**Feature: prop-journal**
"""

import math
from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from propjournal.analytics import aggregate_by_day, check_consistency, evaluate_consistency
from propjournal.models import AggregatedDay, DayEntry


def _days(*pnls: float, start: date = date(2024, 1, 1)) -> list[AggregatedDay]:
    return [AggregatedDay(date=start + timedelta(days=i), pnl=pnl) for i, pnl in enumerate(pnls)]


aggregated_days = st.lists(
    st.builds(
        AggregatedDay,
        date=st.dates(min_value=date(2024, 1, 1), max_value=date(2024, 12, 31)),
        pnl=st.floats(min_value=-20000, max_value=20000, allow_nan=False).map(lambda x: round(x, 2)),
    ),
    max_size=40,
    unique_by=lambda d: d.date,
)


class TestConsistencyScenarios:
    def test_single_day_fails_consistency(self):
        report = check_consistency(
            [DayEntry(date=date(2024, 1, 1), pnl=1000)], rule_percent=40, profit_target=2500
        )
        assert report.total_net_profit == pytest.approx(1000)
        assert report.best_day_pnl == pytest.approx(1000)
        assert report.best_day_date == date(2024, 1, 1)
        assert report.consistency_percent == pytest.approx(100)
        assert report.is_passing_consistency is False
        assert report.is_target_reached is False
        assert report.is_evaluation_passed is False
        assert report.required_total_profit == pytest.approx(2500)
        assert report.consistency_shortfall == pytest.approx(1500)

    def test_five_even_days_pass(self):
        entries = [DayEntry(date=date(2024, 1, 1) + timedelta(days=i), pnl=500) for i in range(5)]
        report = check_consistency(entries, rule_percent=40, profit_target=2000)
        assert report.total_net_profit == pytest.approx(2500)
        assert report.best_day_pnl == pytest.approx(500)
        assert report.consistency_percent == pytest.approx(20)
        assert report.is_passing_consistency is True
        assert report.is_target_reached is True
        assert report.is_evaluation_passed is True
        assert report.consistency_shortfall == 0

    def test_target_reached_but_inconsistent(self):
        report = evaluate_consistency(_days(3000, 500, 500), rule_percent=40, profit_target=2500)
        assert report.is_target_reached is True
        assert report.is_passing_consistency is False
        assert report.is_evaluation_passed is False
        # 3000 / 0.4 = 7500 total needed, 4000 so far
        assert report.consistency_shortfall == pytest.approx(3500)

    def test_exactly_at_rule_limit_passes(self):
        report = evaluate_consistency(_days(250, 250, 250, 250), rule_percent=25, profit_target=0)
        assert report.consistency_percent == 25
        assert report.is_passing_consistency is True


class TestNonPositiveProfit:
    def test_net_loss_never_passes(self):
        report = evaluate_consistency(_days(1000, -1500), rule_percent=40, profit_target=0)
        assert report.total_net_profit == pytest.approx(-500)
        assert report.best_day_pnl == pytest.approx(1000)
        assert report.consistency_percent == 0
        assert report.is_passing_consistency is False
        assert report.consistency_shortfall == pytest.approx(3000)

    def test_all_losing_days(self):
        report = evaluate_consistency(_days(-100, -200), rule_percent=40, profit_target=1000)
        assert report.best_day_pnl == 0
        assert report.best_day_date is None
        assert report.consistency_percent == 0
        assert report.is_passing_consistency is False
        assert report.required_total_profit == 0
        assert report.consistency_shortfall == 0

    def test_empty_ledger(self):
        report = evaluate_consistency([], rule_percent=40, profit_target=2500)
        assert report.total_net_profit == 0
        assert report.best_day_pnl == 0
        assert report.best_day_date is None
        assert report.consistency_percent == 0
        assert report.is_passing_consistency is False
        assert report.is_target_reached is False
        assert report.consistency_shortfall == 0
        assert report.days == []

    def test_zero_target_with_empty_ledger_is_reached(self):
        report = evaluate_consistency([], rule_percent=40, profit_target=0)
        assert report.is_target_reached is True
        assert report.is_evaluation_passed is False


class TestZeroRule:
    def test_zero_rule_percent_never_passes_and_has_no_shortfall(self):
        report = evaluate_consistency(_days(100, 100), rule_percent=0, profit_target=0)
        assert report.consistency_percent == pytest.approx(50)
        assert report.is_passing_consistency is False
        assert report.required_total_profit == 0
        assert report.consistency_shortfall == 0


class TestBestDayTieBreak:
    """
    **Feature: prop-journal, Property 6: Best Day Ties Resolve To Earliest Date**

    Equal best days are resolved to the earliest calendar date no matter
    the order the days are supplied in.
    """

    def test_earliest_date_wins(self):
        days = [
            AggregatedDay(date=date(2024, 1, 3), pnl=500),
            AggregatedDay(date=date(2024, 1, 1), pnl=500),
            AggregatedDay(date=date(2024, 1, 2), pnl=100),
        ]
        report = evaluate_consistency(days, rule_percent=40, profit_target=0)
        assert report.best_day_date == date(2024, 1, 1)
        assert [d.date for d in report.days] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]

    @given(data=st.data(), days=aggregated_days)
    @settings(max_examples=100)
    def test_order_independent(self, data, days: list[AggregatedDay]):
        shuffled = data.draw(st.permutations(days))
        assert evaluate_consistency(shuffled, 40, 2500) == evaluate_consistency(days, 40, 2500)


class TestConsistencyProperties:
    """
    **Feature: prop-journal, Property 7: Consistency Report Invariants**
    """

    @given(days=aggregated_days, rule=st.floats(min_value=1, max_value=100, allow_nan=False))
    @settings(max_examples=100)
    def test_invariants(self, days: list[AggregatedDay], rule: float):
        report = evaluate_consistency(days, rule, 2500)

        assert report.total_net_profit == pytest.approx(math.fsum(d.pnl for d in days))
        assert report.best_day_pnl >= 0
        assert report.consistency_shortfall >= 0
        assert report.is_evaluation_passed == (
            report.is_target_reached and report.is_passing_consistency
        )
        if report.total_net_profit <= 0:
            assert report.is_passing_consistency is False
            assert report.consistency_percent == 0
        if report.is_passing_consistency:
            assert report.consistency_percent <= rule
        for value in (report.consistency_percent, report.consistency_shortfall):
            assert math.isfinite(value)

    @given(days=aggregated_days)
    @settings(max_examples=50)
    def test_shortfall_cures_violation(self, days: list[AggregatedDay]):
        """Adding the shortfall to total profit brings the best day to the limit."""
        report = evaluate_consistency(days, 40, 0)
        if report.best_day_pnl > 0 and report.consistency_shortfall > 0:
            cured_total = report.total_net_profit + report.consistency_shortfall
            assert report.best_day_pnl / cured_total * 100 == pytest.approx(40)

    @given(days=aggregated_days)
    @settings(max_examples=50)
    def test_idempotent(self, days: list[AggregatedDay]):
        assert evaluate_consistency(days, 40, 2500) == evaluate_consistency(days, 40, 2500)


class TestCheckConsistency:
    def test_aggregates_same_day_entries_first(self):
        entries = [
            DayEntry(date=date(2024, 1, 1), pnl=300),
            DayEntry(date=date(2024, 1, 1), pnl=300),
            DayEntry(date=date(2024, 1, 2), pnl=400),
        ]
        report = check_consistency(entries, 40, 0)
        assert report.best_day_pnl == pytest.approx(600)
        assert report.best_day_date == date(2024, 1, 1)
        assert report.days == aggregate_by_day(entries)
