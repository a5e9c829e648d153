"""Consistency rule evaluation.

The consistency rule caps the share of total profit that may come from a
single day. When the best day is too large, the only cure that keeps the
best day intact is more total profit; the shortfall is that amount.
"""

import math
from typing import Iterable, Sequence

from propjournal.analytics.daily import aggregate_by_day
from propjournal.models import AggregatedDay, ConsistencyReport, DayEntry
from propjournal.safemath import safe_divide, safe_percent


def evaluate_consistency(
    days: Sequence[AggregatedDay],
    rule_percent: float,
    profit_target: float,
) -> ConsistencyReport:
    """Evaluate aggregated days against a consistency rule and profit target.

    Args:
        days: Net P&L per calendar day (see :func:`aggregate_by_day`).
        rule_percent: Maximum best-day share of total profit, in percent.
        profit_target: Total profit needed to pass.

    Returns:
        ConsistencyReport. Equal best days resolve to the earliest date.
    """
    ordered = sorted(days, key=lambda d: d.date)
    total_net_profit = math.fsum(d.pnl for d in ordered)

    best_day_pnl = 0.0
    best_day_date = None
    for day in ordered:
        if day.pnl > best_day_pnl:
            best_day_pnl = day.pnl
            best_day_date = day.date

    consistency_percent = (
        safe_percent(best_day_pnl, total_net_profit) if best_day_pnl > 0 else 0.0
    )
    is_passing = total_net_profit > 0 and consistency_percent <= rule_percent
    is_target_reached = total_net_profit >= profit_target

    required_total = (
        safe_divide(best_day_pnl, rule_percent / 100) if best_day_pnl > 0 else 0.0
    )
    shortfall = max(0.0, required_total - total_net_profit) if required_total > 0 else 0.0

    return ConsistencyReport(
        total_net_profit=total_net_profit,
        best_day_pnl=best_day_pnl,
        best_day_date=best_day_date,
        consistency_percent=consistency_percent,
        is_passing_consistency=is_passing,
        is_target_reached=is_target_reached,
        is_evaluation_passed=is_target_reached and is_passing,
        required_total_profit=required_total,
        consistency_shortfall=shortfall,
        days=ordered,
    )


def check_consistency(
    entries: Iterable[DayEntry],
    rule_percent: float,
    profit_target: float,
) -> ConsistencyReport:
    """Aggregate a day-entry ledger and evaluate it for consistency."""
    return evaluate_consistency(aggregate_by_day(entries), rule_percent, profit_target)
