"""Analytics core: pure functions over ledger snapshots."""

from propjournal.analytics.daily import aggregate_by_day, calendar_day
from propjournal.analytics.equity import sort_trades, track_equity
from propjournal.analytics.consistency import check_consistency, evaluate_consistency
from propjournal.analytics.propfirm import evaluate
from propjournal.analytics.breakdown import (
    TradeFilter,
    duration_vs_result,
    filter_trades,
    performance_by_instrument,
    profit_by_session,
    rule_breaks_by_emotion,
    summarize_trades,
)

__all__ = [
    "aggregate_by_day",
    "calendar_day",
    "sort_trades",
    "track_equity",
    "evaluate_consistency",
    "check_consistency",
    "evaluate",
    "summarize_trades",
    "performance_by_instrument",
    "profit_by_session",
    "rule_breaks_by_emotion",
    "duration_vs_result",
    "filter_trades",
    "TradeFilter",
]
