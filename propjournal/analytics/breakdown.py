"""Trade ledger breakdowns for the dashboard, analytics and history views."""

import math
from collections import Counter, defaultdict
from enum import Enum
from typing import Iterable, Sequence

from propjournal.analytics.daily import aggregate_by_day
from propjournal.analytics.equity import sort_trades, track_equity
from propjournal.models import (
    EmotionMistakes,
    InstrumentPerformance,
    SessionProfit,
    Trade,
    TradeStats,
)
from propjournal.safemath import safe_divide, safe_percent


class TradeFilter(str, Enum):
    ALL = "All"
    WINS = "Wins"
    LOSSES = "Losses"
    RULE_BROKEN = "Rule Broken"


def summarize_trades(trades: Iterable[Trade], initial_balance: float) -> TradeStats:
    """Calculate headline performance figures for a trade ledger.

    Args:
        trades: Trade ledger in any order.
        initial_balance: Starting account balance.

    Returns:
        TradeStats. All figures are 0 for an empty ledger.
    """
    ordered = sort_trades(trades)
    equity = track_equity(ordered, initial_balance)
    days = aggregate_by_day(ordered)

    net_profit = math.fsum(t.result_amount for t in ordered)
    winners = [t for t in ordered if t.result_amount > 0]
    best_day_percent = (
        safe_percent(equity.best_day_pnl, net_profit) if equity.best_day_pnl > 0 else 0.0
    )

    return TradeStats(
        current_balance=equity.current_balance,
        net_profit=net_profit,
        total_trades=len(ordered),
        winning_trades=len(winners),
        win_rate=safe_percent(len(winners), len(ordered)),
        avg_rr=safe_divide(math.fsum(t.rr_achieved for t in winners), len(winners)),
        max_drawdown_amount=equity.max_drawdown_amount,
        max_drawdown_percent=equity.max_drawdown_percent,
        best_day_pnl=equity.best_day_pnl,
        best_day_date=equity.best_day_date,
        worst_day_pnl=equity.worst_day_pnl,
        best_day_percent_of_total=best_day_percent,
        equity_curve=equity.equity_curve,
        daily_pnl=days,
    )


def performance_by_instrument(trades: Iterable[Trade]) -> list[InstrumentPerformance]:
    """Total profit and trade count per instrument, most profitable first."""
    profit: dict = defaultdict(list)
    for trade in trades:
        profit[trade.instrument].append(trade.result_amount)

    rows = [
        InstrumentPerformance(instrument=instrument, profit=math.fsum(results), count=len(results))
        for instrument, results in profit.items()
    ]
    return sorted(rows, key=lambda r: r.profit, reverse=True)


def profit_by_session(trades: Iterable[Trade]) -> list[SessionProfit]:
    """Profit from winning trades per session, in order of first appearance."""
    profit: dict = defaultdict(list)
    for trade in trades:
        if trade.result_amount > 0:
            profit[trade.session].append(trade.result_amount)

    return [
        SessionProfit(session=session, profit=math.fsum(results))
        for session, results in profit.items()
    ]


def rule_breaks_by_emotion(trades: Iterable[Trade]) -> list[EmotionMistakes]:
    """Count rule-broken trades by the emotion felt before entry, most frequent first."""
    counts = Counter(t.emotion_before for t in trades if not t.rule_followed)
    return [
        EmotionMistakes(emotion=emotion, mistakes=mistakes)
        for emotion, mistakes in counts.most_common()
    ]


def duration_vs_result(trades: Iterable[Trade]) -> list[tuple[int, float]]:
    """(duration_minutes, result_amount) pairs for trades with a recorded duration."""
    return [(t.duration_minutes, t.result_amount) for t in trades if t.duration_minutes > 0]


def filter_trades(trades: Sequence[Trade], kind: TradeFilter = TradeFilter.ALL) -> list[Trade]:
    """Filter trades for the history view, newest first.

    Args:
        trades: Trade ledger.
        kind: Which trades to keep.

    Returns:
        Matching trades sorted by timestamp, descending.
    """
    if kind == TradeFilter.WINS:
        selected = [t for t in trades if t.result_amount > 0]
    elif kind == TradeFilter.LOSSES:
        selected = [t for t in trades if t.result_amount < 0]
    elif kind == TradeFilter.RULE_BROKEN:
        selected = [t for t in trades if not t.rule_followed]
    else:
        selected = list(trades)
    return sorted(selected, key=lambda t: t.date, reverse=True)
