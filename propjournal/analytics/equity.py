"""Equity curve and drawdown tracking over a trade ledger."""

from typing import Iterable, Sequence

from propjournal.analytics.daily import aggregate_by_day, calendar_day
from propjournal.models import EquityPoint, EquityReport, Trade
from propjournal.safemath import safe_percent


def sort_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Return trades in ascending timestamp order.

    The sort is stable, so trades sharing a timestamp keep their ledger order.
    """
    return sorted(trades, key=lambda t: t.date)


def track_equity(trades: Sequence[Trade], initial_balance: float) -> EquityReport:
    """Walk trades and track balance, peak balance and maximum drawdown.

    Trades are processed in the order given; callers must sort them with
    :func:`sort_trades` first. Unsorted input gives wrong drawdown figures
    but never raises.

    Args:
        trades: Trades in ascending timestamp order.
        initial_balance: Starting account balance.

    Returns:
        EquityReport with one equity point per trade, the drawdown figures
        and the best/worst calendar day.
    """
    balance = initial_balance
    peak_balance = initial_balance
    max_drawdown = 0.0
    curve = []

    for trade in trades:
        balance += trade.result_amount
        if balance > peak_balance:
            peak_balance = balance
        drawdown = peak_balance - balance
        if drawdown > max_drawdown:
            max_drawdown = drawdown
        curve.append(
            EquityPoint(date=calendar_day(trade.date), trade_id=trade.id, balance=balance)
        )

    best_day_pnl = 0.0
    best_day_date = None
    worst_day_pnl = 0.0
    # Days come back ascending, so strict comparison keeps the earliest on ties.
    for day in aggregate_by_day(trades):
        if day.pnl > best_day_pnl:
            best_day_pnl = day.pnl
            best_day_date = day.date
        if day.pnl < worst_day_pnl:
            worst_day_pnl = day.pnl

    return EquityReport(
        equity_curve=curve,
        max_drawdown_amount=max_drawdown,
        max_drawdown_percent=safe_percent(max_drawdown, initial_balance),
        current_balance=balance,
        peak_balance=peak_balance,
        best_day_pnl=best_day_pnl,
        best_day_date=best_day_date,
        worst_day_pnl=worst_day_pnl,
    )
