"""Prop-firm evaluation verdicts.

Combines the daily aggregator, the equity tracker and the consistency
evaluator into a single verdict against :class:`EvaluationThresholds`.
The evaluation is stateless and recomputed from the full trade ledger on
every call.
"""

import logging
from typing import Iterable

from propjournal.analytics.consistency import evaluate_consistency
from propjournal.analytics.daily import aggregate_by_day
from propjournal.analytics.equity import sort_trades, track_equity
from propjournal.models import (
    Evaluation,
    EvaluationThresholds,
    RuleProgress,
    Trade,
    Verdict,
)
from propjournal.safemath import capped_progress

logger = logging.getLogger(__name__)


def _progress(current: float, limit: float) -> RuleProgress:
    return RuleProgress(current=current, limit=limit, percent=capped_progress(current, limit))


def evaluate(trades: Iterable[Trade], thresholds: EvaluationThresholds) -> Evaluation:
    """Evaluate a trade ledger against prop-firm thresholds.

    A broken drawdown, daily-loss or consistency rule yields ``Violated``
    even when the profit target has been met. ``Passed`` requires the
    target and no violation; anything else is ``InProgress``.

    A non-positive initial balance cannot be judged: all rule flags are
    False and the verdict is ``InProgress`` with ``misconfigured`` set.

    Args:
        trades: Trade ledger in any order.
        thresholds: Evaluation limits.

    Returns:
        Evaluation with the verdict, per-rule flags and supporting figures.
    """
    ordered = sort_trades(trades)
    equity = track_equity(ordered, thresholds.initial_balance)
    consistency = evaluate_consistency(
        aggregate_by_day(ordered),
        thresholds.consistency_rule_percent,
        thresholds.target_dollars,
    )

    net_profit = consistency.total_net_profit
    best_day_percent = consistency.consistency_percent
    target_dollars = thresholds.target_dollars
    max_daily_loss_dollars = thresholds.max_daily_loss_dollars
    max_drawdown_dollars = thresholds.max_drawdown_dollars

    if thresholds.is_misconfigured:
        logger.warning(
            "Initial balance %.2f is not positive; evaluation rules are not applied",
            thresholds.initial_balance,
        )
        target_met = drawdown_failed = daily_loss_failed = consistency_failed = False
    else:
        target_met = net_profit >= target_dollars
        drawdown_failed = equity.max_drawdown_amount > max_drawdown_dollars
        daily_loss_failed = abs(equity.worst_day_pnl) > max_daily_loss_dollars
        consistency_failed = best_day_percent > thresholds.consistency_rule_percent

    if drawdown_failed or daily_loss_failed or consistency_failed:
        verdict = Verdict.VIOLATED
    elif target_met:
        verdict = Verdict.PASSED
    else:
        verdict = Verdict.IN_PROGRESS

    logger.debug(
        "Evaluated %d trades: verdict=%s net=%.2f dd=%.2f worst_day=%.2f best_day_pct=%.2f",
        len(ordered),
        verdict.value,
        net_profit,
        equity.max_drawdown_amount,
        equity.worst_day_pnl,
        best_day_percent,
    )

    return Evaluation(
        verdict=verdict,
        target_met=target_met,
        drawdown_failed=drawdown_failed,
        daily_loss_failed=daily_loss_failed,
        consistency_failed=consistency_failed,
        misconfigured=thresholds.is_misconfigured,
        net_profit=net_profit,
        max_drawdown_amount=equity.max_drawdown_amount,
        max_drawdown_percent=equity.max_drawdown_percent,
        worst_day_pnl=equity.worst_day_pnl,
        best_day_pnl=equity.best_day_pnl,
        best_day_percent_of_total=best_day_percent,
        consistency_shortfall=consistency.consistency_shortfall,
        target_dollars=target_dollars,
        max_daily_loss_dollars=max_daily_loss_dollars,
        max_drawdown_dollars=max_drawdown_dollars,
        progress={
            "profit_target": _progress(max(net_profit, 0.0), target_dollars),
            "max_drawdown": _progress(equity.max_drawdown_amount, max_drawdown_dollars),
            "max_daily_loss": _progress(abs(equity.worst_day_pnl), max_daily_loss_dollars),
            "consistency": _progress(best_day_percent, thresholds.consistency_rule_percent),
        },
    )
