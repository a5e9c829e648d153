"""Derived analytics records.

These are recomputed from the ledger on every call and never persisted.
"""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from propjournal.models.trade import Emotion, Instrument, Session


class AggregatedDay(BaseModel):
    """Net P&L of one calendar day."""

    date: date_type = Field(..., description="Calendar day")
    pnl: float = Field(..., description="Sum of same-day P&L")

    model_config = {"frozen": True}


class EquityPoint(BaseModel):
    """Account balance right after a trade."""

    date: date_type = Field(..., description="Calendar day of the trade")
    trade_id: str = Field(..., description="Trade that produced this balance")
    balance: float = Field(..., description="Post-trade balance")

    model_config = {"frozen": True}


class EquityReport(BaseModel):
    """Output of the equity/drawdown tracker."""

    equity_curve: list[EquityPoint] = Field(default_factory=list, description="One point per trade")
    max_drawdown_amount: float = Field(default=0.0, ge=0, description="Largest peak-to-trough drop")
    max_drawdown_percent: float = Field(default=0.0, description="Drawdown as % of initial balance")
    current_balance: float = Field(..., description="Balance after the last trade")
    peak_balance: float = Field(..., description="Highest balance seen")
    best_day_pnl: float = Field(default=0.0, ge=0, description="Best calendar day, 0 if none positive")
    best_day_date: Optional[date_type] = Field(default=None, description="Date of the best day")
    worst_day_pnl: float = Field(default=0.0, le=0, description="Worst calendar day, 0 if none negative")

    model_config = {"frozen": True}


class ConsistencyReport(BaseModel):
    """Output of the consistency evaluator."""

    total_net_profit: float = Field(..., description="Sum of all daily P&L")
    best_day_pnl: float = Field(..., ge=0, description="Best day P&L, floored at 0")
    best_day_date: Optional[date_type] = Field(default=None, description="Date of the best day")
    consistency_percent: float = Field(..., description="Best day as % of total profit")
    is_passing_consistency: bool = Field(..., description="Best-day share within the rule")
    is_target_reached: bool = Field(..., description="Total profit reached the target")
    is_evaluation_passed: bool = Field(..., description="Target reached and rule satisfied")
    required_total_profit: float = Field(..., ge=0, description="Total profit at which the best day is compliant")
    consistency_shortfall: float = Field(..., ge=0, description="Additional profit needed to comply")
    days: list[AggregatedDay] = Field(default_factory=list, description="Aggregated days, ascending")

    model_config = {"frozen": True}


class Verdict(str, Enum):
    IN_PROGRESS = "InProgress"
    PASSED = "Passed"
    VIOLATED = "Violated"


class RuleProgress(BaseModel):
    """How far a figure has moved towards its limit."""

    current: float = Field(..., description="Current value")
    limit: float = Field(..., description="Rule limit")
    percent: float = Field(..., ge=0, le=100, description="Progress, capped at 100")

    model_config = {"frozen": True}


class Evaluation(BaseModel):
    """Prop-firm evaluation verdict with the figures behind it."""

    verdict: Verdict = Field(..., description="Overall status")
    target_met: bool = Field(..., description="Net profit reached the target")
    drawdown_failed: bool = Field(..., description="Max drawdown exceeded")
    daily_loss_failed: bool = Field(..., description="A day lost more than allowed")
    consistency_failed: bool = Field(..., description="Best day share exceeded the rule")
    misconfigured: bool = Field(default=False, description="Initial balance is not positive")
    net_profit: float = Field(..., description="Sum of trade results")
    max_drawdown_amount: float = Field(..., ge=0, description="Largest peak-to-trough drop")
    max_drawdown_percent: float = Field(..., description="Drawdown as % of initial balance")
    worst_day_pnl: float = Field(..., le=0, description="Worst calendar day")
    best_day_pnl: float = Field(..., ge=0, description="Best calendar day")
    best_day_percent_of_total: float = Field(..., ge=0, description="Best day as % of net profit")
    consistency_shortfall: float = Field(..., ge=0, description="Additional profit needed to comply")
    target_dollars: float = Field(..., description="Profit target in account currency")
    max_daily_loss_dollars: float = Field(..., description="Daily loss limit in account currency")
    max_drawdown_dollars: float = Field(..., description="Drawdown limit in account currency")
    progress: dict[str, RuleProgress] = Field(default_factory=dict, description="Per-rule progress")

    model_config = {"frozen": True}

    @property
    def is_violated(self) -> bool:
        return self.verdict == Verdict.VIOLATED

    @property
    def is_passed(self) -> bool:
        return self.verdict == Verdict.PASSED


class InstrumentPerformance(BaseModel):
    instrument: Instrument
    profit: float
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class SessionProfit(BaseModel):
    session: Session
    profit: float

    model_config = {"frozen": True}


class EmotionMistakes(BaseModel):
    emotion: Emotion
    mistakes: int = Field(..., ge=0)

    model_config = {"frozen": True}


class TradeStats(BaseModel):
    """Headline performance figures for a trade ledger."""

    current_balance: float = Field(..., description="Balance after all trades")
    net_profit: float = Field(..., description="Sum of trade results")
    total_trades: int = Field(..., ge=0, description="Number of trades")
    winning_trades: int = Field(..., ge=0, description="Trades with a positive result")
    win_rate: float = Field(..., ge=0, le=100, description="Winning trades as % of all trades")
    avg_rr: float = Field(..., description="Average RR of winning trades")
    max_drawdown_amount: float = Field(..., ge=0, description="Largest peak-to-trough drop")
    max_drawdown_percent: float = Field(..., description="Drawdown as % of initial balance")
    best_day_pnl: float = Field(..., ge=0, description="Best calendar day")
    best_day_date: Optional[date_type] = Field(default=None, description="Date of the best day")
    worst_day_pnl: float = Field(..., le=0, description="Worst calendar day")
    best_day_percent_of_total: float = Field(..., ge=0, description="Best day as % of net profit")
    equity_curve: list[EquityPoint] = Field(default_factory=list, description="One point per trade")
    daily_pnl: list[AggregatedDay] = Field(default_factory=list, description="Aggregated days, ascending")

    model_config = {"frozen": True}
