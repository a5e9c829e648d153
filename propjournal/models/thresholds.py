"""Prop-firm evaluation thresholds."""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from propjournal.safemath import percent_of


class EvaluationThresholds(BaseModel):
    """Configurable limits an evaluation account is judged against.

    Percentages are relative to ``initial_balance``. A non-positive balance
    is a configuration error: every derived dollar limit collapses to 0.
    """

    profit_target_percent: float = Field(default=10.0, ge=0, allow_inf_nan=False, description="Profit target (% of balance)")
    max_daily_loss_percent: float = Field(default=5.0, ge=0, allow_inf_nan=False, description="Max loss on any day (% of balance)")
    max_overall_drawdown_percent: float = Field(default=10.0, ge=0, allow_inf_nan=False, description="Max peak-to-trough drawdown (% of balance)")
    consistency_rule_percent: float = Field(default=40.0, ge=0, allow_inf_nan=False, description="Max share of total profit from the best day (%)")
    initial_balance: float = Field(default=50000.0, allow_inf_nan=False, description="Starting account balance")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @property
    def is_misconfigured(self) -> bool:
        return self.initial_balance <= 0

    @property
    def target_dollars(self) -> float:
        return percent_of(self.initial_balance, self.profit_target_percent)

    @property
    def max_daily_loss_dollars(self) -> float:
        return percent_of(self.initial_balance, self.max_daily_loss_percent)

    @property
    def max_drawdown_dollars(self) -> float:
        return percent_of(self.initial_balance, self.max_overall_drawdown_percent)
