"""Journal state: the ledgers plus the settings the analytics run against.

Every operation returns a new state. Persisting it is the caller's job
(see :class:`propjournal.db.store.JournalStore`).
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from propjournal.models.day_entry import DayEntry
from propjournal.models.thresholds import EvaluationThresholds
from propjournal.models.trade import Trade

_CONFIG = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}


class AccountSettings(BaseModel):
    """Account settings for the trade journal."""

    initial_balance: float = Field(default=50000.0, allow_inf_nan=False, description="Starting balance")

    model_config = _CONFIG


class PropFirmRules(BaseModel):
    """Percentage limits of a prop-firm evaluation."""

    profit_target_percent: float = Field(default=10.0, ge=0, allow_inf_nan=False)
    max_daily_loss_percent: float = Field(default=5.0, ge=0, allow_inf_nan=False)
    max_overall_drawdown_percent: float = Field(default=10.0, ge=0, allow_inf_nan=False)
    consistency_rule_percent: float = Field(default=40.0, ge=0, allow_inf_nan=False)

    model_config = _CONFIG


def _apply_patch(model: BaseModel, patch: Mapping[str, Any]) -> BaseModel:
    """Validate ``patch`` against the fields of ``model`` and return a merged copy."""
    fields = type(model).model_fields
    names = {}
    for name, field in fields.items():
        names[name] = name
        names[field.alias or to_camel(name)] = name

    unknown = sorted(key for key in patch if key not in names)
    if unknown:
        raise ValueError(
            f"Unknown {type(model).__name__} field(s): {', '.join(unknown)}"
        )

    merged = model.model_dump()
    for key, value in patch.items():
        merged[names[key]] = value
    return type(model).model_validate(merged)


class JournalState(BaseModel):
    """Snapshot of everything the journal stores."""

    entries: list[DayEntry] = Field(default_factory=list, description="Daily P&L ledger")
    consistency_rule_percent: float = Field(default=40.0, ge=0, allow_inf_nan=False)
    account_size: float = Field(default=50000.0, allow_inf_nan=False)
    profit_target: float = Field(default=2500.0, allow_inf_nan=False)
    trades: list[Trade] = Field(default_factory=list, description="Trade ledger")
    settings: AccountSettings = Field(default_factory=AccountSettings)
    prop_firm_rules: PropFirmRules = Field(default_factory=PropFirmRules)

    model_config = _CONFIG

    @property
    def thresholds(self) -> EvaluationThresholds:
        """Evaluation thresholds built from the prop-firm rules and account settings."""
        return EvaluationThresholds(
            initial_balance=self.settings.initial_balance,
            **self.prop_firm_rules.model_dump(),
        )

    # ==================== Ledgers ====================

    def add_entry(self, entry: DayEntry) -> "JournalState":
        return self.model_copy(update={"entries": [*self.entries, entry]})

    def delete_entry(self, entry_id: str) -> "JournalState":
        return self.model_copy(
            update={"entries": [e for e in self.entries if e.id != entry_id]}
        )

    def add_trade(self, trade: Trade) -> "JournalState":
        return self.model_copy(update={"trades": [*self.trades, trade]})

    def delete_trade(self, trade_id: str) -> "JournalState":
        return self.model_copy(
            update={"trades": [t for t in self.trades if t.id != trade_id]}
        )

    # ==================== Settings ====================

    def update_account(
        self,
        account_size: float,
        profit_target: Optional[float] = None,
        rule_percent: Optional[float] = None,
    ) -> "JournalState":
        """Update the day-entry tracker settings from scalar values.

        Args:
            account_size: New account size.
            profit_target: New profit target, or None to keep the current one.
            rule_percent: New consistency rule %, or None to keep the current one.

        Returns:
            Updated state.
        """
        merged = self.model_dump()
        merged["account_size"] = account_size
        if profit_target is not None:
            merged["profit_target"] = profit_target
        if rule_percent is not None:
            merged["consistency_rule_percent"] = rule_percent
        return JournalState.model_validate(merged)

    def update_settings(self, patch: Mapping[str, Any]) -> "JournalState":
        """Apply a partial update to the account settings.

        Raises:
            ValueError: If ``patch`` names a field that does not exist.
            pydantic.ValidationError: If a value is invalid.
        """
        settings = _apply_patch(self.settings, patch)
        return self.model_copy(update={"settings": settings})

    def update_rules(self, patch: Mapping[str, Any]) -> "JournalState":
        """Apply a partial update to the prop-firm rules.

        Raises:
            ValueError: If ``patch`` names a field that does not exist.
            pydantic.ValidationError: If a value is invalid.
        """
        rules = _apply_patch(self.prop_firm_rules, patch)
        return self.model_copy(update={"prop_firm_rules": rules})
