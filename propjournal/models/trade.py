"""Trade data model and its enumerations."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

from propjournal.safemath import safe_divide


class Instrument(str, Enum):
    NASDAQ = "Nasdaq"
    SP500 = "S&P500"
    EURUSD = "EURUSD"
    GBPUSD = "GBPUSD"
    GOLD = "Gold"
    OIL = "Oil"
    CRYPTO = "Crypto"
    OTHER = "Other"


class Session(str, Enum):
    LONDON = "London"
    NEW_YORK = "New York"
    ASIAN = "Asian"
    OVERNIGHT = "Overnight"


class Direction(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class Emotion(str, Enum):
    CALM = "Calm"
    FOMO = "FOMO"
    REVENGE = "Revenge"
    BORED = "Bored"
    ANXIOUS = "Anxious"
    CONFIDENT = "Confident"
    GREEDY = "Greedy"
    FEARFUL = "Fearful"


class Trade(BaseModel):
    """Represents a single journaled trade."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()), description="Unique trade ID"
    )
    date: datetime = Field(..., description="Trade timestamp")
    instrument: Instrument = Field(default=Instrument.NASDAQ, description="Traded instrument")
    session: Session = Field(default=Session.NEW_YORK, description="Market session")
    direction: Direction = Field(default=Direction.BUY, description="Trade direction")
    entry_price: float = Field(default=0.0, allow_inf_nan=False, description="Entry price (0 if unset)")
    stop_loss: float = Field(default=0.0, allow_inf_nan=False, description="Stop loss (0 if unset)")
    take_profit: float = Field(default=0.0, allow_inf_nan=False, description="Take profit (0 if unset)")
    risk_amount: float = Field(default=0.0, ge=0, allow_inf_nan=False, description="Amount risked")
    result_amount: float = Field(default=0.0, allow_inf_nan=False, description="Realized P&L")
    duration_minutes: int = Field(default=0, ge=0, description="Time in trade")
    emotion_before: Emotion = Field(default=Emotion.CALM, description="Emotion before entry")
    emotion_after: Emotion = Field(default=Emotion.CALM, description="Emotion after exit")
    rule_followed: bool = Field(default=True, description="Whether the trading plan was followed")
    notes: str = Field(default="", description="Free-text notes")

    model_config = {"frozen": True, "alias_generator": to_camel, "populate_by_name": True}

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        """Store timestamps as naive UTC so aware and naive trades compare."""
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @computed_field(alias="rrAchieved")
    @property
    def rr_achieved(self) -> float:
        """Risk multiple achieved; 0 when no risk was recorded."""
        if self.risk_amount <= 0:
            return 0.0
        return safe_divide(self.result_amount, self.risk_amount)

    @property
    def pnl(self) -> float:
        return self.result_amount
