"""Data models for PropJournal."""

from propjournal.models.day_entry import DayEntry
from propjournal.models.trade import Direction, Emotion, Instrument, Session, Trade
from propjournal.models.thresholds import EvaluationThresholds
from propjournal.models.results import (
    AggregatedDay,
    ConsistencyReport,
    EmotionMistakes,
    EquityPoint,
    EquityReport,
    Evaluation,
    InstrumentPerformance,
    RuleProgress,
    SessionProfit,
    TradeStats,
    Verdict,
)
from propjournal.models.state import AccountSettings, JournalState, PropFirmRules

__all__ = [
    "DayEntry",
    "Trade",
    "Instrument",
    "Session",
    "Direction",
    "Emotion",
    "EvaluationThresholds",
    "AggregatedDay",
    "EquityPoint",
    "EquityReport",
    "ConsistencyReport",
    "Verdict",
    "RuleProgress",
    "Evaluation",
    "InstrumentPerformance",
    "SessionProfit",
    "EmotionMistakes",
    "TradeStats",
    "AccountSettings",
    "PropFirmRules",
    "JournalState",
]
