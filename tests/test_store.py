"""Tests for the journal store and JSON snapshots.

**Feature: prop-journal**
"""

import json
import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from propjournal.analytics import evaluate, sort_trades, summarize_trades
from propjournal.db.store import JournalStore, export_snapshot, import_snapshot
from propjournal.models import (
    DayEntry,
    Direction,
    Emotion,
    Instrument,
    JournalState,
    Session,
    Trade,
    Verdict,
)


@pytest.fixture
def temp_store():
    """Create a temporary journal store for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield JournalStore(Path(tmpdir) / "journal.db")


@pytest.fixture
def sample_state() -> JournalState:
    state = JournalState(
        entries=[
            DayEntry(date=date(2024, 1, 2), pnl=750.25),
            DayEntry(date=date(2024, 1, 1), pnl=-120),
        ],
        trades=[
            Trade(
                date=datetime(2024, 1, 2, 15, 30, tzinfo=timezone.utc),
                instrument=Instrument.EURUSD,
                session=Session.LONDON,
                direction=Direction.SELL,
                entry_price=1.0954,
                stop_loss=1.0975,
                take_profit=1.0910,
                risk_amount=210,
                result_amount=440,
                duration_minutes=95,
                emotion_before=Emotion.CONFIDENT,
                emotion_after=Emotion.CALM,
                notes="clean breakdown",
            ),
            Trade(
                date=datetime(2024, 1, 1, 9, 45, tzinfo=timezone.utc),
                result_amount=-200,
                risk_amount=200,
                rule_followed=False,
                emotion_before=Emotion.REVENGE,
            ),
        ],
    )
    return state.update_rules({"max_daily_loss_percent": 4}).update_settings(
        {"initial_balance": 100000}
    ).update_account(100000, 8000, 35)


class TestSchema:
    def test_required_tables(self, temp_store: JournalStore):
        tables = temp_store.get_tables()
        for table in JournalStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JournalStore(Path(tmpdir) / "nested" / "dir" / "journal.db")
            assert store.db_path.parent.exists()


class TestSaveLoad:
    def test_fresh_store_returns_default(self, temp_store: JournalStore):
        assert not temp_store.has_state()
        assert temp_store.load_state() == JournalState()

    def test_fresh_store_returns_given_default(self, temp_store: JournalStore):
        default = JournalState(profit_target=1234)
        assert temp_store.load_state(default=default) is default

    def test_round_trip(self, temp_store: JournalStore, sample_state: JournalState):
        temp_store.save_state(sample_state)
        assert temp_store.has_state()
        assert temp_store.load_state() == sample_state

    def test_ledger_order_preserved(self, temp_store: JournalStore, sample_state: JournalState):
        temp_store.save_state(sample_state)
        loaded = temp_store.load_state()
        assert [e.id for e in loaded.entries] == [e.id for e in sample_state.entries]
        assert [t.id for t in loaded.trades] == [t.id for t in sample_state.trades]

    def test_save_replaces_previous_state(self, temp_store: JournalStore, sample_state: JournalState):
        temp_store.save_state(sample_state)
        trimmed = sample_state.delete_trade(sample_state.trades[0].id)
        temp_store.save_state(trimmed)
        loaded = temp_store.load_state()
        assert len(loaded.trades) == 1
        assert loaded == trimmed

    def test_empty_state_round_trip(self, temp_store: JournalStore):
        temp_store.save_state(JournalState())
        assert temp_store.has_state()
        assert temp_store.load_state(default=JournalState(profit_target=1)) == JournalState()

    @given(
        pnls=st.lists(
            st.floats(min_value=-100000, max_value=100000, allow_nan=False, allow_infinity=False),
            max_size=20,
        )
    )
    @settings(max_examples=25, deadline=None)
    def test_entries_round_trip(self, pnls: list[float]):
        """*For any* day-entry ledger, save then load returns the same ledger."""
        state = JournalState(entries=[
            DayEntry(date=date(2024, 1, 1) + timedelta(days=i), pnl=pnl)
            for i, pnl in enumerate(pnls)
        ])
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JournalStore(Path(tmpdir) / "journal.db")
            store.save_state(state)
            assert store.load_state() == state


class TestSnapshots:
    def test_export_import_round_trip(self, sample_state: JournalState):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = export_snapshot(sample_state, Path(tmpdir) / "backup.json")
            assert import_snapshot(path) == sample_state

    def test_export_uses_camel_case(self, sample_state: JournalState):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = export_snapshot(sample_state, Path(tmpdir) / "backup.json")
            raw = json.loads(path.read_text())
        assert "propFirmRules" in raw
        assert raw["settings"]["initialBalance"] == 100000
        assert raw["trades"][0]["resultAmount"] == 440
        assert raw["trades"][0]["rrAchieved"] == pytest.approx(440 / 210)

    def test_import_partial_snapshot_uses_defaults(self):
        snapshot = {
            "entries": [{"id": "a", "date": "2024-02-01", "pnl": 300}],
            "trades": [{
                "id": "b",
                "date": "2024-02-01T14:00:00.000Z",
                "instrument": "Gold",
                "session": "New York",
                "direction": "Buy",
                "entryPrice": 2030.5,
                "stopLoss": 2025,
                "takeProfit": 2045,
                "riskAmount": 100,
                "resultAmount": 150,
                "rrAchieved": 1.5,
                "durationMinutes": 20,
                "emotionBefore": "Calm",
                "emotionAfter": "Greedy",
                "ruleFollowed": True,
                "notes": "",
            }],
            "accountSize": 25000,
        }
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "snapshot.json"
            path.write_text(json.dumps(snapshot))
            state = import_snapshot(path)

        assert state.account_size == 25000
        assert state.profit_target == 2500
        assert state.prop_firm_rules.consistency_rule_percent == 40
        assert state.trades[0].instrument == Instrument.GOLD
        assert state.trades[0].emotion_after == Emotion.GREEDY
        assert state.trades[0].rr_achieved == pytest.approx(1.5)

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.json"
            path.write_text("{not json")
            with pytest.raises(ValueError, match="not valid JSON"):
                import_snapshot(path)

    def test_invalid_journal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.json"
            path.write_text(json.dumps({"trades": [{"date": "yesterday"}]}))
            with pytest.raises(ValueError, match="not a valid journal"):
                import_snapshot(path)


@pytest.fixture
def app_snapshot() -> dict:
    """Journal as saved by the browser app: camelCase keys, UTC ``Z`` timestamps."""
    return {
        "entries": [
            {"id": "e1", "date": "2024-02-01", "pnl": 420.5},
            {"id": "e2", "date": "2024-02-02", "pnl": -130},
        ],
        "consistencyRulePercent": 35,
        "accountSize": 50000,
        "profitTarget": 3000,
        "trades": [
            {
                "id": "t1",
                "date": "2024-02-01T14:00:00.000Z",
                "instrument": "Nasdaq",
                "session": "New York",
                "direction": "Buy",
                "entryPrice": 17850.25,
                "stopLoss": 17830,
                "takeProfit": 17910,
                "riskAmount": 200,
                "resultAmount": 600,
                "rrAchieved": 3,
                "durationMinutes": 25,
                "emotionBefore": "Calm",
                "emotionAfter": "Confident",
                "ruleFollowed": True,
                "notes": "",
            },
            {
                "id": "t2",
                "date": "2024-02-02T09:15:00.000Z",
                "instrument": "EURUSD",
                "session": "London",
                "direction": "Sell",
                "entryPrice": 1.0812,
                "stopLoss": 1.0837,
                "takeProfit": 1.0762,
                "riskAmount": 250,
                "resultAmount": -250,
                "rrAchieved": -1,
                "durationMinutes": 40,
                "emotionBefore": "FOMO",
                "emotionAfter": "Anxious",
                "ruleFollowed": False,
                "notes": "entered late",
            },
        ],
        "settings": {"initialBalance": 50000},
        "propFirmRules": {
            "profitTargetPercent": 10,
            "maxDailyLossPercent": 5,
            "maxOverallDrawdownPercent": 10,
            "consistencyRulePercent": 40,
        },
    }


@pytest.fixture
def app_snapshot_path(app_snapshot: dict):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "propFirmTrackerState.json"
        path.write_text(json.dumps(app_snapshot))
        yield path


class TestAppSnapshot:
    def test_import(self, app_snapshot_path: Path):
        state = import_snapshot(app_snapshot_path)
        assert [t.date for t in state.trades] == [
            datetime(2024, 2, 1, 14, 0),
            datetime(2024, 2, 2, 9, 15),
        ]
        assert [t.rr_achieved for t in state.trades] == [3, -1]
        assert state.entries[0].date == date(2024, 2, 1)
        assert state.consistency_rule_percent == 35
        assert state.profit_target == 3000

    def test_round_trip_is_lossless(self, app_snapshot_path: Path, temp_store: JournalStore):
        state = import_snapshot(app_snapshot_path)
        exported = export_snapshot(state, app_snapshot_path.with_name("export.json"))
        assert import_snapshot(exported) == state

        temp_store.save_state(state)
        assert temp_store.load_state() == state

    def test_analytics_with_local_trades(self, app_snapshot_path: Path, temp_store: JournalStore):
        imported = import_snapshot(app_snapshot_path)
        temp_store.save_state(imported)
        state = temp_store.load_state().add_trade(
            Trade(date=datetime(2024, 2, 3, 10, 30), risk_amount=100, result_amount=400)
        )
        temp_store.save_state(state)
        state = temp_store.load_state()

        ordered = sort_trades(state.trades)
        assert [t.id for t in ordered[:2]] == ["t1", "t2"]

        result = evaluate(state.trades, state.thresholds)
        assert result.net_profit == pytest.approx(750)
        assert result.max_drawdown_amount == pytest.approx(250)
        assert result.best_day_pnl == pytest.approx(600)
        # 600 of 750 is 80% against a 40% rule
        assert result.consistency_failed is True
        assert result.verdict == Verdict.VIOLATED

        summary = summarize_trades(state.trades, state.settings.initial_balance)
        assert summary.total_trades == 3
        assert summary.winning_trades == 2
        assert summary.current_balance == pytest.approx(50750)
        assert summary.equity_curve[-1].balance == pytest.approx(50750)
