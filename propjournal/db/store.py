"""SQLite journal store for PropJournal.

The store never saves implicitly: callers load a :class:`JournalState`,
derive a new state from it and hand that to :meth:`JournalStore.save_state`.
"""

import json
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from propjournal.models import (
    AccountSettings,
    DayEntry,
    JournalState,
    PropFirmRules,
    Trade,
)

logger = logging.getLogger(__name__)

# Scalar settings stored in the key/value table, grouped by owner.
_STATE_SETTINGS = ("consistency_rule_percent", "account_size", "profit_target")
_ACCOUNT_SETTINGS = tuple(AccountSettings.model_fields)
_RULE_SETTINGS = tuple(PropFirmRules.model_fields)


class JournalStore:
    """SQLite-based store for the journal ledgers and settings."""

    REQUIRED_TABLES = [
        "day_entries",
        "trades",
        "settings",
    ]

    def __init__(self, db_path: Path):
        """Initialize the journal store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS day_entries (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    pnl REAL NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    date TEXT NOT NULL,
                    instrument TEXT NOT NULL,
                    session TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    stop_loss REAL NOT NULL,
                    take_profit REAL NOT NULL,
                    risk_amount REAL NOT NULL,
                    result_amount REAL NOT NULL,
                    duration_minutes INTEGER NOT NULL,
                    emotion_before TEXT NOT NULL,
                    emotion_after TEXT NOT NULL,
                    rule_followed INTEGER NOT NULL,
                    notes TEXT NOT NULL DEFAULT ''
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value REAL NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== State ====================

    def has_state(self) -> bool:
        """Whether a state has ever been saved to this database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS n FROM settings")
            return cursor.fetchone()["n"] > 0
        finally:
            conn.close()

    def save_state(self, state: JournalState) -> None:
        """Replace the stored journal with ``state`` in a single transaction.

        Args:
            state: Journal state to persist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM day_entries")
            cursor.execute("DELETE FROM trades")
            cursor.execute("DELETE FROM settings")

            cursor.executemany(
                "INSERT INTO day_entries (id, position, date, pnl) VALUES (?, ?, ?, ?)",
                [
                    (entry.id, position, entry.date.isoformat(), entry.pnl)
                    for position, entry in enumerate(state.entries)
                ],
            )

            cursor.executemany(
                """
                INSERT INTO trades
                (id, position, date, instrument, session, direction, entry_price,
                 stop_loss, take_profit, risk_amount, result_amount, duration_minutes,
                 emotion_before, emotion_after, rule_followed, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        trade.id,
                        position,
                        trade.date.isoformat(),
                        trade.instrument.value,
                        trade.session.value,
                        trade.direction.value,
                        trade.entry_price,
                        trade.stop_loss,
                        trade.take_profit,
                        trade.risk_amount,
                        trade.result_amount,
                        trade.duration_minutes,
                        trade.emotion_before.value,
                        trade.emotion_after.value,
                        1 if trade.rule_followed else 0,
                        trade.notes,
                    )
                    for position, trade in enumerate(state.trades)
                ],
            )

            settings = {key: getattr(state, key) for key in _STATE_SETTINGS}
            settings.update(state.settings.model_dump())
            settings.update(
                {f"rules.{key}": value for key, value in state.prop_firm_rules.model_dump().items()}
            )
            cursor.executemany(
                "INSERT INTO settings (key, value) VALUES (?, ?)",
                list(settings.items()),
            )

            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

        logger.info(
            "Saved journal to %s (%d entries, %d trades)",
            self.db_path,
            len(state.entries),
            len(state.trades),
        )

    def load_state(self, default: Optional[JournalState] = None) -> JournalState:
        """Load the stored journal.

        Args:
            default: State to return when nothing has been saved yet.
                Defaults to a fresh JournalState.

        Returns:
            The stored journal state.
        """
        if not self.has_state():
            logger.debug("No saved journal in %s, using defaults", self.db_path)
            return default if default is not None else JournalState()

        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("SELECT id, date, pnl FROM day_entries ORDER BY position")
            entries = [
                DayEntry(id=row["id"], date=date.fromisoformat(row["date"]), pnl=row["pnl"])
                for row in cursor.fetchall()
            ]

            cursor.execute("SELECT * FROM trades ORDER BY position")
            trades = [
                Trade(
                    id=row["id"],
                    date=datetime.fromisoformat(row["date"]),
                    instrument=row["instrument"],
                    session=row["session"],
                    direction=row["direction"],
                    entry_price=row["entry_price"],
                    stop_loss=row["stop_loss"],
                    take_profit=row["take_profit"],
                    risk_amount=row["risk_amount"],
                    result_amount=row["result_amount"],
                    duration_minutes=row["duration_minutes"],
                    emotion_before=row["emotion_before"],
                    emotion_after=row["emotion_after"],
                    rule_followed=bool(row["rule_followed"]),
                    notes=row["notes"],
                )
                for row in cursor.fetchall()
            ]

            cursor.execute("SELECT key, value FROM settings")
            settings = {row["key"]: row["value"] for row in cursor.fetchall()}
        finally:
            conn.close()

        base = JournalState()
        return JournalState(
            entries=entries,
            trades=trades,
            consistency_rule_percent=settings.get(
                "consistency_rule_percent", base.consistency_rule_percent
            ),
            account_size=settings.get("account_size", base.account_size),
            profit_target=settings.get("profit_target", base.profit_target),
            settings=AccountSettings(
                **{key: settings[key] for key in _ACCOUNT_SETTINGS if key in settings}
            ),
            prop_firm_rules=PropFirmRules(
                **{
                    key: settings[f"rules.{key}"]
                    for key in _RULE_SETTINGS
                    if f"rules.{key}" in settings
                }
            ),
        )


# ==================== Snapshots ====================


def export_snapshot(state: JournalState, path: Path) -> Path:
    """Write ``state`` to a JSON snapshot file.

    Args:
        state: Journal state to export.
        path: Destination file.

    Returns:
        The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
    logger.info("Exported journal snapshot to %s", path)
    return path


def import_snapshot(path: Path) -> JournalState:
    """Read a JSON snapshot file.

    Missing fields take their default values.

    Args:
        path: Snapshot file to read.

    Returns:
        The journal state contained in the snapshot.

    Raises:
        ValueError: If the file is not valid JSON or not a valid snapshot.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Snapshot {path} is not valid JSON: {e}") from e

    try:
        state = JournalState.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Snapshot {path} is not a valid journal: {e}") from e

    logger.info(
        "Imported journal snapshot from %s (%d entries, %d trades)",
        path,
        len(state.entries),
        len(state.trades),
    )
    return state
