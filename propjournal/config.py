"""Configuration and logging setup for PropJournal.

Configuration lives in a TOML file (``~/.config/propjournal/config.toml``
by default). Every section is optional; missing values fall back to the
journal defaults.
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from rich.console import Console
from rich.logging import RichHandler

from propjournal.models import AccountSettings, JournalState, PropFirmRules

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "propjournal"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "journal.db"


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Config file path. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        Config dict, empty if the file is missing or unreadable.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return {}


def create_template_config(path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Args:
        path: Destination. Defaults to DEFAULT_CONFIG_PATH.

    Returns:
        The path written.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)

    rules = PropFirmRules()
    state = JournalState()
    template = {
        "journal": {
            "db_path": str(DEFAULT_DB_PATH),
        },
        "logging": {
            "level": "WARNING",
        },
        "account": {
            "initial_balance": AccountSettings().initial_balance,
            "account_size": state.account_size,
            "profit_target": state.profit_target,
            "consistency_rule_percent": state.consistency_rule_percent,
        },
        "rules": rules.model_dump(),
    }

    with open(config_path, "w") as f:
        toml.dump(template, f)

    return config_path


def get_db_path(config: dict) -> Path:
    """Database path from config, or the default location."""
    db_path = config.get("journal", {}).get("db_path")
    return Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH


def default_state(config: dict) -> JournalState:
    """Build the initial journal for a database that has never been saved.

    Args:
        config: Loaded configuration.

    Returns:
        An empty JournalState carrying the configured defaults.
    """
    account = config.get("account", {})
    base = JournalState()
    return JournalState(
        consistency_rule_percent=account.get(
            "consistency_rule_percent", base.consistency_rule_percent
        ),
        account_size=account.get("account_size", base.account_size),
        profit_target=account.get("profit_target", base.profit_target),
        settings=AccountSettings(
            initial_balance=account.get("initial_balance", base.settings.initial_balance)
        ),
        prop_firm_rules=PropFirmRules(**config.get("rules", {})),
    )


def setup_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Route log records to a rich handler on stderr.

    Args:
        level: Log level name.
        console: Console to log to. Defaults to a new stderr console.
    """
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), show_path=False)],
        force=True,
    )
