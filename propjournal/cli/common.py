"""Helpers shared by the CLI command modules."""

from rich.console import Console
from rich.panel import Panel

from propjournal.config import default_state
from propjournal.db.store import JournalStore
from propjournal.models import JournalState

console = Console()


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def get_store(obj: dict) -> JournalStore:
    """Get the journal store for the current invocation."""
    return JournalStore(obj["db_path"])


def load_journal(store: JournalStore, obj: dict) -> JournalState:
    """Load the saved journal, or the configured defaults for a fresh database."""
    return store.load_state(default=default_state(obj.get("config", {})))


def money(value: float, signed: bool = True) -> str:
    """Format an amount as dollars, colored by sign."""
    color = "green" if value >= 0 else "red"
    if value < 0:
        amount = f"-${abs(value):,.2f}"
    else:
        amount = f"{'+' if signed and value > 0 else ''}${value:,.2f}"
    return f"[{color}]{amount}[/{color}]"


def status(ok: bool) -> str:
    return "[green]✓[/green]" if ok else "[red]✗[/red]"
