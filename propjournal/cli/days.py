"""Daily P&L ledger commands for PropJournal CLI.

Handles recording day entries and the consistency rule report.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from propjournal.analytics import check_consistency
from propjournal.cli.common import console, fail, get_store, load_journal, money, status
from propjournal.models import DayEntry
from propjournal.safemath import safe_percent


@click.group()
def day() -> None:
    """Record and review daily P&L entries."""


@day.command("add")
@click.argument("pnl", type=float)
@click.option(
    "--date",
    "entry_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Trading day (YYYY-MM-DD). Defaults to today.",
)
@click.pass_obj
def add_day(obj: dict, pnl: float, entry_date: Optional[datetime]) -> None:
    """Record the net P&L of a trading day.

    \b
    Examples:
      propjournal day add 1250.50
      propjournal day add --date 2024-03-04 -- -400
    """
    entry = DayEntry(date=entry_date.date() if entry_date else date.today(), pnl=pnl)

    store = get_store(obj)
    state = load_journal(store, obj).add_entry(entry)
    store.save_state(state)

    console.print(f"[green]✓[/green] Recorded {money(pnl)} on {entry.date.isoformat()} [dim]({entry.id})[/dim]")


@day.command("list")
@click.pass_obj
def list_days(obj: dict) -> None:
    """List recorded day entries, newest first."""
    state = load_journal(get_store(obj), obj)

    if not state.entries:
        console.print(Panel(
            "[dim]No day entries found[/dim]",
            title="[bold]Daily P&L[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Daily P&L", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("P&L", justify="right")
    table.add_column("ID", style="dim")

    for entry in sorted(state.entries, key=lambda e: e.date, reverse=True):
        table.add_row(entry.date.isoformat(), money(entry.pnl), entry.id)

    console.print(table)


@day.command("delete")
@click.argument("entry_id")
@click.pass_obj
def delete_day(obj: dict, entry_id: str) -> None:
    """Delete a day entry by ID."""
    store = get_store(obj)
    state = load_journal(store, obj)

    if not any(e.id == entry_id for e in state.entries):
        fail(f"No day entry with ID {entry_id}")

    store.save_state(state.delete_entry(entry_id))
    console.print(f"[green]✓[/green] Deleted day entry {entry_id}")


@click.command()
@click.pass_obj
def consistency(obj: dict) -> None:
    """Check daily P&L against the consistency rule and profit target.

    Shows the best day's share of total profit and, when it is too
    large, how much more total profit is needed to comply.

    \b
    Examples:
      propjournal consistency
    """
    state = load_journal(get_store(obj), obj)
    report = check_consistency(
        state.entries, state.consistency_rule_percent, state.profit_target
    )

    best_day = report.best_day_date.isoformat() if report.best_day_date else "-"
    text = (
        f"Total Net Profit:  {money(report.total_net_profit)}\n"
        f"Profit Target:     ${state.profit_target:,.2f} {status(report.is_target_reached)}\n"
        f"Best Day:          {money(report.best_day_pnl)} ({best_day})\n"
        f"Best Day Share:    {report.consistency_percent:.2f}% "
        f"(limit {state.consistency_rule_percent:g}%) {status(report.is_passing_consistency)}\n"
    )
    if report.consistency_shortfall > 0:
        text += f"Shortfall:         [yellow]${report.consistency_shortfall:,.2f}[/yellow] more profit needed\n"

    passed = report.is_evaluation_passed
    text += f"\n[bold]{'[green]PASSED[/green]' if passed else '[yellow]NOT PASSED[/yellow]'}[/bold]"

    console.print(Panel(
        text,
        title="[bold cyan]Consistency[/bold cyan]",
        border_style="green" if passed else "cyan",
    ))

    if report.days:
        table = Table(title="Daily Breakdown", show_header=True, header_style="bold cyan")
        table.add_column("Date", style="bold")
        table.add_column("P&L", justify="right")
        table.add_column("% of Total", justify="right")
        for aggregated in reversed(report.days):
            share = (
                f"{safe_percent(aggregated.pnl, report.total_net_profit):.1f}%"
                if report.total_net_profit > 0
                else "-"
            )
            table.add_row(aggregated.date.isoformat(), money(aggregated.pnl), share)
        console.print(table)
