"""Trade ledger commands for PropJournal CLI.

Handles logging trades, the trade history and performance reports.
"""

from datetime import datetime
from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from propjournal.analytics import (
    TradeFilter,
    filter_trades,
    performance_by_instrument,
    profit_by_session,
    rule_breaks_by_emotion,
    summarize_trades,
)
from propjournal.cli.common import console, fail, get_store, load_journal, money
from propjournal.models import Direction, Emotion, Instrument, Session, Trade


def _choice(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


def _lookup(enum_cls, value: str):
    return next(m for m in enum_cls if m.value.lower() == value.lower())


@click.group()
def trade() -> None:
    """Log and review individual trades."""


@trade.command("add")
@click.option("-r", "--result", "result_amount", type=float, required=True, help="Realized P&L.")
@click.option("--risk", "risk_amount", type=float, default=0.0, show_default=True, help="Amount risked.")
@click.option(
    "--date",
    "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]),
    default=None,
    help="Trade time. Defaults to now.",
)
@click.option("-i", "--instrument", type=_choice(Instrument), default=Instrument.NASDAQ.value, show_default=True)
@click.option("-s", "--session", type=_choice(Session), default=Session.NEW_YORK.value, show_default=True)
@click.option("-d", "--direction", type=_choice(Direction), default=Direction.BUY.value, show_default=True)
@click.option("--entry", "entry_price", type=float, default=0.0, help="Entry price.")
@click.option("--sl", "stop_loss", type=float, default=0.0, help="Stop loss.")
@click.option("--tp", "take_profit", type=float, default=0.0, help="Take profit.")
@click.option("--duration", "duration_minutes", type=int, default=0, help="Minutes in trade.")
@click.option("--before", "emotion_before", type=_choice(Emotion), default=Emotion.CALM.value, help="Emotion before entry.")
@click.option("--after", "emotion_after", type=_choice(Emotion), default=Emotion.CALM.value, help="Emotion after exit.")
@click.option("--broke-rules", is_flag=True, default=False, help="Mark the trade as not following the plan.")
@click.option("-n", "--notes", default="", help="Trade notes.")
@click.pass_obj
def add_trade(
    obj: dict,
    result_amount: float,
    risk_amount: float,
    trade_date: Optional[datetime],
    instrument: str,
    session: str,
    direction: str,
    entry_price: float,
    stop_loss: float,
    take_profit: float,
    duration_minutes: int,
    emotion_before: str,
    emotion_after: str,
    broke_rules: bool,
    notes: str,
) -> None:
    """Log a completed trade.

    \b
    Examples:
      propjournal trade add -r 450 --risk 150 -i Gold -s London
      propjournal trade add -r -200 --risk 200 --before FOMO --broke-rules
    """
    try:
        new_trade = Trade(
            date=trade_date or datetime.now(),
            instrument=_lookup(Instrument, instrument),
            session=_lookup(Session, session),
            direction=_lookup(Direction, direction),
            entry_price=entry_price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            risk_amount=risk_amount,
            result_amount=result_amount,
            duration_minutes=duration_minutes,
            emotion_before=_lookup(Emotion, emotion_before),
            emotion_after=_lookup(Emotion, emotion_after),
            rule_followed=not broke_rules,
            notes=notes,
        )
    except ValidationError as e:
        fail(f"Invalid trade:\n\n{e}")

    store = get_store(obj)
    state = load_journal(store, obj).add_trade(new_trade)
    store.save_state(state)

    console.print(
        f"[green]✓[/green] Logged {new_trade.direction.value} {new_trade.instrument.value} "
        f"{money(new_trade.result_amount)} ({new_trade.rr_achieved:.2f}R) "
        f"[dim]({new_trade.id})[/dim]"
    )


@trade.command("list")
@click.option(
    "-f",
    "--filter",
    "kind",
    type=_choice(TradeFilter),
    default=TradeFilter.ALL.value,
    show_default=True,
    help="Which trades to show.",
)
@click.pass_obj
def list_trades(obj: dict, kind: str) -> None:
    """Display trade history, newest first.

    \b
    Examples:
      propjournal trade list
      propjournal trade list --filter "Rule Broken"
    """
    state = load_journal(get_store(obj), obj)
    selected = _lookup(TradeFilter, kind)
    trades = filter_trades(state.trades, selected)

    if not trades:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade History[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Trade History", show_header=True, header_style="bold cyan")
    table.add_column("Date/Time", style="dim")
    table.add_column("Instrument", style="bold")
    table.add_column("Side", justify="center")
    table.add_column("Session")
    table.add_column("Result", justify="right")
    table.add_column("RR", justify="right")
    table.add_column("Emotion")
    table.add_column("Rules", justify="center")
    table.add_column("ID", style="dim")

    for t in trades:
        side_color = "green" if t.direction == Direction.BUY else "red"
        table.add_row(
            t.date.strftime("%Y-%m-%d %H:%M"),
            t.instrument.value,
            f"[{side_color}]{t.direction.value}[/{side_color}]",
            t.session.value,
            money(t.result_amount),
            f"{t.rr_achieved:.2f}",
            f"{t.emotion_before.value} → {t.emotion_after.value}",
            "[green]✓[/green]" if t.rule_followed else "[red]✗[/red]",
            t.id,
        )

    console.print(table)


@trade.command("delete")
@click.argument("trade_id")
@click.pass_obj
def delete_trade(obj: dict, trade_id: str) -> None:
    """Delete a trade by ID."""
    store = get_store(obj)
    state = load_journal(store, obj)

    if not any(t.id == trade_id for t in state.trades):
        fail(f"No trade with ID {trade_id}")

    store.save_state(state.delete_trade(trade_id))
    console.print(f"[green]✓[/green] Deleted trade {trade_id}")


@click.command()
@click.pass_obj
def stats(obj: dict) -> None:
    """Display headline performance figures for the trade ledger.

    \b
    Examples:
      propjournal stats
    """
    state = load_journal(get_store(obj), obj)
    initial_balance = state.settings.initial_balance
    summary = summarize_trades(state.trades, initial_balance)

    best_day = summary.best_day_date.isoformat() if summary.best_day_date else "-"
    text = (
        f"Current Balance:   {money(summary.current_balance, signed=False)} "
        f"[dim](initial ${initial_balance:,.2f})[/dim]\n"
        f"Net Profit:        {money(summary.net_profit)}\n"
        f"Win Rate:          {summary.win_rate:.1f}% "
        f"[dim]({summary.winning_trades}/{summary.total_trades} trades)[/dim]\n"
        f"Avg RR (winners):  {summary.avg_rr:.2f}\n"
        f"Max Drawdown:      [red]${summary.max_drawdown_amount:,.2f}[/red] "
        f"({summary.max_drawdown_percent:.2f}%)\n"
        f"Best Day:          {money(summary.best_day_pnl)} ({best_day}, "
        f"{summary.best_day_percent_of_total:.1f}% of total)\n"
        f"Worst Day:         {money(summary.worst_day_pnl)}"
    )

    console.print(Panel(
        text,
        title="[bold cyan]Performance[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.pass_obj
def analytics(obj: dict) -> None:
    """Break down results by instrument, session and emotion.

    \b
    Examples:
      propjournal analytics
    """
    state = load_journal(get_store(obj), obj)

    if not state.trades:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Analytics[/bold]",
            border_style="dim",
        ))
        return

    instruments = Table(title="Performance by Instrument", show_header=True, header_style="bold cyan")
    instruments.add_column("Instrument", style="bold")
    instruments.add_column("Trades", justify="right")
    instruments.add_column("Profit", justify="right")
    for row in performance_by_instrument(state.trades):
        instruments.add_row(row.instrument.value, str(row.count), money(row.profit))
    console.print(instruments)

    sessions = Table(title="Winning Profit by Session", show_header=True, header_style="bold cyan")
    sessions.add_column("Session", style="bold")
    sessions.add_column("Profit", justify="right")
    for row in profit_by_session(state.trades):
        sessions.add_row(row.session.value, money(row.profit))
    console.print(sessions)

    mistakes = rule_breaks_by_emotion(state.trades)
    if mistakes:
        emotions = Table(title="Rule Breaks by Emotion", show_header=True, header_style="bold cyan")
        emotions.add_column("Emotion", style="bold")
        emotions.add_column("Mistakes", justify="right")
        for row in mistakes:
            emotions.add_row(row.emotion.value, f"[red]{row.mistakes}[/red]")
        console.print(emotions)
    else:
        console.print("[green]No rule-broken trades.[/green]")
