"""Prop-firm evaluation commands for PropJournal CLI.

Handles the evaluation rules, account settings and the evaluation report.
"""

from typing import Optional

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from propjournal.analytics import evaluate as evaluate_trades
from propjournal.cli.common import console, fail, get_store, load_journal, money, status
from propjournal.models import Verdict

_VERDICT_STYLE = {
    Verdict.PASSED: ("green", "PASSED"),
    Verdict.VIOLATED: ("red", "VIOLATED"),
    Verdict.IN_PROGRESS: ("blue", "IN PROGRESS"),
}


@click.group()
def rules() -> None:
    """Show or change the prop-firm evaluation rules."""


@rules.command("show")
@click.pass_obj
def show_rules(obj: dict) -> None:
    """Display the current rules and their dollar limits."""
    state = load_journal(get_store(obj), obj)
    thresholds = state.thresholds

    table = Table(title="Evaluation Rules", show_header=True, header_style="bold cyan")
    table.add_column("Rule", style="bold")
    table.add_column("Percent", justify="right")
    table.add_column("Limit", justify="right")

    table.add_row("Initial Balance", "-", f"${thresholds.initial_balance:,.2f}")
    table.add_row("Profit Target", f"{thresholds.profit_target_percent:g}%", f"${thresholds.target_dollars:,.2f}")
    table.add_row("Max Daily Loss", f"{thresholds.max_daily_loss_percent:g}%", f"${thresholds.max_daily_loss_dollars:,.2f}")
    table.add_row("Max Drawdown", f"{thresholds.max_overall_drawdown_percent:g}%", f"${thresholds.max_drawdown_dollars:,.2f}")
    table.add_row("Consistency (best day)", f"{thresholds.consistency_rule_percent:g}%", "-")

    console.print(table)


@rules.command("set")
@click.option("--target", "profit_target_percent", type=float, default=None, help="Profit target (% of balance).")
@click.option("--daily-loss", "max_daily_loss_percent", type=float, default=None, help="Max daily loss (% of balance).")
@click.option("--drawdown", "max_overall_drawdown_percent", type=float, default=None, help="Max drawdown (% of balance).")
@click.option("--consistency", "consistency_rule_percent", type=float, default=None, help="Max best-day share of profit (%).")
@click.option("--balance", "initial_balance", type=float, default=None, help="Initial account balance.")
@click.pass_obj
def set_rules(obj: dict, initial_balance: Optional[float], **percents: Optional[float]) -> None:
    """Change one or more evaluation rules.

    \b
    Examples:
      propjournal rules set --target 8 --drawdown 6
      propjournal rules set --balance 100000
    """
    patch = {key: value for key, value in percents.items() if value is not None}
    if not patch and initial_balance is None:
        raise click.UsageError("Nothing to change; pass at least one option.")

    store = get_store(obj)
    state = load_journal(store, obj)
    try:
        if patch:
            state = state.update_rules(patch)
        if initial_balance is not None:
            state = state.update_settings({"initial_balance": initial_balance})
    except (ValueError, ValidationError) as e:
        fail(f"Invalid rules:\n\n{e}")

    store.save_state(state)
    console.print("[green]✓[/green] Rules updated")


@click.group()
def account() -> None:
    """Settings of the daily P&L consistency tracker."""


@account.command("set")
@click.argument("account_size", type=float)
@click.option("--target", "profit_target", type=float, default=None, help="Profit target in dollars.")
@click.option("--consistency", "rule_percent", type=float, default=None, help="Consistency rule (%).")
@click.pass_obj
def set_account(obj: dict, account_size: float, profit_target: Optional[float], rule_percent: Optional[float]) -> None:
    """Set account size, profit target and consistency rule.

    \b
    Examples:
      propjournal account set 50000 --target 2500 --consistency 40
    """
    store = get_store(obj)
    try:
        state = load_journal(store, obj).update_account(account_size, profit_target, rule_percent)
    except ValidationError as e:
        fail(f"Invalid account settings:\n\n{e}")

    store.save_state(state)
    console.print(
        f"[green]✓[/green] Account ${state.account_size:,.2f}, target ${state.profit_target:,.2f}, "
        f"consistency {state.consistency_rule_percent:g}%"
    )


@click.command()
@click.pass_obj
def evaluate(obj: dict) -> None:
    """Evaluate the trade ledger against the prop-firm rules.

    \b
    Examples:
      propjournal evaluate
    """
    state = load_journal(get_store(obj), obj)
    result = evaluate_trades(state.trades, state.thresholds)
    color, label = _VERDICT_STYLE[result.verdict]

    if result.misconfigured:
        console.print(
            "[yellow]Initial balance is not positive; rules cannot be checked. "
            "Run [cyan]propjournal rules set --balance N[/cyan].[/yellow]"
        )

    table = Table(title="Evaluation Progress", show_header=True, header_style="bold cyan")
    table.add_column("Rule", style="bold")
    table.add_column("Current", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("", justify="center")

    progress = result.progress
    table.add_row(
        "Profit Target",
        money(result.net_profit),
        f"${progress['profit_target'].limit:,.2f}",
        f"{progress['profit_target'].percent:.1f}%",
        status(result.target_met),
    )
    table.add_row(
        "Max Overall Drawdown",
        f"${result.max_drawdown_amount:,.2f}",
        f"${progress['max_drawdown'].limit:,.2f}",
        f"{progress['max_drawdown'].percent:.1f}%",
        status(not result.drawdown_failed),
    )
    table.add_row(
        "Max Daily Loss (Worst Day)",
        f"${abs(result.worst_day_pnl):,.2f}",
        f"${progress['max_daily_loss'].limit:,.2f}",
        f"{progress['max_daily_loss'].percent:.1f}%",
        status(not result.daily_loss_failed),
    )
    table.add_row(
        "Consistency (Best Day % of Total)",
        f"{result.best_day_percent_of_total:.1f}%",
        f"{progress['consistency'].limit:g}%",
        f"{progress['consistency'].percent:.1f}%",
        status(not result.consistency_failed),
    )
    console.print(table)

    text = f"[bold {color}]{label}[/bold {color}]"
    if result.consistency_shortfall > 0:
        text += (
            f"\n[dim]Best day {money(result.best_day_pnl)} needs "
            f"${result.consistency_shortfall:,.2f} more total profit to meet the consistency rule.[/dim]"
        )
    console.print(Panel(text, title="[bold]Status[/bold]", border_style=color))
