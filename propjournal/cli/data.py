"""Setup and snapshot commands for PropJournal CLI.

Handles config creation and JSON snapshot export/import.
"""

from pathlib import Path

import click
from rich.panel import Panel

from propjournal.cli.common import console, fail, get_store, load_journal
from propjournal.config import DEFAULT_CONFIG_PATH, create_template_config
from propjournal.db.store import export_snapshot, import_snapshot


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
@click.pass_obj
def init(obj: dict, force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      propjournal init
      propjournal --config ./journal.toml init
    """
    config_path = obj.get("config_path") or DEFAULT_CONFIG_PATH

    if Path(config_path).exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] {config_path}\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = create_template_config(config_path)
    console.print(Panel(
        f"[green]Config created:[/green] {path}\n\n"
        "Edit the [cyan]\\[rules][/cyan] and [cyan]\\[account][/cyan] sections to match your evaluation.",
        title="[bold green]Config[/bold green]",
        border_style="green",
    ))


@click.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_journal(obj: dict, path: Path) -> None:
    """Export the journal to a JSON snapshot.

    \b
    Examples:
      propjournal export backup.json
    """
    state = load_journal(get_store(obj), obj)
    export_snapshot(state, path)
    console.print(
        f"[green]✓[/green] Exported {len(state.entries)} day entries and "
        f"{len(state.trades)} trades to {path}"
    )


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", is_flag=True, default=False, help="Replace the journal without asking.")
@click.pass_obj
def import_journal(obj: dict, path: Path, yes: bool) -> None:
    """Replace the journal with a JSON snapshot.

    \b
    Examples:
      propjournal import backup.json
    """
    try:
        state = import_snapshot(path)
    except ValueError as e:
        fail(str(e), title="Import Failed")

    if not yes:
        click.confirm(
            f"Replace the current journal with {len(state.entries)} day entries "
            f"and {len(state.trades)} trades?",
            abort=True,
        )

    get_store(obj).save_state(state)
    console.print(f"[green]✓[/green] Imported journal from {path}")
