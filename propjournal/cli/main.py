"""Main CLI entry point for PropJournal.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

from pathlib import Path
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    "init": "propjournal.cli.data",
    "export": "propjournal.cli.data",
    "import": "propjournal.cli.data",
    # Daily P&L ledger
    "day": "propjournal.cli.days",
    "consistency": "propjournal.cli.days",
    # Trade ledger
    "trade": "propjournal.cli.trades",
    "stats": "propjournal.cli.trades",
    "analytics": "propjournal.cli.trades",
    # Prop-firm evaluation
    "rules": "propjournal.cli.propfirm",
    "account": "propjournal.cli.propfirm",
    "evaluate": "propjournal.cli.propfirm",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="propjournal")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.config/propjournal/config.toml).",
)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="PROPJOURNAL_DB",
    default=None,
    help="Journal database file.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], db_path: Optional[Path], verbose: bool) -> None:
    """PropJournal - trading journal and prop-firm evaluation tracker.

    Record daily P&L or individual trades and check them against
    profit target, daily loss, drawdown and consistency rules.

    \b
    Quick Start:
      propjournal init                 # Create a config file
      propjournal trade add -r 250     # Log a trade
      propjournal evaluate             # Check evaluation status
    """
    from propjournal.config import get_db_path, load_config, setup_logging

    config = load_config(config_path)
    level = "DEBUG" if verbose else config.get("logging", {}).get("level", "WARNING")
    setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["config"] = config
    ctx.obj["db_path"] = db_path or get_db_path(config)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
