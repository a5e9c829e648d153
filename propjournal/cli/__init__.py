"""CLI commands for PropJournal.

This package provides the command-line interface for recording
ledgers and reviewing evaluation progress.
"""

from propjournal.cli.main import cli, main

__all__ = ["cli", "main"]
