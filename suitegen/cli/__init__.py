"""CLI entry point for suitegen.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from suitegen.cli.generate import generate_command
from suitegen.cli.main import main_command
from suitegen.cli.show import show_command

# Main application
app = typer.Typer(
    name="suitegen",
    help="suitegen: generate test classes from test-data directories",
    add_completion=False,
)

# Add individual commands
app.command("generate")(generate_command)
app.command("show")(show_command)

# Global options (--version)
app.callback()(main_command)


__all__ = [
    "app",
    "generate_command",
    "main_command",
    "show_command",
]
