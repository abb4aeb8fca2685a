"""Main CLI callback handling global options."""

from typing import Optional

import typer

from suitegen import __version__


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"suitegen {__version__}")
        raise typer.Exit()


def main_command(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """suitegen: generate test classes from test-data directories."""
