"""CLI command generating (or checking) the declared test suite."""

from pathlib import Path
from typing import Optional

import typer

from suitegen.config import DEFAULT_CONFIG_FILE, load_suite
from suitegen.exceptions import SuitegenError
from suitegen.generator import run_generation
from suitegen.inconsistency import has_dry_run_arg
from suitegen.cli.utils import setup_logging


def generate_command(
    args: Optional[list[str]] = typer.Argument(
        None,
        help="Generation arguments; pass 'dryRun' to report changes without writing",
    ),
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE),
        "--config",
        "-c",
        help="Suite configuration file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug output",
    ),
) -> None:
    """Generate test classes for every group declared in the configuration."""
    setup_logging(verbose)
    dry_run = has_dry_run_arg(args or [])

    try:
        suite = load_suite(config)
        checker = run_generation(suite, dry_run)
    except SuitegenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not dry_run:
        typer.echo("Generation finished.")
        return

    affected_files = checker.affected_files
    if not affected_files:
        typer.echo("Generated tests are up to date.")
        return

    typer.echo("Generated tests are inconsistent with the test data:", err=True)
    for path in affected_files:
        typer.echo(f"  - {path}", err=True)
    typer.echo("Run 'suitegen generate' to regenerate them.", err=True)
    raise typer.Exit(1)
