"""CLI command listing the test classes and cases a suite would generate."""

from pathlib import Path

import typer

from suitegen.config import DEFAULT_CONFIG_FILE, load_suite
from suitegen.emitter import get_output_path
from suitegen.exceptions import SuitegenError
from suitegen.cli.utils import echo_model


def show_command(
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE),
        "--config",
        "-c",
        help="Suite configuration file",
    ),
) -> None:
    """Show the discovered test classes and cases without writing anything."""
    try:
        suite = load_suite(config)
        for group in suite.test_groups:
            for test_class in group.test_classes:
                typer.echo(f"{test_class.suite_test_class_name} -> {get_output_path(test_class)}")
                for model in test_class.test_models:
                    echo_model(model)
    except SuitegenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
