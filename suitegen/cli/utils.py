"""Utility functions shared by CLI commands."""

import logging

import typer

from suitegen.models import TestClassModel


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for a CLI invocation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def echo_model(model: TestClassModel, indent: int = 1) -> None:
    """Print a discovered model with its cases and nested classes.

    Args:
        model: The model to print; discovery runs here.
        indent: Nesting level used for indentation.
    """
    prefix = "  " * indent
    typer.echo(f"{prefix}{model.name} ({model.root_file.as_posix()})")
    for case in model.test_cases:
        marker = " [ignored]" if case.ignored else ""
        typer.echo(f"{prefix}  - {case.method_name}{marker}")
    for inner in model.inner_test_classes:
        if not inner.is_empty:
            echo_model(inner, indent + 1)
