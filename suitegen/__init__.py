"""Declarative test-suite generator driven by test-data directories."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("suitegen")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
