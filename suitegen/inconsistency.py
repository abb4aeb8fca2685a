"""Tracking of generated files whose content differs from disk.

Contains:
- InconsistencyChecker: Interface receiving changed file paths
- RecordingInconsistencyChecker: Records every changed path (dry run)
- EmptyInconsistencyChecker: Ignores every path (normal generation)
- has_dry_run_arg: Detect the "dryRun" token in process arguments
- inconsistency_checker: Pick the checker variant for a run
"""

from abc import ABC, abstractmethod
from typing import Sequence

DRY_RUN_ARG = "dryRun"


class InconsistencyChecker(ABC):
    """Receives the paths of generated files that changed during a run."""

    @abstractmethod
    def add(self, affected_file: str) -> None:
        """Record one changed file."""

    @property
    @abstractmethod
    def affected_files(self) -> list[str]:
        """Changed files, in the order they were added."""


class RecordingInconsistencyChecker(InconsistencyChecker):
    """Checker that keeps every affected file."""

    def __init__(self):
        self._files: list[str] = []

    def add(self, affected_file: str) -> None:
        self._files.append(affected_file)

    @property
    def affected_files(self) -> list[str]:
        return list(self._files)


class EmptyInconsistencyChecker(InconsistencyChecker):
    """Checker that discards everything and always reports nothing."""

    def add(self, affected_file: str) -> None:
        pass

    @property
    def affected_files(self) -> list[str]:
        return []


def has_dry_run_arg(args: Sequence[str]) -> bool:
    """Check whether the literal "dryRun" token is among the arguments."""
    return any(arg == DRY_RUN_ARG for arg in args)


def inconsistency_checker(dry_run: bool) -> InconsistencyChecker:
    """Create the checker for a generation run.

    Args:
        dry_run: Whether the run only reports what would change.

    Returns:
        A recording checker for dry runs, an empty one otherwise.
    """
    if dry_run:
        return RecordingInconsistencyChecker()
    return EmptyInconsistencyChecker()
