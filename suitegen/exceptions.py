"""Suitegen exception classes.

Contains all exception classes raised while building or generating a suite:
- SuitegenError: Base exception for suitegen errors
- ConfigurationError: Raised when the suite declaration is invalid
- NamingConventionError: Raised when a test-data file violates a naming rule
"""

from pathlib import Path
from typing import Optional


class SuitegenError(Exception):
    """Base exception for suitegen errors."""

    pass


class ConfigurationError(SuitegenError):
    """Raised when a suite, group, class or model declaration is invalid."""

    pass


class NamingConventionError(SuitegenError):
    """Raised when a discovered test-data file is named against convention."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path
