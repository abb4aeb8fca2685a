"""File name patterns deciding what is a test case.

Contains:
- DEFAULT_EXTENSION: Extension matched when a model declares none
- default_pattern: Inclusion pattern for an extension (or directory mode)
- compile_regex: Compile a regex, turning failures into ConfigurationError
- FilePattern: Compiled inclusion/exclusion pair
- compile_file_pattern: Build a FilePattern from model options
"""

import re
from dataclasses import dataclass
from typing import Optional

from suitegen.exceptions import ConfigurationError

DEFAULT_EXTENSION = "kt"

# Directory mode: a full name containing no dot
DIRECTORY_PATTERN = r"^([^\.]+)$"


def default_pattern(extension: Optional[str]) -> str:
    """Return the default inclusion pattern.

    Args:
        extension: File extension without the dot, or None to match directories.

    Returns:
        Regular expression with one capturing group around the case name.
    """
    if extension is None:
        return DIRECTORY_PATTERN
    return rf"^(.+)\.{extension}$"


def compile_regex(pattern: str) -> re.Pattern:
    """Compile a regular expression.

    Raises:
        ConfigurationError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid regular expression {pattern!r}: {e}")


@dataclass(frozen=True)
class FilePattern:
    """Compiled inclusion pattern plus optional exclusion pattern."""

    pattern: re.Pattern
    excluded_pattern: Optional[re.Pattern] = None

    def matches(self, name: str) -> bool:
        """Check whether a directory entry name is a test case."""
        if not self.pattern.fullmatch(name):
            return False
        if self.excluded_pattern is not None and self.excluded_pattern.fullmatch(name):
            return False
        return True

    def extract_name(self, name: str) -> str:
        """Extract the case name from a matching entry name.

        The first capturing group is used; a pattern without groups yields
        the entry name itself.

        Raises:
            ConfigurationError: If the name does not match or the group is empty.
        """
        match = self.pattern.fullmatch(name)
        if match is None:
            raise ConfigurationError(f"{name!r} does not match {self.pattern.pattern!r}")
        if self.pattern.groups == 0:
            return name
        extracted = match.group(1)
        if not extracted:
            raise ConfigurationError(
                f"Pattern {self.pattern.pattern!r} captured no name from {name!r}"
            )
        return extracted


def compile_file_pattern(
    extension: Optional[str] = DEFAULT_EXTENSION,
    pattern: Optional[str] = None,
    excluded_pattern: Optional[str] = None,
) -> FilePattern:
    """Compile the inclusion and exclusion patterns of a model.

    Args:
        extension: Extension used for the default pattern; None means directories.
        pattern: Explicit inclusion pattern, overrides the extension default.
        excluded_pattern: Optional pattern of names to leave out.

    Returns:
        The compiled FilePattern.

    Raises:
        ConfigurationError: If either pattern is invalid.
    """
    if pattern is None:
        pattern = default_pattern(extension)
    compiled_excluded = compile_regex(excluded_pattern) if excluded_pattern is not None else None
    return FilePattern(compile_regex(pattern), compiled_excluded)
