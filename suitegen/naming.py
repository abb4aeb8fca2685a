"""Name derivation helpers.

Contains:
- get_default_suite_test_class_name: Derive the generated class name from its base
- escape_for_identifier: Turn arbitrary text into a valid Python identifier
- file_name_to_identifier: Class name for a test-data file or directory
- case_method_name: Generated method name for a test case
- capitalize_first: Upper-case only the first character
- to_snake_case: CamelCase to snake_case for module names
"""

import re
from pathlib import Path

from suitegen.exceptions import ConfigurationError

ABSTRACT_PREFIX = "Abstract"
GENERATED_SUFFIX = "Generated"

_NON_IDENTIFIER_RE = re.compile(r"\W")


def get_default_suite_test_class_name(base_test_class_name: str) -> str:
    """Derive the generated suite class name from the base class name.

    Args:
        base_test_class_name: Simple name of the hand-written base class.

    Returns:
        The base name without its "Abstract" prefix, suffixed with "Generated".

    Raises:
        ConfigurationError: If the base name does not start with "Abstract".
    """
    if not base_test_class_name.startswith(ABSTRACT_PREFIX):
        raise ConfigurationError(
            f'Doesn\'t start with "{ABSTRACT_PREFIX}": {base_test_class_name}'
        )
    return base_test_class_name[len(ABSTRACT_PREFIX):] + GENERATED_SUFFIX


def capitalize_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def escape_for_identifier(name: str) -> str:
    """Replace every character that cannot appear in an identifier with '_'.

    Args:
        name: Raw name, usually taken from the filesystem.

    Returns:
        A valid Python identifier.
    """
    escaped = _NON_IDENTIFIER_RE.sub("_", name)
    if not escaped or escaped[0].isdigit():
        escaped = "_" + escaped
    return escaped


def file_name_to_identifier(path: Path) -> str:
    """Return the class name used for a test-data file or directory."""
    return escape_for_identifier(capitalize_first(path.name))


def case_method_name(case_name: str) -> str:
    """Return the generated method name for a test case."""
    return "test_" + escape_for_identifier(case_name)


def to_snake_case(name: str) -> str:
    """Convert a CamelCase class name to snake_case.

    Args:
        name: Class name such as "DiagnosticsTestGenerated".

    Returns:
        The snake_case form, e.g. "diagnostics_test_generated".
    """
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.lower()
