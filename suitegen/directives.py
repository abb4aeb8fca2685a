"""In-text directives read from test-data files.

A directive is a comment line of the form ``// NAME: A, B`` (or ``# NAME``).
Only these directives are recognised; other comments are ignored:
- TARGET_BACKEND: the case only runs on the listed backends
- DONT_TARGET_EXACT_BACKEND: the case never runs on the listed backends
- IGNORE_BACKEND: the case is known to fail on the listed backends
- COMMON_COROUTINES_TEST: the case gets an experimental-coroutines variant
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from suitegen.backends import TargetBackend

TARGET_BACKEND = "TARGET_BACKEND"
DONT_TARGET_EXACT_BACKEND = "DONT_TARGET_EXACT_BACKEND"
IGNORE_BACKEND = "IGNORE_BACKEND"
COMMON_COROUTINES_TEST = "COMMON_COROUTINES_TEST"

KNOWN_DIRECTIVES = (TARGET_BACKEND, DONT_TARGET_EXACT_BACKEND, IGNORE_BACKEND, COMMON_COROUTINES_TEST)

_DIRECTIVE_RE = re.compile(
    r"^\s*(?://|#)\s*(?P<name>" + "|".join(KNOWN_DIRECTIVES) + r")\b\s*(?::(?P<values>.*))?$"
)


@dataclass
class Directives:
    """Directives found in one test-data file, keyed by name."""

    values: dict[str, list[str]] = field(default_factory=dict)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get_list(self, name: str) -> list[str]:
        """Return all values given for a directive, in file order."""
        return self.values.get(name, [])


def parse_directives(text: str) -> Directives:
    """Parse directives out of test-data text.

    Repeated directives accumulate their values.

    Args:
        text: Full contents of a test-data file.

    Returns:
        Directives found in the text.
    """
    directives = Directives()
    for line in text.splitlines():
        match = _DIRECTIVE_RE.match(line)
        if not match:
            continue
        values = directives.values.setdefault(match.group("name"), [])
        raw = match.group("values")
        if raw:
            values.extend(v.strip() for v in raw.split(",") if v.strip())
    return directives


def read_directives(path: Path) -> Directives:
    """Read the directives of a test-data file; directories carry none."""
    if path.is_dir():
        return Directives()
    return parse_directives(path.read_text(encoding="utf-8", errors="replace"))


def _lists_backend(backends: list[str], target: TargetBackend) -> bool:
    compatible = target.compatible_with
    return target.value in backends or (compatible is not None and compatible.value in backends)


def is_compatible_target(target: TargetBackend, directives: Directives) -> bool:
    """Check whether a case should be generated for the target backend.

    Args:
        target: Backend configured on the test class model.
        directives: Directives of the case's file.

    Returns:
        False if the case is restricted to other backends or excludes this one.
    """
    if target == TargetBackend.ANY:
        return True
    if target.value in directives.get_list(DONT_TARGET_EXACT_BACKEND):
        return False
    backends = directives.get_list(TARGET_BACKEND)
    if not backends:
        return True
    return _lists_backend(backends, target)


def is_ignored_target(target: TargetBackend, directives: Directives) -> bool:
    """Check whether the case is marked as failing on the target backend."""
    ignored = directives.get_list(IGNORE_BACKEND)
    if TargetBackend.ANY.value in ignored:
        return True
    return target.value in ignored
