"""Write generated test modules to disk.

Contains:
- get_output_path: Output file for a declared test class
- write_if_changed: Write content only when it differs from the file on disk
- generate_and_save: Render a test class and save it, reporting changes
"""

import logging
from pathlib import Path

from suitegen.dsl import TestClass
from suitegen.emitter.renderer import render_test_class
from suitegen.naming import to_snake_case

logger = logging.getLogger(__name__)


def get_output_path(test_class: TestClass) -> Path:
    """Return the path of the module generated for a test class.

    The package is taken from a dotted suite class name, otherwise from the
    module of the base class.

    Args:
        test_class: The declared test class.

    Returns:
        <tests root>/<package dirs>/test_<snake suite name>.py
    """
    package, _, suite_name = test_class.suite_test_class_name.rpartition(".")
    if not package:
        base_module = test_class.base_test_class_name.rpartition(".")[0]
        package = base_module.rpartition(".")[0]

    output_dir = Path(test_class.base_dir)
    if package:
        output_dir = output_dir.joinpath(*package.split("."))
    return output_dir / f"test_{to_snake_case(suite_name)}.py"


def write_if_changed(path: Path, content: str, dry_run: bool = False) -> bool:
    """Write content to path unless the file already holds exactly that.

    Args:
        path: Target file.
        content: New file content.
        dry_run: Only compare, never write.

    Returns:
        True if the file is missing or its content differs.
    """
    if path.exists() and path.read_text(encoding="utf-8") == content:
        logger.debug("Not changed: %s", path)
        return False

    if dry_run:
        logger.info("Would change: %s", path)
        return True

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Generated: %s", path)
    return True


def generate_and_save(test_class: TestClass, dry_run: bool = False) -> tuple[bool, str]:
    """Render a declared test class and save it.

    Args:
        test_class: The declared test class.
        dry_run: Only report whether the file would change.

    Returns:
        Tuple of (changed, output path).
    """
    path = get_output_path(test_class)
    changed = write_if_changed(path, render_test_class(test_class), dry_run)
    return changed, str(path)
