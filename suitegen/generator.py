"""Generation driver: emit every declared test class of a suite.

Contains:
- Emitter: Signature of the callable saving one test class
- run_generation: Walk a built suite and track changed files
- generate_test_group_suite: Build a suite from a callback and generate it
"""

import logging
from typing import Callable, Optional, Sequence, Union

from suitegen.dsl import TestClass, TestGroupSuite, test_group_suite
from suitegen.emitter import generate_and_save
from suitegen.inconsistency import (
    InconsistencyChecker,
    has_dry_run_arg,
    inconsistency_checker,
)

logger = logging.getLogger(__name__)

Emitter = Callable[[TestClass, bool], tuple[bool, str]]


def run_generation(
    suite: TestGroupSuite,
    dry_run: bool = False,
    checker: Optional[InconsistencyChecker] = None,
    emit: Emitter = generate_and_save,
) -> InconsistencyChecker:
    """Emit every test class of the suite in declaration order.

    Emitter failures propagate to the caller unchanged.

    Args:
        suite: The built suite.
        dry_run: Compare generated output against disk without writing.
        checker: Receives changed paths; chosen from dry_run when omitted.
        emit: Callable rendering and saving one test class.

    Returns:
        The checker holding the changed paths.
    """
    if checker is None:
        checker = inconsistency_checker(dry_run)

    for test_group in suite.test_groups:
        for test_class in test_group.test_classes:
            changed, test_source_file_path = emit(test_class, dry_run)
            if changed:
                checker.add(test_source_file_path)

    logger.debug("Generation finished, %d inconsistent file(s)", len(checker.affected_files))
    return checker


def generate_test_group_suite(
    args_or_dry_run: Union[Sequence[str], bool],
    init: Callable[[TestGroupSuite], None],
) -> InconsistencyChecker:
    """Build a suite and generate its test classes.

    Meant to be called from a script's entry point::

        if __name__ == "__main__":
            generate_test_group_suite(sys.argv[1:], configure)

    Args:
        args_or_dry_run: Process arguments (dry run when "dryRun" is among
            them) or the dry-run flag itself.
        init: Callback declaring the suite.

    Returns:
        The checker holding the changed paths.
    """
    if isinstance(args_or_dry_run, bool):
        dry_run = args_or_dry_run
    else:
        dry_run = has_dry_run_arg(args_or_dry_run)
    return run_generation(test_group_suite(init), dry_run)

