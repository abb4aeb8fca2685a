"""Declarative builders for test group suites.

A suite is declared once by calling builder methods, usually from
configuration callbacks::

    def configure(suite):
        def diagnostics(group):
            group.test_class(
                "tests.checkers.AbstractDiagnosticsTest",
                init=lambda cls: cls.model("diagnostics/tests"),
            )

        suite.test_group("tests", "testData", init=diagnostics)

    suite = test_group_suite(configure)

Every builder method also returns the object it created, so the same suite
can be written without callbacks. Configuration errors are raised while the
suite is built; the filesystem is only read when models are discovered.
"""

from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from suitegen.backends import TargetBackend
from suitegen.exceptions import ConfigurationError
from suitegen.models import (
    AnnotationModel,
    SimpleTestClassModel,
    SingleClassTestModel,
    TestClassModel,
)
from suitegen.naming import file_name_to_identifier, get_default_suite_test_class_name
from suitegen.patterns import DEFAULT_EXTENSION, compile_file_pattern

RUN_TEST_METHOD_NAME = "run_test"
DEFAULT_TEST_METHOD = "do_test"


def _class_name_of(base: Union[str, type]) -> str:
    if isinstance(base, type):
        return f"{base.__module__}.{base.__qualname__}"
    return base


class TestClass:
    """One generated test class and the models that populate it."""

    __test__ = False

    def __init__(
        self,
        group: "TestGroup",
        base_test_class_name: str,
        suite_test_class_name: str,
        use_pytest: bool,
        annotations: Sequence[AnnotationModel],
    ):
        self._group = group
        self.base_test_class_name = base_test_class_name
        self.suite_test_class_name = suite_test_class_name
        self.use_pytest = use_pytest
        self.annotations = list(annotations)
        self.test_models: list[TestClassModel] = []

    @property
    def base_dir(self) -> str:
        """Output root the generated file is written under."""
        return self._group.tests_root

    @property
    def test_data_root(self) -> str:
        return self._group.test_data_root

    def model(
        self,
        relative_root_path: str,
        recursive: bool = True,
        exclude_parent_dirs: bool = False,
        extension: Optional[str] = DEFAULT_EXTENSION,
        pattern: Optional[str] = None,
        excluded_pattern: Optional[str] = None,
        test_method: str = DEFAULT_TEST_METHOD,
        single_class: bool = False,
        test_class_name: Optional[str] = None,
        target_backend: TargetBackend = TargetBackend.ANY,
        exclude_dirs: Optional[Sequence[str]] = None,
        filename_starts_lower_case: Optional[bool] = None,
        skip_ignored: bool = False,
        deep: Optional[int] = None,
        skip_tests_for_experimental_coroutines: bool = False,
    ) -> TestClassModel:
        """Register one test class model rooted under the group's test data.

        Args:
            relative_root_path: Root of the model, relative to the test-data root.
            recursive: Turn subdirectories into nested classes.
            exclude_parent_dirs: Drop matched directories that have subdirectories.
            extension: Extension of test files; None matches directories.
            pattern: Inclusion pattern overriding the extension default.
            excluded_pattern: Names matching this pattern are not cases.
            test_method: Method of the base class each case runs.
            single_class: Flatten the whole subtree into a single class.
            test_class_name: Explicit class name instead of the root's name.
            target_backend: Backend the tests run on; filters by directives.
            exclude_dirs: Directories (relative paths) left out entirely.
            filename_starts_lower_case: Assert the case of each name's first letter.
            skip_ignored: Leave out cases ignored on the target backend.
            deep: How many directory levels below the root are followed.
            skip_tests_for_experimental_coroutines: Skip experimental variants.

        Returns:
            The registered model.

        Raises:
            ConfigurationError: On invalid patterns or unsupported combinations.
        """
        root_file = Path(self.test_data_root) / relative_root_path
        file_pattern = compile_file_pattern(extension, pattern, excluded_pattern)
        class_name = test_class_name or file_name_to_identifier(root_file)
        exclude_dirs = list(exclude_dirs or [])
        group = self._group

        if single_class:
            if exclude_dirs:
                raise ConfigurationError("exclude_dirs is unsupported for SingleClassTestModel yet")
            model: TestClassModel = SingleClassTestModel(
                root_file,
                file_pattern,
                filename_starts_lower_case,
                test_method,
                class_name,
                target_backend,
                skip_ignored,
                group.test_runner_method_name,
                group.additional_runner_arguments,
                self.annotations,
                deep=deep,
            )
        else:
            model = SimpleTestClassModel(
                root_file,
                recursive,
                exclude_parent_dirs,
                file_pattern,
                filename_starts_lower_case,
                test_method,
                class_name,
                target_backend,
                exclude_dirs,
                skip_ignored,
                group.test_runner_method_name,
                group.additional_runner_arguments,
                deep,
                self.annotations,
                skip_tests_for_experimental_coroutines,
            )
        self.test_models.append(model)
        return model


class TestGroup:
    """Test classes sharing an output root and a test-data root."""

    __test__ = False

    def __init__(
        self,
        tests_root: str,
        test_data_root: str,
        test_runner_method_name: str = RUN_TEST_METHOD_NAME,
        additional_runner_arguments: Optional[Sequence[str]] = None,
        annotations: Optional[Sequence[AnnotationModel]] = None,
    ):
        self.tests_root = tests_root
        self.test_data_root = test_data_root
        self.test_runner_method_name = test_runner_method_name
        self.additional_runner_arguments = list(additional_runner_arguments or [])
        self.annotations = list(annotations or [])
        self._test_classes: list[TestClass] = []

    @property
    def test_classes(self) -> list[TestClass]:
        return list(self._test_classes)

    def test_class(
        self,
        base_test_class: Union[str, type],
        suite_test_class_name: Optional[str] = None,
        use_pytest: bool = False,
        annotations: Optional[Sequence[AnnotationModel]] = None,
        init: Optional[Callable[[TestClass], None]] = None,
    ) -> TestClass:
        """Append a test class and run its configuration callback.

        Args:
            base_test_class: Fully qualified base class name, or the class itself.
            suite_test_class_name: Generated class name; derived from the base
                name by default.
            use_pytest: Emit pytest markers instead of unittest decorators.
            annotations: Decorators for the generated classes; the group's
                annotations are used when omitted.
            init: Callback declaring the class's models.

        Returns:
            The new TestClass.

        Raises:
            ConfigurationError: If the default name cannot be derived.
        """
        base_test_class_name = _class_name_of(base_test_class)
        if suite_test_class_name is None:
            simple_name = base_test_class_name.rpartition(".")[2]
            suite_test_class_name = get_default_suite_test_class_name(simple_name)
        if annotations is None:
            annotations = self.annotations

        test_class = TestClass(self, base_test_class_name, suite_test_class_name, use_pytest, annotations)
        if init is not None:
            init(test_class)
        self._test_classes.append(test_class)
        return test_class


class TestGroupSuite:
    """Top-level, ordered collection of test groups."""

    __test__ = False

    def __init__(self):
        self._test_groups: list[TestGroup] = []

    @property
    def test_groups(self) -> list[TestGroup]:
        return list(self._test_groups)

    def test_group(
        self,
        tests_root: str,
        test_data_root: str,
        test_runner_method_name: str = RUN_TEST_METHOD_NAME,
        additional_runner_arguments: Optional[Sequence[str]] = None,
        annotations: Optional[Sequence[AnnotationModel]] = None,
        init: Optional[Callable[[TestGroup], None]] = None,
    ) -> TestGroup:
        """Append a test group and run its configuration callback."""
        group = TestGroup(
            tests_root,
            test_data_root,
            test_runner_method_name,
            additional_runner_arguments,
            annotations,
        )
        if init is not None:
            init(group)
        self._test_groups.append(group)
        return group


def test_group_suite(init: Callable[[TestGroupSuite], None]) -> TestGroupSuite:
    """Build a suite by running the configuration callback on an empty one."""
    suite = TestGroupSuite()
    init(suite)
    return suite


# Builder entry point, not a test
test_group_suite.__test__ = False
