"""Test case and test class models built by directory discovery.

Contains:
- AnnotationModel: Decorator attached to generated classes
- TestCaseModel: One resolved test input, rendered as one test method
- TestClassModel: Base for models describing one generated test class
- SimpleTestClassModel: Mirrors the directory structure with nested classes
- SingleClassTestModel: Flattens a whole directory subtree into one class

Discovery is lazy: nothing touches the filesystem until the cases or nested
classes of a model are first requested.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Callable, Optional

from suitegen.backends import TargetBackend
from suitegen.directives import (
    COMMON_COROUTINES_TEST,
    Directives,
    is_compatible_target,
    is_ignored_target,
    read_directives,
)
from suitegen.exceptions import NamingConventionError
from suitegen.naming import capitalize_first, case_method_name, file_name_to_identifier
from suitegen.patterns import FilePattern

logger = logging.getLogger(__name__)

EXPERIMENTAL_COROUTINES_ARGUMENT = 'coroutines_package="kotlin.coroutines.experimental"'

DirectiveReader = Callable[[Path], Directives]


@dataclass(frozen=True)
class AnnotationModel:
    """A decorator applied to a generated test class.

    Attributes:
        name: Dotted decorator expression, e.g. "pytest.mark.slow".
        arguments: Source expressions passed as call arguments.
        module: Module to import so that the decorator name resolves.
    """

    name: str
    arguments: tuple[str, ...] = ()
    module: Optional[str] = None

    def render(self) -> str:
        if not self.arguments:
            return f"@{self.name}"
        return f"@{self.name}({', '.join(self.arguments)})"


@dataclass
class TestCaseModel:
    """One file or directory resolved to a single generated test method."""

    __test__ = False

    name: str
    path: Path
    root: Path
    ignored: bool = False
    extra_arguments: list[str] = field(default_factory=list)

    @property
    def method_name(self) -> str:
        return case_method_name(self.name)

    @property
    def is_directory(self) -> bool:
        return self.path.is_dir()

    @property
    def relative_path(self) -> str:
        """Path of the case relative to its model root, in POSIX form."""
        if self.path == self.root:
            return self.path.name
        return self.path.relative_to(self.root).as_posix()


def _has_files_inside(directory: Path) -> bool:
    return any(p.is_file() for p in directory.rglob("*"))


def _has_subdirectories(directory: Path) -> bool:
    return any(p.is_dir() for p in directory.iterdir())


def _list_children(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


class TestClassModel(ABC):
    """Specification of one generated test class discovered under a root path."""

    __test__ = False

    def __init__(
        self,
        root_file: Path,
        file_pattern: FilePattern,
        filename_starts_lower_case: Optional[bool],
        test_method: str,
        name: str,
        target_backend: TargetBackend,
        skip_ignored: bool,
        test_runner_method_name: str,
        additional_runner_arguments: list[str],
        annotations: list[AnnotationModel],
        directive_reader: DirectiveReader = read_directives,
    ):
        self.root_file = root_file
        self.file_pattern = file_pattern
        self.filename_starts_lower_case = filename_starts_lower_case
        self.test_method = test_method
        self.name = name
        self.target_backend = target_backend
        self.skip_ignored = skip_ignored
        self.test_runner_method_name = test_runner_method_name
        self.additional_runner_arguments = list(additional_runner_arguments)
        self.annotations = list(annotations)
        self._read_directives = directive_reader

    @property
    @abstractmethod
    def test_cases(self) -> list[TestCaseModel]:
        """Cases that become methods of this class."""

    @property
    def inner_test_classes(self) -> list["TestClassModel"]:
        """Nested classes; flat models have none."""
        return []

    @property
    def recursive(self) -> bool:
        return False

    @property
    def exclude_dirs(self) -> list[str]:
        return []

    @property
    def is_empty(self) -> bool:
        """True when neither this class nor any nested class has a case."""
        return not self.test_cases and all(inner.is_empty for inner in self.inner_test_classes)

    def test_case_names(self) -> list[str]:
        """Names of the cases contained directly in this class."""
        return [case.name for case in self.test_cases]

    def _check_filename_case(self, path: Path, extracted_name: str) -> None:
        expected = self.filename_starts_lower_case
        if expected is None:
            return
        first = extracted_name[0]
        if expected and not first.islower():
            raise NamingConventionError(
                f"Invalid file name '{path}', file name should start with lower-case letter",
                path,
            )
        if not expected and not first.isupper():
            raise NamingConventionError(
                f"Invalid file name '{path}', file name should start with upper-case letter",
                path,
            )

    def _cases_from_file(self, path: Path, case_name: str) -> list[TestCaseModel]:
        """Resolve one matching entry into zero or more cases.

        Entries meant for other backends are skipped silently; entries
        ignored on this backend are dropped only when skip_ignored is set.
        """
        directives = self._read_directives(path)
        if not is_compatible_target(self.target_backend, directives):
            logger.debug("Skipping %s: not targeted at %s", path, self.target_backend.value)
            return []
        ignored = is_ignored_target(self.target_backend, directives)
        if ignored and self.skip_ignored:
            logger.debug("Skipping %s: ignored on %s", path, self.target_backend.value)
            return []

        cases = [TestCaseModel(case_name, path, self.root_file, ignored)]
        if COMMON_COROUTINES_TEST in directives and self._generates_experimental_coroutines:
            cases.append(
                TestCaseModel(
                    f"{case_name}_experimental",
                    path,
                    self.root_file,
                    ignored,
                    [EXPERIMENTAL_COROUTINES_ARGUMENT],
                )
            )
        return cases

    @property
    def _generates_experimental_coroutines(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, root_file={str(self.root_file)!r})"


class SimpleTestClassModel(TestClassModel):
    """Model mirroring the directory structure under its root.

    Matching entries directly under the root become cases; when recursive,
    every child directory with files inside becomes a nested class.
    """

    def __init__(
        self,
        root_file: Path,
        recursive: bool,
        exclude_parent_dirs: bool,
        file_pattern: FilePattern,
        filename_starts_lower_case: Optional[bool],
        test_method: str,
        name: str,
        target_backend: TargetBackend,
        exclude_dirs: list[str],
        skip_ignored: bool,
        test_runner_method_name: str,
        additional_runner_arguments: list[str],
        deep: Optional[int],
        annotations: list[AnnotationModel],
        skip_tests_for_experimental_coroutines: bool = False,
        directive_reader: DirectiveReader = read_directives,
    ):
        super().__init__(
            root_file,
            file_pattern,
            filename_starts_lower_case,
            test_method,
            name,
            target_backend,
            skip_ignored,
            test_runner_method_name,
            additional_runner_arguments,
            annotations,
            directive_reader,
        )
        self._recursive = recursive
        self.exclude_parent_dirs = exclude_parent_dirs
        self._exclude_dirs = list(exclude_dirs)
        self.deep = deep
        self.skip_tests_for_experimental_coroutines = skip_tests_for_experimental_coroutines

    @property
    def recursive(self) -> bool:
        return self._recursive

    @property
    def exclude_dirs(self) -> list[str]:
        return self._exclude_dirs

    @property
    def _generates_experimental_coroutines(self) -> bool:
        return not self.skip_tests_for_experimental_coroutines

    def _is_excluded_dir(self, path: Path) -> bool:
        return path.name in self._exclude_dirs and path.is_dir()

    def _nested_exclude_dirs(self, dir_name: str) -> list[str]:
        # "a/b" excludes "b" inside the nested class for "a"
        prefix = dir_name + "/"
        return [d[len(prefix):] for d in self._exclude_dirs if d.startswith(prefix)]

    @cached_property
    def test_cases(self) -> list[TestCaseModel]:
        if self.root_file.is_file():
            return self._cases_for_entry(self.root_file)

        cases: list[TestCaseModel] = []
        for child in _list_children(self.root_file):
            if self._is_excluded_dir(child):
                continue
            if not self.file_pattern.matches(child.name):
                continue
            if child.is_dir() and self.exclude_parent_dirs and _has_subdirectories(child):
                continue
            cases.extend(self._cases_for_entry(child))
        return sorted(cases, key=lambda case: case.name)

    def _cases_for_entry(self, path: Path) -> list[TestCaseModel]:
        extracted = self.file_pattern.extract_name(path.name)
        self._check_filename_case(path, extracted)
        return self._cases_from_file(path, extracted)

    @cached_property
    def inner_test_classes(self) -> list[TestClassModel]:
        if not self._recursive or not self.root_file.is_dir():
            return []
        if self.deep is not None and self.deep <= 0:
            return []

        children: list[TestClassModel] = []
        for child in _list_children(self.root_file):
            if not child.is_dir() or self._is_excluded_dir(child):
                continue
            if not _has_files_inside(child):
                continue
            children.append(
                SimpleTestClassModel(
                    child,
                    True,
                    self.exclude_parent_dirs,
                    self.file_pattern,
                    self.filename_starts_lower_case,
                    self.test_method,
                    file_name_to_identifier(child),
                    self.target_backend,
                    self._nested_exclude_dirs(child.name),
                    self.skip_ignored,
                    self.test_runner_method_name,
                    self.additional_runner_arguments,
                    self.deep - 1 if self.deep is not None else None,
                    self.annotations,
                    self.skip_tests_for_experimental_coroutines,
                    self._read_directives,
                )
            )
        return sorted(children, key=lambda model: model.name)


class SingleClassTestModel(TestClassModel):
    """Model flattening every matching file below the root into one class.

    A file in a subdirectory is named "<relative dir>-<Name>" so that equal
    file names in different directories stay distinct cases.
    """

    def __init__(
        self,
        root_file: Path,
        file_pattern: FilePattern,
        filename_starts_lower_case: Optional[bool],
        test_method: str,
        name: str,
        target_backend: TargetBackend,
        skip_ignored: bool,
        test_runner_method_name: str,
        additional_runner_arguments: list[str],
        annotations: list[AnnotationModel],
        deep: Optional[int] = None,
        directive_reader: DirectiveReader = read_directives,
    ):
        super().__init__(
            root_file,
            file_pattern,
            filename_starts_lower_case,
            test_method,
            name,
            target_backend,
            skip_ignored,
            test_runner_method_name,
            additional_runner_arguments,
            annotations,
            directive_reader,
        )
        self.deep = deep

    @property
    def recursive(self) -> bool:
        return True

    def _walk_files(self) -> list[Path]:
        if self.root_file.is_file():
            return [self.root_file]
        if not self.root_file.exists():
            raise FileNotFoundError(f"Test data root not found: {self.root_file}")
        files = []
        for path in self.root_file.rglob("*"):
            if not path.is_file():
                continue
            depth = len(path.relative_to(self.root_file).parts) - 1
            if self.deep is not None and depth > self.deep:
                continue
            files.append(path)
        return sorted(files, key=lambda p: p.relative_to(self.root_file).as_posix())

    def _case_name(self, path: Path, extracted: str) -> str:
        if path == self.root_file or path.parent == self.root_file:
            return extracted
        relative_dir = path.parent.relative_to(self.root_file).as_posix()
        return f"{relative_dir}-{capitalize_first(extracted)}"

    @cached_property
    def test_cases(self) -> list[TestCaseModel]:
        cases: list[TestCaseModel] = []
        for path in self._walk_files():
            if not self.file_pattern.matches(path.name):
                continue
            extracted = self.file_pattern.extract_name(path.name)
            self._check_filename_case(path, extracted)
            cases.extend(self._cases_from_file(path, self._case_name(path, extracted)))
        return sorted(cases, key=lambda case: case.name)
