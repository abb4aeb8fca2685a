"""Suite configuration stored in a YAML file.

Handles reading suitegen.yaml and turning it into a TestGroupSuite.
The file mirrors the builder DSL::

    groups:
      - tests_root: tests
        test_data_root: testData
        classes:
          - base: tests.checkers.AbstractDiagnosticsTest
            models:
              - path: diagnostics/tests
                exclude_dirs: [script]
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from suitegen.backends import TargetBackend
from suitegen.dsl import DEFAULT_TEST_METHOD, RUN_TEST_METHOD_NAME, TestGroupSuite
from suitegen.exceptions import ConfigurationError
from suitegen.models import AnnotationModel
from suitegen.patterns import DEFAULT_EXTENSION

DEFAULT_CONFIG_FILE = "suitegen.yaml"


class AnnotationConfig(BaseModel):
    """A decorator applied to generated classes."""

    model_config = ConfigDict(extra="forbid")

    name: str
    arguments: list[str] = []
    module: Optional[str] = None

    def to_model(self) -> AnnotationModel:
        return AnnotationModel(self.name, tuple(self.arguments), self.module)


class ModelConfig(BaseModel):
    """Options of one model() call."""

    model_config = ConfigDict(extra="forbid")

    path: str
    recursive: bool = True
    exclude_parent_dirs: bool = False
    extension: Optional[str] = DEFAULT_EXTENSION  # null means directories
    pattern: Optional[str] = None
    excluded_pattern: Optional[str] = None
    test_method: str = DEFAULT_TEST_METHOD
    single_class: bool = False
    test_class_name: Optional[str] = None
    target_backend: TargetBackend = TargetBackend.ANY
    exclude_dirs: list[str] = []
    filename_starts_lower_case: Optional[bool] = None
    skip_ignored: bool = False
    deep: Optional[int] = Field(default=None, ge=0)
    skip_tests_for_experimental_coroutines: bool = False


class ClassConfig(BaseModel):
    """One generated test class."""

    model_config = ConfigDict(extra="forbid")

    base: str
    suite_name: Optional[str] = None
    use_pytest: bool = False
    annotations: Optional[list[AnnotationConfig]] = None
    models: list[ModelConfig] = Field(min_length=1)


class GroupConfig(BaseModel):
    """A group of test classes sharing roots."""

    model_config = ConfigDict(extra="forbid")

    tests_root: str
    test_data_root: str
    runner: str = RUN_TEST_METHOD_NAME
    runner_arguments: list[str] = []
    annotations: list[AnnotationConfig] = []
    classes: list[ClassConfig] = []


class SuiteConfig(BaseModel):
    """The whole suite declaration."""

    model_config = ConfigDict(extra="forbid")

    groups: list[GroupConfig] = []


def load_suite_config(config_file: Path) -> SuiteConfig:
    """Load and validate a suite configuration file.

    Args:
        config_file: Path to the YAML file.

    Returns:
        The validated SuiteConfig.

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid.
    """
    if not config_file.exists():
        raise ConfigurationError(f"Suite configuration not found: {config_file}")

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {config_file}: {e}")

    try:
        return SuiteConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid suite configuration in {config_file}:\n{e}")


def _join(base_dir: Optional[Path], path: str) -> str:
    if base_dir is None:
        return path
    return (base_dir / path).as_posix()


def build_suite(config: SuiteConfig, base_dir: Optional[Path] = None) -> TestGroupSuite:
    """Build a TestGroupSuite from a validated configuration.

    Args:
        config: The validated configuration.
        base_dir: Directory the configured roots are relative to.

    Returns:
        The built suite.

    Raises:
        ConfigurationError: If any declaration is rejected by the builders.
    """
    suite = TestGroupSuite()
    for group_config in config.groups:
        group = suite.test_group(
            _join(base_dir, group_config.tests_root),
            _join(base_dir, group_config.test_data_root),
            test_runner_method_name=group_config.runner,
            additional_runner_arguments=group_config.runner_arguments,
            annotations=[a.to_model() for a in group_config.annotations],
        )
        for class_config in group_config.classes:
            annotations = None
            if class_config.annotations is not None:
                annotations = [a.to_model() for a in class_config.annotations]
            test_class = group.test_class(
                class_config.base,
                suite_test_class_name=class_config.suite_name,
                use_pytest=class_config.use_pytest,
                annotations=annotations,
            )
            for model_config in class_config.models:
                test_class.model(
                    model_config.path,
                    **model_config.model_dump(exclude={"path"}),
                )
    return suite


def load_suite(config_file: Path) -> TestGroupSuite:
    """Load a configuration file and build its suite, relative to the file."""
    return build_suite(load_suite_config(config_file), config_file.parent)
