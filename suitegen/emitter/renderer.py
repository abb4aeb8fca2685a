"""Render a test class declaration into Python test module source.

Contains:
- GENERATED_HEADER: Marker comment at the top of every generated module
- render_test_class: Render a TestClass into module text

Nested models are rendered as module-level classes named after their
parent ("Outer_Inner") so that both unittest and pytest collect them.
"""

from typing import Optional

from suitegen.backends import TargetBackend
from suitegen.dsl import TestClass
from suitegen.exceptions import ConfigurationError
from suitegen.models import TestCaseModel, TestClassModel
from suitegen.naming import escape_for_identifier

GENERATED_HEADER = (
    "# This file was generated automatically by suitegen. DO NOT MODIFY IT MANUALLY.\n"
    "# Regenerate it with `suitegen generate`."
)

INDENT = "    "


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _skip_decorator(use_pytest: bool, reason: str) -> str:
    if use_pytest:
        return f"@pytest.mark.skip(reason={_quote(reason)})"
    return f"@unittest.skip({_quote(reason)})"


def _claim_name(seen: dict[str, str], name: str, source: str, kind: str) -> None:
    """Record a generated name, failing if another source already produced it."""
    if name in seen:
        raise ConfigurationError(
            f"Generated {kind} name '{name}' collides: {seen[name]} and {source}"
        )
    seen[name] = source


def _all_files_present_name(model: TestClassModel) -> str:
    return "test_all_files_present_in_" + escape_for_identifier(model.root_file.name)


def _class_for(
    test_class: TestClass,
    model: TestClassModel,
    class_name: str,
    base_name: str,
) -> list[str]:
    lines: list[str] = []
    for annotation in model.annotations:
        lines.append(annotation.render())
    lines.append(f"class {class_name}({base_name}):")
    lines.append(f'{INDENT}"""Test data: {model.root_file.as_posix()}."""')

    methods: dict[str, str] = {}
    if model.root_file.is_dir():
        _claim_name(methods, _all_files_present_name(model), model.root_file.as_posix(), "method")
        lines.append("")
        lines.extend(_all_files_present_method(model))

    for case in model.test_cases:
        _claim_name(methods, case.method_name, case.path.as_posix(), "method")
        lines.append("")
        lines.extend(_case_method(test_class, model, case))
    return lines


def _all_files_present_method(model: TestClassModel) -> list[str]:
    method_name = _all_files_present_name(model)
    pattern = model.file_pattern
    excluded = pattern.excluded_pattern
    exclude_dirs = ", ".join(_quote(d) for d in model.exclude_dirs)
    return [
        f"{INDENT}def {method_name}(self):",
        f"{INDENT * 2}self.assert_all_files_present(",
        f"{INDENT * 3}{_quote(model.root_file.as_posix())},",
        f"{INDENT * 3}{_quote(pattern.pattern.pattern)},",
        f"{INDENT * 3}excluded_pattern={_quote(excluded.pattern) if excluded else None},",
        f"{INDENT * 3}recursive={model.recursive},",
        f"{INDENT * 3}exclude_dirs=[{exclude_dirs}],",
        f"{INDENT * 3}target_backend={_quote(model.target_backend.value)},",
        f"{INDENT * 2})",
    ]


def _case_method(test_class: TestClass, model: TestClassModel, case: TestCaseModel) -> list[str]:
    arguments = [f"self.{model.test_method}", _quote(case.path.as_posix())]
    arguments.extend(model.additional_runner_arguments)
    arguments.extend(case.extra_arguments)
    if model.target_backend != TargetBackend.ANY:
        arguments.append(f"target_backend={_quote(model.target_backend.value)}")

    lines = []
    if case.ignored:
        reason = f"IGNORE_BACKEND: {model.target_backend.value}"
        lines.append(INDENT + _skip_decorator(test_class.use_pytest, reason))
    lines.append(f"{INDENT}def {case.method_name}(self):")
    lines.append(f"{INDENT * 2}self.{model.test_runner_method_name}({', '.join(arguments)})")
    return lines


def _collect_classes(
    test_class: TestClass,
    model: TestClassModel,
    class_name: str,
    base_name: str,
    classes: dict[str, str],
) -> list[list[str]]:
    _claim_name(classes, class_name, model.root_file.as_posix(), "class")
    blocks = [_class_for(test_class, model, class_name, base_name)]
    for inner in model.inner_test_classes:
        if inner.is_empty:
            continue
        inner_name = f"{class_name}_{inner.name}"
        blocks.extend(_collect_classes(test_class, inner, inner_name, base_name, classes))
    return blocks


def _has_ignored_cases(model: TestClassModel) -> bool:
    if any(case.ignored for case in model.test_cases):
        return True
    return any(_has_ignored_cases(inner) for inner in model.inner_test_classes)


def _imports(test_class: TestClass, base_module: Optional[str], base_name: str) -> list[str]:
    modules = set()
    if any(_has_ignored_cases(model) for model in test_class.test_models):
        modules.add("pytest" if test_class.use_pytest else "unittest")
    for annotation in test_class.annotations:
        if annotation.module:
            modules.add(annotation.module)

    lines = [f"import {module}" for module in sorted(modules)]
    if base_module:
        if lines:
            lines.append("")
        lines.append(f"from {base_module} import {base_name}")
    return lines


def render_test_class(test_class: TestClass) -> str:
    """Render the module source for a declared test class.

    A single model becomes the suite class itself; with several models each
    one becomes a class named "<Suite>_<Model>".

    Args:
        test_class: The declared test class; its models are discovered here.

    Returns:
        Generated module text, ending with a newline.

    Raises:
        ConfigurationError: If two cases map to the same method name, or two
            models to the same class name.
    """
    base_module, _, base_name = test_class.base_test_class_name.rpartition(".")
    suite_name = test_class.suite_test_class_name.rpartition(".")[2]

    classes: dict[str, str] = {}
    blocks: list[list[str]] = []
    if len(test_class.test_models) == 1:
        model = test_class.test_models[0]
        blocks.extend(_collect_classes(test_class, model, suite_name, base_name, classes))
    else:
        for model in test_class.test_models:
            class_name = f"{suite_name}_{model.name}"
            blocks.extend(_collect_classes(test_class, model, class_name, base_name, classes))

    sections = [GENERATED_HEADER]
    imports = _imports(test_class, base_module or None, base_name)
    if imports:
        sections.append("\n".join(imports))
    sections.extend("\n".join(block) for block in blocks)
    return "\n\n\n".join(sections) + "\n"
