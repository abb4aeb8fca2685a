"""Tests for suitegen.models module."""

from pathlib import Path

import pytest

from suitegen.backends import TargetBackend
from suitegen.exceptions import NamingConventionError
from suitegen.models import (
    EXPERIMENTAL_COROUTINES_ARGUMENT,
    AnnotationModel,
    SimpleTestClassModel,
    SingleClassTestModel,
)
from suitegen.patterns import compile_file_pattern


def simple_model(root: Path, **overrides) -> SimpleTestClassModel:
    options = dict(
        recursive=True,
        exclude_parent_dirs=False,
        file_pattern=compile_file_pattern("kt"),
        filename_starts_lower_case=None,
        test_method="do_test",
        name="Root",
        target_backend=TargetBackend.ANY,
        exclude_dirs=[],
        skip_ignored=False,
        test_runner_method_name="run_test",
        additional_runner_arguments=[],
        deep=None,
        annotations=[],
    )
    options.update(overrides)
    return SimpleTestClassModel(root, **options)


def single_model(root: Path, **overrides) -> SingleClassTestModel:
    options = dict(
        file_pattern=compile_file_pattern("kt"),
        filename_starts_lower_case=None,
        test_method="do_test",
        name="Root",
        target_backend=TargetBackend.ANY,
        skip_ignored=False,
        test_runner_method_name="run_test",
        additional_runner_arguments=[],
        annotations=[],
    )
    options.update(overrides)
    return SingleClassTestModel(root, **options)


class TestAnnotationModel:
    """Tests for AnnotationModel rendering."""

    def test_render_without_arguments(self):
        """Test a bare decorator."""
        assert AnnotationModel("pytest.mark.slow").render() == "@pytest.mark.slow"

    def test_render_with_arguments(self):
        """Test a decorator call."""
        annotation = AnnotationModel("pytest.mark.timeout", ("30",), "pytest")
        assert annotation.render() == "@pytest.mark.timeout(30)"


class TestSimpleTestClassModel:
    """Tests for SimpleTestClassModel discovery."""

    def test_discovers_matching_files(self, make_files, temp_dir):
        """Test that only matching files directly under the root are cases."""
        make_files({"root/foo.kt": "", "root/bar.kt": "", "root/ignore.txt": ""})
        model = simple_model(temp_dir / "root")

        assert model.test_case_names() == ["bar", "foo"]
        assert [c.method_name for c in model.test_cases] == ["test_bar", "test_foo"]

    def test_nested_directories_become_inner_classes(self, test_data_tree):
        """Test recursion into subdirectories."""
        model = simple_model(test_data_tree / "diagnostics")

        assert model.test_case_names() == ["bar", "foo"]
        inner = {m.name: m for m in model.inner_test_classes}
        assert sorted(inner) == ["Nested", "Skip"]
        assert inner["Nested"].test_case_names() == ["baz"]

    def test_exclude_dirs(self, test_data_tree):
        """Test that excluded directories disappear entirely."""
        model = simple_model(test_data_tree / "diagnostics", exclude_dirs=["skip"])

        assert [m.name for m in model.inner_test_classes] == ["Nested"]
        assert "qux" not in model.test_case_names()

    def test_exclude_dirs_nested_path(self, make_files, temp_dir):
        """Test that 'a/b' excludes b inside a only."""
        make_files({"root/a/b/x.kt": "", "root/a/c/y.kt": "", "root/b/z.kt": ""})
        model = simple_model(temp_dir / "root", exclude_dirs=["a/b"])

        inner = {m.name: m for m in model.inner_test_classes}
        assert sorted(inner) == ["A", "B"]
        assert [m.name for m in inner["A"].inner_test_classes] == ["C"]
        assert inner["A"].exclude_dirs == ["b"]

    def test_exclude_dirs_in_directory_mode(self, make_files, temp_dir):
        """Test that an excluded directory is not a directory case either."""
        make_files({"root/one/a.txt": "", "root/skip/b.txt": ""})
        model = simple_model(
            temp_dir / "root",
            file_pattern=compile_file_pattern(None),
            recursive=False,
            exclude_dirs=["skip"],
        )

        assert model.test_case_names() == ["one"]

    def test_not_recursive(self, test_data_tree):
        """Test that recursion can be disabled."""
        model = simple_model(test_data_tree / "diagnostics", recursive=False)
        assert model.inner_test_classes == []

    def test_deep_limits_nesting(self, make_files, temp_dir):
        """Test the deep option."""
        make_files({"root/a/x.kt": "", "root/a/b/y.kt": ""})

        assert simple_model(temp_dir / "root", deep=0).inner_test_classes == []

        one_level = simple_model(temp_dir / "root", deep=1)
        (inner,) = one_level.inner_test_classes
        assert inner.name == "A"
        assert inner.inner_test_classes == []

        unlimited = simple_model(temp_dir / "root")
        assert [m.name for m in unlimited.inner_test_classes[0].inner_test_classes] == ["B"]

    def test_directories_without_files_are_skipped(self, temp_dir):
        """Test that empty directory trees produce no inner class."""
        (temp_dir / "root" / "empty" / "deeper").mkdir(parents=True)
        model = simple_model(temp_dir / "root")
        assert model.inner_test_classes == []
        assert model.is_empty

    def test_directory_mode_cases(self, make_files, temp_dir):
        """Test directories as cases."""
        make_files({"root/caseOne/a.txt": "", "root/caseTwo/b.txt": "", "root/file.txt": ""})
        model = simple_model(temp_dir / "root", file_pattern=compile_file_pattern(None), recursive=False)

        assert model.test_case_names() == ["caseOne", "caseTwo"]
        assert all(case.is_directory for case in model.test_cases)

    def test_exclude_parent_dirs(self, make_files, temp_dir):
        """Test that matched directories with subdirectories are dropped."""
        make_files({"root/leaf/a.txt": "", "root/parent/child/b.txt": ""})
        model = simple_model(
            temp_dir / "root",
            file_pattern=compile_file_pattern(None),
            recursive=False,
            exclude_parent_dirs=True,
        )

        assert model.test_case_names() == ["leaf"]

    def test_root_file(self, make_files, temp_dir):
        """Test a model rooted at a single file."""
        make_files({"root/single.kt": ""})
        model = simple_model(temp_dir / "root" / "single.kt")

        assert model.test_case_names() == ["single"]
        assert model.inner_test_classes == []

    def test_filename_starts_lower_case(self, make_files, temp_dir):
        """Test the naming-convention assertion."""
        make_files({"root/good.kt": "", "root/Bad.kt": ""})
        model = simple_model(temp_dir / "root", filename_starts_lower_case=True)

        with pytest.raises(NamingConventionError) as exc_info:
            model.test_cases
        assert exc_info.value.path == temp_dir / "root" / "Bad.kt"

    def test_filename_starts_upper_case(self, make_files, temp_dir):
        """Test the upper-case variant of the assertion."""
        make_files({"root/Good.kt": ""})
        model = simple_model(temp_dir / "root", filename_starts_lower_case=False)
        assert model.test_case_names() == ["Good"]

    def test_backend_mismatch_is_skipped(self, make_files, temp_dir):
        """Test that cases for other backends are left out without error."""
        make_files(
            {
                "root/jvm.kt": "// TARGET_BACKEND: JVM\n",
                "root/js.kt": "// TARGET_BACKEND: JS\n",
                "root/all.kt": "fun main() {}\n",
            }
        )
        model = simple_model(temp_dir / "root", target_backend=TargetBackend.JVM)
        assert model.test_case_names() == ["all", "jvm"]

    def test_any_backend_keeps_everything(self, make_files, temp_dir):
        """Test that the ANY backend never filters."""
        make_files({"root/js.kt": "// TARGET_BACKEND: JS\n"})
        assert simple_model(temp_dir / "root").test_case_names() == ["js"]

    def test_ignored_cases(self, make_files, temp_dir):
        """Test ignored cases with and without skip_ignored."""
        make_files({"root/broken.kt": "// IGNORE_BACKEND: JVM\n", "root/ok.kt": ""})

        kept = simple_model(temp_dir / "root", target_backend=TargetBackend.JVM)
        assert [(c.name, c.ignored) for c in kept.test_cases] == [("broken", True), ("ok", False)]

        skipped = simple_model(temp_dir / "root", target_backend=TargetBackend.JVM, skip_ignored=True)
        assert skipped.test_case_names() == ["ok"]

    def test_coroutines_variants(self, make_files, temp_dir):
        """Test the experimental coroutines variant."""
        make_files({"root/co.kt": "// COMMON_COROUTINES_TEST\n"})

        model = simple_model(temp_dir / "root")
        assert model.test_case_names() == ["co", "co_experimental"]
        assert model.test_cases[1].extra_arguments == [EXPERIMENTAL_COROUTINES_ARGUMENT]

        release_only = simple_model(temp_dir / "root", skip_tests_for_experimental_coroutines=True)
        assert release_only.test_case_names() == ["co"]

    def test_discovery_is_lazy(self, temp_dir):
        """Test that building a model does not touch the filesystem."""
        model = simple_model(temp_dir / "missing")
        with pytest.raises(FileNotFoundError):
            model.test_cases


class TestSingleClassTestModel:
    """Tests for SingleClassTestModel discovery."""

    def test_flattens_subtree(self, make_files, temp_dir):
        """Test that files at any depth become cases of one class."""
        make_files({"root/top.kt": "", "root/a/x.kt": "", "root/a/b/y.kt": "", "root/a/z.txt": ""})
        model = single_model(temp_dir / "root")

        assert model.test_case_names() == ["a-X", "a/b-Y", "top"]

    def test_missing_root_raises(self, temp_dir):
        """Test that a missing root fails at discovery instead of yielding no cases."""
        model = single_model(temp_dir / "missing")
        with pytest.raises(FileNotFoundError):
            model.test_cases
        assert model.inner_test_classes == []

    def test_same_name_in_different_dirs(self, make_files, temp_dir):
        """Test that equal file names stay distinct cases."""
        make_files({"root/a/x.kt": "", "root/b/x.kt": ""})
        model = single_model(temp_dir / "root")

        cases = model.test_cases
        assert len(cases) == 2
        assert len({c.method_name for c in cases}) == 2
        assert [c.relative_path for c in cases] == ["a/x.kt", "b/x.kt"]

    def test_directories_are_not_cases(self, make_files, temp_dir):
        """Test that only files are collected."""
        make_files({"root/dir/a.txt": ""})
        model = single_model(temp_dir / "root", file_pattern=compile_file_pattern(None))
        assert model.test_cases == []

    def test_excluded_pattern(self, make_files, temp_dir):
        """Test the exclusion pattern on flattened files."""
        make_files({"root/a/x.kt": "", "root/a/x.fir.kt": ""})
        model = single_model(
            temp_dir / "root",
            file_pattern=compile_file_pattern("kt", excluded_pattern=r"^.+\.fir\.kt$"),
        )
        assert model.test_case_names() == ["a-X"]

    def test_deep_limits_walk(self, make_files, temp_dir):
        """Test that deep bounds the directory depth."""
        make_files({"root/top.kt": "", "root/a/x.kt": "", "root/a/b/y.kt": ""})
        model = single_model(temp_dir / "root", deep=1)
        assert model.test_case_names() == ["a-X", "top"]

    def test_backend_filtering(self, make_files, temp_dir):
        """Test backend filtering in flattened models."""
        make_files({"root/a/js.kt": "// TARGET_BACKEND: JS\n", "root/a/jvm.kt": ""})
        model = single_model(temp_dir / "root", target_backend=TargetBackend.JVM_IR)
        assert model.test_case_names() == ["a-Jvm"]
