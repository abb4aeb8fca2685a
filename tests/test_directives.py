"""Tests for suitegen.directives module."""

from suitegen.backends import TargetBackend
from suitegen.directives import (
    COMMON_COROUTINES_TEST,
    IGNORE_BACKEND,
    TARGET_BACKEND,
    is_compatible_target,
    is_ignored_target,
    parse_directives,
    read_directives,
)


class TestParseDirectives:
    """Tests for parse_directives function."""

    def test_parses_lists(self):
        """Test comma separated values."""
        directives = parse_directives("// TARGET_BACKEND: JVM, JS\nfun foo() {}\n")
        assert directives.get_list(TARGET_BACKEND) == ["JVM", "JS"]

    def test_accumulates_repeated_directives(self):
        """Test that repeated directives are merged."""
        directives = parse_directives("// IGNORE_BACKEND: JVM\n// IGNORE_BACKEND: JS\n")
        assert directives.get_list(IGNORE_BACKEND) == ["JVM", "JS"]

    def test_flag_directive(self):
        """Test directives without values."""
        directives = parse_directives("# COMMON_COROUTINES_TEST\n")
        assert COMMON_COROUTINES_TEST in directives
        assert directives.get_list(COMMON_COROUTINES_TEST) == []

    def test_ignores_plain_code(self):
        """Test that code lines are not directives."""
        directives = parse_directives("val x = 1 // TARGET_BACKEND: JVM\n")
        assert TARGET_BACKEND not in directives

    def test_ignores_unknown_comment_words(self):
        """Test that ordinary upper-case comments are not directives."""
        directives = parse_directives("// NOTE: keep\n# TODO\n// TARGET_BACKENDS: JVM\n// TARGET_BACKEND: JS\n")
        assert directives.values == {TARGET_BACKEND: ["JS"]}

    def test_directory_has_no_directives(self, temp_dir):
        """Test that directories carry no directives."""
        assert read_directives(temp_dir).values == {}


class TestIsCompatibleTarget:
    """Tests for is_compatible_target function."""

    def test_any_is_always_compatible(self):
        """Test the ANY backend."""
        directives = parse_directives("// TARGET_BACKEND: JS\n")
        assert is_compatible_target(TargetBackend.ANY, directives)

    def test_no_directive_is_compatible(self):
        """Test files without backend restrictions."""
        assert is_compatible_target(TargetBackend.JVM, parse_directives(""))

    def test_other_target_is_incompatible(self):
        """Test files restricted to another backend."""
        directives = parse_directives("// TARGET_BACKEND: JS\n")
        assert not is_compatible_target(TargetBackend.JVM, directives)

    def test_compatible_backend_is_accepted(self):
        """Test that JVM_IR accepts JVM test data."""
        directives = parse_directives("// TARGET_BACKEND: JVM\n")
        assert is_compatible_target(TargetBackend.JVM_IR, directives)

    def test_dont_target_exact_backend(self):
        """Test exclusion of the exact backend only."""
        directives = parse_directives("// DONT_TARGET_EXACT_BACKEND: JVM_IR\n")
        assert not is_compatible_target(TargetBackend.JVM_IR, directives)
        assert is_compatible_target(TargetBackend.JVM, directives)


class TestIsIgnoredTarget:
    """Tests for is_ignored_target function."""

    def test_ignored_backend(self):
        """Test an explicitly ignored backend."""
        directives = parse_directives("// IGNORE_BACKEND: JS\n")
        assert is_ignored_target(TargetBackend.JS, directives)
        assert not is_ignored_target(TargetBackend.JVM, directives)

    def test_ignored_everywhere(self):
        """Test IGNORE_BACKEND: ANY."""
        directives = parse_directives("// IGNORE_BACKEND: ANY\n")
        assert is_ignored_target(TargetBackend.JVM, directives)
        assert is_ignored_target(TargetBackend.ANY, directives)
