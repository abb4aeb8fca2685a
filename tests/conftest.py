"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_files(temp_dir):
    """Create files under temp_dir from a mapping of relative path to content."""

    def _make(files: dict[str, str], root: Path = temp_dir) -> Path:
        for relative_path, content in files.items():
            path = root / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make


@pytest.fixture
def test_data_tree(make_files, temp_dir):
    """A small test-data tree with files, nested directories and noise."""
    make_files(
        {
            "testData/diagnostics/foo.kt": "fun foo() {}\n",
            "testData/diagnostics/bar.kt": "fun bar() {}\n",
            "testData/diagnostics/ignore.txt": "not a test\n",
            "testData/diagnostics/nested/baz.kt": "fun baz() {}\n",
            "testData/diagnostics/skip/qux.kt": "fun qux() {}\n",
        }
    )
    return temp_dir / "testData"
