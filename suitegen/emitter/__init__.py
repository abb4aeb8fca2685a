"""Emitter turning declared test classes into generated test modules.

This package provides:
- renderer: render_test_class, GENERATED_HEADER
- writer: get_output_path, write_if_changed, generate_and_save
"""

from suitegen.emitter.renderer import (
    GENERATED_HEADER,
    render_test_class,
)
from suitegen.emitter.writer import (
    generate_and_save,
    get_output_path,
    write_if_changed,
)


__all__ = [
    "GENERATED_HEADER",
    "render_test_class",
    "generate_and_save",
    "get_output_path",
    "write_if_changed",
]
