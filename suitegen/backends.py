"""Target backends a test case may be restricted to or excluded from."""

from enum import Enum
from typing import Optional


class TargetBackend(str, Enum):
    """Execution backend a generated test runs against."""

    ANY = "ANY"
    JVM = "JVM"
    JVM_IR = "JVM_IR"
    JS = "JS"
    JS_IR = "JS_IR"
    NATIVE = "NATIVE"
    WASM = "WASM"

    @property
    def compatible_with(self) -> Optional["TargetBackend"]:
        """Backend whose test data this backend also accepts."""
        return _COMPATIBLE_WITH.get(self)


_COMPATIBLE_WITH = {
    TargetBackend.JVM_IR: TargetBackend.JVM,
    TargetBackend.JS_IR: TargetBackend.JS,
}
