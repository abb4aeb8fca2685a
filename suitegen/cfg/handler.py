"""Per-module handler running the CFG consistency check."""

import logging
from typing import Any, Optional

from suitegen.cfg.checker import CfgConsistencyChecker
from suitegen.cfg.graph import CfgVisitor, SourceArtifact

logger = logging.getLogger(__name__)


class CfgConsistencyHandler:
    """Checks the control-flow graphs of every parsed unit of a module."""

    def __init__(self, checker: Optional[CfgVisitor] = None):
        self.checker = checker or CfgConsistencyChecker()

    def process_module(self, module: Any, info: SourceArtifact) -> None:
        logger.debug("Checking control-flow graphs of %s", module)
        for unit in info.files.values():
            unit.accept(self.checker)

    def process_after_all_modules(self) -> None:
        pass
