"""Control-flow graph consistency checking.

This package provides:
- graph: CfgNode, ControlFlowGraph, SourceUnit, SourceArtifact, CfgVisitor, add_edge
- checker: CfgConsistencyChecker, CfgInconsistencyError
- handler: CfgConsistencyHandler
"""

from suitegen.cfg.graph import (
    CfgNode,
    CfgVisitor,
    ControlFlowGraph,
    SourceArtifact,
    SourceUnit,
    add_edge,
)
from suitegen.cfg.checker import (
    CfgConsistencyChecker,
    CfgInconsistencyError,
)
from suitegen.cfg.handler import (
    CfgConsistencyHandler,
)


__all__ = [
    "CfgNode",
    "CfgVisitor",
    "ControlFlowGraph",
    "SourceArtifact",
    "SourceUnit",
    "add_edge",
    "CfgConsistencyChecker",
    "CfgInconsistencyError",
    "CfgConsistencyHandler",
]
