"""Consistency checks over control-flow graphs.

Contains:
- CfgInconsistencyError: Raised on the first inconsistency found
- CfgConsistencyChecker: Visitor asserting graph invariants
"""

from suitegen.cfg.graph import CfgNode, CfgVisitor, ControlFlowGraph
from suitegen.exceptions import SuitegenError


class CfgInconsistencyError(SuitegenError):
    """Raised when a control-flow graph is internally inconsistent."""

    pass


def _contains(nodes: list[CfgNode], node: CfgNode) -> bool:
    return any(n is node for n in nodes)


class CfgConsistencyChecker(CfgVisitor):
    """Checks that edges are mirrored and graphs are well-formed.

    For every graph the enter and exit nodes must belong to it, the exit
    node must have no following nodes and every node must be reachable
    from the enter node. For every node, each following node must list it
    as a previous node and vice versa.
    """

    def visit_graph(self, graph: ControlFlowGraph) -> None:
        if not _contains(graph.nodes, graph.enter_node):
            raise CfgInconsistencyError(f"Enter node of {graph.name} is not in the graph")
        if not _contains(graph.nodes, graph.exit_node):
            raise CfgInconsistencyError(f"Exit node of {graph.name} is not in the graph")
        if graph.exit_node.following_nodes:
            raise CfgInconsistencyError(f"Exit node of {graph.name} has following nodes")

        reachable = self._reachable(graph.enter_node)
        for node in graph.nodes:
            if id(node) not in reachable:
                raise CfgInconsistencyError(f"{node} of {graph.name} is unreachable from enter node")

        super().visit_graph(graph)

    def visit_node(self, node: CfgNode) -> None:
        for following in node.following_nodes:
            if not _contains(following.previous_nodes, node):
                raise CfgInconsistencyError(f"{node} -> {following} is not mirrored in previous nodes")
        for previous in node.previous_nodes:
            if not _contains(previous.following_nodes, node):
                raise CfgInconsistencyError(f"{previous} -> {node} is not mirrored in following nodes")

    @staticmethod
    def _reachable(enter_node: CfgNode) -> set[int]:
        seen = {id(enter_node)}
        stack = [enter_node]
        while stack:
            for following in stack.pop().following_nodes:
                if id(following) not in seen:
                    seen.add(id(following))
                    stack.append(following)
        return seen
