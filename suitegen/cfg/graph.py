"""Control-flow graph structures visited by consistency checks.

Contains:
- CfgVisitor: Base visitor with no-op hooks
- CfgNode: A node with following and previous edges
- ControlFlowGraph: Nodes of one declaration plus nested graphs
- SourceUnit: A parsed source file holding its graphs
- SourceArtifact: Parsed source units of one module
- add_edge: Link two nodes in both directions
"""

from dataclasses import dataclass, field


class CfgVisitor:
    """Visitor over source units, graphs and nodes."""

    def visit_unit(self, unit: "SourceUnit") -> None:
        for graph in unit.graphs:
            graph.accept(self)

    def visit_graph(self, graph: "ControlFlowGraph") -> None:
        for node in graph.nodes:
            node.accept(self)
        for sub_graph in graph.sub_graphs:
            sub_graph.accept(self)

    def visit_node(self, node: "CfgNode") -> None:
        pass


@dataclass(eq=False)
class CfgNode:
    label: str
    following_nodes: list["CfgNode"] = field(default_factory=list)
    previous_nodes: list["CfgNode"] = field(default_factory=list)

    def accept(self, visitor: CfgVisitor) -> None:
        visitor.visit_node(self)

    def __repr__(self) -> str:
        return f"CfgNode({self.label!r})"


@dataclass(eq=False)
class ControlFlowGraph:
    name: str
    enter_node: CfgNode
    exit_node: CfgNode
    nodes: list[CfgNode] = field(default_factory=list)
    sub_graphs: list["ControlFlowGraph"] = field(default_factory=list)

    def accept(self, visitor: CfgVisitor) -> None:
        visitor.visit_graph(self)


@dataclass
class SourceUnit:
    name: str
    graphs: list[ControlFlowGraph] = field(default_factory=list)

    def accept(self, visitor: CfgVisitor) -> None:
        visitor.visit_unit(self)


@dataclass
class SourceArtifact:
    """Parsed source units of one module, keyed by file name."""

    files: dict[str, SourceUnit] = field(default_factory=dict)


def add_edge(from_node: CfgNode, to_node: CfgNode) -> None:
    """Link from_node to to_node, recording the edge on both ends."""
    from_node.following_nodes.append(to_node)
    to_node.previous_nodes.append(from_node)
