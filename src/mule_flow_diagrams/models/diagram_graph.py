"""
Abstract diagram graph handed to render backends.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Tuple


class DiagramType(Enum):
    """
    Diagram styles. The type only changes style hints, never the topology.
    """
    GRAPH = "graph"
    COMPACT = "compact"

    @classmethod
    def from_name(cls, name: str) -> 'DiagramType':
        """
        Look up a diagram type by its case-insensitive name.

        Args:
            name: Diagram type name, e.g. ``graph``

        Returns:
            The matching DiagramType

        Raises:
            ValueError: If no diagram type has that name
        """
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown diagram type '{name}', expected one of: {choices}") from None


class NodeKind:
    CONTAINER = "container"
    STEP = "step"


class EdgeKind:
    SEQUENCE = "sequence"
    REFERENCE = "reference"


@dataclass(frozen=True)
class DiagramNode:
    """A node of the diagram graph together with its display attributes."""
    id: str
    label: str
    kind: str
    group: str
    attributes: Tuple[Tuple[str, str], ...] = ()

    @property
    def attrs(self) -> Dict[str, str]:
        return dict(self.attributes)


@dataclass(frozen=True)
class DiagramEdge:
    """A directed edge between two node ids."""
    source: str
    target: str
    kind: str
    attributes: Tuple[Tuple[str, str], ...] = ()

    @property
    def attrs(self) -> Dict[str, str]:
        return dict(self.attributes)


@dataclass
class DiagramGraph:
    """
    Nodes and directed edges built from the aggregated flow containers.

    ``nodes`` keeps insertion order so that backends emit a stable layout.
    ``groups`` maps each container anchor id to its display title and is used
    by backends that cluster the steps of one flow together.
    """
    diagram_type: DiagramType
    nodes: Dict[str, DiagramNode] = field(default_factory=dict)
    edges: List[DiagramEdge] = field(default_factory=list)
    groups: Dict[str, str] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)

    def add_node(self, node: DiagramNode) -> None:
        """
        Add a node to the graph.

        Args:
            node: The node to add

        Raises:
            ValueError: If a node with the same id already exists
        """
        if node.id in self.nodes:
            raise ValueError(f"Duplicate node id '{node.id}'")
        self.nodes[node.id] = node

    def add_edge(self, edge: DiagramEdge) -> None:
        """
        Add an edge between two existing nodes.

        Args:
            edge: The edge to add

        Raises:
            KeyError: If either endpoint has not been added as a node
        """
        for endpoint in (edge.source, edge.target):
            if endpoint not in self.nodes:
                raise KeyError(f"Edge endpoint '{endpoint}' is not a node of the graph")
        self.edges.append(edge)

    def node_set(self) -> FrozenSet[DiagramNode]:
        return frozenset(self.nodes.values())

    def edge_set(self) -> FrozenSet[DiagramEdge]:
        return frozenset(self.edges)

    def is_empty(self) -> bool:
        return not self.nodes
