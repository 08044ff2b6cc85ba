"""Graph snapshot model.

Nodes and edges as exchanged with the rendering layer, plus conversion to and
from cytoscape-style element dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Keys owned by the model; everything else in an element's ``data`` is passthrough
_NODE_KEYS = frozenset({"id", "score", "rank"})
_EDGE_KEYS = frozenset({"source", "target"})


@dataclass
class Node:
    """A graph node, optionally annotated with a combined score and rank."""
    id: str
    score: float | None = None
    rank: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class Edge:
    """A directed edge between two node ids."""
    source: str
    target: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class GraphSnapshot:
    """Ordered nodes and edges of a graph.

    ``None`` for either collection means it is absent, which is not the same
    as an empty list.
    """
    nodes: list[Node] | None = field(default_factory=list)
    edges: list[Edge] | None = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes) if self.nodes is not None else 0

    @property
    def edge_count(self) -> int:
        return len(self.edges) if self.edges is not None else 0

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes or []:
            if node.id == node_id:
                return node
        return None

    @classmethod
    def from_elements(cls, elements: dict) -> GraphSnapshot:
        """Build a snapshot from a cytoscape-style elements dictionary.

        Args:
            elements: Mapping with optional ``nodes`` and ``edges`` lists,
                      each entry wrapping its attributes in a ``data`` dict

        Returns:
            GraphSnapshot with absent collections mapped to None

        Raises:
            ValueError: If an element lacks its required identifiers
        """
        if not isinstance(elements, dict):
            raise ValueError(
                f"Graph elements must be an object, got {type(elements).__name__}"
            )

        nodes = None
        if elements.get("nodes") is not None:
            nodes = [
                _node_from_element(element, i)
                for i, element in enumerate(elements["nodes"])
            ]

        edges = None
        if elements.get("edges") is not None:
            edges = [
                _edge_from_element(element, i)
                for i, element in enumerate(elements["edges"])
            ]

        return cls(nodes=nodes, edges=edges)

    def to_elements(self) -> dict:
        """Convert the snapshot back to a cytoscape-style elements dictionary."""
        result: dict[str, Any] = {}

        if self.nodes is not None:
            result["nodes"] = [{"data": _node_to_data(n)} for n in self.nodes]

        if self.edges is not None:
            result["edges"] = [
                {"data": {**e.data, "source": e.source, "target": e.target}}
                for e in self.edges
            ]

        return result


def _element_data(element: Any, kind: str, index: int) -> dict:
    # Accept both wrapped ({"data": {...}}) and bare attribute dicts
    if not isinstance(element, dict):
        raise ValueError(f"{kind} #{index} is not an object")
    data = element.get("data", element)
    if not isinstance(data, dict):
        raise ValueError(f"{kind} #{index} has a non-object 'data' field")
    return data


def _node_from_element(element: Any, index: int) -> Node:
    data = _element_data(element, "Node", index)
    if data.get("id") is None:
        raise ValueError(f"Node #{index} is missing an 'id'")

    score = data.get("score")
    rank = data.get("rank")

    return Node(
        id=str(data["id"]),
        score=float(score) if score is not None else None,
        rank=int(rank) if rank is not None else None,
        data={k: v for k, v in data.items() if k not in _NODE_KEYS},
    )


def _edge_from_element(element: Any, index: int) -> Edge:
    data = _element_data(element, "Edge", index)
    for key in ("source", "target"):
        if data.get(key) is None:
            raise ValueError(f"Edge #{index} is missing a '{key}'")

    return Edge(
        source=str(data["source"]),
        target=str(data["target"]),
        data={k: v for k, v in data.items() if k not in _EDGE_KEYS},
    )


def _node_to_data(node: Node) -> dict:
    data: dict[str, Any] = {**node.data, "id": node.id}
    if node.score is not None:
        data["score"] = node.score
    if node.rank is not None:
        data["rank"] = node.rank
    return data
