from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Sequence

from .errors import UnannotatedInputError
from .geometry import Point, euclidean
from .voronoi import (
    EdgeCategory,
    Line,
    VertexCategory,
    VoronoiDiagram,
    VoronoiEdge,
    VoronoiVertex,
)

logger = logging.getLogger(__name__)

NodeKey = Hashable

# Arc length of parabolic edges is not computed; thresholds downstream are
# calibrated against this placeholder.
CURVED_EDGE_LENGTH = 1.0

@dataclass(slots=True)
class Neighbor:
    """Adjacency record: the node reached over one Voronoi edge."""

    node: NodeKey
    length: float
    edge: VoronoiEdge | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"node": json_key(self.node), "length": float(self.length)}
        if self.edge is not None:
            payload["edge"] = self.edge.index
        return payload

@dataclass(slots=True)
class Node:
    """Skeleton vertex with its distance to the island boundary."""

    key: NodeKey
    point: Point
    distance: float = 0.0
    category: VertexCategory = VertexCategory.INSIDE
    neighbors: list[Neighbor] = field(default_factory=list)

    @property
    def degree(self) -> int:
        return len(self.neighbors)

    @property
    def is_leaf(self) -> bool:
        return len(self.neighbors) == 1

    def to_dict(self) -> dict[str, object]:
        return {
            "key": json_key(self.key),
            "x": float(self.point[0]),
            "y": float(self.point[1]),
            "distance": float(self.distance),
            "category": self.category.value,
            "neighbors": [neighbor.to_dict() for neighbor in self.neighbors],
        }

@dataclass(slots=True)
class SkeletonGraph:
    """Undirected weighted skeleton of one island, keyed by vertex identity.

    The graph owns every node; neighbors refer to each other by key only.
    """

    nodes: dict[NodeKey, Node] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, key: object) -> bool:
        return key in self.nodes

    def __getitem__(self, key: NodeKey) -> Node:
        return self.nodes[key]

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def add_node(
        self,
        key: NodeKey,
        point: Point,
        *,
        distance: float = 0.0,
        category: VertexCategory = VertexCategory.INSIDE,
    ) -> Node:
        """Return the node stored under ``key``, creating it on first access."""

        node = self.nodes.get(key)
        if node is not None:
            return node
        node = Node(
            key=key,
            point=(float(point[0]), float(point[1])),
            distance=float(distance),
            category=category,
        )
        self.nodes[key] = node
        return node

    def connect(
        self,
        a: NodeKey,
        b: NodeKey,
        length: float | None = None,
        *,
        edge: VoronoiEdge | None = None,
    ) -> float:
        """Add a symmetric pair of neighbor records between two stored nodes.

        ``edge`` is the half edge running from ``a`` to ``b``; ``b`` receives
        its twin. Without an explicit ``length`` the straight distance
        between the nodes is used.
        """

        node_a = self.nodes[a]
        node_b = self.nodes[b]
        if length is None:
            length = euclidean(node_a.point, node_b.point)
        length = float(length)
        twin = edge.twin if edge is not None else None
        node_a.neighbors.append(Neighbor(b, length, edge))
        node_b.neighbors.append(Neighbor(a, length, twin))
        return length

    def get_neighbor(self, from_key: NodeKey, to_key: NodeKey) -> Neighbor | None:
        for neighbor in self.nodes[from_key].neighbors:
            if neighbor.node == to_key:
                return neighbor
        return None

    def neighbor_distance(self, from_key: NodeKey, to_key: NodeKey) -> float:
        neighbor = self.get_neighbor(from_key, to_key)
        if neighbor is None:
            raise KeyError(f"Node {from_key!r} is not adjacent to {to_key!r}.")
        return neighbor.length

    def path_length(self, keys: Sequence[NodeKey]) -> float:
        return sum(self.neighbor_distance(a, b) for a, b in zip(keys, keys[1:]))

    def contour_nodes(self) -> Iterable[Node]:
        return (node for node in self.nodes.values() if node.category is VertexCategory.ON_CONTOUR)

    def edge_count(self) -> int:
        return sum(node.degree for node in self.nodes.values()) // 2

    def to_payload(self) -> dict[str, list[dict[str, object]]]:
        return {"nodes": [node.to_dict() for node in self.nodes.values()]}


def build_skeleton_graph(
    diagram: VoronoiDiagram,
    lines: Sequence[Line],
    *,
    strict: bool = False,
) -> SkeletonGraph:
    """Collect the inner edges of an annotated Voronoi diagram into a graph.

    Args:
        diagram: Voronoi diagram of the island boundary with vertex and edge
            categories already assigned.
        lines: Boundary segments, indexed by ``cell.source_index``.
        strict: Raise ``UnannotatedInputError`` instead of returning an
            empty graph when an ``UNKNOWN`` vertex is reached.

    Returns:
        The skeleton graph; empty when the diagram is not fully annotated.
    """

    graph = SkeletonGraph()
    for edge in diagram.edges:
        if edge.is_secondary or edge.is_infinite:
            continue
        twin = edge.twin
        # Each undirected edge is taken from its lower-indexed half.
        if twin is not None and edge.index > twin.index:
            continue
        if edge.category is not EdgeCategory.POINTS_INSIDE and (
            twin is None or twin.category is not EdgeCategory.POINTS_INSIDE
        ):
            continue

        v0 = edge.vertex0
        v1 = edge.vertex1
        if v0.category is VertexCategory.OUTSIDE or v1.category is VertexCategory.OUTSIDE:
            continue
        if v0.category is VertexCategory.UNKNOWN or v1.category is VertexCategory.UNKNOWN:
            message = f"Voronoi edge {edge.index} reaches a vertex without inside/outside annotation."
            if strict:
                raise UnannotatedInputError(message)
            logger.warning("build_skeleton_graph: %s Returning an empty skeleton.", message)
            return SkeletonGraph()

        if edge.is_linear:
            length = euclidean(v0.point, v1.point)
        else:
            length = CURVED_EDGE_LENGTH

        node0 = _get_node(graph, v0, edge, lines)
        node1 = _get_node(graph, v1, edge, lines)
        graph.connect(node0.key, node1.key, length, edge=edge)

    logger.debug(
        "build_skeleton_graph: %d nodes, %d edges from %d half edges",
        len(graph),
        graph.edge_count(),
        len(diagram.edges),
    )
    return graph

def _get_node(
    graph: SkeletonGraph,
    vertex: VoronoiVertex,
    edge: VoronoiEdge,
    lines: Sequence[Line],
) -> Node:
    node = graph.nodes.get(vertex.index)
    if node is not None:
        return node
    # The boundary distance comes from the cell of whichever edge reaches
    # the vertex first; other adjacent cells may give a different value.
    line = lines[edge.cell.source_index]
    return graph.add_node(
        vertex.index,
        vertex.point,
        distance=line.distance_to(vertex.point),
        category=vertex.category,
    )

def get_neighbor(graph: SkeletonGraph, from_key: NodeKey, to_key: NodeKey) -> Neighbor | None:
    return graph.get_neighbor(from_key, to_key)

def get_neighbor_distance(graph: SkeletonGraph, from_key: NodeKey, to_key: NodeKey) -> float:
    return graph.neighbor_distance(from_key, to_key)

def json_key(key: NodeKey) -> object:
    return key if isinstance(key, (int, str)) else repr(key)

__all__ = [
    "CURVED_EDGE_LENGTH",
    "NodeKey",
    "Neighbor",
    "Node",
    "SkeletonGraph",
    "build_skeleton_graph",
    "get_neighbor",
    "get_neighbor_distance",
    "json_key",
]
