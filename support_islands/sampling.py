"""
Turn the longest path of an island skeleton into support points.

Short islands get one point in the middle of the longest path; longer ones
start with a point inset from the contour leaf the search started from.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .errors import (
    DegenerateNeighborError,
    EmptyLongestPathError,
    MissingContourStartError,
    SupportIslandError,
)
from .geometry import Point, interpolate, move_towards
from .longest_path import create_longest_path
from .paths import ExPath
from .settings import SampleConfig, load_sample_config
from .skeleton_graph import NodeKey, SkeletonGraph, build_skeleton_graph
from .voronoi import Line, VoronoiDiagram, load_diagram

logger = logging.getLogger(__name__)

RATIO_EPSILON = 1e-12


@dataclass(slots=True)
class SampleResult:
    points: list[Point]
    longest_path: ExPath
    start_node: NodeKey

    def to_payload(self) -> dict[str, object]:
        return {
            "points": [[float(x), float(y)] for x, y in self.points],
            "length": float(self.longest_path.length),
            "longest_path": self.longest_path.to_payload(),
        }


def find_start_node(graph: SkeletonGraph) -> NodeKey:
    """Return the first node that lies on the island contour."""

    for node in graph.contour_nodes():
        return node.key
    raise MissingContourStartError(
        f"Skeleton with {len(graph)} nodes has no node on the island contour."
    )


def get_edge_point(graph: SkeletonGraph, from_key: NodeKey, to_key: NodeKey, ratio: float) -> Point:
    """Point at ``ratio`` of the way from one node to an adjacent one.

    Curved edges are approximated by their chord.
    """

    start = graph[from_key].point
    end = graph[to_key].point
    if ratio <= RATIO_EPSILON:
        return start
    if ratio >= 1.0 - RATIO_EPSILON:
        return end
    return interpolate(start, end, ratio)


def get_center_of_path(graph: SkeletonGraph, nodes: Sequence[NodeKey], path_length: float) -> Point:
    """Point halfway along ``nodes`` measured by edge length."""

    if not nodes:
        raise EmptyLongestPathError("Cannot find the center of a path without nodes.")
    if len(nodes) == 1:
        return graph[nodes[0]].point

    half_path_length = path_length / 2.0
    distance = 0.0
    for prev_key, key in zip(nodes, nodes[1:]):
        edge_length = graph.neighbor_distance(prev_key, key)
        distance += edge_length
        if distance >= half_path_length:
            if edge_length == 0.0:
                return graph[key].point
            ratio = 1.0 - (distance - half_path_length) / edge_length
            return get_edge_point(graph, prev_key, key, ratio)
    # Only reachable when path_length overstates the summed edges.
    return graph[nodes[-1]].point


def get_offseted_point(graph: SkeletonGraph, node_key: NodeKey, padding: float) -> Point:
    """Point moved from a leaf toward its only neighbor by ``edge_length / padding``."""

    node = graph[node_key]
    if not node.is_leaf:
        raise DegenerateNeighborError(
            f"Node {node_key!r} has {node.degree} neighbors; an offset point needs a leaf."
        )
    if padding <= 0:
        raise ValueError("padding must be positive.")
    neighbor = node.neighbors[0]
    return move_towards(node.point, graph[neighbor.node].point, neighbor.length / padding)


def sample_voronoi_graph(graph: SkeletonGraph, config: SampleConfig) -> SampleResult:
    start_node = find_start_node(graph)
    longest_path = create_longest_path(graph, start_node)
    if not longest_path.nodes:
        raise EmptyLongestPathError("Longest path search returned a path without nodes.")

    if longest_path.length < config.max_length_for_one_support_point:
        points = [get_center_of_path(graph, longest_path.nodes, longest_path.length)]
    else:
        points = [get_offseted_point(graph, start_node, config.start_distance)]
    logger.debug(
        "sample_voronoi_graph: longest path %.3f over %d nodes -> %d point(s)",
        longest_path.length,
        len(longest_path.nodes),
        len(points),
    )
    return SampleResult(points=points, longest_path=longest_path, start_node=start_node)


def sample_island(
    diagram: VoronoiDiagram,
    lines: Sequence[Line],
    config: SampleConfig | None = None,
) -> SampleResult:
    """Build the skeleton of one island and sample it."""

    graph = build_skeleton_graph(diagram, lines, strict=True)
    if graph.is_empty:
        raise MissingContourStartError("Voronoi diagram has no edge inside the island.")
    return sample_voronoi_graph(graph, config or SampleConfig())


def _cli(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Place support points along the Voronoi skeleton of an island."
    )
    parser.add_argument(
        "diagram",
        type=Path,
        help="JSON file with the annotated Voronoi diagram and its boundary lines.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="TOML file with a [support_islands] table (default: config.toml).",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the result JSON here instead of printing it.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log search details.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = load_sample_config(args.config)
    diagram, lines = load_diagram(args.diagram)
    try:
        result = sample_island(diagram, lines, config)
    except SupportIslandError as exc:
        logger.error("Island skipped: %s", exc)
        return 1

    payload = json.dumps(result.to_payload(), indent=2)
    if args.out is None:
        print(payload)
    else:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(payload)
        print(f"Wrote {len(result.points)} point(s) to {args.out}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(_cli())


__all__ = [
    "SampleResult",
    "find_start_node",
    "get_edge_point",
    "get_center_of_path",
    "get_offseted_point",
    "sample_voronoi_graph",
    "sample_island",
]
