"""
Linearize circles of the skeleton.

A circle is cut so that the resulting path from its entry node reaches the
circle node whose distance along the circle plus longest side branch is the
largest. Distances on the circle always take the shorter way around.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math

from .paths import Circle, ExPath, Path, SideBranches
from .skeleton_graph import NodeKey, SkeletonGraph

logger = logging.getLogger(__name__)


def find_longest_path_on_circle(
    graph: SkeletonGraph,
    circle: Circle,
    side_branches: dict[NodeKey, SideBranches],
) -> Path:
    """Cut a single circle entered at ``circle.nodes[0]``.

    The returned path starts at the node after the entry node and ends with
    the longest side branch of the chosen circle node, which is taken out of
    ``side_branches``.
    """

    half_circle_length = circle.length / 2.0
    distance_on_circle = 0.0

    best_score = -math.inf
    best_index: int | None = None
    best_reverse = False
    for index in range(1, len(circle.nodes)):
        distance_on_circle += graph.neighbor_distance(circle.nodes[index - 1], circle.nodes[index])
        reverse = distance_on_circle > half_circle_length
        arc = circle.length - distance_on_circle if reverse else distance_on_circle
        branches = side_branches.get(circle.nodes[index])
        score = arc + (branches.longest_length() if branches else 0.0)
        if score > best_score:
            best_score = score
            best_index = index
            best_reverse = reverse

    if best_index is None:
        return Path()

    if best_reverse:
        nodes = list(reversed(circle.nodes[best_index:]))
    else:
        nodes = list(circle.nodes[1 : best_index + 1])
    _append_longest_branch(nodes, circle.nodes[best_index], side_branches)
    logger.debug(
        "find_longest_path_on_circle: circle of %d nodes cut at index %d (%s), length %.3f",
        len(circle.nodes),
        best_index,
        "reverse" if best_reverse else "forward",
        best_score,
    )
    return Path(nodes, best_score)


def find_longest_path_on_circles(
    graph: SkeletonGraph,
    input_node: NodeKey,
    finished_circle_index: int,
    ex_path: ExPath,
) -> Path:
    """Longest path from ``input_node`` through the circles connected to a finished circle."""

    circle = ex_path.circles[finished_circle_index]
    connected = ex_path.connected_circles.get(finished_circle_index)
    if not connected:
        return find_longest_path_on_circle(graph, circle, ex_path.side_branches)

    members: set[NodeKey] = {input_node}
    for circle_index in {finished_circle_index, *connected}:
        members.update(ex_path.circles[circle_index].nodes)

    # Shortest distances from the input node inside the circle cluster.
    counter = itertools.count()
    queue: list[tuple[float, int, Path]] = [(0.0, next(counter), Path([input_node], 0.0))]
    done: set[NodeKey] = set()
    best: Path | None = None
    best_score = -math.inf
    while queue:
        _, _, path = heapq.heappop(queue)
        node = path.nodes[-1]
        if node in done:
            continue
        done.add(node)
        if node != input_node:
            branches = ex_path.side_branches.get(node)
            score = path.length + (branches.longest_length() if branches else 0.0)
            if score > best_score:
                best_score = score
                best = path
        for neighbor in graph[node].neighbors:
            if neighbor.node not in members or neighbor.node in done:
                continue
            next_path = path.copy()
            next_path.append(neighbor.node, neighbor.length)
            heapq.heappush(queue, (next_path.length, next(counter), next_path))

    if best is None:
        return Path()

    nodes = best.nodes[1:]
    _append_longest_branch(nodes, best.nodes[-1], ex_path.side_branches)
    logger.debug(
        "find_longest_path_on_circles: %d connected circles, %d nodes, length %.3f",
        len(connected) + 1,
        len(members),
        best_score,
    )
    return Path(nodes, best_score)


def _append_longest_branch(
    nodes: list[NodeKey],
    key: NodeKey,
    side_branches: dict[NodeKey, SideBranches],
) -> None:
    branches = side_branches.get(key)
    if not branches:
        return
    nodes.extend(branches.pop().nodes)
    if not branches:
        del side_branches[key]


__all__ = ["find_longest_path_on_circle", "find_longest_path_on_circles"]
