"""
Longest path search over an island skeleton.

The skeleton is walked depth first from a start node with an explicit stack
of frames, so large skeletons never hit the interpreter recursion limit.
Every frame collects the branches found below its node; once all neighbors
are evaluated the longest branch continues the path and the others are kept
as side branches. Edges that lead back to a node on the current path close a
circle; a circle is cut into a linear branch when the search returns to its
first node.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .circles import find_longest_path_on_circles
from .paths import ExPath, Path, SideBranches, connect_circles, create_circle
from .reshape import reshape_longest_path
from .skeleton_graph import NodeKey, SkeletonGraph

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    node: NodeKey
    previous: NodeKey | None
    edge_length: float
    next_neighbor: int = 0
    # Stored tail first so finished nodes are appended, not prepended.
    branches: SideBranches = field(default_factory=SideBranches)
    circle_indexes: set[int] = field(default_factory=set)


def create_longest_path(graph: SkeletonGraph, start_node: NodeKey) -> ExPath:
    """Search the longest path from ``start_node`` and reshape it."""

    longest_path = search_longest_path(graph, start_node)
    reshape_longest_path(graph, longest_path)
    return longest_path


def search_longest_path(graph: SkeletonGraph, start_node: NodeKey) -> ExPath:
    """Depth first pass that records the path, side branches and circles."""

    if start_node not in graph:
        raise ValueError(f"Unknown start node: {start_node!r}")

    result = ExPath()
    act_path = Path([start_node], 0.0)
    walked: list[float] = [0.0]
    position: dict[NodeKey, int] = {start_node: 0}
    visited: set[NodeKey] = {start_node}
    stack: list[_Frame] = [_Frame(start_node, None, 0.0)]

    while stack:
        frame = stack[-1]
        neighbors = graph[frame.node].neighbors
        if frame.next_neighbor < len(neighbors):
            neighbor = neighbors[frame.next_neighbor]
            frame.next_neighbor += 1
            if neighbor.node == frame.previous:
                continue
            circle = create_circle(act_path, neighbor, position=position, walked=walked)
            if circle is not None:
                frame.circle_indexes.add(len(result.circles))
                result.circles.append(circle)
                continue
            if neighbor.node in visited:
                # Far end of a circle already closed deeper in the search.
                continue
            visited.add(neighbor.node)
            if graph[neighbor.node].is_leaf:
                frame.branches.push(Path([neighbor.node], neighbor.length))
                continue
            stack.append(_Frame(neighbor.node, frame.node, neighbor.length))
            act_path.append(neighbor.node, neighbor.length)
            walked.append(act_path.length)
            position[neighbor.node] = len(act_path.nodes) - 1
            continue

        stack.pop()
        act_path.nodes.pop()
        walked.pop()
        del position[frame.node]
        if walked:
            act_path.length = walked[-1]

        branch, open_circles = _finish_node(graph, frame, result)
        if not stack:
            # Circles always end at the start node at the latest.
            result.path = _walking_order(branch)
            break
        parent = stack[-1]
        if branch is None:
            parent.circle_indexes.update(open_circles)
        else:
            parent.branches.push(Path(branch.nodes, branch.length + frame.edge_length))

    logger.debug(
        "search_longest_path: %d visited nodes, %d circles, path of %d nodes (%.3f)",
        len(visited),
        len(result.circles),
        len(result.path.nodes),
        result.path.length,
    )
    return result


def _finish_node(
    graph: SkeletonGraph,
    frame: _Frame,
    result: ExPath,
) -> tuple[Path | None, set[int]]:
    """Turn the branches collected at ``frame`` into the branch its parent sees.

    Returns ``(None, open_circles)`` while the node lies on a circle that is
    closed above it.
    """

    circles = frame.circle_indexes
    if len(circles) > 1:
        connect_circles(result.connected_circles, circles)
    ending = {index for index in circles if result.circles[index].nodes[0] == frame.node}
    open_circles = circles - ending

    if open_circles:
        # Resolved later, when the search returns to the first node of the circle.
        for branch in frame.branches:
            result.add_side_branch(frame.node, _walking_order(branch))
        return None, open_circles

    if ending:
        resolved = find_longest_path_on_circles(graph, frame.node, min(ending), result)
        if resolved.nodes:
            frame.branches.push(_walking_order(resolved))

    if not frame.branches:
        return Path([frame.node], 0.0), set()
    longest = frame.branches.pop()
    if frame.branches:
        result.side_branches[frame.node] = SideBranches(
            _walking_order(branch) for branch in frame.branches
        )
    longest.nodes.append(frame.node)
    return longest, set()


def _walking_order(branch: Path) -> Path:
    return Path(branch.nodes[::-1], branch.length)


__all__ = ["create_longest_path", "search_longest_path"]
