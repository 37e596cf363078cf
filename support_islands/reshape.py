from __future__ import annotations

import logging

from .errors import EmptyLongestPathError
from .paths import ExPath, Path
from .skeleton_graph import SkeletonGraph

logger = logging.getLogger(__name__)

# Relative margin a side branch must win by; keeps rounding noise from
# swapping branches of equal length back and forth.
LENGTH_TOLERANCE = 1e-9


def reshape_longest_path(graph: SkeletonGraph, ex_path: ExPath) -> int:
    """Swap in side branches that are longer than the rest of the main path.

    Walks the main path from its start; wherever the longest side branch of
    a node is longer than the remaining path behind that node, the branch
    becomes the new continuation and the old continuation is stored as a
    side branch of the node. Walks repeat until a pass makes no swap.

    Returns:
        Number of swaps made.
    """

    if not ex_path.path.nodes:
        raise EmptyLongestPathError("Longest path search returned a path without nodes.")

    swaps = 0
    changed = True
    while changed:
        changed = False
        nodes = ex_path.path.nodes
        walked = 0.0
        index = 0
        while index < len(nodes):
            key = nodes[index]
            if index:
                walked += graph.neighbor_distance(nodes[index - 1], key)
            branches = ex_path.side_branches.get(key)
            remaining = ex_path.path.length - walked
            if branches and _is_longer(branches.top().length, remaining):
                new_tail = branches.pop()
                old_tail = Path(nodes[index + 1 :], remaining)
                if old_tail.nodes:
                    branches.push(old_tail)
                elif not branches:
                    del ex_path.side_branches[key]
                ex_path.path = Path(nodes[: index + 1] + new_tail.nodes, walked + new_tail.length)
                nodes = ex_path.path.nodes
                swaps += 1
                changed = True
                logger.debug(
                    "reshape_longest_path: swapped branch at node %r, length %.3f -> %.3f",
                    key,
                    walked + remaining,
                    ex_path.path.length,
                )
            index += 1
    return swaps


def _is_longer(candidate: float, current: float) -> bool:
    return candidate - current > LENGTH_TOLERANCE * max(1.0, abs(current))


__all__ = ["LENGTH_TOLERANCE", "reshape_longest_path"]
