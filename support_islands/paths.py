"""Path containers shared by the longest path search, circle resolution and reshaping."""

from __future__ import annotations

import heapq
import itertools
import json
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Sequence

from .skeleton_graph import Neighbor, NodeKey, json_key

ConnectedCircles = dict[int, set[int]]


@dataclass(slots=True)
class Path:
    """Node keys in walking order and the summed edge length between them."""

    nodes: list[NodeKey] = field(default_factory=list)
    length: float = 0.0

    def __len__(self) -> int:
        return len(self.nodes)

    def append(self, key: NodeKey, edge_length: float) -> None:
        self.nodes.append(key)
        self.length += edge_length

    def copy(self) -> Path:
        return Path(list(self.nodes), self.length)

    def to_dict(self) -> dict[str, object]:
        return {"nodes": [json_key(key) for key in self.nodes], "length": float(self.length)}


@dataclass(slots=True)
class Circle:
    """Cycle of the skeleton; the last node connects back to the first one."""

    nodes: list[NodeKey]
    length: float

    def __contains__(self, key: object) -> bool:
        return key in self.nodes

    def to_dict(self) -> dict[str, object]:
        return {"nodes": [json_key(key) for key in self.nodes], "length": float(self.length)}


class SideBranches:
    """Branches hanging off one node, the longest always on top.

    Branches of equal length come out in insertion order.
    """

    __slots__ = ("_heap", "_counter")

    def __init__(self, branches: Iterable[Path] = ()) -> None:
        self._heap: list[tuple[float, int, Path]] = []
        self._counter = itertools.count()
        for branch in branches:
            self.push(branch)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Path]:
        """Iterate from the longest branch to the shortest without consuming."""

        for _, _, branch in sorted(self._heap, key=lambda item: (item[0], item[1])):
            yield branch

    def __repr__(self) -> str:
        return f"SideBranches({[branch.length for branch in self]!r})"

    def push(self, branch: Path) -> None:
        heapq.heappush(self._heap, (-branch.length, next(self._counter), branch))

    def top(self) -> Path:
        if not self._heap:
            raise IndexError("top from empty side branches")
        return self._heap[0][2]

    def pop(self) -> Path:
        if not self._heap:
            raise IndexError("pop from empty side branches")
        return heapq.heappop(self._heap)[2]

    def longest_length(self) -> float:
        return self._heap[0][2].length if self._heap else 0.0


@dataclass(slots=True)
class ExPath:
    """Longest path from the start node plus everything seen beside it."""

    path: Path = field(default_factory=Path)
    side_branches: dict[NodeKey, SideBranches] = field(default_factory=dict)
    circles: list[Circle] = field(default_factory=list)
    connected_circles: ConnectedCircles = field(default_factory=dict)

    @property
    def nodes(self) -> list[NodeKey]:
        return self.path.nodes

    @property
    def length(self) -> float:
        return self.path.length

    def add_side_branch(self, key: NodeKey, branch: Path) -> None:
        self.side_branches.setdefault(key, SideBranches()).push(branch)

    def longest_side_branch(self, key: NodeKey) -> Path | None:
        branches = self.side_branches.get(key)
        return branches.top() if branches else None

    def to_payload(self) -> dict[str, object]:
        return {
            "path": self.path.to_dict(),
            "side_branches": [
                {"node": json_key(key), "branches": [branch.to_dict() for branch in branches]}
                for key, branches in self.side_branches.items()
            ],
            "circles": [circle.to_dict() for circle in self.circles],
            "connected_circles": {
                str(index): sorted(connected) for index, connected in sorted(self.connected_circles.items())
            },
        }

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(self.to_payload(), indent=indent)


def create_circle(
    path: Path,
    neighbor: Neighbor,
    *,
    position: Mapping[NodeKey, int] | None = None,
    walked: Sequence[float] | None = None,
) -> Circle | None:
    """Return the circle closed by stepping from ``path``'s last node to ``neighbor``.

    ``position`` maps path nodes to their index and saves the linear scan.
    Without ``walked`` (cumulative distance per path index) the circle
    length still includes the path walked before the circle starts.
    """

    if len(path.nodes) < 2:
        return None
    if position is not None:
        index = position.get(neighbor.node)
    else:
        try:
            index = path.nodes.index(neighbor.node, 0, len(path.nodes) - 1)
        except ValueError:
            index = None
    if index is None or index >= len(path.nodes) - 1:
        return None
    length = path.length + neighbor.length
    if walked is not None:
        length -= walked[index]
    return Circle(list(path.nodes[index:]), length)


def merge_connected_circle(
    dst: ConnectedCircles,
    src: ConnectedCircles,
    dst_circle_count: int = 0,
) -> None:
    """Merge ``src`` into ``dst``, shifting the indexes of ``src`` by ``dst_circle_count``.

    After the merge every circle lists all other circles reachable from it,
    in both directions.
    """

    for src_index, src_connected in src.items():
        group = {dst_circle_count + src_index}
        group.update(dst_circle_count + index for index in src_connected)
        pending = list(group)
        while pending:
            index = pending.pop()
            for other in dst.get(index, ()):
                if other not in group:
                    group.add(other)
                    pending.append(other)
        for index in group:
            dst[index] = group - {index}


def connect_circles(connected: ConnectedCircles, indexes: Iterable[int]) -> None:
    """Record that the circles in ``indexes`` share a node."""

    members = set(indexes)
    if len(members) < 2:
        return
    merge_connected_circle(connected, {index: members - {index} for index in members})


def append_neighbor_branch(dst: ExPath, src: ExPath) -> None:
    """Move side branches and circles of ``src`` into ``dst``."""

    for key, branches in src.side_branches.items():
        target = dst.side_branches.get(key)
        if target is None:
            dst.side_branches[key] = branches
            continue
        for branch in branches:
            target.push(branch)

    if src.circles:
        if src.connected_circles:
            merge_connected_circle(dst.connected_circles, src.connected_circles, len(dst.circles))
        dst.circles.extend(src.circles)
    src.side_branches = {}
    src.circles = []
    src.connected_circles = {}


__all__ = [
    "ConnectedCircles",
    "Path",
    "Circle",
    "SideBranches",
    "ExPath",
    "create_circle",
    "merge_connected_circle",
    "connect_circles",
    "append_neighbor_branch",
]
