"""
In-memory model of an annotated segment Voronoi diagram.

The diagram itself is produced upstream; this module only fixes the shape
the skeleton builder reads: half edges with twins, the cell each half edge
bounds (and the boundary segment that generated that cell), and the
inside/outside annotation of vertices and edges.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .geometry import Point, point_segment_distance


class VertexCategory(Enum):
    INSIDE = "inside"
    OUTSIDE = "outside"
    ON_CONTOUR = "on_contour"
    UNKNOWN = "unknown"


class EdgeCategory(Enum):
    POINTS_INSIDE = "points_inside"
    POINTS_OUTSIDE = "points_outside"
    POINTS_TO_CONTOUR = "points_to_contour"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Line:
    """Boundary segment of an island."""

    start: Point
    end: Point

    def distance_to(self, point: Point) -> float:
        return point_segment_distance(point, self.start, self.end)

    def to_list(self) -> list[list[float]]:
        return [[float(self.start[0]), float(self.start[1])], [float(self.end[0]), float(self.end[1])]]


@dataclass(eq=False, slots=True)
class VoronoiVertex:
    index: int
    x: float
    y: float
    category: VertexCategory = VertexCategory.UNKNOWN

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(eq=False, slots=True)
class VoronoiCell:
    index: int
    source_index: int


@dataclass(eq=False, slots=True)
class VoronoiEdge:
    """Directed half edge running from ``vertex0`` to ``vertex1``."""

    index: int
    vertex0: VoronoiVertex | None
    vertex1: VoronoiVertex | None
    cell: VoronoiCell
    twin: VoronoiEdge | None = field(default=None, repr=False)
    is_primary: bool = True
    is_linear: bool = True
    category: EdgeCategory = EdgeCategory.UNKNOWN

    @property
    def is_secondary(self) -> bool:
        return not self.is_primary

    @property
    def is_curved(self) -> bool:
        return not self.is_linear

    @property
    def is_infinite(self) -> bool:
        return self.vertex0 is None or self.vertex1 is None


@dataclass(slots=True)
class VoronoiDiagram:
    vertices: list[VoronoiVertex] = field(default_factory=list)
    edges: list[VoronoiEdge] = field(default_factory=list)
    cells: list[VoronoiCell] = field(default_factory=list)

    def add_vertex(
        self,
        x: float,
        y: float,
        category: VertexCategory = VertexCategory.INSIDE,
    ) -> VoronoiVertex:
        vertex = VoronoiVertex(len(self.vertices), float(x), float(y), category)
        self.vertices.append(vertex)
        return vertex

    def add_cell(self, source_index: int) -> VoronoiCell:
        cell = VoronoiCell(len(self.cells), int(source_index))
        self.cells.append(cell)
        return cell

    def add_edge_pair(
        self,
        vertex0: VoronoiVertex | None,
        vertex1: VoronoiVertex | None,
        cell: VoronoiCell,
        twin_cell: VoronoiCell,
        *,
        category: EdgeCategory = EdgeCategory.POINTS_INSIDE,
        twin_category: EdgeCategory | None = None,
        is_primary: bool = True,
        is_linear: bool = True,
    ) -> tuple[VoronoiEdge, VoronoiEdge]:
        """Append a half edge and its twin; return both in insertion order."""

        edge = VoronoiEdge(
            index=len(self.edges),
            vertex0=vertex0,
            vertex1=vertex1,
            cell=cell,
            is_primary=is_primary,
            is_linear=is_linear,
            category=category,
        )
        twin = VoronoiEdge(
            index=edge.index + 1,
            vertex0=vertex1,
            vertex1=vertex0,
            cell=twin_cell,
            is_primary=is_primary,
            is_linear=is_linear,
            category=category if twin_category is None else twin_category,
        )
        edge.twin = twin
        twin.twin = edge
        self.edges.extend((edge, twin))
        return edge, twin

    def to_payload(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "vertices": [
                {"x": vertex.x, "y": vertex.y, "category": vertex.category.value}
                for vertex in self.vertices
            ],
            "cells": [{"source_index": cell.source_index} for cell in self.cells],
            "edges": [
                {
                    "vertex0": None if edge.vertex0 is None else edge.vertex0.index,
                    "vertex1": None if edge.vertex1 is None else edge.vertex1.index,
                    "cell": edge.cell.index,
                    "twin": None if edge.twin is None else edge.twin.index,
                    "is_primary": edge.is_primary,
                    "is_linear": edge.is_linear,
                    "category": edge.category.value,
                }
                for edge in self.edges
            ],
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> VoronoiDiagram:
        diagram = cls()
        for item in payload.get("vertices", []):
            diagram.add_vertex(
                item["x"],
                item["y"],
                VertexCategory(item.get("category", VertexCategory.UNKNOWN.value)),
            )
        for item in payload.get("cells", []):
            diagram.add_cell(item["source_index"])

        def vertex_at(raw: int | None) -> VoronoiVertex | None:
            return None if raw is None else diagram.vertices[int(raw)]

        twins: list[int] = []
        for index, item in enumerate(payload.get("edges", [])):
            diagram.edges.append(
                VoronoiEdge(
                    index=index,
                    vertex0=vertex_at(item.get("vertex0")),
                    vertex1=vertex_at(item.get("vertex1")),
                    cell=diagram.cells[int(item["cell"])],
                    is_primary=bool(item.get("is_primary", True)),
                    is_linear=bool(item.get("is_linear", True)),
                    category=EdgeCategory(item.get("category", EdgeCategory.UNKNOWN.value)),
                )
            )
            twins.append(int(item["twin"]))

        for edge, twin_index in zip(diagram.edges, twins):
            if not 0 <= twin_index < len(diagram.edges):
                raise ValueError(f"Edge {edge.index} references missing twin {twin_index}.")
            edge.twin = diagram.edges[twin_index]
        for edge in diagram.edges:
            if edge.twin is edge or edge.twin.twin is not edge:
                raise ValueError(f"Edge {edge.index} and its twin do not reference each other.")
        return diagram


def lines_from_payload(raw_lines: list[Any]) -> list[Line]:
    return [Line(tuple(map(float, start)), tuple(map(float, end))) for start, end in raw_lines]


def load_diagram(path: Path | str) -> tuple[VoronoiDiagram, list[Line]]:
    """Read a diagram payload with its ``lines`` from a JSON file."""

    payload = json.loads(Path(path).read_text())
    return VoronoiDiagram.from_payload(payload), lines_from_payload(payload.get("lines", []))


__all__ = [
    "VertexCategory",
    "EdgeCategory",
    "Line",
    "VoronoiVertex",
    "VoronoiCell",
    "VoronoiEdge",
    "VoronoiDiagram",
    "lines_from_payload",
    "load_diagram",
]
