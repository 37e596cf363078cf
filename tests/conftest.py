"""Pytest fixtures for support_islands tests."""

from __future__ import annotations

from typing import Callable, Iterable

import pytest

from support_islands.skeleton_graph import SkeletonGraph
from support_islands.voronoi import (
    EdgeCategory,
    Line,
    VertexCategory,
    VoronoiDiagram,
)

GraphFactory = Callable[..., SkeletonGraph]


def make_graph(
    points: dict[str, tuple[float, float]],
    edges: Iterable[tuple[str, str] | tuple[str, str, float]],
    contour: Iterable[str] = (),
) -> SkeletonGraph:
    """Graph with string keys; edges without a length use the straight distance."""

    contour = set(contour)
    graph = SkeletonGraph()
    for key, point in points.items():
        category = VertexCategory.ON_CONTOUR if key in contour else VertexCategory.INSIDE
        graph.add_node(key, point, category=category)
    for edge in edges:
        graph.connect(*edge)
    return graph


@pytest.fixture
def graph_factory() -> GraphFactory:
    return make_graph


@pytest.fixture
def straight_graph() -> SkeletonGraph:
    """A-B-C on the x axis with edge lengths 2 and 4."""

    return make_graph(
        {"A": (0.0, 0.0), "B": (2.0, 0.0), "C": (6.0, 0.0)},
        [("A", "B"), ("B", "C")],
        contour=["A"],
    )


@pytest.fixture
def square_with_branch() -> SkeletonGraph:
    """Unit square A-B-C-D with a branch of length 3 hanging off C."""

    return make_graph(
        {
            "A": (0.0, 0.0),
            "B": (1.0, 0.0),
            "C": (1.0, 1.0),
            "D": (0.0, 1.0),
            "E": (4.0, 1.0),
        },
        [("A", "B"), ("B", "C"), ("C", "D"), ("D", "A"), ("C", "E")],
        contour=["A"],
    )


@pytest.fixture
def corridor_lines() -> list[Line]:
    return [
        Line((-1.0, -1.0), (7.0, -1.0)),
        Line((-1.0, 2.0), (7.0, 2.0)),
    ]


@pytest.fixture
def corridor_diagram() -> VoronoiDiagram:
    """Skeleton (0,0)-(2,0)-(6,0) of a corridor plus edges the builder must drop."""

    diagram = VoronoiDiagram()
    bottom = diagram.add_cell(0)
    top = diagram.add_cell(1)
    v0 = diagram.add_vertex(0.0, 0.0, VertexCategory.ON_CONTOUR)
    v1 = diagram.add_vertex(2.0, 0.0, VertexCategory.INSIDE)
    v2 = diagram.add_vertex(6.0, 0.0, VertexCategory.INSIDE)
    outside = diagram.add_vertex(9.0, 0.0, VertexCategory.OUTSIDE)

    diagram.add_edge_pair(v0, v1, bottom, top)
    diagram.add_edge_pair(
        v1,
        v2,
        top,
        bottom,
        category=EdgeCategory.POINTS_OUTSIDE,
        twin_category=EdgeCategory.POINTS_INSIDE,
    )
    diagram.add_edge_pair(v2, outside, bottom, top)
    diagram.add_edge_pair(v1, None, bottom, top)
    diagram.add_edge_pair(v0, v2, bottom, top, is_primary=False)
    diagram.add_edge_pair(
        v0,
        v2,
        bottom,
        top,
        category=EdgeCategory.POINTS_OUTSIDE,
        twin_category=EdgeCategory.POINTS_TO_CONTOUR,
    )
    return diagram
