"""Tests for building the skeleton graph from an annotated Voronoi diagram."""

import json
import logging

import pytest

from support_islands.errors import UnannotatedInputError
from support_islands.skeleton_graph import (
    CURVED_EDGE_LENGTH,
    SkeletonGraph,
    build_skeleton_graph,
    get_neighbor,
    get_neighbor_distance,
)
from support_islands.voronoi import (
    EdgeCategory,
    Line,
    VertexCategory,
    VoronoiDiagram,
    load_diagram,
)


class TestBuildSkeletonGraph:
    def test_keeps_only_inner_edges(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        assert set(graph.nodes) == {0, 1, 2}
        assert graph.edge_count() == 2
        assert [n.node for n in graph[0].neighbors] == [1]
        assert [n.node for n in graph[1].neighbors] == [0, 2]
        assert [n.node for n in graph[2].neighbors] == [1]

    def test_edge_lengths_are_euclidean(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        assert get_neighbor_distance(graph, 0, 1) == pytest.approx(2.0)
        assert get_neighbor_distance(graph, 1, 2) == pytest.approx(4.0)

    def test_neighbors_are_symmetric(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        for node in graph.nodes.values():
            for neighbor in node.neighbors:
                back = get_neighbor(graph, neighbor.node, node.key)
                assert back is not None
                assert back.length == neighbor.length

    def test_neighbor_edges_start_at_their_node(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        for node in graph.nodes.values():
            for neighbor in node.neighbors:
                assert neighbor.edge.vertex0.index == node.key
                assert neighbor.edge.vertex1.index == neighbor.node

    def test_distance_comes_from_first_edge_cell(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        # Vertices 0 and 1 are first reached by an edge of the bottom cell,
        # vertex 2 by the half edge of the top cell.
        assert graph[0].distance == pytest.approx(1.0)
        assert graph[1].distance == pytest.approx(1.0)
        assert graph[2].distance == pytest.approx(2.0)

    def test_nodes_copy_vertex_data(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        for key, node in graph.nodes.items():
            vertex = corridor_diagram.vertices[key]
            assert node.point == vertex.point
            assert node.category is vertex.category
        assert set(graph[0].to_dict()) == {"key", "x", "y", "distance", "category", "neighbors"}
        assert json.loads(json.dumps(graph.to_payload())) == graph.to_payload()

    def test_contour_category_is_kept(self, corridor_diagram, corridor_lines):
        graph = build_skeleton_graph(corridor_diagram, corridor_lines)

        assert [node.key for node in graph.contour_nodes()] == [0]

    def test_curved_edge_uses_placeholder_length(self):
        diagram = VoronoiDiagram()
        cell = diagram.add_cell(0)
        other = diagram.add_cell(0)
        a = diagram.add_vertex(0.0, 0.0, VertexCategory.ON_CONTOUR)
        b = diagram.add_vertex(30.0, 40.0)
        diagram.add_edge_pair(a, b, cell, other, is_linear=False)

        graph = build_skeleton_graph(diagram, [Line((0.0, -1.0), (1.0, -1.0))])

        assert get_neighbor_distance(graph, a.index, b.index) == CURVED_EDGE_LENGTH

    def test_unknown_vertex_gives_empty_graph(self, corridor_lines, caplog):
        diagram = VoronoiDiagram()
        cell = diagram.add_cell(0)
        other = diagram.add_cell(1)
        a = diagram.add_vertex(0.0, 0.0, VertexCategory.ON_CONTOUR)
        b = diagram.add_vertex(2.0, 0.0, VertexCategory.INSIDE)
        c = diagram.add_vertex(4.0, 0.0, VertexCategory.UNKNOWN)
        diagram.add_edge_pair(a, b, cell, other)
        diagram.add_edge_pair(b, c, cell, other)

        with caplog.at_level(logging.WARNING, logger="support_islands.skeleton_graph"):
            graph = build_skeleton_graph(diagram, corridor_lines)

        assert graph.is_empty
        assert "annotation" in caplog.text

    def test_unknown_vertex_raises_in_strict_mode(self, corridor_lines):
        diagram = VoronoiDiagram()
        cell = diagram.add_cell(0)
        other = diagram.add_cell(1)
        a = diagram.add_vertex(0.0, 0.0, VertexCategory.UNKNOWN)
        b = diagram.add_vertex(2.0, 0.0, VertexCategory.INSIDE)
        diagram.add_edge_pair(a, b, cell, other)

        with pytest.raises(UnannotatedInputError):
            build_skeleton_graph(diagram, corridor_lines, strict=True)

    def test_unknown_vertex_on_dropped_edge_is_ignored(self, corridor_lines):
        diagram = VoronoiDiagram()
        cell = diagram.add_cell(0)
        other = diagram.add_cell(1)
        a = diagram.add_vertex(0.0, 0.0, VertexCategory.ON_CONTOUR)
        b = diagram.add_vertex(2.0, 0.0, VertexCategory.INSIDE)
        c = diagram.add_vertex(4.0, 0.0, VertexCategory.UNKNOWN)
        diagram.add_edge_pair(a, b, cell, other)
        diagram.add_edge_pair(
            b,
            c,
            cell,
            other,
            category=EdgeCategory.POINTS_OUTSIDE,
            twin_category=EdgeCategory.POINTS_OUTSIDE,
        )

        graph = build_skeleton_graph(diagram, corridor_lines, strict=True)

        assert set(graph.nodes) == {a.index, b.index}


class TestSkeletonGraph:
    def test_add_node_returns_existing(self):
        graph = SkeletonGraph()
        first = graph.add_node("A", (0.0, 0.0), distance=1.0)
        second = graph.add_node("A", (5.0, 5.0), distance=3.0)

        assert first is second
        assert second.point == (0.0, 0.0)
        assert second.distance == 1.0

    def test_missing_neighbor(self, straight_graph):
        assert get_neighbor(straight_graph, "A", "C") is None
        with pytest.raises(KeyError):
            get_neighbor_distance(straight_graph, "A", "C")

    def test_path_length(self, straight_graph):
        assert straight_graph.path_length(["A", "B", "C"]) == pytest.approx(6.0)

    def test_to_payload_lists_neighbors(self, straight_graph):
        payload = straight_graph.to_payload()

        by_key = {item["key"]: item for item in payload["nodes"]}
        assert by_key["B"]["neighbors"] == [
            {"node": "A", "length": 2.0},
            {"node": "C", "length": 4.0},
        ]
        assert by_key["A"]["category"] == "on_contour"


class TestDiagramPayload:
    def test_load_diagram_builds_same_skeleton(self, tmp_path, corridor_diagram, corridor_lines):
        payload = corridor_diagram.to_payload()
        payload["lines"] = [line.to_list() for line in corridor_lines]
        path = tmp_path / "diagram.json"
        path.write_text(json.dumps(payload))

        diagram, lines = load_diagram(path)
        graph = build_skeleton_graph(diagram, lines)
        expected = build_skeleton_graph(corridor_diagram, corridor_lines)

        assert graph.to_payload() == expected.to_payload()
        assert lines == corridor_lines

    def test_twin_must_point_back(self, corridor_diagram):
        payload = corridor_diagram.to_payload()
        payload["edges"][0]["twin"] = 3

        with pytest.raises(ValueError):
            VoronoiDiagram.from_payload(payload)
