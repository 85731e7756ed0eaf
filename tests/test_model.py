"""Tests for roadlink_checker data model classes.

Tests: PathPoint, Node, RoadEdge, RoadGraph, Verdict, CheckFlag
"""

import json

import pytest

from conftest import GraphBuilder, point_at
from roadlink_checker.core.errors import GraphInconsistencyError
from roadlink_checker.model.check_flag import CheckFlag
from roadlink_checker.model.node import Node
from roadlink_checker.model.path_point import PathPoint
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import EdgeDirection, RoadGraph
from roadlink_checker.model.verdict import (
    NoConnectionEitherEnd,
    NoLinkEquivalentEitherEnd,
    Ok,
    TooLong,
    TooLongAndWrongClass,
    Verdict,
    WrongClass,
)


class TestPathPoint:
    """PathPoint - geometry atom."""

    def test_nan_coordinates_rejected(self) -> None:
        with pytest.raises(ValueError):
            PathPoint(lon=float("nan"), lat=0.0)
        with pytest.raises(ValueError):
            PathPoint(lon=0.0, lat=float("nan"))

    @pytest.mark.parametrize(
        "lon, lat",
        [
            (0.0, 95.0),
            (0.0, -90.5),
            (180.5, 0.0),
            (float("inf"), 0.0),
            (0.0, float("-inf")),
        ],
    )
    def test_out_of_range_coordinates_rejected(self, lon: float, lat: float) -> None:
        with pytest.raises(ValueError):
            PathPoint(lon=lon, lat=lat)

    def test_range_limits_accepted(self) -> None:
        point = PathPoint(lon=-180.0, lat=90.0)
        assert point.lon_lat == (-180.0, 90.0)

    def test_bearing_to_east(self) -> None:
        bearing = point_at(x_m=0, y_m=0).bearing_to(other=point_at(x_m=100, y_m=0))
        assert bearing == pytest.approx(90.0, abs=0.01)

    def test_lat_lon_order(self) -> None:
        point = PathPoint(lon=10.0, lat=46.0)
        assert point.lat_lon == (46.0, 10.0)
        assert point.lon_lat == (10.0, 46.0)


class TestNode:
    """Node - intersection point."""

    def test_from_dict(self) -> None:
        node = Node.from_dict(data={"id": "7", "location": {"lon": 1.0, "lat": 2.0}})
        assert node.id == 7
        assert node.lon_lat == (1.0, 2.0)


class TestRoadEdge:
    """RoadEdge - directed edge with polyline and tags."""

    def test_highway_class_normalized(self) -> None:
        edge = RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2, tags={"highway": " Primary_Link "})
        assert edge.highway_class == "primary_link"

    def test_missing_highway_tag_is_empty(self) -> None:
        edge = RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2)
        assert edge.highway_class == ""

    def test_main_and_reverse(self) -> None:
        edge = RoadEdge(id=5, osm_id=1, start_node_id=1, end_node_id=2, points=[point_at(0, 0), point_at(10, 0)])
        twin = edge.reversed()
        assert edge.is_main_edge
        assert not twin.is_main_edge
        assert twin.id == -5
        assert (twin.start_node_id, twin.end_node_id) == (2, 1)
        assert twin.points[0] == edge.points[-1]

    def test_length_of_polyline(self) -> None:
        """Length sums all polyline legs (L-shaped 300m + 400m)."""
        edge = RoadEdge(
            id=1,
            osm_id=1,
            start_node_id=1,
            end_node_id=2,
            points=[point_at(0, 0), point_at(300, 0), point_at(300, 400)],
        )
        assert edge.length_m == pytest.approx(700, rel=1e-3)

    def test_length_without_geometry_is_zero(self) -> None:
        edge = RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2, points=[point_at(0, 0)])
        assert edge.length_m == 0.0

    def test_headings(self) -> None:
        """Heading at start follows the first leg, at end the last leg."""
        edge = RoadEdge(
            id=1,
            osm_id=1,
            start_node_id=1,
            end_node_id=2,
            points=[point_at(0, 0), point_at(300, 0), point_at(300, 400)],
        )
        assert edge.heading_at_start == pytest.approx(90.0, abs=0.01)
        assert edge.heading_at_end == pytest.approx(0.0, abs=0.01)

    def test_heading_without_geometry_raises(self) -> None:
        edge = RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2)
        with pytest.raises(GraphInconsistencyError):
            _ = edge.heading_at_start


class TestRoadGraph:
    """RoadGraph - arena, adjacency and way building."""

    def test_add_way_creates_edges_and_twins(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0).node(3, 200, 0)
        edges = builder.way(42, [1, 2, 3], "primary")

        assert [e.id for e in edges] == [42001, 42002, -42001, -42002]
        assert all(e.osm_id == 42 for e in edges)
        assert builder.graph.edge(edge_id=-42002).start_node_id == 3

    def test_link_roads_are_two_way_by_default(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0)
        edges = builder.way(7, [1, 2], "primary_link")
        assert len(edges) == 2

    @pytest.mark.parametrize(
        "tags",
        [
            {"highway": "primary", "oneway": "yes"},
            {"highway": "motorway"},
            {"highway": "motorway_link"},
            {"highway": "primary", "junction": "roundabout"},
        ],
    )
    def test_one_way_tags(self, tags: dict[str, str]) -> None:
        assert not RoadGraph.is_two_way(tags=tags)

    def test_oneway_no_overrides_implied_oneway(self) -> None:
        assert RoadGraph.is_two_way(tags={"highway": "motorway", "oneway": "no"})

    def test_oneway_reverse_flips_direction(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0)
        edges = builder.way(7, [1, 2], "primary", oneway="-1")
        assert len(edges) == 1
        assert (edges[0].start_node_id, edges[0].end_node_id) == (2, 1)

    def test_edges_touching_by_direction(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0).node(3, 200, 0)
        builder.way(5, [1, 2], "primary", two_way=False)
        builder.way(6, [2, 3], "primary", two_way=True)
        graph = builder.graph

        assert [e.id for e in graph.edges_touching(node_id=2, direction=EdgeDirection.INCOMING)] == [-6001, 5001]
        assert [e.id for e in graph.edges_touching(node_id=2, direction=EdgeDirection.OUTGOING)] == [6001]
        assert [e.id for e in graph.edges_touching(node_id=2)] == [-6001, 5001, 6001]

    def test_edges_touching_unknown_node_raises(self) -> None:
        with pytest.raises(GraphInconsistencyError):
            RoadGraph().edges_touching(node_id=99)

    def test_unknown_ids_raise(self) -> None:
        graph = RoadGraph()
        with pytest.raises(GraphInconsistencyError):
            graph.node(node_id=1)
        with pytest.raises(GraphInconsistencyError):
            graph.edge(edge_id=1)

    def test_main_edge(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0)
        builder.way(7, [1, 2], "primary", two_way=True)
        graph = builder.graph

        assert graph.main_edge(edge=graph.edge(edge_id=-7001)).id == 7001
        assert graph.main_edge(edge=graph.edge(edge_id=7001)).id == 7001

    def test_duplicate_edge_rejected(self) -> None:
        graph = RoadGraph()
        graph.add_edge(edge=RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2))
        with pytest.raises(ValueError):
            graph.add_edge(edge=RoadEdge(id=1, osm_id=1, start_node_id=1, end_node_id=2))

    def test_edge_geometry_defaults_to_nodes(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 250, 0)
        edge = builder.graph.add_edge(edge=RoadEdge(id=9, osm_id=9, start_node_id=1, end_node_id=2))
        assert len(edge.points) == 2
        assert edge.length_m == pytest.approx(250, rel=1e-3)

    def test_add_way_with_unknown_node_raises(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0)
        with pytest.raises(GraphInconsistencyError):
            builder.way(7, [1, 2], "primary")

    def test_get_stats(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0).node(3, 200, 0)
        builder.way(5, [1, 2, 3], "primary", two_way=True)
        builder.way(6, [3, 1], "motorway")

        stats = builder.graph.get_stats()
        assert stats == {"total_nodes": 3, "total_edges": 5, "main_edges": 3, "total_ways": 2}

    def test_long_way_gets_consecutive_ids(self) -> None:
        """A way with more segments than the id multiplier still builds completely."""
        graph = RoadGraph()
        for node_id in range(1, 1103):
            graph.add_node(node=Node(id=node_id, location=point_at(x_m=node_id * 10, y_m=0)))

        edges = graph.add_way(osm_id=7, node_ids=list(range(1, 1103)), tags={"highway": "residential"})

        assert len(edges) == 2202
        assert edges[0].id == 7001
        assert edges[1100].id == 8101
        assert graph.get_stats()["main_edges"] == 1101

    def test_colliding_long_way_leaves_graph_unchanged(self) -> None:
        """A way spilling into ids of an existing way is rejected before anything is added."""
        graph = RoadGraph()
        for node_id in range(1, 1104):
            graph.add_node(node=Node(id=node_id, location=point_at(x_m=node_id * 10, y_m=0)))
        graph.add_way(osm_id=8, node_ids=[1102, 1103], tags={"highway": "primary"})
        stats_before = graph.get_stats()
        touching_before = [e.id for e in graph.edges_touching(node_id=500)]

        with pytest.raises(ValueError, match="collides"):
            graph.add_way(osm_id=7, node_ids=list(range(1, 1103)), tags={"highway": "residential"})

        assert graph.get_stats() == stats_before
        assert not any(e.osm_id == 7 for e in graph.edges.values())
        assert [e.id for e in graph.edges_touching(node_id=500)] == touching_before == []


class TestRoadGraphSerialization:
    """RoadGraph - dict and JSON serialization."""

    def test_to_dict_and_from_dict(self, builder: GraphBuilder) -> None:
        builder.node(1, 0, 0).node(2, 100, 0).node(3, 100, 100)
        builder.way(5, [1, 2, 3], "primary_link", two_way=True)
        original = builder.graph

        restored = RoadGraph.from_dict(data=json.loads(json.dumps(original.to_dict())))

        assert set(restored.nodes) == set(original.nodes)
        assert set(restored.edges) == set(original.edges)
        assert restored.edge(edge_id=-5002).tags == {"highway": "primary_link"}
        assert restored.edge(edge_id=5002).length_m == pytest.approx(original.edge(edge_id=5002).length_m)
        assert [e.id for e in restored.edges_touching(node_id=2)] == [e.id for e in original.edges_touching(node_id=2)]

    def test_from_dict_accepts_lists_and_missing_points(self) -> None:
        data = {
            "nodes": [
                {"id": 1, "location": {"lon": 0.0, "lat": 0.0}},
                {"id": 2, "location": {"lon": 0.001, "lat": 0.0}},
            ],
            "edges": [{"id": 3001, "osm_id": 3, "start_node_id": 1, "end_node_id": 2, "tags": {"highway": "trunk"}}],
        }
        graph = RoadGraph.from_dict(data=data)
        assert graph.edge(edge_id=3001).length_m > 100

    def test_save_and_load_json(self, builder: GraphBuilder, tmp_path) -> None:
        builder.node(1, 0, 0).node(2, 100, 0)
        builder.way(5, [1, 2], "residential")
        path = tmp_path / "graph.json"

        builder.graph.save_json(path=path)
        loaded = RoadGraph.load_json(path=path)

        assert loaded.get_stats() == builder.graph.get_stats()


class TestVerdict:
    """Verdict - tagged variants."""

    def test_issue_verdicts(self) -> None:
        assert TooLong(length_m=1500.0, maximum_m=1000.0).is_issue
        assert WrongClass(suggested_class="motorway_link").is_issue
        assert TooLongAndWrongClass(length_m=1500.0, maximum_m=1000.0, suggested_class="trunk_link").is_issue

    def test_non_issue_verdicts(self) -> None:
        assert not Ok().is_issue
        assert not NoConnectionEitherEnd().is_issue
        assert not NoLinkEquivalentEitherEnd().is_issue

    def test_from_dict_restores_type(self) -> None:
        verdict = TooLongAndWrongClass(length_m=2000.0, maximum_m=1000.0, suggested_class="trunk_link")
        assert Verdict.from_dict(data=verdict.to_dict()) == verdict

    def test_from_dict_unknown_type(self) -> None:
        with pytest.raises(ValueError):
            Verdict.from_dict(data={"verdict_type": "Nope"})


class TestCheckFlag:
    """CheckFlag - reporting record."""

    def test_to_dict(self) -> None:
        flag = CheckFlag(
            check_name="RoadLinkCheck",
            identifier=10,
            edge_ids=(10001, 10002),
            instruction="Fix it.",
            verdict=WrongClass(suggested_class="motorway_link"),
        )
        data = flag.to_dict()
        assert data["edge_ids"] == [10001, 10002]
        assert data["verdict"] == {"suggested_class": "motorway_link", "verdict_type": "WrongClass"}
        assert CheckFlag.from_dict(data=data) == flag
