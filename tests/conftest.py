"""Shared pytest fixtures for roadlink_checker tests.

Provides GraphBuilder and reusable link scenarios for all tests.

COORDINATE SYSTEM:
    Tests place nodes in meters around the equator/prime meridian intersection
    (x = east, y = north) and convert with fixed per-degree factors, so lengths
    and headings can be reasoned about without GeoCalculator.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from roadlink_checker.core.road_class_table import RoadClassTable
from roadlink_checker.model.node import Node
from roadlink_checker.model.path_point import PathPoint
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import RoadGraph

# WGS84 degree lengths at the equator
METERS_PER_DEGREE_LON = 111_319.49
METERS_PER_DEGREE_LAT = 110_574.27


def point_at(x_m: float, y_m: float) -> PathPoint:
    """PathPoint x_m east and y_m north of the origin."""
    return PathPoint(lon=x_m / METERS_PER_DEGREE_LON, lat=y_m / METERS_PER_DEGREE_LAT)


class GraphBuilder:
    """Builds RoadGraphs from node positions given in meters.

    Example:
        builder = GraphBuilder()
        builder.node(1, 0, 0).node(2, 100, 0)
        builder.way(7, [1, 2], "primary")
        graph = builder.graph
    """

    def __init__(self) -> None:
        self.graph = RoadGraph()

    def node(self, node_id: int, x_m: float, y_m: float) -> "GraphBuilder":
        self.graph.add_node(node=Node(id=node_id, location=point_at(x_m=x_m, y_m=y_m)))
        return self

    def way(
        self,
        osm_id: int,
        node_ids: list[int],
        highway: str,
        two_way: Optional[bool] = None,
        **tags: str,
    ) -> list[RoadEdge]:
        return self.graph.add_way(
            osm_id=osm_id,
            node_ids=node_ids,
            tags={"highway": highway, **tags},
            two_way=two_way,
        )


# =============================================================================
# LINK SCENARIO
# =============================================================================

# Node ids of the link scenario
WEST, JUNCTION_START, EAST, LINK_MIDDLE, JUNCTION_END, FAR_END = 1, 2, 3, 4, 5, 6

START_ROAD_OSM_ID = 1
END_ROAD_OSM_ID = 2
LINK_OSM_ID = 10

# Link direction: 3-4-5 triangle, heading ~37° (north-east)
LINK_DX, LINK_DY = 0.6, 0.8


@dataclass
class LinkScenario:
    """A link way between two roads.

    Layout (meters):
        start road:  WEST(-500, 0) -> JUNCTION_START(0, 0) -> EAST(500, 0), two-way
        link:        JUNCTION_START -> LINK_MIDDLE -> JUNCTION_END, heading ~37°
        end road:    JUNCTION_END -> FAR_END, continuing the link heading, two-way

    At JUNCTION_START the link continues the eastbound direction of the start
    road (deviation ~53°), while the westbound direction doubles back (~127°).
    """

    graph: RoadGraph
    link_edges: list[RoadEdge]

    @property
    def first_link_edge(self) -> RoadEdge:
        return self.link_edges[0]


def build_link_scenario(
    link_class: str,
    link_length_m: float,
    start_class: Optional[str] = "primary",
    end_class: Optional[str] = "primary",
    link_two_way: bool = False,
) -> LinkScenario:
    """Build a two-edge link of the given class and length.

    Args:
        link_class: Highway class of the link way
        link_length_m: Total link length in meters
        start_class: Class of the road at the link start (None = no road)
        end_class: Class of the road at the link end (None = no road)
        link_two_way: Add reverse twins for the link edges
    """
    builder = GraphBuilder()
    end_x, end_y = LINK_DX * link_length_m, LINK_DY * link_length_m
    builder.node(JUNCTION_START, 0, 0)
    builder.node(LINK_MIDDLE, end_x / 2, end_y / 2)
    builder.node(JUNCTION_END, end_x, end_y)

    if start_class is not None:
        builder.node(WEST, -500, 0).node(EAST, 500, 0)
        builder.way(START_ROAD_OSM_ID, [WEST, JUNCTION_START, EAST], start_class, two_way=True)
    if end_class is not None:
        builder.node(FAR_END, end_x + 300, end_y + 400)
        builder.way(END_ROAD_OSM_ID, [JUNCTION_END, FAR_END], end_class, two_way=True)

    link_edges = builder.way(LINK_OSM_ID, [JUNCTION_START, LINK_MIDDLE, JUNCTION_END], link_class, two_way=link_two_way)
    return LinkScenario(graph=builder.graph, link_edges=link_edges)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def builder() -> GraphBuilder:
    """Empty graph builder."""
    return GraphBuilder()


@pytest.fixture
def default_table() -> RoadClassTable:
    """RoadClassTable with the default priority order and correspondence."""
    return RoadClassTable.default()


@pytest.fixture
def primary_link_too_long() -> LinkScenario:
    """1500m primary_link between two primary roads (too long, correctly classified)."""
    return build_link_scenario(link_class="primary_link", link_length_m=1500.0)


@pytest.fixture
def secondary_link_between_motorways() -> LinkScenario:
    """200m secondary_link connecting only to motorways (wrong class)."""
    return build_link_scenario(
        link_class="secondary_link",
        link_length_m=200.0,
        start_class="motorway",
        end_class="motorway",
    )


@pytest.fixture
def tertiary_link_trunk_to_tertiary() -> LinkScenario:
    """2000m tertiary_link from a trunk to a tertiary road (too long and wrong class)."""
    return build_link_scenario(
        link_class="tertiary_link",
        link_length_m=2000.0,
        start_class="trunk",
        end_class="tertiary",
    )
