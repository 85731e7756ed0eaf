"""RoadEdge - One directed arc of the road graph.

A RoadEdge connects two nodes and stores the polyline geometry between them.
Several consecutive edges can belong to the same real-world way, which they
share through their osm_id. Two-way roads are represented by a main edge
(positive id) and a reverse twin carrying the negated id.
"""

from dataclasses import dataclass, field
from typing import Any

from shapely.geometry import LineString

from roadlink_checker.constants import HighwayConfig
from roadlink_checker.core.errors import GraphInconsistencyError
from roadlink_checker.core.geo_calculator import GeoCalculator
from roadlink_checker.model.path_point import PathPoint


@dataclass
class RoadEdge:
    """A directed road edge between two nodes.

    Attributes:
        id: Edge identifier. Negative for the reverse twin of a two-way road.
        osm_id: Identifier of the logical way this edge belongs to
        start_node_id: ID of the node the edge leaves
        end_node_id: ID of the node the edge enters
        points: Polyline from start to end (source of truth for geometry)
        tags: OSM-style tags of the way

    Properties:
        highway_class: Lower-cased highway tag
        is_main_edge: Whether this is the representative direction
        length_m: Geodesic length of the polyline
        heading_at_start: Bearing when leaving the start node
        heading_at_end: Bearing when arriving at the end node
    """

    id: int
    osm_id: int
    start_node_id: int
    end_node_id: int
    points: list[PathPoint] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def highway_class(self) -> str:
        """Highway classification ("" when the edge has no highway tag)."""
        return self.tags.get(HighwayConfig.HIGHWAY_KEY, "").strip().lower()

    @property
    def is_main_edge(self) -> bool:
        """Main edges carry positive ids; reverse twins are negative."""
        return self.id > 0

    @property
    def reverse_id(self) -> int:
        """Identifier of the opposite-direction twin (may not exist)."""
        return -self.id

    @property
    def length_m(self) -> float:
        """Geodesic polyline length in meters (0.0 without at least two points)."""
        if len(self.points) < 2:
            return 0.0
        return GeoCalculator.geodesic_length_m(line=self.get_linestring())

    @property
    def heading_at_start(self) -> float:
        """Bearing in degrees of the first polyline leg (leaving the start node).

        Raises:
            GraphInconsistencyError: If the edge has fewer than two points.
        """
        self._require_geometry()
        return self.points[0].bearing_to(other=self.points[1])

    @property
    def heading_at_end(self) -> float:
        """Bearing in degrees on arrival at the end node.

        Raises:
            GraphInconsistencyError: If the edge has fewer than two points.
        """
        self._require_geometry()
        before, last = self.points[-2], self.points[-1]
        return GeoCalculator.final_bearing_deg(lon1=before.lon, lat1=before.lat, lon2=last.lon, lat2=last.lat)

    def _require_geometry(self) -> None:
        if len(self.points) < 2:
            raise GraphInconsistencyError(f"Edge {self.id} has {len(self.points)} point(s), need at least 2")

    def get_linestring(self) -> LineString:
        """Get Shapely LineString for the edge geometry (lon, lat)."""
        return LineString([p.lon_lat for p in self.points])

    def reversed(self) -> "RoadEdge":
        """Build the reverse twin of this edge."""
        return RoadEdge(
            id=self.reverse_id,
            osm_id=self.osm_id,
            start_node_id=self.end_node_id,
            end_node_id=self.start_node_id,
            points=list(reversed(self.points)),
            tags=dict(self.tags),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoadEdge":
        """Create RoadEdge from dictionary."""
        return cls(
            id=int(data["id"]),
            osm_id=int(data["osm_id"]),
            start_node_id=int(data["start_node_id"]),
            end_node_id=int(data["end_node_id"]),
            points=[PathPoint(**p) for p in data.get("points", [])],
            tags={str(k): str(v) for k, v in data.get("tags", {}).items()},
        )

    def __repr__(self) -> str:
        return f"RoadEdge({self.id}, way={self.osm_id}, {self.start_node_id}->{self.end_node_id}, {self.highway_class})"
