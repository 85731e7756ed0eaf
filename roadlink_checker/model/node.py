"""Node - Intersection point in the road graph.

A Node represents a point where road edges meet.
It wraps a PathPoint for its location (single source of truth).
Adjacency is owned by RoadGraph, not by the node itself.
"""

from dataclasses import dataclass
from typing import Any

from roadlink_checker.model.path_point import PathPoint


@dataclass
class Node:
    """An intersection point in the road graph.

    Attributes:
        id: Unique integer identifier
        location: PathPoint containing the geographic coordinates

    Example:
        node = Node(id=1, location=PathPoint(lon=10.295, lat=46.985))
        print(node.lat_lon)  # (46.985, 10.295)
    """

    id: int
    location: PathPoint

    @property
    def lon(self) -> float:
        """Longitude delegated from location."""
        return self.location.lon

    @property
    def lat(self) -> float:
        """Latitude delegated from location."""
        return self.location.lat

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return self.location.lat_lon

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Shapely order."""
        return self.location.lon_lat

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Node":
        """Create Node from dictionary."""
        return cls(
            id=int(data["id"]),
            location=PathPoint(**data["location"]),
        )

    def __repr__(self) -> str:
        return f"Node({self.id}, {self.location})"
