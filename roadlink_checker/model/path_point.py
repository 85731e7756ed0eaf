"""PathPoint - The fundamental geometry atom of the road graph.

A PathPoint represents a single WGS84 coordinate.
It is the single source of truth for location throughout the system.

Used by:
- Node (wraps a PathPoint for its location)
- RoadEdge (contains list of PathPoints for polyline geometry)
"""

from dataclasses import dataclass

import numpy as np

from roadlink_checker.core.geo_calculator import GeoCalculator


@dataclass
class PathPoint:
    """A point on a road polyline.

    Attributes:
        lon: Longitude in decimal degrees (WGS84)
        lat: Latitude in decimal degrees (WGS84)

    Example:
        point = PathPoint(lon=10.295, lat=46.985)
    """

    lon: float
    lat: float

    @property
    def lat_lon(self) -> tuple[float, float]:
        """Return (lat, lon) tuple - standard geographic order."""
        return (self.lat, self.lon)

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Shapely order."""
        return (self.lon, self.lat)

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.lon) or np.isnan(self.lat):
            raise ValueError(f"PathPoint cannot have NaN coordinates, got ({self.lon}, {self.lat})")
        if not (np.isfinite(self.lon) and np.isfinite(self.lat)):
            raise ValueError(f"PathPoint coordinates must be finite, got ({self.lon}, {self.lat})")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude must be within [-180, 180], got {self.lon}")
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude must be within [-90, 90], got {self.lat}")

    def bearing_to(self, other: "PathPoint") -> float:
        """Initial bearing from this point towards another, in degrees."""
        return GeoCalculator.initial_bearing_deg(
            lon1=self.lon,
            lat1=self.lat,
            lon2=other.lon,
            lat2=other.lat,
        )

    def __repr__(self) -> str:
        return f"PathPoint(lon={self.lon:.6f}, lat={self.lat:.6f})"
