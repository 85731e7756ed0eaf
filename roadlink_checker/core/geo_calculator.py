"""Geodesic calculations on Earth's surface.

Provides geographic helper functions for road network validation:
- Bearing calculation (initial heading between points)
- Polyline length on the WGS84 ellipsoid
- Angular deviation between headings (circular math)

Bearings are in degrees clockwise from North (0-360).
"""

from math import atan2, cos, degrees, radians, sin

from pyproj import Geod
from shapely.geometry import LineString

# Ellipsoid used for edge lengths
WGS84_GEOD = Geod(ellps="WGS84")


class GeoCalculator:
    """Static methods for geodesic calculations on Earth's surface.

    Coordinates are in decimal degrees (WGS84).
    Bearings are in degrees clockwise from North (0-360).
    Distances are in meters.
    """

    @staticmethod
    def initial_bearing_deg(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
        """Calculate initial bearing from point 1 to point 2.

        The bearing is the compass direction to travel from start to end,
        measured clockwise from true North.

        Args:
            lon1: Longitude of start point (decimal degrees)
            lat1: Latitude of start point (decimal degrees)
            lon2: Longitude of end point (decimal degrees)
            lat2: Latitude of end point (decimal degrees)

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        lon1_rad, lat1_rad = radians(lon1), radians(lat1)
        lon2_rad, lat2_rad = radians(lon2), radians(lat2)
        dlon = lon2_rad - lon1_rad
        y = sin(dlon) * cos(lat2_rad)
        x = cos(lat1_rad) * sin(lat2_rad) - sin(lat1_rad) * cos(lat2_rad) * cos(dlon)
        return (degrees(atan2(y, x)) + 360) % 360

    @staticmethod
    def final_bearing_deg(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
        """Calculate the bearing on arrival at point 2 when coming from point 1.

        Returns:
            Bearing in degrees (0-360, clockwise from North).
        """
        reverse = GeoCalculator.initial_bearing_deg(lon1=lon2, lat1=lat2, lon2=lon1, lat2=lat1)
        return (reverse + 180) % 360

    @staticmethod
    def geodesic_length_m(line: LineString) -> float:
        """Length of a lon/lat polyline on the WGS84 ellipsoid.

        Args:
            line: Shapely LineString with (lon, lat) coordinates

        Returns:
            Length in meters. 0.0 for empty or single-point lines.
        """
        if line.is_empty or len(line.coords) < 2:
            return 0.0
        return float(WGS84_GEOD.geometry_length(line))

    @staticmethod
    def bearing_deviation_deg(bearing_a: float, bearing_b: float) -> float:
        """Absolute angular difference between two bearings.

        Handles the wraparound at 0°/360° correctly, always taking the shorter arc.

        Args:
            bearing_a: First bearing in degrees
            bearing_b: Second bearing in degrees

        Returns:
            Deviation in degrees (0-180). 0 = same heading, 180 = opposite.
        """
        return abs((bearing_a - bearing_b + 180) % 360 - 180)
