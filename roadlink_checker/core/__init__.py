"""Link classification engine.

- RoadClassTable: Total order over highway classes, link <-> parent mapping
- WayAssembler: Rebuilds a logical way from any of its edges
- NeighborResolver: Continuing neighbor at a way endpoint (heading based)
- ClassificationEngine: Combines the above into a Verdict
- GeoCalculator: Bearings, distances and geodesic lengths
"""

from roadlink_checker.core.errors import ConfigurationError, GraphInconsistencyError
from roadlink_checker.core.geo_calculator import GeoCalculator
from roadlink_checker.core.road_class_table import RoadClassTable

# WayAssembler, NeighborResolver and ClassificationEngine have circular import with model
# Import directly: from roadlink_checker.core.classification_engine import ClassificationEngine

__all__ = [
    # Errors
    "ConfigurationError",
    "GraphInconsistencyError",
    # Geometry
    "GeoCalculator",
    # Class table
    "RoadClassTable",
]
