"""Configuration constants for Road Link Checker.

All configurable defaults are centralized here for easy tuning.
Runtime overrides are read by roadlink_checker.config.CheckConfiguration.

Classes:
    HighwayConfig: Link classes, class priority and link/parent correspondence
    LengthConfig: Maximum link length
    NeighborConfig: Heading continuity band for neighbor resolution
    AccessConfig: Access tag combinations flagged by HighwayAccessCheck
    InstructionConfig: Flag instruction templates
    GraphConfig: Edge identifier scheme and serialization version
    RunnerConfig: Batch evaluation settings
"""


class HighwayConfig:
    """Highway classes used by the link classification engine."""

    # Classes considered "link" classes (on/off-ramps, connectors)
    LINK_TYPES = [
        "motorway_link",
        "trunk_link",
        "primary_link",
        "secondary_link",
        "tertiary_link",
    ]

    # Class importance, most important first
    PRIORITY_ORDER = [
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
    ]

    # Link class -> parent class
    LINK_TO_PARENT = {
        "motorway_link": "motorway",
        "trunk_link": "trunk",
        "primary_link": "primary",
        "secondary_link": "secondary",
        "tertiary_link": "tertiary",
    }
    assert set(LINK_TO_PARENT.keys()) == set(LINK_TYPES)
    assert set(LINK_TO_PARENT.values()) <= set(PRIORITY_ORDER)

    HIGHWAY_KEY = "highway"
    LINK_SUFFIX = "_link"


class LengthConfig:
    """Maximum cumulative link length."""

    MAXIMUM_METERS = 1000.0
    METERS_PER_MILE = 1609.344


class NeighborConfig:
    """Neighbor resolution parameters."""

    # Candidates whose heading deviates more than this from the way heading
    # are treated as doubling back and are not eligible (0 = straight ahead)
    MAXIMUM_HEADING_DEVIATION_DEG = 90.0


class AccessConfig:
    """Access tag combinations flagged by HighwayAccessCheck."""

    ACCESS_KEY = "access"
    ACCESS_VALUES_TO_FLAG = ["yes", "permissive"]
    MOTORWAY_CLASSES = ["motorway", "trunk"]
    FOOTWAY_CLASSES = [
        "footway",
        "bridleway",
        "steps",
        "path",
        "cycleway",
        "pedestrian",
        "track",
        "bus_guideway",
        "busway",
        "raceway",
    ]


class InstructionConfig:
    """Instruction templates rendered into check flags."""

    LINK_TOO_LONG = "Invalid link, distance, {length_m:.1f} m, greater than maximum, {maximum_m:.1f} m."
    LINK_WRONG_CLASS = "Link is classified as {actual} but its dominant connection suggests {suggested}."
    HIGHWAY_IS_MOTORWAY = "Including ski, horse, moped, hazmat and so on, unless explicitly excluded."
    HIGHWAY_IS_FOOTWAY = "Including car, horse, moped, hazmat and so on, unless explicitly excluded."


class GraphConfig:
    """Edge identifier scheme and serialization settings."""

    # Edges built by RoadGraph.add_way get ids osm_id * EDGE_ID_MULTIPLIER + index
    EDGE_ID_MULTIPLIER = 1000
    SERIALIZATION_VERSION = "1.0"

    ONEWAY_KEY = "oneway"
    ONEWAY_TRUE_VALUES = ["yes", "true", "1"]
    # One-way against the digitized node order
    ONEWAY_REVERSE_VALUES = ["-1", "reverse"]
    ONEWAY_FALSE_VALUES = ["no", "false", "0"]
    # Classes that are one-way unless tagged otherwise
    IMPLIED_ONEWAY_CLASSES = ["motorway", "motorway_link"]
    JUNCTION_KEY = "junction"
    IMPLIED_ONEWAY_JUNCTIONS = ["roundabout", "circular"]


class RunnerConfig:
    """Batch evaluation settings."""

    DEFAULT_MAX_WORKERS = 4
