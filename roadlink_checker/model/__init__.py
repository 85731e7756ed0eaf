"""Data model classes for the road graph.

Follows the separation of Geometry (where things are) vs Topology (how things connect):
- PathPoint: Geometry atom (lon, lat)
- Node: Intersection point (wraps PathPoint, has ID)
- RoadEdge: Directed edge between nodes, with polyline and tags
- RoadGraph: Arena owning all nodes and edges, with adjacency indexes
- Verdict: Outcome of evaluating one link way
- CheckFlag: Flagged way reported by a check
"""

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

__all__ = [
    "PathPoint",
    "Node",
    "RoadEdge",
    "RoadGraph",
    "EdgeDirection",
    "Verdict",
    "Ok",
    "TooLong",
    "WrongClass",
    "TooLongAndWrongClass",
    "NoConnectionEitherEnd",
    "NoLinkEquivalentEitherEnd",
    "CheckFlag",
]
