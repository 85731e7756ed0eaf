"""NeighborResolver - Find the road a way continues into at one of its ends.

Intersections often have many edges, so raw adjacency over-counts. Links are
drawn as ramps branching off a through-road, so the neighbor a link logically
continues into is the one whose heading best continues the link's heading.

Candidates at the start node are edges entering it; at the end node, edges
leaving it. The way's own edges (and reverse twins) are never candidates.

- No candidate: no connection (None)
- One candidate: that candidate
- Several: smallest heading deviation within the forward band wins,
  lowest edge id on exact ties; None if every candidate doubles back
"""

import logging
from enum import Enum
from typing import Optional

from roadlink_checker.constants import NeighborConfig
from roadlink_checker.core.geo_calculator import GeoCalculator
from roadlink_checker.core.way_assembler import Way
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import EdgeDirection, RoadGraph

logger = logging.getLogger(__name__)


class WayEndpoint(Enum):
    """Which boundary node of a way to resolve."""

    START = "start"
    END = "end"


class NeighborResolver:
    """Resolves the continuing neighbor edge at a way endpoint.

    Attributes:
        graph: Road graph to query
        maximum_deviation_deg: Widest heading deviation still counted as a
            forward continuation (0 = straight ahead, 180 = full reversal)
    """

    def __init__(
        self,
        graph: RoadGraph,
        maximum_deviation_deg: float = NeighborConfig.MAXIMUM_HEADING_DEVIATION_DEG,
    ) -> None:
        self.graph = graph
        self.maximum_deviation_deg = maximum_deviation_deg

    def candidates(self, way: Way, endpoint: WayEndpoint, exclude_osm_id: Optional[int] = None) -> list[RoadEdge]:
        """Directionally appropriate edges at an endpoint, outside the way.

        Raises:
            GraphInconsistencyError: If the endpoint node does not exist.
        """
        if endpoint is WayEndpoint.START:
            node_id, direction = way.start_node_id, EdgeDirection.INCOMING
        else:
            node_id, direction = way.end_node_id, EdgeDirection.OUTGOING

        excluded_osm_ids = {way.osm_id, exclude_osm_id}
        return [
            edge
            for edge in self.graph.edges_touching(node_id=node_id, direction=direction)
            if not way.contains(edge=edge) and edge.osm_id not in excluded_osm_ids
        ]

    def heading_deviation(self, way: Way, endpoint: WayEndpoint, candidate: RoadEdge) -> float:
        """Deviation between the way heading and a candidate heading at an endpoint.

        At the start the way departs the node and the candidate arrives; at the
        end the way arrives and the candidate departs.

        Raises:
            GraphInconsistencyError: If either edge has no usable geometry.
        """
        if endpoint is WayEndpoint.START:
            way_heading = way.first_edge.heading_at_start
            candidate_heading = candidate.heading_at_end
        else:
            way_heading = way.last_edge.heading_at_end
            candidate_heading = candidate.heading_at_start
        return GeoCalculator.bearing_deviation_deg(bearing_a=way_heading, bearing_b=candidate_heading)

    def resolve_edge(
        self,
        way: Way,
        endpoint: WayEndpoint,
        exclude_osm_id: Optional[int] = None,
    ) -> Optional[RoadEdge]:
        """Pick the single best continuing neighbor edge.

        Args:
            way: Assembled way
            endpoint: START or END boundary node of the way
            exclude_osm_id: Additional way identity to ignore

        Returns:
            The chosen edge, or None when nothing connects or every
            candidate doubles back.

        Raises:
            GraphInconsistencyError: If the graph around the endpoint is malformed.
        """
        candidates = self.candidates(way=way, endpoint=endpoint, exclude_osm_id=exclude_osm_id)
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        scored = []
        for candidate in candidates:
            deviation = self.heading_deviation(way=way, endpoint=endpoint, candidate=candidate)
            if deviation <= self.maximum_deviation_deg:
                scored.append((deviation, candidate.id, candidate))

        if not scored:
            logger.debug(f"{way}: all {len(candidates)} candidates at {endpoint.value} double back")
            return None
        return min(scored, key=lambda item: (item[0], item[1]))[2]

    def resolve_endpoint(
        self,
        way: Way,
        endpoint: WayEndpoint,
        exclude_osm_id: Optional[int] = None,
    ) -> Optional[str]:
        """Class of the continuing neighbor at an endpoint, None for no connection."""
        edge = self.resolve_edge(way=way, endpoint=endpoint, exclude_osm_id=exclude_osm_id)
        if edge is None:
            return None
        return edge.highway_class or None
