"""WayAssembler - Rebuild a logical way from any one of its edges.

A real-world way is usually split into several consecutive edges, and two-way
roads carry a reverse twin for every edge. The assembler walks outward from a
starting edge across all edges sharing its way identity (osm_id) and collapses
every direction pair to its main edge.

The result only depends on the set of edges found, never on the entry edge,
so evaluating a way from any of its edges gives the same Way.
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass
from functools import cached_property

from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import EdgeDirection, RoadGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Way:
    """A logical way assembled from graph edges.

    Attributes:
        osm_id: Way identity shared by all edges
        edges: Main edges of the way, sorted by id
        start_node_id: Boundary node where the way begins
        end_node_id: Boundary node where the way ends
        first_edge: Edge leaving the start node
        last_edge: Edge entering the end node
    """

    osm_id: int
    edges: tuple[RoadEdge, ...]
    start_node_id: int
    end_node_id: int
    first_edge: RoadEdge
    last_edge: RoadEdge

    @cached_property
    def edge_ids(self) -> frozenset[int]:
        return frozenset(edge.id for edge in self.edges)

    @property
    def highway_class(self) -> str:
        """Class of the lowest-id edge."""
        return self.edges[0].highway_class

    @property
    def length_m(self) -> float:
        """Plain sum of edge lengths in meters, in edge id order."""
        return sum(edge.length_m for edge in self.edges)

    def contains(self, edge: RoadEdge) -> bool:
        """Whether an edge, or its reverse twin, is part of the way."""
        return edge.id in self.edge_ids or edge.reverse_id in self.edge_ids

    def __repr__(self) -> str:
        return (
            f"Way({self.osm_id}, {len(self.edges)} edges, "
            f"{self.start_node_id}->{self.end_node_id}, {self.highway_class})"
        )


class WayAssembler:
    """Collects the edges of the way a given edge belongs to.

    Example:
        assembler = WayAssembler(graph=graph)
        way = assembler.assemble(start_edge=graph.edge(edge_id=10000001))
    """

    def __init__(self, graph: RoadGraph) -> None:
        self.graph = graph

    def collect_edges(self, start_edge: RoadEdge) -> list[RoadEdge]:
        """Main edges of the way containing start_edge, sorted by id.

        Breadth-first walk over both end nodes of every visited edge. Each
        edge is visited once, so self-loops and edges that are their own
        neighbor at both ends terminate.

        Raises:
            GraphInconsistencyError: If an edge references an unknown node.
        """
        osm_id = start_edge.osm_id
        first = self.graph.main_edge(edge=start_edge)
        found: dict[int, RoadEdge] = {first.id: first}
        visited_nodes: set[int] = set()
        queue: deque[RoadEdge] = deque([first])

        while queue:
            edge = queue.popleft()
            for node_id in (edge.start_node_id, edge.end_node_id):
                if node_id in visited_nodes:
                    continue
                visited_nodes.add(node_id)
                for candidate in self.graph.edges_touching(node_id=node_id, direction=EdgeDirection.ANY):
                    if candidate.osm_id != osm_id:
                        continue
                    representative = self.graph.main_edge(edge=candidate)
                    if representative.id not in found:
                        found[representative.id] = representative
                        queue.append(representative)

        return [found[edge_id] for edge_id in sorted(found)]

    def assemble(self, start_edge: RoadEdge) -> Way:
        """Assemble the full way containing start_edge.

        Args:
            start_edge: Any edge of the way (main or reverse)

        Returns:
            Way with its boundary nodes and boundary edges resolved.

        Raises:
            GraphInconsistencyError: If an edge references an unknown node.
        """
        edges = self.collect_edges(start_edge=start_edge)
        first_edge, last_edge = self._boundary_edges(edges=edges)
        way = Way(
            osm_id=start_edge.osm_id,
            edges=tuple(edges),
            start_node_id=first_edge.start_node_id,
            end_node_id=last_edge.end_node_id,
            first_edge=first_edge,
            last_edge=last_edge,
        )
        logger.debug(f"Assembled {way} from edge {start_edge.id}")
        return way

    @staticmethod
    def _boundary_edges(edges: list[RoadEdge]) -> tuple[RoadEdge, RoadEdge]:
        """Find the edges leaving the start node and entering the end node.

        The start node has no incoming way edge and the end node no outgoing
        way edge; the lowest edge id wins when several qualify. Closed rings
        have neither, so they start at the lowest-id edge and end at the
        lowest-id edge entering its start node.
        """
        incoming = Counter(edge.end_node_id for edge in edges)
        outgoing = Counter(edge.start_node_id for edge in edges)

        sources = [edge for edge in edges if incoming[edge.start_node_id] == 0]
        sinks = [edge for edge in edges if outgoing[edge.end_node_id] == 0]

        first_edge = sources[0] if sources else edges[0]
        if sinks:
            return first_edge, sinks[0]

        closing = [edge for edge in edges if edge.end_node_id == first_edge.start_node_id]
        return first_edge, closing[0] if closing else edges[-1]
