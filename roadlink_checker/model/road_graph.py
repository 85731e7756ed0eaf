"""RoadGraph - Arena of nodes and edges with adjacency indexes.

Owns all nodes and edges of a road network, keyed by integer identifiers.
Provides operations for:
- Adding nodes, edges and whole ways (with reverse twins for two-way roads)
- Adjacency queries filtered by direction
- Resolving the representative (main) edge of a direction pair
- Serialization/deserialization (JSON)

Adjacency indexes are updated when edges are added, so evaluation only reads
from the graph and can run on several threads at once.
"""

import json
import logging
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from roadlink_checker.constants import GraphConfig, HighwayConfig
from roadlink_checker.core.errors import GraphInconsistencyError
from roadlink_checker.model.node import Node
from roadlink_checker.model.road_edge import RoadEdge

logger = logging.getLogger(__name__)


class EdgeDirection(Enum):
    """Direction filter for adjacency queries, relative to a node."""

    INCOMING = "incoming"  # Edges ending at the node
    OUTGOING = "outgoing"  # Edges starting at the node
    ANY = "any"


class RoadGraph:
    """Graph representing a road network.

    Example:
        graph = RoadGraph()
        graph.add_node(Node(id=1, location=PathPoint(lon=0.0, lat=0.0)))
        graph.add_node(Node(id=2, location=PathPoint(lon=0.01, lat=0.0)))
        graph.add_way(osm_id=7, node_ids=[1, 2], tags={"highway": "primary"})
        graph.edges_touching(node_id=2, direction=EdgeDirection.INCOMING)
    """

    def __init__(self) -> None:
        """Initialize empty road graph."""
        self.nodes: dict[int, Node] = {}
        self.edges: dict[int, RoadEdge] = {}

        self._incoming: dict[int, list[int]] = {}
        self._outgoing: dict[int, list[int]] = {}

    # =========================================================================
    # Build Operations
    # =========================================================================

    def add_node(self, node: Node) -> Node:
        """Add a node, replacing any node with the same id."""
        self.nodes[node.id] = node
        self._incoming.setdefault(node.id, [])
        self._outgoing.setdefault(node.id, [])
        return node

    def add_edge(self, edge: RoadEdge) -> RoadEdge:
        """Add an edge and index it by its start and end nodes.

        Edges referencing nodes that are not (yet) in the graph are accepted;
        traversing them later raises GraphInconsistencyError.

        Raises:
            ValueError: If an edge with the same id already exists.
        """
        if edge.id in self.edges:
            raise ValueError(f"Edge {edge.id} already exists")
        if edge.id == 0:
            raise ValueError("Edge id 0 is reserved (cannot tell main from reverse edge)")

        # Geometry defaults to the straight line between the end nodes
        if not edge.points:
            start = self.nodes.get(edge.start_node_id)
            end = self.nodes.get(edge.end_node_id)
            if start is not None and end is not None:
                edge.points = [start.location, end.location]

        self.edges[edge.id] = edge
        self._outgoing.setdefault(edge.start_node_id, []).append(edge.id)
        self._incoming.setdefault(edge.end_node_id, []).append(edge.id)
        return edge

    def add_way(
        self,
        osm_id: int,
        node_ids: list[int],
        tags: dict[str, str],
        two_way: Optional[bool] = None,
    ) -> list[RoadEdge]:
        """Split a way into consecutive edges and add them to the graph.

        Edge ids follow osm_id * EDGE_ID_MULTIPLIER + index (1-based). Two-way
        roads also get reverse twins with negated ids.

        Args:
            osm_id: Identifier of the way (must be positive)
            node_ids: Ordered node ids along the way (at least 2)
            tags: Tags of the way
            two_way: Force two-way/one-way. Derived from tags when None.

        Returns:
            List of created edges (main edges first, then reverse twins).

        Raises:
            ValueError: If the way has fewer than two nodes, a bad osm_id, or
                edge ids already in the graph. Nothing is added in that case.
            GraphInconsistencyError: If a node id is unknown.
        """
        if osm_id <= 0:
            raise ValueError(f"Way id must be positive, got {osm_id}")
        if len(node_ids) < 2:
            raise ValueError(f"Way {osm_id} must have at least 2 nodes, got {len(node_ids)}")
        for node_id in node_ids:
            self.node(node_id=node_id)

        oneway_value = tags.get(GraphConfig.ONEWAY_KEY, "").strip().lower()
        if oneway_value in GraphConfig.ONEWAY_REVERSE_VALUES:
            node_ids = list(reversed(node_ids))
        if two_way is None:
            two_way = self.is_two_way(tags=tags)

        main_edges = [
            RoadEdge(
                id=osm_id * GraphConfig.EDGE_ID_MULTIPLIER + index,
                osm_id=osm_id,
                start_node_id=start_id,
                end_node_id=end_id,
                tags=dict(tags),
            )
            for index, (start_id, end_id) in enumerate(zip(node_ids, node_ids[1:]), start=1)
        ]
        reverse_edges = [edge.reversed() for edge in main_edges] if two_way else []
        edges = main_edges + reverse_edges

        # Long ways spill into the id range of later ways; the whole way must fit before any edge is added
        taken = sorted(edge.id for edge in edges if edge.id in self.edges)
        if taken:
            raise ValueError(
                f"Way {osm_id} ({len(main_edges)} segments) collides with existing edge ids {taken[:5]}"
            )

        for edge in edges:
            self.add_edge(edge=edge)
        return edges

    @staticmethod
    def is_two_way(tags: dict[str, str]) -> bool:
        """Derive two-way-ness from oneway, highway and junction tags."""
        oneway_value = tags.get(GraphConfig.ONEWAY_KEY, "").strip().lower()
        if oneway_value in GraphConfig.ONEWAY_TRUE_VALUES or oneway_value in GraphConfig.ONEWAY_REVERSE_VALUES:
            return False
        if oneway_value in GraphConfig.ONEWAY_FALSE_VALUES:
            return True
        highway = tags.get(HighwayConfig.HIGHWAY_KEY, "").strip().lower()
        junction = tags.get(GraphConfig.JUNCTION_KEY, "").strip().lower()
        if highway in GraphConfig.IMPLIED_ONEWAY_CLASSES:
            return False
        return junction not in GraphConfig.IMPLIED_ONEWAY_JUNCTIONS

    # =========================================================================
    # Query Operations
    # =========================================================================

    def node(self, node_id: int) -> Node:
        """Get a node by id.

        Raises:
            GraphInconsistencyError: If the node does not exist.
        """
        node = self.nodes.get(node_id)
        if node is None:
            raise GraphInconsistencyError(f"Node {node_id} not found")
        return node

    def edge(self, edge_id: int) -> RoadEdge:
        """Get an edge by id.

        Raises:
            GraphInconsistencyError: If the edge does not exist.
        """
        edge = self.edges.get(edge_id)
        if edge is None:
            raise GraphInconsistencyError(f"Edge {edge_id} not found")
        return edge

    def edges_touching(self, node_id: int, direction: EdgeDirection = EdgeDirection.ANY) -> list[RoadEdge]:
        """Edges touching a node, filtered by direction.

        Args:
            node_id: ID of the node
            direction: INCOMING (ending at node), OUTGOING (starting at node) or ANY

        Returns:
            Edges sorted by id. A self-loop appears once.

        Raises:
            GraphInconsistencyError: If the node does not exist.
        """
        if node_id not in self.nodes:
            raise GraphInconsistencyError(f"Node {node_id} not found")

        edge_ids: set[int] = set()
        if direction in (EdgeDirection.INCOMING, EdgeDirection.ANY):
            edge_ids.update(self._incoming.get(node_id, []))
        if direction in (EdgeDirection.OUTGOING, EdgeDirection.ANY):
            edge_ids.update(self._outgoing.get(node_id, []))
        return [self.edges[edge_id] for edge_id in sorted(edge_ids)]

    def main_edge(self, edge: RoadEdge) -> RoadEdge:
        """Representative direction of an edge.

        Returns:
            The positive-id twin for a reverse edge when it exists, else the edge.
        """
        if edge.is_main_edge:
            return edge
        return self.edges.get(edge.reverse_id, edge)

    def main_edges(self) -> Iterator[RoadEdge]:
        """Iterate main edges in id order."""
        for edge_id in sorted(self.edges):
            edge = self.edges[edge_id]
            if edge.is_main_edge:
                yield edge

    def get_stats(self) -> dict:
        """Get graph statistics."""
        return {
            "total_nodes": len(self.nodes),
            "total_edges": len(self.edges),
            "main_edges": sum(1 for e in self.edges.values() if e.is_main_edge),
            "total_ways": len({e.osm_id for e in self.edges.values()}),
        }

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize entire graph to JSON-compatible dict."""
        return {
            "version": GraphConfig.SERIALIZATION_VERSION,
            "nodes": {str(nid): asdict(node) for nid, node in sorted(self.nodes.items())},
            "edges": {str(eid): asdict(edge) for eid, edge in sorted(self.edges.items())},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoadGraph":
        """Deserialize graph from dict.

        Nodes are loaded before edges so that edges without explicit points
        take their geometry from their end nodes.
        """
        graph = cls()
        for node_data in _values(data["nodes"]):
            graph.add_node(node=Node.from_dict(data=node_data))
        for edge_data in _values(data["edges"]):
            graph.add_edge(edge=RoadEdge.from_dict(data=edge_data))
        logger.info(f"Loaded road graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges")
        return graph

    @classmethod
    def load_json(cls, path: Path | str) -> "RoadGraph":
        """Load graph from a JSON file written by save_json()."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(data=json.load(f))

    def save_json(self, path: Path | str) -> None:
        """Write graph to a JSON file."""
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


def _values(container: dict | list) -> Iterable[dict]:
    """Entries of an id-keyed mapping or a plain list."""
    if isinstance(container, dict):
        return container.values()
    return container
