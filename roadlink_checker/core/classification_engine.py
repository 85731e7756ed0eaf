"""ClassificationEngine - Decide whether a link way is too long or misclassified.

Evaluation of one edge:
1. Assemble the full way the edge belongs to
2. Resolve the continuing neighbor class at both boundary nodes
3. Sum the way length
4. Compare the way class with the link class implied by the dominant
   (more important) neighbor
5. Combine the classification result with the length check

Evaluation is a pure function of the graph: the same way evaluated from any
of its edges, any number of times, gives the same verdict. Malformed graph
data never raises; it yields NoConnectionEitherEnd.
"""

import logging
from typing import TYPE_CHECKING, Optional

from roadlink_checker.constants import LengthConfig, NeighborConfig
from roadlink_checker.core.errors import GraphInconsistencyError
from roadlink_checker.core.neighbor_resolver import NeighborResolver, WayEndpoint
from roadlink_checker.core.road_class_table import RoadClassTable
from roadlink_checker.core.way_assembler import Way, WayAssembler
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import RoadGraph
from roadlink_checker.model.verdict import (
    NoConnectionEitherEnd,
    NoLinkEquivalentEitherEnd,
    Ok,
    TooLong,
    TooLongAndWrongClass,
    Verdict,
    WrongClass,
)

if TYPE_CHECKING:
    from roadlink_checker.config import CheckConfiguration

logger = logging.getLogger(__name__)


class ClassificationEngine:
    """Link classification engine.

    Holds no state between evaluations, so one engine can serve several
    worker threads evaluating disjoint edges of the same graph.

    Example:
        engine = ClassificationEngine(graph=graph, table=RoadClassTable.default())
        verdict = engine.evaluate(edge=graph.edge(edge_id=10000001))
        if verdict.is_issue:
            ...
    """

    def __init__(
        self,
        graph: RoadGraph,
        table: RoadClassTable,
        maximum_length_m: float = LengthConfig.MAXIMUM_METERS,
        maximum_heading_deviation_deg: float = NeighborConfig.MAXIMUM_HEADING_DEVIATION_DEG,
    ) -> None:
        self.graph = graph
        self.table = table
        self.maximum_length_m = maximum_length_m
        self.assembler = WayAssembler(graph=graph)
        self.resolver = NeighborResolver(graph=graph, maximum_deviation_deg=maximum_heading_deviation_deg)

    @classmethod
    def from_configuration(cls, graph: RoadGraph, configuration: "CheckConfiguration") -> "ClassificationEngine":
        """Engine configured from a loaded check configuration."""
        return cls(
            graph=graph,
            table=RoadClassTable.from_configuration(configuration=configuration),
            maximum_length_m=configuration.maximum_length_m,
            maximum_heading_deviation_deg=configuration.maximum_heading_deviation_deg,
        )

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate(self, edge: RoadEdge) -> Verdict:
        """Evaluate the way containing an edge.

        Args:
            edge: Any constituent edge of the way

        Returns:
            Verdict for the whole way.
        """
        try:
            way = self.assembler.assemble(start_edge=edge)
            return self.evaluate_way(way=way)
        except GraphInconsistencyError as e:
            logger.warning(f"Way {edge.osm_id} (edge {edge.id}) is malformed, treating as unconnected: {e}")
            return NoConnectionEitherEnd()

    def evaluate_way(self, way: Way) -> Verdict:
        """Evaluate an already assembled way.

        Raises:
            GraphInconsistencyError: If the graph around the way is malformed.
        """
        length_m = way.length_m
        if length_m <= 0:
            logger.warning(f"{way} has zero length, treating as unconnected")
            return NoConnectionEitherEnd()

        start_class = self.resolver.resolve_endpoint(way=way, endpoint=WayEndpoint.START)
        end_class = self.resolver.resolve_endpoint(way=way, endpoint=WayEndpoint.END)

        verdict = self.combine(
            classification=self.classify(way_class=way.highway_class, start_class=start_class, end_class=end_class),
            length_m=length_m,
        )
        logger.debug(f"{way}: start={start_class}, end={end_class}, length={length_m:.1f}m -> {verdict}")
        return verdict

    def classify(self, way_class: str, start_class: Optional[str], end_class: Optional[str]) -> Verdict:
        """Classification part of the verdict, ignoring length.

        Returns:
            Ok, WrongClass, NoConnectionEitherEnd or NoLinkEquivalentEitherEnd.
        """
        present = [c for c in (start_class, end_class) if c is not None]
        if not present:
            return NoConnectionEitherEnd()

        # Only neighbors with a link form can tell which link class is expected
        comparable = [c for c in present if self.table.has_link_form(c)]
        if not comparable:
            return NoLinkEquivalentEitherEnd()

        dominant = self.dominant_class(classes=comparable)
        expected = self.table.expected_link_for(dominant)
        if expected is None or expected == way_class.strip().lower():
            return Ok()
        return WrongClass(suggested_class=expected)

    def dominant_class(self, classes: list[str]) -> str:
        """Most important class; the earlier one (start) wins exact ties."""
        return min(classes, key=self.table.priority)

    def combine(self, classification: Verdict, length_m: float) -> Verdict:
        """Merge the classification verdict with the length check."""
        too_long = length_m > self.maximum_length_m

        if isinstance(classification, WrongClass):
            if too_long:
                return TooLongAndWrongClass(
                    length_m=length_m,
                    maximum_m=self.maximum_length_m,
                    suggested_class=classification.suggested_class,
                )
            return classification
        if isinstance(classification, Ok) and too_long:
            return TooLong(length_m=length_m, maximum_m=self.maximum_length_m)
        return classification
