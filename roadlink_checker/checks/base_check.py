"""BaseCheck - Common lifecycle of a graph check.

A check decides per edge whether it applies (valid_check_for_object) and,
if so, whether the edge's way must be flagged (flag). Flags always cover the
whole way, whichever edge triggered them.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from roadlink_checker.checks.flagged_registry import FlaggedRegistry
from roadlink_checker.core.errors import GraphInconsistencyError
from roadlink_checker.core.way_assembler import WayAssembler
from roadlink_checker.model.check_flag import CheckFlag
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import RoadGraph
from roadlink_checker.model.verdict import Verdict

logger = logging.getLogger(__name__)


class BaseCheck(ABC):
    """Abstract base class for checks over a RoadGraph.

    Subclasses implement valid_check_for_object() and flag().

    Attributes:
        graph: Graph under validation
        flagged: Ways already handled by this check (injectable, thread-safe)
    """

    def __init__(self, graph: RoadGraph, flagged: Optional[FlaggedRegistry] = None) -> None:
        self.graph = graph
        self.flagged = flagged if flagged is not None else FlaggedRegistry()
        self._walker = WayAssembler(graph=graph)

    @property
    def name(self) -> str:
        """Check name used in flags and configuration."""
        return type(self).__name__

    @abstractmethod
    def valid_check_for_object(self, edge: RoadEdge) -> bool:
        """Whether this check applies to the edge."""

    @abstractmethod
    def flag(self, edge: RoadEdge) -> Optional[CheckFlag]:
        """Evaluate an edge that passed valid_check_for_object()."""

    def run(self, edge: RoadEdge) -> Optional[CheckFlag]:
        """Validity test followed by evaluation."""
        if not self.valid_check_for_object(edge=edge):
            return None
        return self.flag(edge=edge)

    def create_flag(
        self,
        edge: RoadEdge,
        instruction: str,
        verdict: Optional[Verdict] = None,
        edges: Optional[Iterable[RoadEdge]] = None,
    ) -> CheckFlag:
        """Flag covering every main edge of the way containing edge.

        Args:
            edge: Edge that triggered the flag
            instruction: Rendered instruction
            verdict: Structured verdict, if any
            edges: Way edges when already known; walked from edge otherwise
        """
        if edges is None:
            try:
                edges = self._walker.collect_edges(start_edge=edge)
            except GraphInconsistencyError as e:
                logger.warning(f"Could not walk way {edge.osm_id}, flagging edge {edge.id} only: {e}")
                edges = [self.graph.main_edge(edge=edge)]
        return CheckFlag(
            check_name=self.name,
            identifier=edge.osm_id,
            edge_ids=tuple(sorted(e.id for e in edges)),
            instruction=instruction,
            verdict=verdict,
        )
