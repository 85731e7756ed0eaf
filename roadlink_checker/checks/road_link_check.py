"""RoadLinkCheck - Flag link ways that are too long or wrongly classified.

Applies to main edges whose highway class is a configured link type. The way
identity is marked before evaluation, so every way is evaluated (and flagged)
at most once no matter how many of its edges are visited, or by how many
threads.

Only TooLong, WrongClass and TooLongAndWrongClass verdicts are flagged.
Unconnected ways and ways without a comparable neighbor are left alone.
"""

import logging
from typing import Optional

from roadlink_checker.checks.base_check import BaseCheck
from roadlink_checker.checks.flagged_registry import FlaggedRegistry
from roadlink_checker.config import CheckConfiguration
from roadlink_checker.constants import InstructionConfig
from roadlink_checker.core.classification_engine import ClassificationEngine
from roadlink_checker.model.check_flag import CheckFlag
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import RoadGraph
from roadlink_checker.model.verdict import TooLong, TooLongAndWrongClass, Verdict, WrongClass

logger = logging.getLogger(__name__)


def render_instruction(verdict: Verdict, actual_class: str) -> str:
    """Human-readable instruction for an issue verdict.

    Raises:
        ValueError: If the verdict is not an issue.
    """
    if isinstance(verdict, TooLong):
        return InstructionConfig.LINK_TOO_LONG.format(length_m=verdict.length_m, maximum_m=verdict.maximum_m)
    if isinstance(verdict, WrongClass):
        return InstructionConfig.LINK_WRONG_CLASS.format(actual=actual_class, suggested=verdict.suggested_class)
    if isinstance(verdict, TooLongAndWrongClass):
        too_long = InstructionConfig.LINK_TOO_LONG.format(length_m=verdict.length_m, maximum_m=verdict.maximum_m)
        wrong_class = InstructionConfig.LINK_WRONG_CLASS.format(actual=actual_class, suggested=verdict.suggested_class)
        return f"{too_long} {wrong_class}"
    raise ValueError(f"No instruction for verdict {verdict!r}")


class RoadLinkCheck(BaseCheck):
    """Link length and classification check.

    Example:
        check = RoadLinkCheck(graph=graph)
        flags = [f for e in graph.main_edges() if (f := check.run(edge=e))]
    """

    def __init__(
        self,
        graph: RoadGraph,
        configuration: Optional[CheckConfiguration] = None,
        flagged: Optional[FlaggedRegistry] = None,
    ) -> None:
        super().__init__(graph=graph, flagged=flagged)
        self.configuration = configuration if configuration is not None else CheckConfiguration()
        self.engine = ClassificationEngine.from_configuration(graph=graph, configuration=self.configuration)

    def valid_check_for_object(self, edge: RoadEdge) -> bool:
        return (
            edge.is_main_edge
            and self.engine.table.is_link(edge.highway_class)
            and not self.flagged.is_flagged(edge.osm_id)
        )

    def flag(self, edge: RoadEdge) -> Optional[CheckFlag]:
        # Another edge of this way got here first
        if not self.flagged.mark(edge.osm_id):
            return None

        verdict = self.engine.evaluate(edge=edge)
        if not verdict.is_issue:
            logger.debug(f"Way {edge.osm_id}: {verdict.verdict_type}, not flagged")
            return None

        logger.debug(f"Way {edge.osm_id}: flagged as {verdict.verdict_type}")
        return self.create_flag(
            edge=edge,
            instruction=render_instruction(verdict=verdict, actual_class=edge.highway_class),
            verdict=verdict,
        )
