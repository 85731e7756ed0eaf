"""HighwayAccessCheck - Flag suspicious blanket access tags.

access=yes or access=permissive opens a way to every mode of transport
unless a mode is excluded explicitly. That is rarely intended on motorways
and trunks, nor on footways and similar paths.
"""

from typing import Optional

from roadlink_checker.checks.base_check import BaseCheck
from roadlink_checker.constants import AccessConfig, InstructionConfig
from roadlink_checker.model.check_flag import CheckFlag
from roadlink_checker.model.road_edge import RoadEdge


class HighwayAccessCheck(BaseCheck):
    """Access tag check on main edges."""

    def valid_check_for_object(self, edge: RoadEdge) -> bool:
        return edge.is_main_edge and not self.flagged.is_flagged(edge.osm_id)

    def flag(self, edge: RoadEdge) -> Optional[CheckFlag]:
        if not self.flagged.mark(edge.osm_id):
            return None

        access = edge.tags.get(AccessConfig.ACCESS_KEY, "").strip().lower()
        if access not in AccessConfig.ACCESS_VALUES_TO_FLAG:
            return None

        highway = edge.highway_class
        if highway in AccessConfig.MOTORWAY_CLASSES:
            return self.create_flag(edge=edge, instruction=InstructionConfig.HIGHWAY_IS_MOTORWAY)
        if highway in AccessConfig.FOOTWAY_CLASSES:
            return self.create_flag(edge=edge, instruction=InstructionConfig.HIGHWAY_IS_FOOTWAY)
        return None
