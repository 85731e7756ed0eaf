"""Checks over a road graph.

- FlaggedRegistry: Thread-safe set of handled way identities
- BaseCheck: Common check lifecycle and flag creation
- RoadLinkCheck: Link length and classification
- HighwayAccessCheck: Blanket access tags on motorways and footways
- CheckRunner: Batch evaluation on a thread pool
"""

from roadlink_checker.checks.base_check import BaseCheck
from roadlink_checker.checks.check_runner import AVAILABLE_CHECKS, CheckRunner, build_checks
from roadlink_checker.checks.flagged_registry import FlaggedRegistry
from roadlink_checker.checks.highway_access_check import HighwayAccessCheck
from roadlink_checker.checks.road_link_check import RoadLinkCheck, render_instruction

__all__ = [
    "BaseCheck",
    "FlaggedRegistry",
    "RoadLinkCheck",
    "render_instruction",
    "HighwayAccessCheck",
    "CheckRunner",
    "build_checks",
    "AVAILABLE_CHECKS",
]
