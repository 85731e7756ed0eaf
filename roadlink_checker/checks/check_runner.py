"""CheckRunner - Run checks over every main edge of a graph.

Edges are evaluated independently, optionally on a thread pool. Evaluation
only reads the graph; the per-check FlaggedRegistry is the single shared
mutable state and is safe for concurrent check-and-mark.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from roadlink_checker.checks.base_check import BaseCheck
from roadlink_checker.checks.highway_access_check import HighwayAccessCheck
from roadlink_checker.checks.road_link_check import RoadLinkCheck
from roadlink_checker.config import CheckConfiguration
from roadlink_checker.constants import RunnerConfig
from roadlink_checker.model.check_flag import CheckFlag
from roadlink_checker.model.road_edge import RoadEdge
from roadlink_checker.model.road_graph import RoadGraph

logger = logging.getLogger(__name__)

AVAILABLE_CHECKS = ("RoadLinkCheck", "HighwayAccessCheck")


def build_checks(
    graph: RoadGraph,
    names: Iterable[str] = AVAILABLE_CHECKS,
    configuration: Optional[CheckConfiguration] = None,
) -> list[BaseCheck]:
    """Instantiate checks by name.

    Raises:
        ValueError: If a name is not in AVAILABLE_CHECKS.
    """
    checks: list[BaseCheck] = []
    for name in names:
        if name == "RoadLinkCheck":
            checks.append(RoadLinkCheck(graph=graph, configuration=configuration))
        elif name == "HighwayAccessCheck":
            checks.append(HighwayAccessCheck(graph=graph))
        else:
            raise ValueError(f"Unknown check {name!r}, expected one of {AVAILABLE_CHECKS}")
    return checks


class CheckRunner:
    """Batch evaluation of checks.

    Attributes:
        checks: Checks to run
        max_workers: Worker threads; 1 runs sequentially in the caller's thread
    """

    def __init__(self, checks: list[BaseCheck], max_workers: int = RunnerConfig.DEFAULT_MAX_WORKERS) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.checks = checks
        self.max_workers = max_workers

    def _run_edge(self, edge: RoadEdge) -> list[CheckFlag]:
        return [flag for check in self.checks if (flag := check.run(edge=edge)) is not None]

    def run(self, edges: Iterable[RoadEdge]) -> list[CheckFlag]:
        """Run every check on every edge.

        Returns:
            Flags sorted by (check name, way identifier).
        """
        edges = list(edges)
        flags: list[CheckFlag] = []

        if self.max_workers == 1:
            for edge in edges:
                flags.extend(self._run_edge(edge=edge))
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                for edge_flags in executor.map(self._run_edge, edges):
                    flags.extend(edge_flags)

        flags.sort(key=lambda f: (f.check_name, f.identifier))
        counts = Counter(f.check_name for f in flags)
        for check in self.checks:
            logger.info(f"{check.name}: {counts.get(check.name, 0)} flag(s) over {len(check.flagged)} way(s)")
        return flags

    def run_graph(self, graph: RoadGraph) -> list[CheckFlag]:
        """Run every check on every main edge of a graph."""
        return self.run(edges=graph.main_edges())
