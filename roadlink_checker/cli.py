"""Command line interface - run the checks on a road graph JSON file.

Run: roadlink-check graph.json --config checks.json --output flags.json
  or python -m roadlink_checker graph.json
"""

import argparse
import json
import logging
import sys
from typing import Optional

from roadlink_checker.checks.check_runner import AVAILABLE_CHECKS, CheckRunner, build_checks
from roadlink_checker.config import CheckConfiguration
from roadlink_checker.constants import RunnerConfig
from roadlink_checker.core.errors import ConfigurationError
from roadlink_checker.model.road_graph import RoadGraph

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="roadlink-check",
        description="Flag highway links that are too long or classified inconsistently with their connections.",
    )
    parser.add_argument("graph", help="Road graph JSON file (RoadGraph.to_dict format)")
    parser.add_argument("--config", default=None, help="Check configuration JSON file")
    parser.add_argument(
        "--checks",
        default=",".join(AVAILABLE_CHECKS),
        help=f"Comma-separated checks to run (default: {','.join(AVAILABLE_CHECKS)})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=RunnerConfig.DEFAULT_MAX_WORKERS,
        help="Worker threads (1 = sequential)",
    )
    parser.add_argument("--output", default=None, help="Write flags to this JSON file instead of stdout")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        configuration = CheckConfiguration.load(path=args.config)
        graph = RoadGraph.load_json(path=args.graph)
        names = [name.strip() for name in args.checks.split(",") if name.strip()]
        checks = build_checks(graph=graph, names=names, configuration=configuration)
        runner = CheckRunner(checks=checks, max_workers=args.workers)
    except (ConfigurationError, OSError, ValueError, KeyError) as e:
        logger.error(f"Cannot start checks: {e}")
        return EXIT_INPUT_ERROR

    flags = runner.run_graph(graph=graph)
    payload = json.dumps([flag.to_dict() for flag in flags], indent=2)

    if args.output is None:
        print(payload)
    else:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info(f"Wrote {len(flags)} flag(s) to {args.output}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
