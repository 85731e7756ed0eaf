"""CheckConfiguration - Runtime configuration for the checks.

Reads nested dictionaries (usually a JSON file) shaped like:

    {
        "RoadLinkCheck": {
            "highwayTypes": {
                "linkTypes": ["motorway_link", ...],
                "priorityOrder": ["motorway", ...],
                "linkToParentCorrespondence": {"motorway_link": "motorway", ...}
            },
            "length": {"maximum": {"meters": 1000.0}},
            "neighbor": {"heading": {"maximumDeviation": {"degrees": 90.0}}}
        }
    }

Values are looked up by dotted key ("length.maximum.meters"), falling back
to the defaults in constants.py. A block without the check name at the top
level is read as the check block itself.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from roadlink_checker.constants import HighwayConfig, LengthConfig, NeighborConfig
from roadlink_checker.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CHECK_NAME = "RoadLinkCheck"

_MISSING = object()


def configuration_value(data: dict[str, Any], key: str, default: Any = None) -> Any:
    """Look up a dotted key in nested dictionaries.

    Args:
        data: Nested configuration
        key: Dotted path, e.g. "length.maximum.meters"
        default: Returned when any part of the path is missing

    Returns:
        The configured value or the default.
    """
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def _string_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"{key} must be a list of strings, got {value!r}")
    return list(value)


def _string_mapping(value: Any, key: str) -> dict[str, str]:
    if not isinstance(value, dict) or not all(isinstance(k, str) and isinstance(v, str) for k, v in value.items()):
        raise ConfigurationError(f"{key} must map strings to strings, got {value!r}")
    return dict(value)


def _positive_number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigurationError(f"{key} must be a positive number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class CheckConfiguration:
    """Validated configuration of the link check.

    Attributes:
        link_types: Classes considered links
        priority_order: Class importance, most important first
        link_to_parent: Link class -> parent class
        maximum_length_m: Maximum cumulative link length
        maximum_heading_deviation_deg: Forward-continuation band for neighbors
    """

    link_types: list[str] = field(default_factory=lambda: list(HighwayConfig.LINK_TYPES))
    priority_order: list[str] = field(default_factory=lambda: list(HighwayConfig.PRIORITY_ORDER))
    link_to_parent: dict[str, str] = field(default_factory=lambda: dict(HighwayConfig.LINK_TO_PARENT))
    maximum_length_m: float = LengthConfig.MAXIMUM_METERS
    maximum_heading_deviation_deg: float = NeighborConfig.MAXIMUM_HEADING_DEVIATION_DEG

    def __post_init__(self) -> None:
        """Validate value ranges."""
        _positive_number(self.maximum_length_m, "length.maximum.meters")
        deviation = self.maximum_heading_deviation_deg
        if isinstance(deviation, bool) or not isinstance(deviation, (int, float)) or not 0 <= deviation <= 180:
            raise ConfigurationError(f"Heading deviation must be within [0, 180] degrees, got {deviation!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any], check_name: str = CHECK_NAME) -> "CheckConfiguration":
        """Build configuration from nested dictionaries.

        Raises:
            ConfigurationError: If a value has the wrong type or range.
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")
        block = data.get(check_name, data)

        maximum_length_m = configuration_value(block, "length.maximum.meters", _MISSING)
        if maximum_length_m is _MISSING:
            miles = configuration_value(block, "length.maximum.miles", _MISSING)
            if miles is _MISSING:
                maximum_length_m = LengthConfig.MAXIMUM_METERS
            else:
                maximum_length_m = _positive_number(miles, "length.maximum.miles") * LengthConfig.METERS_PER_MILE

        return cls(
            link_types=_string_list(
                configuration_value(block, "highwayTypes.linkTypes", HighwayConfig.LINK_TYPES),
                "highwayTypes.linkTypes",
            ),
            priority_order=_string_list(
                configuration_value(block, "highwayTypes.priorityOrder", HighwayConfig.PRIORITY_ORDER),
                "highwayTypes.priorityOrder",
            ),
            link_to_parent=_string_mapping(
                configuration_value(block, "highwayTypes.linkToParentCorrespondence", HighwayConfig.LINK_TO_PARENT),
                "highwayTypes.linkToParentCorrespondence",
            ),
            maximum_length_m=_positive_number(maximum_length_m, "length.maximum.meters"),
            maximum_heading_deviation_deg=configuration_value(
                block,
                "neighbor.heading.maximumDeviation.degrees",
                NeighborConfig.MAXIMUM_HEADING_DEVIATION_DEG,
            ),
        )

    @classmethod
    def from_json_file(cls, path: Path | str, check_name: str = CHECK_NAME) -> "CheckConfiguration":
        """Load configuration from a JSON file.

        Raises:
            ConfigurationError: If the file is not valid JSON or holds bad values.
            OSError: If the file cannot be read.
        """
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
        configuration = cls.from_dict(data=data, check_name=check_name)
        logger.info(f"Loaded configuration from {Path(path).name}: max length {configuration.maximum_length_m:.0f}m")
        return configuration

    @classmethod
    def load(cls, path: Optional[Path | str] = None) -> "CheckConfiguration":
        """Configuration from a file, or the defaults when path is None."""
        if path is None:
            return cls()
        return cls.from_json_file(path=path)
