"""CheckFlag - Flagged issue produced by a check.

A CheckFlag records which way was flagged, by which check, and why.
It is what the checks hand over to whatever stores or displays results.
"""

from dataclasses import dataclass
from typing import Any, Optional

from roadlink_checker.model.verdict import Verdict


@dataclass(frozen=True)
class CheckFlag:
    """A flagged way.

    Attributes:
        check_name: Name of the check that produced the flag
        identifier: Way (osm) identifier of the flagged way
        edge_ids: Ids of the main edges making up the way, sorted
        instruction: Human-readable instruction for fixing the issue
        verdict: Structured verdict, when the check produced one
    """

    check_name: str
    identifier: int
    edge_ids: tuple[int, ...]
    instruction: str
    verdict: Optional[Verdict] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "check_name": self.check_name,
            "identifier": self.identifier,
            "edge_ids": list(self.edge_ids),
            "instruction": self.instruction,
            "verdict": self.verdict.to_dict() if self.verdict is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CheckFlag":
        """Create CheckFlag from dictionary."""
        verdict_data = data.get("verdict")
        return cls(
            check_name=data["check_name"],
            identifier=int(data["identifier"]),
            edge_ids=tuple(int(e) for e in data["edge_ids"]),
            instruction=data["instruction"],
            verdict=Verdict.from_dict(data=verdict_data) if verdict_data else None,
        )

    def __str__(self) -> str:
        return f"[{self.check_name}] way {self.identifier}: {self.instruction}"
