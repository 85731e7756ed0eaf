"""Verdict - Outcome of evaluating one link way.

Verdicts carry structured data only (measured length, limit, suggested
class). Rendering them into instructions is left to the checks that report
them.

- Ok: length and classification are fine
- TooLong: cumulative length exceeds the maximum
- WrongClass: classification disagrees with the dominant neighbor
- TooLongAndWrongClass: both of the above
- NoConnectionEitherEnd: no neighbor could be resolved (or malformed way)
- NoLinkEquivalentEitherEnd: neighbors have no link form to compare against
"""

from abc import ABC
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Verdict(ABC):
    """Abstract base class for verdicts.

    Use isinstance() to check the verdict type.
    Each subclass has a verdict_type field for serialization.
    """

    @property
    def is_issue(self) -> bool:
        """Whether the verdict should be flagged."""
        return False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Verdict":
        """Restore a verdict from to_dict() output.

        Raises:
            ValueError: If verdict_type is unknown.
        """
        fields = dict(data)
        verdict_type = fields.pop("verdict_type", None)
        verdict_cls = _VERDICT_TYPES.get(verdict_type)
        if verdict_cls is None:
            raise ValueError(f"Unknown verdict type: {verdict_type!r}")
        return verdict_cls(**fields)


@dataclass(frozen=True)
class Ok(Verdict):
    verdict_type: str = "Ok"


@dataclass(frozen=True)
class TooLong(Verdict):
    """Way is longer than the configured maximum.

    Attributes:
        length_m: Measured cumulative length
        maximum_m: Configured maximum
    """

    length_m: float
    maximum_m: float
    verdict_type: str = "TooLong"

    @property
    def is_issue(self) -> bool:
        return True


@dataclass(frozen=True)
class WrongClass(Verdict):
    """Way classification is inconsistent with its dominant neighbor.

    Attributes:
        suggested_class: Link class implied by the dominant neighbor
    """

    suggested_class: str
    verdict_type: str = "WrongClass"

    @property
    def is_issue(self) -> bool:
        return True


@dataclass(frozen=True)
class TooLongAndWrongClass(Verdict):
    length_m: float
    maximum_m: float
    suggested_class: str
    verdict_type: str = "TooLongAndWrongClass"

    @property
    def is_issue(self) -> bool:
        return True


@dataclass(frozen=True)
class NoConnectionEitherEnd(Verdict):
    verdict_type: str = "NoConnectionEitherEnd"


@dataclass(frozen=True)
class NoLinkEquivalentEitherEnd(Verdict):
    verdict_type: str = "NoLinkEquivalentEitherEnd"


_VERDICT_TYPES: dict[str, type[Verdict]] = {
    cls.__name__: cls
    for cls in (Ok, TooLong, WrongClass, TooLongAndWrongClass, NoConnectionEitherEnd, NoLinkEquivalentEitherEnd)
}
