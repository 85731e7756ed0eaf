"""RoadClassTable - Total order over highway classes and link correspondence.

Classes are ranked by position (lower rank = more important). Each link class
is ranked directly after its parent unless the priority order lists it
explicitly, so the ranking stays total without ties:

    motorway, motorway_link, trunk, trunk_link, ..., tertiary_link,
    unclassified, residential

Classes unknown to the table share the sentinel rank len(ranking), after
every ranked class.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from roadlink_checker.constants import HighwayConfig
from roadlink_checker.core.errors import ConfigurationError

if TYPE_CHECKING:
    from roadlink_checker.config import CheckConfiguration


def _normalize(road_class: str) -> str:
    return road_class.strip().lower()


class RoadClassTable:
    """Immutable priority table and parent <-> link mapping.

    Example:
        table = RoadClassTable.default()
        table.priority("motorway")        # 0
        table.link_for("primary")         # "primary_link"
        table.parent_for("trunk_link")    # "trunk"
        table.is_more_important("trunk", "primary")  # True
    """

    def __init__(
        self,
        priority_order: Iterable[str],
        link_to_parent: dict[str, str],
        link_types: Optional[Iterable[str]] = None,
    ) -> None:
        """Build the table.

        Args:
            priority_order: Classes, most important first
            link_to_parent: Link class -> parent class
            link_types: Classes considered links. Defaults to the keys of link_to_parent.

        Raises:
            ConfigurationError: If the tables are inconsistent.
        """
        order = [_normalize(c) for c in priority_order]
        mapping = {_normalize(link): _normalize(parent) for link, parent in link_to_parent.items()}
        links = [_normalize(c) for c in link_types] if link_types is not None else list(mapping)

        if not order:
            raise ConfigurationError("Priority order must not be empty")
        duplicates = sorted({c for c in order if order.count(c) > 1})
        if duplicates:
            raise ConfigurationError(f"Priority order lists classes more than once: {duplicates}")

        parent_to_link: dict[str, str] = {}
        for link, parent in mapping.items():
            if link == parent:
                raise ConfigurationError(f"Class {link!r} cannot be its own parent")
            if link not in links:
                raise ConfigurationError(f"Link class {link!r} is not listed in the link types {links}")
            if parent not in order:
                raise ConfigurationError(f"Parent class {parent!r} of {link!r} is absent from the priority order")
            if parent in parent_to_link:
                raise ConfigurationError(
                    f"Parent class {parent!r} has more than one link class: {parent_to_link[parent]!r}, {link!r}"
                )
            parent_to_link[parent] = link

        ranking: list[str] = []
        for road_class in order:
            ranking.append(road_class)
            link = parent_to_link.get(road_class)
            if link is not None and link not in order:
                ranking.append(link)
        # Links without a parent (or ranked nowhere yet) go after everything else
        ranking.extend(link for link in links if link not in ranking)

        self._ranking: tuple[str, ...] = tuple(ranking)
        self._rank: dict[str, int] = {c: i for i, c in enumerate(ranking)}
        self._links: frozenset[str] = frozenset(links)
        self._link_to_parent: dict[str, str] = mapping
        self._parent_to_link: dict[str, str] = parent_to_link

    @classmethod
    def default(cls) -> "RoadClassTable":
        """Table built from HighwayConfig defaults."""
        return cls(
            priority_order=HighwayConfig.PRIORITY_ORDER,
            link_to_parent=HighwayConfig.LINK_TO_PARENT,
            link_types=HighwayConfig.LINK_TYPES,
        )

    @classmethod
    def from_configuration(cls, configuration: "CheckConfiguration") -> "RoadClassTable":
        """Table built from a loaded check configuration."""
        return cls(
            priority_order=configuration.priority_order,
            link_to_parent=configuration.link_to_parent,
            link_types=configuration.link_types,
        )

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def ranking(self) -> tuple[str, ...]:
        """All ranked classes, most important first."""
        return self._ranking

    @property
    def sentinel_rank(self) -> int:
        """Rank shared by all classes unknown to the table."""
        return len(self._ranking)

    def priority(self, road_class: str) -> int:
        """Rank of a class. Lower = more important."""
        return self._rank.get(_normalize(road_class), self.sentinel_rank)

    def is_more_important(self, road_class: str, other: str) -> bool:
        return self.priority(road_class) < self.priority(other)

    def is_link(self, road_class: str) -> bool:
        return _normalize(road_class) in self._links

    def link_for(self, parent_class: str) -> Optional[str]:
        """Link class of a parent class, None if it has no link form."""
        return self._parent_to_link.get(_normalize(parent_class))

    def parent_for(self, link_class: str) -> Optional[str]:
        """Parent class of a link class, None if it has no parent."""
        return self._link_to_parent.get(_normalize(link_class))

    def has_link_form(self, road_class: str) -> bool:
        """Whether the class is a link or has a link counterpart."""
        return self.is_link(road_class) or self.link_for(road_class) is not None

    def expected_link_for(self, road_class: str) -> Optional[str]:
        """Link class a way connecting to road_class should carry.

        Returns:
            road_class itself if it is a link, its link form otherwise,
            None if it has neither.
        """
        if self.is_link(road_class):
            return _normalize(road_class)
        return self.link_for(road_class)

    def __repr__(self) -> str:
        return f"RoadClassTable({list(self._ranking)})"
