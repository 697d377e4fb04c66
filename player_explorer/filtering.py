"""Filter predicate and projections of the entity store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .entities import ALL_CATEGORIES, AxisConfig, Entity


@dataclass(frozen=True)
class FilterPredicate:
    """Independent clauses combined with logical AND.

    Parameters
    ----------
    category : str
        Position code matched as a substring (``"G"`` keeps ``"G-F"``), or
        ``"ALL"``.
    min_threshold : float
        Minimum value of ``threshold_key``.  An absent value counts as 0.
    threshold_key : str
        Metric the threshold applies to.
    name_allowlist : frozenset[str]
        Names picked through search.  Empty means no restriction.
    """

    category: str = ALL_CATEGORIES
    min_threshold: float = 0.0
    threshold_key: str = "MPG"
    name_allowlist: frozenset[str] = field(default_factory=frozenset)

    def matches(self, entity: Entity) -> bool:
        if self.name_allowlist and entity.name not in self.name_allowlist:
            return False
        if self.category != ALL_CATEGORIES and self.category not in entity.category:
            return False
        value = entity.value(self.threshold_key)
        return (value if value is not None else 0.0) >= self.min_threshold

    @property
    def active_clauses(self) -> list[str]:
        """Names of the clauses that differ from the defaults."""
        active = []
        if self.category != ALL_CATEGORIES:
            active.append("position")
        if self.min_threshold > 0:
            active.append("minutes")
        if self.name_allowlist:
            active.append("search")
        return active


def filter_entities(entities: Iterable[Entity], predicate: FilterPredicate) -> list[Entity]:
    """Return the entities passing *predicate*, in their original order."""
    return [e for e in entities if predicate.matches(e)]


def plottable(entities: Iterable[Entity], axis: AxisConfig) -> list[Entity]:
    """Keep entities with finite values for both keys of *axis*."""
    return [e for e in entities if e.has(axis.x_key, axis.y_key)]


def matches_search(entity: Entity, term: str | None) -> bool:
    """Case-insensitive substring match on the name; empty *term* matches."""
    if not term:
        return True
    return term.lower() in entity.name.lower()


def search_suggestions(
    entities: Sequence[Entity],
    term: str | None,
    exclude: Iterable[str] = (),
    limit: int = 5,
) -> list[str]:
    """Names matching *term* that are not already in *exclude*."""
    if not term:
        return []
    skip = set(exclude)
    hits = [
        e.name for e in entities
        if e.name not in skip and matches_search(e, term)
    ]
    return hits[:limit]
