"""ResultFusion - deterministic merge of two context extractions.

The first argument is the precision-favoured source (ContextProvider) and
the second is the breadth source (CreativeProvider). The merge is
asymmetric:

    tags                      union, deduplicated, first TAG_LIMIT entries
    people/places/dates/
    tasks/emotions            union, deduplicated, no limit
    summary                   first
    title                     second when non-empty, else first
    priority                  max
    category, sentiment       first
    confidence                arithmetic mean

Union order is always first's entries followed by second's, so the result
does not depend on which provider finished first.
"""

from __future__ import annotations

from memory_ai.core.constants import TAG_LIMIT
from memory_ai.models.results import ContextExtractionResult, dedupe


_UNBOUNDED_LIST_FIELDS = ("people", "places", "dates", "tasks", "emotions")


def merge(
    first: ContextExtractionResult | None,
    second: ContextExtractionResult | None,
) -> ContextExtractionResult:
    """Merge two extraction results.

    If exactly one input is present it is returned unchanged.

    Args:
        first: Precision-favoured result.
        second: Breadth result.

    Returns:
        The fused result.

    Raises:
        ValueError: If both inputs are None.

    Example:
        >>> merge(a, None) is a
        True
    """
    if first is None and second is None:
        msg = "merge() needs at least one extraction result"
        raise ValueError(msg)
    if second is None:
        return first  # type: ignore[return-value]
    if first is None:
        return second

    lists = {
        field: _union(getattr(first, field), getattr(second, field))
        for field in _UNBOUNDED_LIST_FIELDS
    }
    return ContextExtractionResult(
        summary=first.summary,
        title=second.title or first.title,
        tags=_union(first.tags, second.tags)[:TAG_LIMIT],
        **lists,
        priority=max(first.priority, second.priority),
        category=first.category,
        sentiment=first.sentiment,
        confidence=(first.confidence + second.confidence) / 2,
    )


def _union(a: list[str], b: list[str]) -> list[str]:
    return dedupe([*a, *b])
