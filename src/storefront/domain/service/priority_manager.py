"""Domain service: featured/priority management for tags and categories.

Featured items occupy the priority band ``[featured_start, non_featured_start)``
and non-featured items start at ``non_featured_start``. Within each band
priorities should be consecutive; a hole or a duplicate is a "gap".

Every function here is non-mutating: it returns a new list of copied items
and never changes the list or the items it was given.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Sequence, TypeVar

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.taxonomy import FeaturedPrioritizedItem

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=FeaturedPrioritizedItem)


@dataclass(frozen=True)
class RenumberConfig:
    """Priority bands for one collection.

    ``featured_end`` is the intended size of the featured band; the hard
    boundary for featured priorities is ``non_featured_start``.
    """

    featured_start: int
    featured_end: int
    non_featured_start: int

    def __post_init__(self) -> None:
        if self.featured_start < 1:
            raise ValidationError("featured_start must be at least 1")
        if self.featured_end < self.featured_start:
            raise ValidationError("featured_end cannot be below featured_start")
        if self.non_featured_start <= self.featured_end:
            raise ValidationError(
                f"non_featured_start ({self.non_featured_start}) must be above "
                f"featured_end ({self.featured_end})"
            )


TAG_RENUMBER_CONFIG = RenumberConfig(featured_start=1, featured_end=8, non_featured_start=21)
CATEGORY_RENUMBER_CONFIG = RenumberConfig(featured_start=1, featured_end=7, non_featured_start=8)


@dataclass(frozen=True)
class PriorityRange:
    min: int
    max: int


@dataclass(frozen=True)
class PriorityGap:
    expected: int
    actual: int


@dataclass(frozen=True)
class FeaturedStats:
    total_count: int
    featured_count: int
    non_featured_count: int
    featured_range: PriorityRange
    non_featured_range: PriorityRange
    has_priority_gaps: bool
    gap_details: list[PriorityGap] | None = None


@dataclass(frozen=True)
class PriorityReport:
    success: bool
    errors: list[str]


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


def calculate_stats(items: Sequence[ItemT], config: RenumberConfig) -> FeaturedStats:
    featured = [i for i in items if i.featured]
    non_featured = [i for i in items if not i.featured]

    gaps = _find_gaps(featured, config.featured_start) + _find_gaps(
        non_featured, config.non_featured_start
    )

    return FeaturedStats(
        total_count=len(items),
        featured_count=len(featured),
        non_featured_count=len(non_featured),
        featured_range=_range_of(featured, config.featured_start),
        non_featured_range=_range_of(non_featured, config.non_featured_start),
        has_priority_gaps=bool(gaps),
        gap_details=gaps or None,
    )


def _range_of(items: list[ItemT], default: int) -> PriorityRange:
    if not items:
        return PriorityRange(min=default, max=default)
    priorities = [i.priority for i in items]
    return PriorityRange(min=min(priorities), max=max(priorities))


def _find_gaps(items: list[ItemT], start: int) -> list[PriorityGap]:
    ordered = sorted(items, key=lambda i: i.priority)
    return [
        PriorityGap(expected=start + index, actual=item.priority)
        for index, item in enumerate(ordered)
        if item.priority != start + index
    ]


# ---------------------------------------------------------------------------
# Renumbering
# ---------------------------------------------------------------------------


def auto_renumber(items: Sequence[ItemT], config: RenumberConfig) -> list[ItemT]:
    """Close every gap while keeping the relative order inside each band.

    Each band is sorted by current priority (stable, so ties keep their
    input order) and renumbered from its start. Featured items come first
    in the returned list.
    """
    featured = sorted((i for i in items if i.featured), key=lambda i: i.priority)
    non_featured = sorted((i for i in items if not i.featured), key=lambda i: i.priority)

    band_size = config.featured_end - config.featured_start + 1
    if len(featured) > band_size:
        logger.warning(
            "%d featured items exceed the featured band of %d (priorities %d-%d)",
            len(featured), band_size, config.featured_start, config.featured_end,
        )

    renumbered = [
        item.model_copy(update={"priority": config.featured_start + index})
        for index, item in enumerate(featured)
    ] + [
        item.model_copy(update={"priority": config.non_featured_start + index})
        for index, item in enumerate(non_featured)
    ]
    logger.debug("Renumbered %d items", len(renumbered))
    return renumbered


# ---------------------------------------------------------------------------
# Manual reordering
# ---------------------------------------------------------------------------


def move_up(items: Sequence[ItemT], index: int) -> Sequence[ItemT]:
    """Swap the item at *index* with the one above it (priority and position).

    Returns *items* itself when the item is already at the top.
    """
    _check_index(items, index)
    if index == 0:
        return items
    return _swap(items, index - 1, index)


def move_down(items: Sequence[ItemT], index: int) -> Sequence[ItemT]:
    """Swap the item at *index* with the one below it (priority and position).

    Returns *items* itself when the item is already at the bottom.
    """
    _check_index(items, index)
    if index >= len(items) - 1:
        return items
    return _swap(items, index, index + 1)


def _check_index(items: Sequence[ItemT], index: int) -> None:
    # An empty list has no boundary to cross: moving is a no-op.
    if items and not 0 <= index < len(items):
        raise IndexError(f"Index {index} out of range for {len(items)} items")


def _swap(items: Sequence[ItemT], upper: int, lower: int) -> list[ItemT]:
    result = list(items)
    first, second = result[upper], result[lower]
    result[upper] = second.model_copy(update={"priority": first.priority})
    result[lower] = first.model_copy(update={"priority": second.priority})
    return result


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_priorities(items: Sequence[ItemT], config: RenumberConfig) -> PriorityReport:
    """Report duplicate priorities and items outside their band.

    Collects every violation instead of stopping at the first one.
    """
    errors: list[str] = []

    names_by_priority: dict[int, list[str]] = defaultdict(list)
    for item in items:
        names_by_priority[item.priority].append(item.name)
    for priority, names in names_by_priority.items():
        if len(names) > 1:
            errors.append(f"Duplicate priority {priority} detected: {', '.join(names)}")

    for item in items:
        if item.featured and not (
            config.featured_start <= item.priority < config.non_featured_start
        ):
            errors.append(
                f'Featured item "{item.name}" has priority {item.priority} outside '
                f"valid range ({config.featured_start}-{config.non_featured_start - 1})"
            )
        elif not item.featured and item.priority < config.non_featured_start:
            errors.append(
                f'Non-featured item "{item.name}" has priority {item.priority} below '
                f"minimum ({config.non_featured_start})"
            )

    return PriorityReport(success=not errors, errors=errors)
