"""Count-and-sort projections over tags and categories.

Generic helpers for any featured/prioritized collection plus the product
counts the tag and category pages display.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, TypeVar

from storefront.domain.model.product import Product
from storefront.domain.model.taxonomy import Category, FeaturedPrioritizedItem, Tag
from storefront.domain.service.tags import normalize_tag_id

ItemT = TypeVar("ItemT", bound=FeaturedPrioritizedItem)


@dataclass(frozen=True)
class TagWithCount:
    tag: Tag
    count: int

    @property
    def name(self) -> str:
        return self.tag.name


@dataclass(frozen=True)
class CategoryWithCount:
    category: Category
    count: int

    @property
    def name(self) -> str:
        return self.category.name


def build_tags_with_counts(
    products: Iterable[Product], tags: Mapping[str, Tag] | Iterable[Tag]
) -> list[TagWithCount]:
    """One entry per tag metadata record with the number of products using it."""
    counts: Counter[str] = Counter()
    for product in products:
        counts.update({normalize_tag_id(tag) for tag in product.tags})

    records = tags.values() if isinstance(tags, Mapping) else tags
    return [TagWithCount(tag=tag, count=counts[normalize_tag_id(tag.id)]) for tag in records]


def build_categories_with_counts(
    products: Iterable[Product], categories: Iterable[Category]
) -> list[CategoryWithCount]:
    """Product counts per category, main and secondary associations alike."""
    counts: Counter[str] = Counter()
    for product in products:
        counts.update(set(product.category_ids()))
    return [CategoryWithCount(category=c, count=counts[c.id]) for c in categories]


def tags_missing_metadata(
    products: Iterable[Product], known_ids: Iterable[str]
) -> list[str]:
    """Normalized product tags with no metadata record, sorted."""
    known = {normalize_tag_id(tag_id) for tag_id in known_ids}
    used = {normalize_tag_id(tag) for product in products for tag in product.tags}
    return sorted(used - known)


def sort_by_count(entries: Sequence[TagWithCount | CategoryWithCount]) -> list:
    """Most used first, ties alphabetically."""
    return sorted(entries, key=lambda e: (-e.count, e.name.casefold()))


# --- Featured / priority helpers ---------------------------------------------


def get_featured(items: Iterable[ItemT]) -> list[ItemT]:
    return [item for item in items if item.featured]


def get_non_featured(items: Iterable[ItemT]) -> list[ItemT]:
    return [item for item in items if not item.featured]


def sort_by_priority(items: Iterable[ItemT]) -> list[ItemT]:
    """Lower priority number first, then alphabetically by name."""
    return sorted(items, key=lambda item: (item.priority, item.name.casefold()))


def get_featured_sorted(items: Iterable[ItemT]) -> list[ItemT]:
    return sort_by_priority(get_featured(items))


def get_non_featured_sorted(items: Iterable[ItemT]) -> list[ItemT]:
    return sort_by_priority(get_non_featured(items))
