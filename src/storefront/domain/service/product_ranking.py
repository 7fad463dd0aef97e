"""Domain service: display ordering for product lists.

Two strategies:

* ``sort_by_priority_randomized``: priority groups in descending order,
  shuffled inside each group on every call so equal-priority products take
  turns appearing first. The shuffle is intentional.
* Tiered orderings (``sort_intelligently``, ``sort_best_value``,
  ``sort_featured``): buckets by the featured / best-value / bestseller
  flags. Deterministic: tiers keep input order, the catch-all tier is
  sorted by main category, then name, then id.

None of these functions mutate their argument; each returns a new list.
"""

from __future__ import annotations

import random
from collections import defaultdict
from typing import Callable, Iterable, Sequence

from storefront.domain.model.product import Product

TierRule = Callable[[Product], bool]


def sort_by_priority_randomized(
    products: Sequence[Product], rng: random.Random | None = None
) -> list[Product]:
    """Highest priority first; random (uniform) order within a priority."""
    rng = rng or random.Random()

    groups: dict[int, list[Product]] = defaultdict(list)
    for product in products:
        groups[product.priority or 0].append(product)

    result: list[Product] = []
    for priority in sorted(groups, reverse=True):
        group = list(groups[priority])
        rng.shuffle(group)  # Fisher-Yates
        result.extend(group)
    return result


def sort_for_catalog(products: Sequence[Product]) -> list[Product]:
    """Stable catalog order: priority descending, then id."""
    return sorted(products, key=lambda p: (-(p.priority or 0), p.id))


# ---------------------------------------------------------------------------
# Tiered orderings
# ---------------------------------------------------------------------------


def _featured_best_value_bestseller(p: Product) -> bool:
    return p.featured and p.best_value and p.bestseller


def _featured_best_value(p: Product) -> bool:
    return p.featured and p.best_value


_GENERAL_TIERS: tuple[TierRule, ...] = (
    _featured_best_value_bestseller,
    _featured_best_value,
    lambda p: p.featured and p.bestseller,
    lambda p: p.featured,
)

_BEST_VALUE_TIERS: tuple[TierRule, ...] = (
    _featured_best_value_bestseller,
    _featured_best_value,
    lambda p: p.best_value and p.bestseller,
    lambda p: p.best_value,
)


def sort_intelligently(products: Sequence[Product]) -> list[Product]:
    """General ordering for home, products, category and tag pages.

    1. featured + best value + bestseller
    2. featured + best value
    3. featured + bestseller
    4. featured only
    5. everything else, by main category
    """
    tiers, rest = _bucket(products, _GENERAL_TIERS)
    return [*_flatten(tiers), *_by_main_category(rest)]


def sort_best_value(products: Sequence[Product]) -> list[Product]:
    """Ordering for the best-value page.

    Same first two tiers as ``sort_intelligently``; then best value +
    bestseller, best value only, and everything else by main category.
    """
    tiers, rest = _bucket(products, _BEST_VALUE_TIERS)
    return [*_flatten(tiers), *_by_main_category(rest)]


def sort_featured(products: Sequence[Product]) -> list[Product]:
    """The four featured tiers of ``sort_intelligently``; non-featured are dropped."""
    tiers, _ = _bucket(products, _GENERAL_TIERS)
    return _flatten(tiers)


def _bucket(
    products: Iterable[Product], rules: Sequence[TierRule]
) -> tuple[list[list[Product]], list[Product]]:
    tiers: list[list[Product]] = [[] for _ in rules]
    rest: list[Product] = []
    for product in products:
        for tier, matches in zip(tiers, rules):
            if matches(product):
                tier.append(product)
                break
        else:
            rest.append(product)
    return tiers, rest


def _flatten(tiers: list[list[Product]]) -> list[Product]:
    return [product for tier in tiers for product in tier]


def _by_main_category(products: list[Product]) -> list[Product]:
    return sorted(products, key=lambda p: (p.main_category, p.name.casefold(), p.id))
