"""Domain service: referential integrity across catalog collections.

Checks every reference a product makes (categories, tags, cross-sells,
FAQs, testimonials) against the loaded collections. The check is
exhaustive: id sets are built once, every product is scanned, and all
broken references are returned together.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from storefront.domain.model.content import FAQ, Testimonial
from storefront.domain.model.product import Product
from storefront.domain.model.taxonomy import Category, Tag
from storefront.domain.service.tags import normalize_tag_id

logger = logging.getLogger(__name__)


class ReferenceField(Enum):
    MAIN_CATEGORY = "mainCategory"
    SECONDARY_CATEGORIES = "secondaryCategories"
    TAGS = "tags"
    CROSS_SELL_IDS = "crossSellIds"
    TESTIMONIAL_IDS = "testimonialIds"
    FAQ_IDS = "faqIds"


@dataclass(frozen=True)
class RelationshipError:
    product_id: str
    field: ReferenceField
    invalid_value: str
    message: str


@dataclass(frozen=True)
class ReferenceReport:
    """Broken references plus an informational orphan report.

    Orphans (FAQs/testimonials nobody references) never fail the report.
    """

    errors: list[RelationshipError] = field(default_factory=list)
    orphan_testimonial_ids: list[str] = field(default_factory=list)
    orphan_faq_ids: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def errors_by_product(self) -> dict[str, list[RelationshipError]]:
        grouped: dict[str, list[RelationshipError]] = {}
        for error in self.errors:
            grouped.setdefault(error.product_id, []).append(error)
        return grouped


def check_references(
    products: Sequence[Product],
    categories: Iterable[Category],
    tags: Iterable[Tag],
    testimonials: Iterable[Testimonial],
    faqs: Iterable[FAQ],
) -> ReferenceReport:
    category_ids = {c.id for c in categories}
    tag_ids = {normalize_tag_id(t.id) for t in tags}
    product_ids = {p.id for p in products}
    testimonial_ids = [t.id for t in testimonials]
    faq_ids = [f.id for f in faqs]
    known_testimonials = set(testimonial_ids)
    known_faqs = set(faq_ids)

    errors: list[RelationshipError] = []
    referenced_testimonials: set[str] = set()
    referenced_faqs: set[str] = set()

    for product in products:
        def broken(ref_field: ReferenceField, value: str, message: str) -> None:
            errors.append(RelationshipError(product.id, ref_field, value, message))

        if product.main_category not in category_ids:
            broken(
                ReferenceField.MAIN_CATEGORY, product.main_category,
                f'Category "{product.main_category}" does not exist',
            )

        for secondary in product.secondary_categories:
            if secondary.id not in category_ids:
                broken(
                    ReferenceField.SECONDARY_CATEGORIES, secondary.id,
                    f'Category "{secondary.id}" does not exist',
                )

        for tag in product.tags:
            normalized = normalize_tag_id(tag)
            if normalized not in tag_ids:
                hint = "" if normalized == tag else f' (normalized: "{normalized}")'
                broken(
                    ReferenceField.TAGS, tag,
                    f'Tag "{tag}"{hint} has no entry in the tag metadata',
                )

        for cross_sell_id in product.cross_sell_ids:
            if cross_sell_id not in product_ids:
                broken(
                    ReferenceField.CROSS_SELL_IDS, cross_sell_id,
                    f'Referenced product "{cross_sell_id}" does not exist',
                )

        embedded_testimonials = {t.id for t in product.testimonials or []}
        for testimonial_id in product.testimonial_ids:
            if testimonial_id not in known_testimonials | embedded_testimonials:
                broken(
                    ReferenceField.TESTIMONIAL_IDS, testimonial_id,
                    f'Testimonial "{testimonial_id}" does not exist',
                )

        embedded_faqs = {f.id for f in product.faqs or []}
        for faq_id in product.faq_ids:
            if faq_id not in known_faqs | embedded_faqs:
                broken(
                    ReferenceField.FAQ_IDS, faq_id,
                    f'FAQ "{faq_id}" does not exist',
                )

        referenced_testimonials.update(product.referenced_testimonial_ids())
        referenced_faqs.update(product.referenced_faq_ids())

    report = ReferenceReport(
        errors=errors,
        orphan_testimonial_ids=_unreferenced(testimonial_ids, referenced_testimonials),
        orphan_faq_ids=_unreferenced(faq_ids, referenced_faqs),
    )
    logger.debug(
        "Checked references of %d products: %d broken, %d orphan testimonials, "
        "%d orphan FAQs",
        len(products), len(errors),
        len(report.orphan_testimonial_ids), len(report.orphan_faq_ids),
    )
    return report


@dataclass(frozen=True)
class CrossSellStats:
    total: int
    top: list[tuple[str, int]]  # (product id, cross-sell count), most first


def cross_sell_stats(products: Sequence[Product], limit: int = 5) -> CrossSellStats:
    """Total cross-sell references and the products that make the most.

    Products without cross-sells are left out of ``top``; ties keep input order.
    """
    counts = [(p.id, len(p.cross_sell_ids)) for p in products if p.cross_sell_ids]
    ranked = sorted(counts, key=lambda pair: -pair[1])
    return CrossSellStats(total=sum(n for _, n in counts), top=ranked[:limit])


def find_duplicate_ids(items: Iterable) -> list[str]:
    """Ids that occur more than once, in first-seen order."""
    counts = Counter(item.id for item in items)
    return [item_id for item_id, count in counts.items() if count > 1]


def _unreferenced(ids: list[str], referenced: set[str]) -> list[str]:
    seen: set[str] = set()
    orphans: list[str] = []
    for item_id in ids:
        if item_id not in referenced and item_id not in seen:
            orphans.append(item_id)
        seen.add(item_id)
    return orphans
