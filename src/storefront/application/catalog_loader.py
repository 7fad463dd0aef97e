"""Loads raw catalog collections from a repository and validates their shape.

Shared by the use-case handlers so every command sees the same view of a
snapshot: valid entities on one side, per-entity field errors on the other.
"""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.content import FAQ, Testimonial
from storefront.domain.model.product import Product
from storefront.domain.model.taxonomy import Category
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.schema_validator import (
    CollectionResult,
    validate_collection,
    validate_complete_tag_map,
    validate_tag_map,
)


class CatalogLoader:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._universe = universe

    def products(self) -> CollectionResult[Product]:
        return validate_collection(
            Product, self._catalog_repo.load_products(), self._universe, "products"
        )

    def categories(self) -> CollectionResult[Category]:
        return validate_collection(
            Category, self._catalog_repo.load_categories(), self._universe, "categories"
        )

    def tags(self, complete: bool = True):
        raw = self._catalog_repo.load_tags()
        if complete:
            return validate_complete_tag_map(raw, self._universe)
        return validate_tag_map(raw, self._universe)

    def faqs(self) -> CollectionResult[FAQ]:
        return self._per_product(FAQ, self._catalog_repo.load_faqs(), "faq")

    def testimonials(self) -> CollectionResult[Testimonial]:
        return self._per_product(
            Testimonial, self._catalog_repo.load_testimonials(), "testimonials"
        )

    def valid_products(self) -> list[Product]:
        """Products, refusing to continue when any record is invalid."""
        result = self.products()
        if not result.success:
            raise ValidationError(
                f"{len(result.failures)} product(s) failed schema validation; "
                f"run 'storefront validate products' for details"
            )
        return result.entities

    def _per_product(self, model, raw_by_product: dict, suffix: str) -> CollectionResult:
        merged: CollectionResult = CollectionResult()
        for product_id, raw in sorted(raw_by_product.items()):
            label = f"{product_id}-{suffix}.json"
            result = validate_collection(model, raw, self._universe, label)
            merged.entities.extend(result.entities)
            for entity_label, errors in result.failures.items():
                merged.add_failure(f"{label} {entity_label}", errors)
        return merged
