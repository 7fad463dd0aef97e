"""Application service: Rank Products use case (query)."""

from __future__ import annotations

import random
from enum import Enum

from storefront.application.catalog_loader import CatalogLoader
from storefront.application.dto import ProductSummaryDTO
from storefront.domain.model.product import Product
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.product_ranking import (
    sort_best_value,
    sort_by_priority_randomized,
    sort_featured,
    sort_intelligently,
)


class ProductOrdering(Enum):
    INTELLIGENT = "intelligent"
    BEST_VALUE = "best-value"
    FEATURED = "featured"
    PRIORITY = "priority"


def _flags(product: Product) -> str:
    flags = [
        name
        for name, on in (
            ("featured", product.featured),
            ("best value", product.best_value),
            ("bestseller", product.bestseller),
        )
        if on
    ]
    return ", ".join(flags)


class RankProductsHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
        rng: random.Random | None = None,
    ) -> None:
        self._loader = CatalogLoader(catalog_repo, universe)
        self._rng = rng

    def handle(self, ordering: ProductOrdering) -> list[ProductSummaryDTO]:
        products = self._loader.valid_products()

        if ordering == ProductOrdering.BEST_VALUE:
            ranked = sort_best_value(products)
        elif ordering == ProductOrdering.FEATURED:
            ranked = sort_featured(products)
        elif ordering == ProductOrdering.PRIORITY:
            ranked = sort_by_priority_randomized(products, self._rng)
        else:
            ranked = sort_intelligently(products)

        return [
            ProductSummaryDTO(
                id=p.id,
                name=p.name,
                main_category=p.main_category,
                priority=p.priority,
                price_display=p.price_display,
                flags=_flags(p),
                badge_categories=p.badge_category_ids(),
            )
            for p in ranked
        ]
