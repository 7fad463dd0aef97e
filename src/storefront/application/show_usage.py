"""Application services: tag and category usage (queries).

Schema-invalid records are skipped; ``storefront validate`` reports them.
"""

from __future__ import annotations

from storefront.application.catalog_loader import CatalogLoader
from storefront.application.dto import UsageLineDTO
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.aggregation import (
    build_categories_with_counts,
    build_tags_with_counts,
    sort_by_count,
)


class ShowTagUsageHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(self, limit: int | None = None) -> list[UsageLineDTO]:
        products = self._loader.products().entities
        tags = self._loader.tags(complete=False).entities
        entries = sort_by_count(build_tags_with_counts(products, tags))
        if limit is not None:
            entries = entries[:limit]
        return [
            UsageLineDTO(id=e.tag.id, name=e.name, featured=e.tag.featured, count=e.count)
            for e in entries
        ]


class ShowCategoryUsageHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(self) -> list[UsageLineDTO]:
        products = self._loader.products().entities
        categories = self._loader.categories().entities
        entries = sort_by_count(build_categories_with_counts(products, categories))
        return [
            UsageLineDTO(
                id=e.category.id,
                name=e.name,
                featured=e.category.featured,
                count=e.count,
            )
            for e in entries
        ]
