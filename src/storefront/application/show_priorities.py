"""Application service: Show Priorities use case (query)."""

from __future__ import annotations

from storefront.application.dto import PriorityItemDTO, PriorityStatsDTO
from storefront.application.taxonomy_store import TaxonomyCollection, TaxonomyStore
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.priority_manager import (
    calculate_stats,
    validate_priorities,
)


class ShowPrioritiesHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._store = TaxonomyStore(catalog_repo, universe)

    def handle(self, collection: TaxonomyCollection) -> PriorityStatsDTO:
        items = self._store.load(collection)
        stats = calculate_stats(items, collection.config)
        report = validate_priorities(items, collection.config)

        return PriorityStatsDTO(
            collection=collection.value,
            total=stats.total_count,
            featured=stats.featured_count,
            non_featured=stats.non_featured_count,
            featured_range=(stats.featured_range.min, stats.featured_range.max),
            non_featured_range=(stats.non_featured_range.min, stats.non_featured_range.max),
            gaps=[
                f"expected {gap.expected}, found {gap.actual}"
                for gap in stats.gap_details or []
            ],
            errors=report.errors,
            items=[
                PriorityItemDTO(
                    id=item.id,
                    name=item.name,
                    featured=item.featured,
                    priority=item.priority,
                )
                for item in sorted(items, key=lambda i: (i.priority, i.id))
            ],
        )
