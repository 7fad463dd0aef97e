"""Application service: Aggregate Products use case (command).

Merges the per-product files (record, FAQs, testimonials) into the single
``products.json`` list the site build reads, in catalog order.
"""

from __future__ import annotations

import logging

from storefront.application.catalog_loader import CatalogLoader
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.product_ranking import sort_for_catalog
from storefront.domain.service.reference_checker import find_duplicate_ids

logger = logging.getLogger(__name__)


class AggregateProductsHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(self) -> list[str]:
        """Write the aggregated list; returns the product ids in written order."""
        products = self._loader.valid_products()
        if not products:
            raise ValidationError("No products found to aggregate")
        duplicates = find_duplicate_ids(products)
        if duplicates:
            raise ValidationError(f"Duplicate product id(s): {', '.join(duplicates)}")

        # Raw records keep fields the schema doesn't model.
        raw_by_id = {record["id"]: record for record in self._catalog_repo.load_products()}
        faqs = self._catalog_repo.load_faqs()
        testimonials = self._catalog_repo.load_testimonials()

        records = []
        for product in sort_for_catalog(products):
            record = raw_by_id[product.id]
            records.append(
                {
                    **record,
                    "faqs": faqs.get(product.id, record.get("faqs", [])),
                    "testimonials": testimonials.get(
                        product.id, record.get("testimonials", [])
                    ),
                }
            )

        self._catalog_repo.save_aggregated_products(records)
        logger.info("Aggregated %d products", len(records))
        return [record["id"] for record in records]
