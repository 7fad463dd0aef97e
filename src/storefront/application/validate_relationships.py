"""Application service: Validate Relationships use case (query).

Fail-closed: only schema-valid entities take part in the reference check,
and schema failures are reported next to the broken references so a single
run shows the complete defect list.
"""

from __future__ import annotations

import logging

from storefront.application.catalog_loader import CatalogLoader
from storefront.application.dto import IssueGroupDTO, ValidationReportDTO
from storefront.application.validate_schemas import report_groups
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.reference_checker import (
    check_references,
    cross_sell_stats,
)

logger = logging.getLogger(__name__)


class ValidateRelationshipsHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(self, include_schema_errors: bool = True) -> ValidationReportDTO:
        products = self._loader.products()
        categories = self._loader.categories()
        tags = self._loader.tags(complete=False)
        faqs = self._loader.faqs()
        testimonials = self._loader.testimonials()

        schema_failures = [
            r for r in (products, categories, tags, faqs, testimonials) if not r.success
        ]
        if schema_failures:
            logger.info(
                "%d collection(s) have schema errors; checking references of the "
                "valid records only",
                len(schema_failures),
            )

        report = check_references(
            products.entities,
            categories.entities,
            tags.entities,
            testimonials.entities,
            faqs.entities,
        )

        groups: list[IssueGroupDTO] = []
        if include_schema_errors:
            for result in schema_failures:
                groups.extend(report_groups(result))
        for product_id, errors in report.errors_by_product().items():
            groups.append(
                IssueGroupDTO(
                    subject=product_id,
                    issues=[f"{e.field.value}: {e.message}" for e in errors],
                )
            )

        warnings = [
            f'Testimonial "{i}" is not referenced by any product'
            for i in report.orphan_testimonial_ids
        ] + [
            f'FAQ "{i}" is not referenced by any product' for i in report.orphan_faq_ids
        ]

        return ValidationReportDTO(
            title="Relationships",
            checked=len(products.entities),
            groups=groups,
            warnings=warnings,
            info=_cross_sell_info(products.entities),
        )


def _cross_sell_info(products) -> list[str]:
    stats = cross_sell_stats(products)
    if not stats.top:
        return ["No cross-sell references found"]
    top = ", ".join(f"{product_id} ({count})" for product_id, count in stats.top)
    return [
        f"Cross-sell references: {stats.total}",
        f"Most cross-sells: {top}",
    ]
