"""Application service: Validate Schemas use case (query).

Checks one collection's records against the entity schemas and reports
failures grouped by entity.
"""

from __future__ import annotations

from enum import Enum

from storefront.application.catalog_loader import CatalogLoader
from storefront.application.dto import IssueGroupDTO, ValidationReportDTO
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.reference_checker import find_duplicate_ids
from storefront.domain.service.schema_validator import (
    CollectionResult,
    validate_promotion,
)


class CatalogCollection(Enum):
    PRODUCTS = "products"
    CATEGORIES = "categories"
    TAGS = "tags"
    CONTENT = "content"
    PROMOTION = "promotion"


def report_groups(result: CollectionResult) -> list[IssueGroupDTO]:
    return [
        IssueGroupDTO(subject=label, issues=[str(e) for e in errors])
        for label, errors in result.failures.items()
    ]


class ValidateSchemasHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(
        self, collection: CatalogCollection, partial_tags: bool = False
    ) -> ValidationReportDTO:
        if collection == CatalogCollection.PRODUCTS:
            return self._with_unique_ids("Products", self._loader.products())
        if collection == CatalogCollection.CATEGORIES:
            return self._with_unique_ids("Categories", self._loader.categories())
        if collection == CatalogCollection.TAGS:
            result = self._loader.tags(complete=not partial_tags)
            return self._report("Tags", result)
        if collection == CatalogCollection.CONTENT:
            return self._content()
        return self._promotion()

    # --- Collections ----------------------------------------------------------

    def _with_unique_ids(self, title: str, result: CollectionResult) -> ValidationReportDTO:
        groups = report_groups(result)
        for duplicate in find_duplicate_ids(result.entities):
            groups.append(
                IssueGroupDTO(
                    subject=duplicate,
                    issues=[f'id: Duplicate id "{duplicate}"'],
                )
            )
        return ValidationReportDTO(
            title=title,
            checked=len(result.entities) + len(result.failures),
            groups=groups,
        )

    def _content(self) -> ValidationReportDTO:
        faqs = self._loader.faqs()
        testimonials = self._loader.testimonials()
        return ValidationReportDTO(
            title="FAQs and testimonials",
            checked=sum(
                len(r.entities) + len(r.failures) for r in (faqs, testimonials)
            ),
            groups=report_groups(faqs) + report_groups(testimonials),
        )

    def _promotion(self) -> ValidationReportDTO:
        raw = self._catalog_repo.load_promotion()
        if raw is None:
            return ValidationReportDTO(
                title="Promotion", checked=0, warnings=["No promotion config found"]
            )
        outcome = validate_promotion(raw)
        groups = []
        if not outcome.success:
            groups.append(
                IssueGroupDTO(subject="promotion", issues=[str(e) for e in outcome.errors])
            )
        return ValidationReportDTO(title="Promotion", checked=1, groups=groups)

    @staticmethod
    def _report(title: str, result: CollectionResult) -> ValidationReportDTO:
        return ValidationReportDTO(
            title=title,
            checked=len(result.entities) + len(result.failures),
            groups=report_groups(result),
        )
