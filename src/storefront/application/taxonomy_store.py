"""Loading and saving of the two prioritized collections (tags, categories).

Priority edits are written back onto the raw records so fields the schema
doesn't know about survive the round trip.
"""

from __future__ import annotations

from enum import Enum

from storefront.application.catalog_loader import CatalogLoader
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.taxonomy import FeaturedPrioritizedItem
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.priority_manager import (
    CATEGORY_RENUMBER_CONFIG,
    TAG_RENUMBER_CONFIG,
    RenumberConfig,
)
from storefront.domain.service.reference_checker import find_duplicate_ids


class TaxonomyCollection(Enum):
    TAGS = "tags"
    CATEGORIES = "categories"

    @property
    def config(self) -> RenumberConfig:
        if self == TaxonomyCollection.TAGS:
            return TAG_RENUMBER_CONFIG
        return CATEGORY_RENUMBER_CONFIG

    @property
    def item_label(self) -> str:
        return "Tag" if self == TaxonomyCollection.TAGS else "Category"


class TaxonomyStore:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._loader = CatalogLoader(catalog_repo, universe)

    def load(self, collection: TaxonomyCollection) -> list[FeaturedPrioritizedItem]:
        """Load a collection; priority edits need every record to be valid."""
        if collection == TaxonomyCollection.TAGS:
            result = self._loader.tags(complete=False)
        else:
            result = self._loader.categories()

        if not result.success:
            raise ValidationError(
                f"{len(result.failures)} {collection.value} record(s) failed schema "
                f"validation; run 'storefront validate {collection.value}' first"
            )
        duplicates = find_duplicate_ids(result.entities)
        if duplicates:
            raise ValidationError(
                f"Duplicate {collection.value} id(s): {', '.join(duplicates)}; "
                f"run 'storefront validate {collection.value}' first"
            )
        return result.entities

    def save_priorities(
        self, collection: TaxonomyCollection, priorities: dict[str, int]
    ) -> None:
        if not priorities:
            return
        if collection == TaxonomyCollection.TAGS:
            raw_tags = self._catalog_repo.load_tags()
            self._catalog_repo.save_tags(
                {key: _with_priority(record, priorities) for key, record in raw_tags.items()}
            )
        else:
            raw_categories = self._catalog_repo.load_categories()
            self._catalog_repo.save_categories(
                [_with_priority(record, priorities) for record in raw_categories]
            )


def _with_priority(record: dict, priorities: dict[str, int]) -> dict:
    if record.get("id") in priorities:
        return {**record, "priority": priorities[record["id"]]}
    return dict(record)
