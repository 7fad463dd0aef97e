"""Application service: Seed Tags use case (command).

Adds a starter metadata record for every tag products use that ``tags.json``
doesn't describe yet. Existing records are never touched; new ones are
non-featured and appended after the highest priority in use.
"""

from __future__ import annotations

import logging

from storefront.application.catalog_loader import CatalogLoader
from storefront.application.dto import PriorityItemDTO
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.aggregation import tags_missing_metadata
from storefront.domain.service.priority_manager import TAG_RENUMBER_CONFIG
from storefront.domain.service.tags import tag_display_name

logger = logging.getLogger(__name__)

DEFAULT_TAG_ICON = "FaTag"
DEFAULT_TAG_COLOR = "#999999"


def starter_tag_record(tag_id: str, priority: int) -> dict:
    name = tag_display_name(tag_id)
    return {
        "id": tag_id,
        "name": name,
        "description": f"Resources and tools for {name.lower()}",
        "icon": DEFAULT_TAG_ICON,
        "color": DEFAULT_TAG_COLOR,
        "featured": False,
        "priority": priority,
    }


class SeedTagsHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._loader = CatalogLoader(catalog_repo, universe)

    def handle(self, dry_run: bool = False) -> list[PriorityItemDTO]:
        products = self._loader.valid_products()
        # Refuses a tag file that isn't an object before anything is written.
        self._loader.tags(complete=False)
        raw_tags = self._catalog_repo.load_tags()

        missing = tags_missing_metadata(products, raw_tags)
        if not missing:
            return []

        priority = _last_priority(raw_tags)
        seeded: dict[str, dict] = {}
        for tag_id in missing:
            priority += 1
            seeded[tag_id] = starter_tag_record(tag_id, priority)

        if not dry_run:
            self._catalog_repo.save_tags({**raw_tags, **seeded})
            logger.info("Seeded %d tag(s)", len(seeded))
        return [
            PriorityItemDTO(
                id=record["id"],
                name=record["name"],
                featured=record["featured"],
                priority=record["priority"],
            )
            for record in seeded.values()
        ]


def _last_priority(raw_tags: dict) -> int:
    in_use = [
        record["priority"]
        for record in raw_tags.values()
        if isinstance(record, dict) and type(record.get("priority")) is int
    ]
    return max([TAG_RENUMBER_CONFIG.non_featured_start - 1, *in_use])
