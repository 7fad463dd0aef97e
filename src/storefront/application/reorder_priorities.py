"""Application services: Renumber Priorities and Move Priority use cases.

Both write only the priorities that actually changed back to the
collection file.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from storefront.application.dto import PriorityChangeDTO
from storefront.application.taxonomy_store import TaxonomyCollection, TaxonomyStore
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.taxonomy import FeaturedPrioritizedItem
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse
from storefront.domain.repository.catalog_repository import CatalogRepository
from storefront.domain.service.priority_manager import (
    auto_renumber,
    move_down,
    move_up,
)

logger = logging.getLogger(__name__)


class MoveDirection(Enum):
    UP = "up"
    DOWN = "down"


def _changes(
    before: Sequence[FeaturedPrioritizedItem], after: Sequence[FeaturedPrioritizedItem]
) -> list[PriorityChangeDTO]:
    old = {item.id: item.priority for item in before}
    return [
        PriorityChangeDTO(
            id=item.id,
            name=item.name,
            old_priority=old[item.id],
            new_priority=item.priority,
        )
        for item in after
        if old[item.id] != item.priority
    ]


class RenumberPrioritiesHandler:

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._store = TaxonomyStore(catalog_repo, universe)

    def handle(
        self, collection: TaxonomyCollection, dry_run: bool = False
    ) -> list[PriorityChangeDTO]:
        items = self._store.load(collection)
        changes = _changes(items, auto_renumber(items, collection.config))

        if changes and not dry_run:
            self._store.save_priorities(
                collection, {c.id: c.new_priority for c in changes}
            )
            logger.info("Renumbered %d %s", len(changes), collection.value)
        return changes


class MovePriorityHandler:
    """Swap an item with its neighbour inside its own band (featured or not)."""

    def __init__(
        self,
        catalog_repo: CatalogRepository,
        universe: CatalogUniverse = DEFAULT_UNIVERSE,
    ) -> None:
        self._store = TaxonomyStore(catalog_repo, universe)

    def handle(
        self,
        collection: TaxonomyCollection,
        item_id: str,
        direction: MoveDirection,
    ) -> list[PriorityChangeDTO]:
        items = self._store.load(collection)
        target = next((i for i in items if i.id == item_id), None)
        if target is None:
            raise EntityNotFoundError(
                f"{collection.item_label} '{item_id}' not found"
            )

        band = sorted(
            (i for i in items if i.featured == target.featured),
            key=lambda i: (i.priority, i.id),
        )
        index = next(n for n, item in enumerate(band) if item.id == item_id)
        neighbour_index = index - 1 if direction == MoveDirection.UP else index + 1
        if 0 <= neighbour_index < len(band):
            neighbour = band[neighbour_index]
            if neighbour.priority == target.priority:
                raise ValidationError(
                    f"'{item_id}' shares priority {target.priority} with "
                    f"'{neighbour.id}'; run 'storefront priorities renumber' first"
                )
        moved = move_up(band, index) if direction == MoveDirection.UP else move_down(band, index)

        changes = _changes(band, moved)
        if changes:
            self._store.save_priorities(
                collection, {c.id: c.new_priority for c in changes}
            )
        else:
            logger.info("'%s' is already at the %s of its band", item_id,
                        "top" if direction == MoveDirection.UP else "bottom")
        return changes
