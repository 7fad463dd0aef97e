"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from storefront.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)

# Relative to the working directory; override with --data-dir or
# STOREFRONT_DATA_DIR.
DEFAULT_DATA_DIR = Path("data")


def catalog_repository(data_dir: Path | None = None) -> JsonCatalogRepository:
    return JsonCatalogRepository(data_dir or DEFAULT_DATA_DIR)
