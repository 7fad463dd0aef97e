"""JSON-file-backed implementation of CatalogRepository.

Layout of the data directory::

    products/{id}.json                one product per file
    products/{id}-faq.json            FAQs of that product
    products/{id}-testimonials.json   testimonials of that product
    products.json                     aggregated list; read when products/ is missing
    categories.json                   array of categories
    tags.json                         object keyed by tag id
    promotion.json                    optional banner config
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from storefront.domain.exceptions import CatalogLoadError
from storefront.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

FAQ_SUFFIX = "-faq"
TESTIMONIALS_SUFFIX = "-testimonials"


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir

    # --- CatalogRepository interface ------------------------------------------

    def load_products(self) -> Any:
        products_dir = self._data_dir / "products"
        if not products_dir.is_dir():
            return self._load_raw(self._data_dir / "products.json", default=[])
        return [
            self._load_raw(path)
            for path in sorted(products_dir.glob("*.json"))
            if not path.stem.endswith((FAQ_SUFFIX, TESTIMONIALS_SUFFIX))
        ]

    def load_categories(self) -> Any:
        return self._load_raw(self._data_dir / "categories.json", default=[])

    def load_tags(self) -> Any:
        return self._load_raw(self._data_dir / "tags.json", default={})

    def load_faqs(self) -> dict[str, Any]:
        return self._load_per_product(FAQ_SUFFIX)

    def load_testimonials(self) -> dict[str, Any]:
        return self._load_per_product(TESTIMONIALS_SUFFIX)

    def load_promotion(self) -> Any | None:
        return self._load_raw(self._data_dir / "promotion.json", default=None)

    def save_categories(self, records: list[dict]) -> None:
        self._persist_raw(self._data_dir / "categories.json", records)

    def save_tags(self, records: dict[str, dict]) -> None:
        self._persist_raw(self._data_dir / "tags.json", records)

    def save_aggregated_products(self, records: list[dict]) -> None:
        self._persist_raw(self._data_dir / "products.json", records)

    # --- Serialization helpers ------------------------------------------------

    def _load_per_product(self, suffix: str) -> dict[str, Any]:
        products_dir = self._data_dir / "products"
        if not products_dir.is_dir():
            return {}
        return {
            path.stem[: -len(suffix)]: self._load_raw(path)
            for path in sorted(products_dir.glob(f"*{suffix}.json"))
        }

    def _load_raw(self, file_path: Path, default: Any = None) -> Any:
        if not file_path.exists():
            logger.debug("%s not found, using %r", file_path, default)
            return default
        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CatalogLoadError(
                f"{file_path}: invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}"
            ) from exc
        except OSError as exc:
            raise CatalogLoadError(f"{file_path}: {exc.strerror}") from exc
        logger.debug("Loaded %s", file_path)
        return raw

    def _persist_raw(self, file_path: Path, raw: Any) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        logger.debug("Wrote %s", file_path)
