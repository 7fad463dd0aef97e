"""Abstract repository for the catalog content files.

Defined in the domain layer so the domain never depends on
infrastructure. It hands out *raw* JSON values: turning them into entities
is the schema validator's job, so malformed records are reported instead
of crashing the load.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CatalogRepository(ABC):

    @abstractmethod
    def load_products(self) -> Any:
        """Return the raw product records (expected: a list of objects)."""

    @abstractmethod
    def load_categories(self) -> Any:
        """Return the raw category records (expected: a list of objects)."""

    @abstractmethod
    def load_tags(self) -> Any:
        """Return the raw tag map (expected: an object keyed by tag id)."""

    @abstractmethod
    def load_faqs(self) -> dict[str, Any]:
        """Return raw FAQ lists keyed by the id of the owning product."""

    @abstractmethod
    def load_testimonials(self) -> dict[str, Any]:
        """Return raw testimonial lists keyed by the id of the owning product."""

    @abstractmethod
    def load_promotion(self) -> Any | None:
        """Return the raw promotion config, or None when there is none."""

    @abstractmethod
    def save_categories(self, records: list[dict]) -> None:
        """Persist the full list of category records."""

    @abstractmethod
    def save_aggregated_products(self, records: list[dict]) -> None:
        """Persist the single-file product list the site build reads."""

    @abstractmethod
    def save_tags(self, records: dict[str, dict]) -> None:
        """Persist the full tag map."""
