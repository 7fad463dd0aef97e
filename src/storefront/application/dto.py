"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class IssueGroupDTO:
    """Every problem found for one entity, each line ``field: message``."""

    subject: str
    issues: list[str]


@dataclass(frozen=True)
class ValidationReportDTO:
    title: str
    checked: int
    groups: list[IssueGroupDTO] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    info: list[str] = field(default_factory=list)  # never affects ok

    @property
    def ok(self) -> bool:
        return not self.groups

    @property
    def issue_count(self) -> int:
        return sum(len(g.issues) for g in self.groups)


@dataclass(frozen=True)
class PriorityItemDTO:
    id: str
    name: str
    featured: bool
    priority: int


@dataclass(frozen=True)
class PriorityStatsDTO:
    collection: str
    total: int
    featured: int
    non_featured: int
    featured_range: tuple[int, int]
    non_featured_range: tuple[int, int]
    gaps: list[str]
    errors: list[str]
    items: list[PriorityItemDTO]  # sorted by priority


@dataclass(frozen=True)
class PriorityChangeDTO:
    id: str
    name: str
    old_priority: int
    new_priority: int


@dataclass(frozen=True)
class ProductSummaryDTO:
    id: str
    name: str
    main_category: str
    priority: int
    price_display: str
    flags: str  # e.g. "featured, bestseller"
    badge_categories: list[str] = field(default_factory=list)  # main category first


@dataclass(frozen=True)
class UsageLineDTO:
    id: str
    name: str
    featured: bool
    count: int


@dataclass(frozen=True)
class PromotionStatusDTO:
    behavior: str
    active: bool
    promo_text: str
    starts: str | None = None  # ISO-8601
    ends: str | None = None
    discount_code: str | None = None
