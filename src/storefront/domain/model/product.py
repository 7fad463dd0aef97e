"""Product entity, the centre of the catalog graph.

A product points at categories, tags, FAQs, testimonials and other products.
The schema only checks what can be checked on one record; whether those
references resolve is the job of the reference checker.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import (
    AliasChoices,
    Field,
    HttpUrl,
    NonNegativeFloat,
    StrictBool,
    StrictInt,
    ValidationInfo,
    field_validator,
    model_validator,
)

from storefront.domain.model.base import NonEmptyStr, SchemaModel, UrlOrEmpty
from storefront.domain.model.content import FAQ, Testimonial
from storefront.domain.model.universe import universe_from_context


class PriceTier(Enum):
    FREE = "free"
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"
    SUBSCRIPTION = "subscription"


class ProductStatus(Enum):
    ACTIVE = "active"
    COMING_SOON = "coming-soon"
    ARCHIVED = "archived"


class PaymentFrequency(Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"
    BIENNIAL = "biennial"


class SecondaryCategory(SchemaModel):
    """A secondary category association.

    ``distant`` marks a related category that is not shown as a badge.
    """

    id: str
    distant: StrictBool = False

    @field_validator("id")
    @classmethod
    def _known_category(cls, value: str, info: ValidationInfo) -> str:
        return universe_from_context(info.context).categories.require(value)


class ProductVariant(SchemaModel):
    name: NonEmptyStr
    price: NonNegativeFloat
    price_display: NonEmptyStr
    description: str
    gumroad_url: HttpUrl


class ProductBenefits(SchemaModel):
    immediate: list[str] | None = None
    systematic: list[str] | None = None
    long_term: list[str] | None = None


class Subscription(SchemaModel):
    """Recurring billing options and the price of each."""

    frequencies: Annotated[list[PaymentFrequency], Field(min_length=1)]
    prices: dict[PaymentFrequency, NonNegativeFloat]

    @model_validator(mode="after")
    def _every_frequency_priced(self) -> Subscription:
        if len(set(self.frequencies)) != len(self.frequencies):
            raise ValueError("Payment frequencies must not repeat")
        missing = [f.value for f in self.frequencies if f not in self.prices]
        if missing:
            raise ValueError(f"Missing price for frequency: {', '.join(missing)}")
        return self

    def savings_percent(self, frequency: PaymentFrequency) -> int | None:
        """Whole-percent saving of *frequency* against paying monthly."""
        months = {PaymentFrequency.YEARLY: 12, PaymentFrequency.BIENNIAL: 24}.get(frequency)
        monthly = self.prices.get(PaymentFrequency.MONTHLY)
        price = self.prices.get(frequency)
        if months is None or not monthly or price is None:
            return None
        return round((1 - price / (monthly * months)) * 100)


class StatsProof(SchemaModel):
    user_count: str | None = None
    time_saved: str | None = None
    rating: str | None = None


class Product(SchemaModel):
    # Identity
    id: NonEmptyStr
    permalink: NonEmptyStr
    name: NonEmptyStr
    tagline: NonEmptyStr
    secondary_tagline: str | None = None

    # Pricing
    price: NonNegativeFloat
    price_display: NonEmptyStr
    price_tier: PriceTier
    gumroad_url: HttpUrl
    variants: list[ProductVariant] | None = None
    subscription: Subscription | None = None

    # Taxonomy
    main_category: str
    secondary_categories: list[SecondaryCategory]
    tags: Annotated[list[NonEmptyStr], Field(min_length=1)]

    # Marketing copy (problem / agitate / solution)
    problem: NonEmptyStr
    problem_points: Annotated[list[str], Field(min_length=1)]
    agitate: NonEmptyStr
    agitate_points: Annotated[list[str], Field(min_length=1)]
    solution: NonEmptyStr
    solution_points: Annotated[list[str], Field(min_length=1)]

    # Features & benefits
    description: NonEmptyStr
    features: Annotated[list[str], Field(min_length=1)]
    benefits: ProductBenefits
    included: Annotated[list[str], Field(min_length=1)]

    # Social proof & content
    testimonial_ids: list[str] = Field(default_factory=list)
    faq_ids: list[str] = Field(default_factory=list)
    testimonials: list[Testimonial] | None = None
    faqs: list[FAQ] | None = None
    stats_proof: StatsProof | None = None

    # Media & links
    cover_image: str | None = None
    screenshots: list[str] | None = None
    video_url: UrlOrEmpty | None = None
    demo_url: UrlOrEmpty | None = None
    landing_page_url: UrlOrEmpty | None = None

    # Audience
    target_audience: list[str] = Field(default_factory=list)
    perfect_for: list[str] = Field(default_factory=list)
    not_for_you: list[str] = Field(default_factory=list)
    trust_badges: list[str] = Field(default_factory=list)
    guarantees: list[str] = Field(default_factory=list)

    # Display flags
    featured: StrictBool
    best_value: StrictBool = Field(
        validation_alias=AliasChoices("bestValue", "mostValue", "best_value"),
        serialization_alias="bestValue",
    )
    bestseller: StrictBool = False
    status: ProductStatus
    priority: Annotated[StrictInt, Field(ge=0, le=100)] = 0

    cross_sell_ids: list[str] = Field(default_factory=list)

    # SEO
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: list[str] | None = None

    @field_validator("main_category")
    @classmethod
    def _known_category(cls, value: str, info: ValidationInfo) -> str:
        return universe_from_context(info.context).categories.require(value)

    # --- Derived views --------------------------------------------------------

    def category_ids(self) -> list[str]:
        """Main category followed by every secondary category."""
        return [self.main_category, *(sc.id for sc in self.secondary_categories)]

    def badge_category_ids(self) -> list[str]:
        """Categories shown as badges: distant associations are left out."""
        return [
            self.main_category,
            *(sc.id for sc in self.secondary_categories if not sc.distant),
        ]

    def referenced_faq_ids(self) -> list[str]:
        embedded = [faq.id for faq in self.faqs or []]
        return [*self.faq_ids, *(i for i in embedded if i not in self.faq_ids)]

    def referenced_testimonial_ids(self) -> list[str]:
        embedded = [t.id for t in self.testimonials or []]
        return [
            *self.testimonial_ids,
            *(i for i in embedded if i not in self.testimonial_ids),
        ]
