"""FAQ and Testimonial entities.

Both are stored in per-product files (``{product-id}-faq.json``,
``{product-id}-testimonials.json``). The owning product is implied by the
file name and never stored in the record itself.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictBool, StrictInt

from storefront.domain.model.base import NonEmptyStr, SchemaModel, UrlOrEmpty


class FAQ(SchemaModel):
    id: NonEmptyStr
    question: NonEmptyStr
    answer: NonEmptyStr
    order: Annotated[StrictInt, Field(ge=0)]


class Testimonial(SchemaModel):
    id: NonEmptyStr
    author: NonEmptyStr
    role: str | None = None
    company: str | None = None
    avatar_url: UrlOrEmpty | None = None
    twitter_handle: str | None = None
    twitter_url: UrlOrEmpty | None = None
    rating: Annotated[StrictInt, Field(ge=1, le=5)]
    quote: NonEmptyStr
    featured: StrictBool
