"""Category and Tag entities.

Both share the ``FeaturedPrioritizedItem`` shape: they can be featured and
carry a display priority (lower number = shown first).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, StrictBool, StrictInt, ValidationInfo, field_validator

from storefront.domain.model.base import NonEmptyStr, SchemaModel
from storefront.domain.model.universe import universe_from_context

TAG_ID_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class FeaturedPrioritizedItem(SchemaModel):
    id: NonEmptyStr
    name: NonEmptyStr
    description: NonEmptyStr
    icon: str | None = None
    color: str | None = None
    featured: StrictBool
    priority: Annotated[StrictInt, Field(ge=1)]


class Category(FeaturedPrioritizedItem):

    @field_validator("id")
    @classmethod
    def _known_category(cls, value: str, info: ValidationInfo) -> str:
        return universe_from_context(info.context).categories.require(value)


class Tag(FeaturedPrioritizedItem):
    """A tag. Ids are kebab-case; colors, when set, are ``#RRGGBB``."""

    id: Annotated[str, Field(pattern=TAG_ID_PATTERN)]
    color: Annotated[str, Field(pattern=HEX_COLOR_PATTERN)] | None = None

    @field_validator("id")
    @classmethod
    def _known_tag(cls, value: str, info: ValidationInfo) -> str:
        return universe_from_context(info.context).tags.require(value)
