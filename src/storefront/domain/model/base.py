"""Shared building blocks for the entity schemas.

Catalog JSON uses camelCase keys; the models expose snake_case attributes
and report field errors under the JSON key so messages point at the file
content the author actually edits.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic.alias_generators import to_camel

NonEmptyStr = Annotated[str, Field(min_length=1)]
UrlOrEmpty = Union[HttpUrl, Literal[""]]


class SchemaModel(BaseModel):
    """Base for every catalog entity.

    Frozen: transformations produce copies via ``model_copy`` and never
    touch the records handed to them.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
