"""Domain service: Entity schema validation.

Turns raw JSON values into entities and reports every field-level problem
as a ``FieldError`` (path + message + what was found). Malformed-but-typed
data never raises; only a wrong top-level shape (e.g. an object where an
array is expected) raises ``SchemaShapeError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import pydantic

from storefront.domain.exceptions import SchemaShapeError
from storefront.domain.model.base import SchemaModel
from storefront.domain.model.promotion import PromotionConfig
from storefront.domain.model.taxonomy import Tag
from storefront.domain.model.universe import DEFAULT_UNIVERSE, CatalogUniverse

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SchemaModel)

_MISSING = object()


@dataclass(frozen=True)
class FieldError:
    """One field-level problem, addressed by its JSON path."""

    path: str
    message: str
    found: Any = _MISSING

    def __str__(self) -> str:
        if self.found is _MISSING:
            return f"{self.path}: {self.message}"
        return f"{self.path}: {self.message} (got: {self.found!r})"


@dataclass(frozen=True)
class EntityResult(Generic[T]):
    entity: T | None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.entity is not None and not self.errors


@dataclass
class CollectionResult(Generic[T]):
    """Outcome of validating an array (or map) of records.

    ``failures`` maps an entity label (its id, or ``[index N]`` when the
    id is unusable) to that entity's field errors.
    """

    entities: list[T] = field(default_factory=list)
    failures: dict[str, list[FieldError]] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures

    def add_failure(self, label: str, errors: list[FieldError]) -> None:
        self.failures.setdefault(label, []).extend(errors)


# ---------------------------------------------------------------------------
# Single entities
# ---------------------------------------------------------------------------


def validate_entity(
    model: type[T],
    raw: Any,
    universe: CatalogUniverse = DEFAULT_UNIVERSE,
) -> EntityResult[T]:
    try:
        entity = model.model_validate(raw, context={"universe": universe})
    except pydantic.ValidationError as exc:
        return EntityResult(entity=None, errors=_to_field_errors(exc))
    return EntityResult(entity=entity)


def validate_promotion(
    raw: Any, universe: CatalogUniverse = DEFAULT_UNIVERSE
) -> EntityResult[PromotionConfig]:
    if not isinstance(raw, dict):
        raise SchemaShapeError("Promotion config must be a JSON object")
    return validate_entity(PromotionConfig, raw, universe)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


def validate_collection(
    model: type[T],
    raw: Any,
    universe: CatalogUniverse = DEFAULT_UNIVERSE,
    label: str = "records",
) -> CollectionResult[T]:
    """Validate every element of an array; invalid siblings don't stop the rest."""
    if not isinstance(raw, list):
        raise SchemaShapeError(
            f"Expected an array of {label}, got {type(raw).__name__}"
        )

    result: CollectionResult[T] = CollectionResult()
    for index, record in enumerate(raw):
        outcome = validate_entity(model, record, universe)
        if outcome.success:
            result.entities.append(outcome.entity)
        else:
            result.add_failure(_label_for(record, index), outcome.errors)

    logger.debug(
        "Validated %d %s: %d valid, %d invalid",
        len(raw), label, len(result.entities), len(result.failures),
    )
    return result


def validate_tag_map(
    raw: Any, universe: CatalogUniverse = DEFAULT_UNIVERSE
) -> CollectionResult[Tag]:
    """Loose tag-map check: any subset of valid tag ids.

    Each key must be a known tag id and match the ``id`` of its record.
    """
    if not isinstance(raw, dict):
        raise SchemaShapeError(
            f"Expected an object of tags keyed by tag id, got {type(raw).__name__}"
        )

    result: CollectionResult[Tag] = CollectionResult()
    for key, record in raw.items():
        key_errors: list[FieldError] = []
        if key not in universe.tags:
            key_errors.append(FieldError(key, f"'{key}' is not a known tag id"))

        outcome = validate_entity(Tag, record, universe)
        if outcome.success and outcome.entity.id != key:
            key_errors.append(
                FieldError(
                    "id",
                    f"Tag id must match its key '{key}'",
                    found=outcome.entity.id,
                )
            )

        errors = key_errors + outcome.errors
        if errors:
            result.add_failure(key, errors)
        else:
            result.entities.append(outcome.entity)
    return result


def validate_complete_tag_map(
    raw: Any, universe: CatalogUniverse = DEFAULT_UNIVERSE
) -> CollectionResult[Tag]:
    """Strict tag-map check: the loose rules plus full universe coverage."""
    result = validate_tag_map(raw, universe)
    for tag_id in universe.tags:
        if tag_id not in raw:
            result.add_failure(
                tag_id, [FieldError(tag_id, "Missing metadata entry for tag id")]
            )
    return result


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _label_for(record: Any, index: int) -> str:
    if isinstance(record, dict):
        record_id = record.get("id")
        if isinstance(record_id, str) and record_id:
            return record_id
    return f"[index {index}]"


def _to_field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "[root]"
        if err["type"] == "missing" or not err["loc"]:
            errors.append(FieldError(path, err["msg"]))
        else:
            errors.append(FieldError(path, err["msg"], found=err.get("input")))
    return errors
