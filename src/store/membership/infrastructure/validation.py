"""Structural validation of entity records before they reach the backend.

Full validation runs the entity's pydantic model over the complete record.
Partial validation checks only the fields named in an update's field mask,
so a sparse record passes as long as its unset fields stay out of the mask.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Annotated, Any, TypeVar

from pydantic import EmailStr, TypeAdapter, ValidationError

from membership.domain.entities import Entity
from membership.ports.exceptions import EmptyFieldMaskError, RecordValidationError

EntityT = TypeVar("EntityT", bound=Entity)


def validate(entity_cls: type[EntityT], values: Mapping[str, Any]) -> EntityT:
    """Validate a complete record.

    Args:
        entity_cls: The entity type to build
        values: Every field value of the record

    Returns:
        The validated entity

    Raises:
        RecordValidationError: If any field violates its constraints
    """
    try:
        return entity_cls.model_validate(dict(values))
    except ValidationError as e:
        raise RecordValidationError(
            entity_cls.__name__, _error_entries(e.errors())
        ) from e


def validate_partial(
    entity_cls: type[Entity],
    values: Mapping[str, Any],
    fields: Sequence[str],
) -> dict[str, Any]:
    """Validate only the fields named in a field mask.

    Masked fields without a supplied value are skipped; they will not be
    written either.

    Args:
        entity_cls: The entity type being updated
        values: Candidate values, possibly for more fields than the mask names
        fields: The field mask

    Returns:
        Validated values for the masked fields that have one

    Raises:
        EmptyFieldMaskError: If ``fields`` is empty
        RecordValidationError: If a masked field is unknown, immutable, or
            its value violates its constraints
    """
    if not fields:
        raise EmptyFieldMaskError()

    errors: list[dict[str, Any]] = []
    validated: dict[str, Any] = {}

    for name in fields:
        if name not in entity_cls.model_fields:
            errors.append(
                {"loc": (name,), "msg": "Unknown field", "type": "unknown_field"}
            )
            continue
        if name in entity_cls.immutable_fields:
            errors.append(
                {"loc": (name,), "msg": "Field is immutable", "type": "immutable_field"}
            )
            continue
        if name not in values:
            continue

        try:
            validated[name] = _field_adapter(entity_cls, name).validate_python(
                values[name]
            )
        except ValidationError as e:
            errors.extend(
                {**entry, "loc": (name, *entry["loc"])}
                for entry in _error_entries(e.errors())
            )

    if errors:
        raise RecordValidationError(entity_cls.__name__, errors)

    return validated


@lru_cache(maxsize=None)
def _field_adapter(entity_cls: type[Entity], name: str) -> TypeAdapter[Any]:
    """Build (once) a validator for a single field of an entity."""
    field = entity_cls.model_fields[name]
    if field.metadata:
        return TypeAdapter(Annotated[(field.annotation, *field.metadata)])
    return TypeAdapter(field.annotation)


def _error_entries(errors: Sequence[Any]) -> list[dict[str, Any]]:
    """Keep the parts of pydantic error details that are safe to expose."""
    return [
        {"loc": tuple(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in errors
    ]


_EMAIL_ADAPTER: TypeAdapter[str] = TypeAdapter(EmailStr)


def normalize_email(email: str) -> str | None:
    """Normalise an email address the way it is stored.

    Lookups must compare against the stored form, in which the domain part
    is lowercased.

    Returns:
        The normalised address, or None if ``email`` is not a valid address
    """
    try:
        return _EMAIL_ADAPTER.validate_python(email)
    except ValidationError:
        return None
