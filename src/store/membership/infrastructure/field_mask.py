"""Field-masked partial updates.

An update writes exactly the columns of the fields named in its field mask
that also have a supplied value. Fields outside the mask keep their stored
values even when the caller passed a new value for them, and a masked field
without a value is left alone rather than nulled. Existence of the target
row is decided by the affected-row count.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import update

from membership.infrastructure.executor import StatementExecutor
from membership.infrastructure.mappings import EntityMapping
from membership.ports.exceptions import (
    EmptyFieldMaskError,
    NothingToUpdateError,
    ResourceNotFoundError,
)


def build_assignments(
    mapping: EntityMapping[Any],
    fields: Sequence[str],
    values: Mapping[str, Any],
) -> dict[str, Any]:
    """Column name -> value for masked fields that have a supplied value.

    Assignments follow mask order; a field named twice is assigned once.
    Names without a column in the mapping are ignored.
    """
    return {
        mapping.columns[name]: values[name]
        for name in fields
        if name in values and name in mapping.columns
    }


class FieldMaskUpdateEngine:
    """Executes field-masked updates against a single row."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    async def update(
        self,
        mapping: EntityMapping[Any],
        entity_id: str,
        fields: Sequence[str],
        values: Mapping[str, Any],
    ) -> None:
        """Update the masked fields of one entity.

        Backend errors are raised untranslated.

        Args:
            mapping: Storage mapping of the entity type
            entity_id: Primary key of the row to change
            fields: The field mask
            values: Candidate values by field name

        Raises:
            EmptyFieldMaskError: If ``fields`` is empty (no backend call)
            NothingToUpdateError: If no masked field has a value (no backend call)
            ResourceNotFoundError: If no row has this id
        """
        if not fields:
            raise EmptyFieldMaskError()

        assignments = build_assignments(mapping, fields, values)
        if not assignments:
            raise NothingToUpdateError()

        stmt = (
            update(mapping.table)
            .where(mapping.primary_key == entity_id)
            .values(assignments)
        )
        count = await self._executor.execute_rowcount(stmt)

        if count == 0:
            raise ResourceNotFoundError()
