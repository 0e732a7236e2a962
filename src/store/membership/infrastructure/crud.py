"""Generic create/read/delete primitives shared by every entity type.

Primitives raise backend errors untranslated; translation happens once, at
the repository boundary.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from sqlalchemy import Table, delete, insert, select

from membership.domain.entities import Entity
from membership.infrastructure.executor import StatementExecutor
from membership.infrastructure.mappings import EntityMapping
from membership.ports.exceptions import ResourceNotFoundError

EntityT = TypeVar("EntityT", bound=Entity)


@dataclass(frozen=True)
class Junction:
    """Two tables linked through an intermediate table.

    Selecting through a junction returns rows of ``left`` linked to the row
    of ``right`` with a given primary key.

    Attributes:
        left: Table whose rows are returned
        right: Table holding the looked-up key
        link: Linking table
        link_left_fk: Column of ``link`` referencing ``left``
        link_right_fk: Column of ``link`` referencing ``right``
        left_pk: Primary key column of ``left``
        right_pk: Primary key column of ``right``
    """

    left: Table
    right: Table
    link: Table
    link_left_fk: str
    link_right_fk: str
    left_pk: str = "id"
    right_pk: str = "id"


class CrudPrimitives:
    """Parameterized create, read and delete operations."""

    def __init__(self, executor: StatementExecutor) -> None:
        self._executor = executor

    async def create(self, mapping: EntityMapping[EntityT], entity: EntityT) -> None:
        """Insert the mapping's insertable columns of ``entity``."""
        stmt = insert(mapping.table).values(mapping.insert_values(entity))
        await self._executor.execute(stmt)

    async def get_by_id(
        self, mapping: EntityMapping[EntityT], entity_id: str
    ) -> tuple[EntityT | None, int]:
        """Select one row by primary key.

        A found count of zero is a normal result, not an error.

        Returns:
            The entity (or None) and the number of rows found
        """
        stmt = select(mapping.table).where(mapping.primary_key == entity_id)
        rows = await self._executor.fetch_all(stmt)

        if not rows:
            return None, 0
        return mapping.from_row(rows[0]), len(rows)

    async def get_many_by_ids(
        self, mapping: EntityMapping[EntityT], entity_ids: Sequence[str]
    ) -> list[EntityT]:
        """Select every row whose primary key is in ``entity_ids``.

        Order of the result is whatever the backend returns.
        """
        if not entity_ids:
            return []

        stmt = select(mapping.table).where(mapping.primary_key.in_(list(entity_ids)))
        rows = await self._executor.fetch_all(stmt)
        return [mapping.from_row(row) for row in rows]

    async def get_many_by(
        self, mapping: EntityMapping[EntityT], field: str, value: Any
    ) -> list[EntityT]:
        """Select every row whose ``field`` equals ``value``."""
        return await self.get_many_where(mapping, {field: value})

    async def get_many_where(
        self, mapping: EntityMapping[EntityT], criteria: Mapping[str, Any]
    ) -> list[EntityT]:
        """Select every row matching all ``criteria`` (field name -> value)."""
        stmt = select(mapping.table).where(
            *(mapping.column(field) == value for field, value in criteria.items())
        )
        rows = await self._executor.fetch_all(stmt)
        return [mapping.from_row(row) for row in rows]

    async def delete(self, mapping: EntityMapping[Any], entity_id: str) -> None:
        """Delete one row by primary key.

        Raises:
            ResourceNotFoundError: If no row has this id
        """
        stmt = delete(mapping.table).where(mapping.primary_key == entity_id)
        count = await self._executor.execute_rowcount(stmt)

        if count == 0:
            raise ResourceNotFoundError()

    async def select_junction(
        self,
        mapping: EntityMapping[EntityT],
        junction: Junction,
        lookup_id: str,
    ) -> list[EntityT]:
        """Select rows of ``junction.left`` linked to one row of ``junction.right``.

        Args:
            mapping: Storage mapping of the entity stored in ``junction.left``
            junction: The tables and keys to join through
            lookup_id: Primary key of the ``junction.right`` row

        Returns:
            Entities built from the matching ``left`` rows
        """
        left, right, link = junction.left, junction.right, junction.link
        joined = left.join(
            link, left.c[junction.left_pk] == link.c[junction.link_left_fk]
        ).join(right, right.c[junction.right_pk] == link.c[junction.link_right_fk])

        stmt = (
            select(left)
            .select_from(joined)
            .where(right.c[junction.right_pk] == lookup_id)
        )
        rows = await self._executor.fetch_all(stmt)
        return [mapping.from_row(row) for row in rows]
