"""Generic entity repository.

Wires the validation gate, the CRUD primitives and the field-mask update
engine together for one entity type, and translates every backend error
exactly once before it leaves the repository.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership.domain.entities import Entity
from membership.domain.value_objects import IdGenerator, generate_id, is_entity_id
from membership.infrastructure.crud import CrudPrimitives
from membership.infrastructure.error_translator import backend_message, translate_error
from membership.infrastructure.executor import StatementExecutor
from membership.infrastructure.field_mask import FieldMaskUpdateEngine
from membership.infrastructure.mappings import EntityMapping
from membership.infrastructure.observability import (
    DefaultEntityRepositoryProbe,
    EntityRepositoryProbe,
)
from membership.infrastructure.validation import validate, validate_partial
from membership.ports.exceptions import (
    RecordValidationError,
    ResourceNotFoundError,
    StoreError,
)
from membership.ports.repositories import Record

EntityT = TypeVar("EntityT", bound=Entity)

# Errors that can come back from a backend call
_BACKEND_ERRORS = (StoreError, SQLAlchemyError, OSError)


def candidate_values(record: Record) -> dict[str, Any]:
    """Field name -> value supplied by a record.

    For an entity instance only the fields set explicitly at construction
    count as supplied, so defaults never leak into an update.
    """
    if isinstance(record, Entity):
        return {name: getattr(record, name) for name in record.model_fields_set}
    return dict(record)


class EntityRepository(Generic[EntityT]):
    """Create, read, update and delete operations for one entity type.

    Subclasses set ``mapping`` and may override ``_prepare_create`` to
    fill in server-assigned fields.
    """

    mapping: ClassVar[EntityMapping[Any]]

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: EntityRepositoryProbe | None = None,
        id_generator: IdGenerator = generate_id,
    ) -> None:
        """Initialize repository.

        Args:
            session_factory: Sessionmaker bound to the store's engine
            probe: Optional domain probe for observability
            id_generator: Produces identifiers for new entities
        """
        executor = StatementExecutor(session_factory)
        self._crud = CrudPrimitives(executor)
        self._field_mask = FieldMaskUpdateEngine(executor)
        self._probe = probe or DefaultEntityRepositoryProbe(self.mapping.name)
        self._generate_id = id_generator

    @contextmanager
    def _translated_errors(self) -> Iterator[None]:
        """Replace backend errors raised inside the block with safe ones."""
        try:
            yield
        except _BACKEND_ERRORS as e:
            translated = translate_error(e)
            if translated is e:
                raise
            self._probe.backend_error_translated(backend_message(e), str(translated))
            raise translated from None

    def _prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        """Adjust candidate values of a new entity before validation."""
        return values

    def _validate(self, values: Mapping[str, Any]) -> EntityT:
        try:
            return validate(self.mapping.entity, values)
        except RecordValidationError as e:
            self._probe.validation_failed(e.errors)
            raise

    async def create(self, record: Record) -> EntityT:
        """Persist a new entity under a freshly generated id.

        Args:
            record: Field values for the new entity; any ``id`` is replaced

        Returns:
            The validated entity as written

        Raises:
            RecordValidationError: If the record violates its constraints
            DatabaseError: If the backend rejects the insert
        """
        values = candidate_values(record)
        values["id"] = self._generate_id()
        entity = self._validate(self._prepare_create(values))

        with self._translated_errors():
            await self._crud.create(self.mapping, entity)

        self._probe.entity_created(entity.id)
        return entity

    async def update(
        self, entity_id: str, record: Record, fields: Sequence[str] = ()
    ) -> None:
        """Change only the fields named in ``fields``.

        Args:
            entity_id: Identifier of the entity to change
            record: Candidate values; those outside the mask are ignored
            fields: The field mask

        Raises:
            EmptyFieldMaskError: If ``fields`` is empty
            RecordValidationError: If a masked field is unknown, immutable or
                has an invalid value
            NothingToUpdateError: If no masked field has a supplied value
            ResourceNotFoundError: If no entity has this id
            DatabaseError: If the backend rejects the update
        """
        try:
            values = validate_partial(
                self.mapping.entity, candidate_values(record), fields
            )
        except RecordValidationError as e:
            self._probe.validation_failed(e.errors)
            raise

        if not is_entity_id(entity_id):
            raise ResourceNotFoundError()

        with self._translated_errors():
            await self._field_mask.update(self.mapping, entity_id, fields, values)

        self._probe.entity_updated(entity_id, fields)

    async def get(self, entity_id: str) -> EntityT | None:
        """Retrieve an entity by id.

        Returns:
            The entity, or None if no row has this id
        """
        entity = None
        if is_entity_id(entity_id):
            with self._translated_errors():
                entity, _ = await self._crud.get_by_id(self.mapping, entity_id)

        if entity is None:
            self._probe.entity_not_found(entity_id)
            return None

        self._probe.entity_retrieved(entity_id)
        return entity

    async def get_many(self, entity_ids: Sequence[str]) -> list[EntityT]:
        """Retrieve every entity whose id is in ``entity_ids``.

        Ids that match no row are skipped.
        """
        ids = [entity_id for entity_id in entity_ids if is_entity_id(entity_id)]

        with self._translated_errors():
            entities = await self._crud.get_many_by_ids(self.mapping, ids)

        self._probe.entities_listed(len(entities))
        return entities

    async def delete(self, entity_id: str) -> None:
        """Delete an entity by id.

        Raises:
            ResourceNotFoundError: If no entity has this id
            DatabaseError: If the backend rejects the delete
        """
        if not is_entity_id(entity_id):
            raise ResourceNotFoundError()

        with self._translated_errors():
            await self._crud.delete(self.mapping, entity_id)

        self._probe.entity_deleted(entity_id)

    async def _list_where(self, **criteria: Any) -> list[EntityT]:
        """List entities whose fields equal every value in ``criteria``."""
        with self._translated_errors():
            entities = await self._crud.get_many_where(self.mapping, criteria)

        self._probe.entities_listed(len(entities), criteria)
        return entities
