"""Repository protocols (ports) for the membership bounded context.

Repository protocols define the interface for persisting and retrieving
entity records. Implementations translate every backend error into the
vocabulary of ``membership.ports.exceptions`` before it leaves them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from membership.domain.entities import Entity, JoinRequest, Member, Tenant, User

EntityT = TypeVar("EntityT", bound=Entity)

# Candidate values for create/update: a mapping of field name to value, or an
# entity whose explicitly set fields are taken as supplied
Record = Mapping[str, Any] | Entity


@runtime_checkable
class IEntityRepository(Protocol[EntityT]):
    """Create/read/update/delete operations shared by every entity type."""

    async def create(self, record: Record) -> EntityT:
        """Persist a new entity.

        The store assigns the identifier; any ``id`` in the record is ignored.

        Args:
            record: Field values for the new entity

        Returns:
            The validated entity as stored

        Raises:
            RecordValidationError: If the record violates its constraints
            DatabaseError: If the backend rejects the insert
        """
        ...

    async def update(
        self, entity_id: str, record: Record, fields: Sequence[str] = ()
    ) -> None:
        """Change only the named fields of an existing entity.

        Args:
            entity_id: Identifier of the entity to change
            record: Candidate values; only those named in ``fields`` are written
            fields: The field mask

        Raises:
            EmptyFieldMaskError: If ``fields`` is empty
            RecordValidationError: If a masked value violates its constraints
            NothingToUpdateError: If no masked field has a supplied value
            ResourceNotFoundError: If no entity has this id
            DatabaseError: If the backend rejects the update
        """
        ...

    async def get(self, entity_id: str) -> EntityT | None:
        """Retrieve an entity by id.

        Returns:
            The entity, or None if not found
        """
        ...

    async def get_many(self, entity_ids: Sequence[str]) -> list[EntityT]:
        """Retrieve every entity whose id is in ``entity_ids``, in no particular order."""
        ...

    async def delete(self, entity_id: str) -> None:
        """Delete an entity.

        Raises:
            ResourceNotFoundError: If no entity has this id
            DatabaseError: If the backend rejects the delete
        """
        ...


@runtime_checkable
class IUserRepository(IEntityRepository[User], Protocol):
    """Repository for User records."""

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve the user registered with ``email``, or None."""
        ...

    async def list_for_tenant(self, tenant_id: str) -> list[User]:
        """List users holding a membership in the tenant."""
        ...


@runtime_checkable
class ITenantRepository(IEntityRepository[Tenant], Protocol):
    """Repository for Tenant records."""

    async def list_for_user(self, user_id: str) -> list[Tenant]:
        """List tenants the user is a member of."""
        ...


@runtime_checkable
class IJoinRequestRepository(IEntityRepository[JoinRequest], Protocol):
    """Repository for JoinRequest records."""

    async def list_by_tenant(self, tenant_id: str) -> list[JoinRequest]:
        """List join requests targeting the tenant."""
        ...

    async def list_by_user(self, user_id: str) -> list[JoinRequest]:
        """List join requests addressed to a registered user."""
        ...

    async def list_by_anon_email(self, email: str) -> list[JoinRequest]:
        """List join requests addressed to an email without an account."""
        ...


@runtime_checkable
class IMemberRepository(IEntityRepository[Member], Protocol):
    """Repository for Member records."""

    async def list_by_tenant(self, tenant_id: str) -> list[Member]:
        """List memberships of the tenant."""
        ...

    async def list_by_user(self, user_id: str) -> list[Member]:
        """List memberships held by the user."""
        ...

    async def is_member(self, tenant_id: str, user_id: str) -> bool:
        """Check whether the user holds a membership in the tenant."""
        ...
