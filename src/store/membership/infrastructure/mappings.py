"""Static storage metadata for each entity type.

An ``EntityMapping`` declares, once per entity type, which table stores it,
how entity field names map to column names, and which fields a create
writes. Create, update and read paths all go through the same mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Column, Table

from membership.domain.entities import Entity, JoinRequest, Member, Tenant, User
from membership.infrastructure.models import (
    JoinRequestModel,
    MemberModel,
    TenantModel,
    UserModel,
)

EntityT = TypeVar("EntityT", bound=Entity)


@dataclass(frozen=True)
class EntityMapping(Generic[EntityT]):
    """How one entity type is stored.

    Attributes:
        name: Short entity name used in logs
        entity: The entity record class
        table: The backing table
        columns: Entity field name -> column name, for every stored field
        insert_fields: Fields written when the entity is created
    """

    name: str
    entity: type[EntityT]
    table: Table
    columns: Mapping[str, str]
    insert_fields: tuple[str, ...]

    @property
    def primary_key(self) -> Column[Any]:
        """The ``id`` column of the table."""
        return self.table.c[self.columns["id"]]

    def column(self, field: str) -> Column[Any]:
        """Return the column storing ``field``.

        Raises:
            KeyError: If the field is not stored
        """
        return self.table.c[self.columns[field]]

    def insert_values(self, entity: EntityT) -> dict[str, Any]:
        """Column name -> value for the fields written on create."""
        return {self.columns[name]: getattr(entity, name) for name in self.insert_fields}

    def from_row(self, row: Mapping[str, Any]) -> EntityT:
        """Rebuild an entity from a selected row without re-validating it."""
        return self.entity.model_construct(
            **{name: row[column] for name, column in self.columns.items()}
        )


USER_MAPPING: EntityMapping[User] = EntityMapping(
    name="user",
    entity=User,
    table=UserModel.__table__,
    columns={
        "id": "id",
        "auth_id": "auth_id",
        "email": "email",
        "first_name": "first_name",
        "last_name": "last_name",
    },
    insert_fields=("id", "auth_id", "email", "first_name", "last_name"),
)

TENANT_MAPPING: EntityMapping[Tenant] = EntityMapping(
    name="tenant",
    entity=Tenant,
    table=TenantModel.__table__,
    columns={
        "id": "id",
        "name": "name",
        "owner_id": "owner_id",
    },
    insert_fields=("id", "name", "owner_id"),
)

# is_accepted is never written on create: a new request is always undecided
JOIN_REQUEST_MAPPING: EntityMapping[JoinRequest] = EntityMapping(
    name="joinrequest",
    entity=JoinRequest,
    table=JoinRequestModel.__table__,
    columns={
        "id": "id",
        "tenant_id": "tenant_id",
        "user_id": "user_id",
        "anon_email": "anon_email",
        "is_accepted": "is_accepted",
        "is_from_user": "is_from_user",
        "created_at": "created_at",
        "expires_at": "expires_at",
    },
    insert_fields=(
        "id",
        "tenant_id",
        "user_id",
        "anon_email",
        "is_from_user",
        "created_at",
        "expires_at",
    ),
)

MEMBER_MAPPING: EntityMapping[Member] = EntityMapping(
    name="member",
    entity=Member,
    table=MemberModel.__table__,
    columns={
        "id": "id",
        "tenant_id": "tenant_id",
        "user_id": "user_id",
        "alias": "alias",
        "is_admin": "is_admin",
        "is_inactive": "is_inactive",
    },
    insert_fields=("id", "tenant_id", "user_id", "alias", "is_admin", "is_inactive"),
)
