"""Entity records for the membership domain.

Each entity is a pydantic model whose field annotations carry the
structural constraints checked before anything is written: identifier
format, required-ness and email format.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr

from membership.domain.value_objects import EntityId, RequiredText


class Entity(BaseModel):
    """Base record for every stored entity.

    The identifier is assigned once by the store at creation time and is
    never part of an update.
    """

    model_config = ConfigDict(extra="forbid")

    # Fields that may never appear in an update's field mask
    immutable_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    id: EntityId


class User(Entity):
    """A person known to the system through an external auth provider."""

    auth_id: EntityId
    email: EmailStr
    first_name: RequiredText
    last_name: RequiredText


class Tenant(Entity):
    """An organization owned by a user."""

    name: RequiredText
    owner_id: EntityId


class JoinRequest(Entity):
    """An invitation or request to join a tenant.

    A request targets either a registered user (``user_id``) or an email
    address without an account (``anon_email``). ``is_accepted`` and
    ``is_from_user`` are tri-state: ``None`` means undecided.
    """

    immutable_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at"})

    tenant_id: EntityId
    user_id: EntityId | None = None
    anon_email: EmailStr | None = None
    is_accepted: bool | None = None
    is_from_user: bool | None = None
    created_at: datetime
    expires_at: datetime | None = None


class Member(Entity):
    """A user's membership in a tenant; one row per (tenant, user) pair."""

    tenant_id: EntityId
    user_id: EntityId
    alias: str | None = None
    is_admin: bool = False
    is_inactive: bool = False
