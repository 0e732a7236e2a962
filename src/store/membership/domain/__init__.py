"""Membership domain: entity records and value objects."""

from membership.domain.entities import Entity, JoinRequest, Member, Tenant, User
from membership.domain.value_objects import (
    EntityId,
    IdGenerator,
    RequiredText,
    generate_id,
    is_entity_id,
)

__all__ = [
    "Entity",
    "EntityId",
    "IdGenerator",
    "JoinRequest",
    "Member",
    "RequiredText",
    "Tenant",
    "User",
    "generate_id",
    "is_entity_id",
]
