"""PostgreSQL implementation of IUserRepository."""

from __future__ import annotations

from membership.domain.entities import User
from membership.domain.value_objects import is_entity_id
from membership.infrastructure.crud import Junction
from membership.infrastructure.mappings import MEMBER_MAPPING, TENANT_MAPPING, USER_MAPPING
from membership.infrastructure.repository import EntityRepository
from membership.infrastructure.validation import normalize_email

# Users linked to a tenant through their memberships
USERS_OF_TENANT = Junction(
    left=USER_MAPPING.table,
    right=TENANT_MAPPING.table,
    link=MEMBER_MAPPING.table,
    link_left_fk="user_id",
    link_right_fk="tenant_id",
)


class UserRepository(EntityRepository[User]):
    """Repository for User records.

    ``auth_id`` and ``email`` are unique; a duplicate of either surfaces as
    "user already exists". Deleting a user who still owns a tenant is
    rejected by the backend.
    """

    mapping = USER_MAPPING

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve the user registered with ``email``.

        ``email`` is normalised as on create before comparing, so a
        differently cased domain still matches.

        Returns:
            The user, or None if no user has this email
        """
        normalized = normalize_email(email)
        if normalized is None:
            return None

        users = await self._list_where(email=normalized)
        return users[0] if users else None

    async def list_for_tenant(self, tenant_id: str) -> list[User]:
        """List users holding a membership in the tenant."""
        if not is_entity_id(tenant_id):
            return []

        with self._translated_errors():
            users = await self._crud.select_junction(
                self.mapping, USERS_OF_TENANT, tenant_id
            )

        self._probe.entities_listed(len(users), {"tenant_id": tenant_id})
        return users
