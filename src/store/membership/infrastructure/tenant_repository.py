"""PostgreSQL implementation of ITenantRepository."""

from __future__ import annotations

from membership.domain.entities import Tenant
from membership.domain.value_objects import is_entity_id
from membership.infrastructure.crud import Junction
from membership.infrastructure.mappings import MEMBER_MAPPING, TENANT_MAPPING, USER_MAPPING
from membership.infrastructure.repository import EntityRepository

# Tenants linked to a user through the user's memberships
TENANTS_OF_USER = Junction(
    left=TENANT_MAPPING.table,
    right=USER_MAPPING.table,
    link=MEMBER_MAPPING.table,
    link_left_fk="tenant_id",
    link_right_fk="user_id",
)


class TenantRepository(EntityRepository[Tenant]):
    """Repository for Tenant records.

    The owner must be an existing user. Deleting a tenant removes its
    memberships and join requests with it.
    """

    mapping = TENANT_MAPPING

    async def list_for_user(self, user_id: str) -> list[Tenant]:
        """List tenants the user is a member of.

        Ownership alone does not count; the owner appears only if they also
        hold a membership.
        """
        if not is_entity_id(user_id):
            return []

        with self._translated_errors():
            tenants = await self._crud.select_junction(
                self.mapping, TENANTS_OF_USER, user_id
            )

        self._probe.entities_listed(len(tenants), {"user_id": user_id})
        return tenants
