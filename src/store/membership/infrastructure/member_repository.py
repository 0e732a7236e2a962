"""PostgreSQL implementation of IMemberRepository."""

from __future__ import annotations

from membership.domain.entities import Member
from membership.domain.value_objects import is_entity_id
from membership.infrastructure.mappings import MEMBER_MAPPING
from membership.infrastructure.repository import EntityRepository


class MemberRepository(EntityRepository[Member]):
    """Repository for Member records.

    A user holds at most one membership per tenant; a second one surfaces
    as "user is already member of tenant".
    """

    mapping = MEMBER_MAPPING

    async def list_by_tenant(self, tenant_id: str) -> list[Member]:
        """List memberships of the tenant."""
        if not is_entity_id(tenant_id):
            return []
        return await self._list_where(tenant_id=tenant_id)

    async def list_by_user(self, user_id: str) -> list[Member]:
        """List memberships held by the user."""
        if not is_entity_id(user_id):
            return []
        return await self._list_where(user_id=user_id)

    async def is_member(self, tenant_id: str, user_id: str) -> bool:
        """Check whether the user holds a membership in the tenant.

        Inactive memberships count.
        """
        if not (is_entity_id(tenant_id) and is_entity_id(user_id)):
            return False
        members = await self._list_where(tenant_id=tenant_id, user_id=user_id)
        return bool(members)
