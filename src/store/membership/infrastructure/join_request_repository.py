"""PostgreSQL implementation of IJoinRequestRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from membership.domain.entities import JoinRequest
from membership.domain.value_objects import IdGenerator, generate_id, is_entity_id
from membership.infrastructure.mappings import JOIN_REQUEST_MAPPING
from membership.infrastructure.observability import EntityRepositoryProbe
from membership.infrastructure.repository import EntityRepository
from membership.infrastructure.validation import normalize_email

Clock = Callable[[], datetime]


def utc_clock() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(UTC)


class JoinRequestRepository(EntityRepository[JoinRequest]):
    """Repository for JoinRequest records.

    A new request is always undecided and stamped with the current time:
    ``is_accepted`` and ``created_at`` supplied by the caller are replaced.
    """

    mapping = JOIN_REQUEST_MAPPING

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        probe: EntityRepositoryProbe | None = None,
        id_generator: IdGenerator = generate_id,
        clock: Clock = utc_clock,
    ) -> None:
        """Initialize repository.

        Args:
            session_factory: Sessionmaker bound to the store's engine
            probe: Optional domain probe for observability
            id_generator: Produces identifiers for new entities
            clock: Source of ``created_at`` timestamps
        """
        super().__init__(session_factory, probe=probe, id_generator=id_generator)
        self._clock = clock

    def _prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        values["is_accepted"] = None
        values["created_at"] = self._clock()
        return values

    async def list_by_tenant(self, tenant_id: str) -> list[JoinRequest]:
        """List join requests targeting the tenant."""
        if not is_entity_id(tenant_id):
            return []
        return await self._list_where(tenant_id=tenant_id)

    async def list_by_user(self, user_id: str) -> list[JoinRequest]:
        """List join requests addressed to a registered user."""
        if not is_entity_id(user_id):
            return []
        return await self._list_where(user_id=user_id)

    async def list_by_anon_email(self, email: str) -> list[JoinRequest]:
        """List join requests addressed to an email without an account.

        ``email`` is normalised as on create before comparing.
        """
        normalized = normalize_email(email)
        if normalized is None:
            return []
        return await self._list_where(anon_email=normalized)
