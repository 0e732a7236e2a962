"""Composition root of the membership store.

Builds the bounded connection pool once and wires every repository and the
invitation service to it.

Example:
    async with create_store() as store:
        user = await store.users.create(
            {"auth_id": auth_id, "email": "zed@acme.io",
             "first_name": "Zed", "last_name": "Shaw"}
        )
        await store.users.update(user.id, {"first_name": "Zee"}, ["first_name"])
"""

from __future__ import annotations

from types import TracebackType

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database import create_engine
from infrastructure.observability import (
    ConnectionProbe,
    DefaultConnectionProbe,
    ObservationContext,
)
from infrastructure.settings import DatabaseSettings, get_database_settings
from membership.application.observability import DefaultInvitationServiceProbe
from membership.application.services import InvitationService
from membership.domain.value_objects import IdGenerator, generate_id
from membership.infrastructure.join_request_repository import (
    Clock,
    JoinRequestRepository,
    utc_clock,
)
from membership.infrastructure.member_repository import MemberRepository
from membership.infrastructure.observability import (
    DefaultEntityRepositoryProbe,
    EntityRepositoryProbe,
)
from membership.infrastructure.tenant_repository import TenantRepository
from membership.infrastructure.user_repository import UserRepository


class MembershipStore:
    """Entry point to users, tenants, join requests and members.

    Every repository method runs as its own unit of work on a connection
    borrowed from the shared pool. Safe to use from concurrent tasks.

    Attributes:
        users: User records
        tenants: Tenant records
        join_requests: JoinRequest records
        members: Member records
        invitations: Tenant invitation workflow
    """

    def __init__(
        self,
        engine: AsyncEngine,
        probe: ConnectionProbe | None = None,
        id_generator: IdGenerator = generate_id,
        clock: Clock = utc_clock,
        context: ObservationContext | None = None,
    ) -> None:
        """Initialize the store over an existing engine.

        Args:
            engine: Async engine owning the connection pool
            probe: Optional domain probe for pool lifecycle events
            id_generator: Produces identifiers for new entities
            clock: Source of join request timestamps
            context: Optional metadata added to every repository and
                invitation event
        """
        self._engine = engine
        self._probe = probe or DefaultConnectionProbe()
        self._context = context

        session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        self.users = UserRepository(
            session_factory,
            probe=self._repository_probe(UserRepository.mapping.name),
            id_generator=id_generator,
        )
        self.tenants = TenantRepository(
            session_factory,
            probe=self._repository_probe(TenantRepository.mapping.name),
            id_generator=id_generator,
        )
        self.join_requests = JoinRequestRepository(
            session_factory,
            probe=self._repository_probe(JoinRequestRepository.mapping.name),
            id_generator=id_generator,
            clock=clock,
        )
        self.members = MemberRepository(
            session_factory,
            probe=self._repository_probe(MemberRepository.mapping.name),
            id_generator=id_generator,
        )

        invitation_probe = DefaultInvitationServiceProbe()
        if context is not None:
            invitation_probe = invitation_probe.with_context(context)
        self.invitations = InvitationService(
            user_repository=self.users,
            member_repository=self.members,
            join_request_repository=self.join_requests,
            probe=invitation_probe,
        )

    def _repository_probe(self, entity_type: str) -> EntityRepositoryProbe:
        probe = DefaultEntityRepositoryProbe(entity_type)
        if self._context is None:
            return probe
        return probe.with_context(self._context)

    @property
    def engine(self) -> AsyncEngine:
        """The engine owning the connection pool."""
        return self._engine

    async def close(self) -> None:
        """Dispose of the connection pool."""
        await self._engine.dispose()
        self._probe.pool_closed()

    async def __aenter__(self) -> MembershipStore:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


def create_store(
    settings: DatabaseSettings | None = None,
    probe: ConnectionProbe | None = None,
    context: ObservationContext | None = None,
) -> MembershipStore:
    """Create a store with a pool bounded by ``settings.pool_max_connections``.

    No connection is opened until the first operation.

    Args:
        settings: Database settings (defaults to the cached environment settings)
        probe: Optional domain probe for pool lifecycle events
        context: Optional metadata added to every repository and invitation
            event

    Returns:
        A ready-to-use store
    """
    settings = settings or get_database_settings()
    probe = probe or DefaultConnectionProbe()

    engine = create_engine(settings)
    probe.pool_initialized(
        host=settings.host,
        database=settings.database,
        max_conn=settings.pool_max_connections,
    )
    return MembershipStore(engine, probe=probe, context=context)
