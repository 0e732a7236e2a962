"""Unit tests for the store composition root."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from infrastructure.observability import ObservationContext
from membership.application.services import InvitationService
from membership.infrastructure.join_request_repository import JoinRequestRepository
from membership.infrastructure.member_repository import MemberRepository
from membership.infrastructure.tenant_repository import TenantRepository
from membership.infrastructure.user_repository import UserRepository
from membership.store import MembershipStore, create_store


@pytest.fixture
def mock_engine():
    """Create mock async engine."""
    engine = MagicMock()
    engine.dispose = AsyncMock()
    return engine


@pytest.fixture
def mock_probe():
    """Create mock connection probe."""
    return MagicMock()


class TestMembershipStore:
    """Tests for MembershipStore wiring and lifecycle."""

    def test_exposes_repositories_and_service(self, mock_engine):
        """Every entity type and the invitation workflow are reachable."""
        store = MembershipStore(mock_engine)

        assert isinstance(store.users, UserRepository)
        assert isinstance(store.tenants, TenantRepository)
        assert isinstance(store.join_requests, JoinRequestRepository)
        assert isinstance(store.members, MemberRepository)
        assert isinstance(store.invitations, InvitationService)
        assert store.engine is mock_engine

    def test_uses_injected_id_generator(self, mock_engine):
        """The id generator is shared by every repository."""

        def generator():
            return "00000000-0000-4000-8000-000000000000"

        store = MembershipStore(mock_engine, id_generator=generator)

        assert store.users._generate_id is generator
        assert store.members._generate_id is generator

    def test_binds_observation_context(self, mock_engine):
        """Every repository and the invitation service log with the context."""
        context = ObservationContext(request_id="req-1", tenant_id="t-1")

        store = MembershipStore(mock_engine, context=context)

        for repository in (
            store.users,
            store.tenants,
            store.join_requests,
            store.members,
        ):
            assert repository._probe._context is context
        assert store.invitations._probe._context is context

    def test_probes_are_named_after_entity_types(self, mock_engine):
        """Repository events carry their entity type."""
        store = MembershipStore(mock_engine)

        assert store.users._probe._entity_type == "user"
        assert store.join_requests._probe._entity_type == "joinrequest"
        assert store.members._probe._context is None

    @pytest.mark.asyncio
    async def test_close_disposes_pool(self, mock_engine, mock_probe):
        """Closing releases the pool and records it."""
        store = MembershipStore(mock_engine, probe=mock_probe)

        await store.close()

        mock_engine.dispose.assert_awaited_once()
        mock_probe.pool_closed.assert_called_once()

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self, mock_engine):
        """Leaving the context closes the store."""
        async with MembershipStore(mock_engine) as store:
            assert isinstance(store, MembershipStore)

        mock_engine.dispose.assert_awaited_once()


class TestCreateStore:
    """Tests for create_store."""

    def test_builds_engine_from_settings(self, mock_db_settings, mock_probe):
        """The pool is created once, bounded by the settings."""
        with patch("membership.store.create_engine") as mock_create_engine:
            store = create_store(mock_db_settings, probe=mock_probe)

        mock_create_engine.assert_called_once_with(mock_db_settings)
        assert store.engine is mock_create_engine.return_value
        assert store.users._probe._context is None
        mock_probe.pool_initialized.assert_called_once_with(
            host="testhost", database="testdb", max_conn=5
        )

    def test_passes_context_to_store(self, mock_db_settings, mock_probe):
        """A context given at creation reaches the repositories."""
        context = ObservationContext(request_id="req-1")

        with patch("membership.store.create_engine"):
            store = create_store(mock_db_settings, probe=mock_probe, context=context)

        assert store.tenants._probe._context is context

    def test_defaults_to_environment_settings(self, mock_db_settings):
        """Without settings the cached environment settings are used."""
        with (
            patch("membership.store.create_engine"),
            patch(
                "membership.store.get_database_settings",
                return_value=mock_db_settings,
            ) as mock_get_settings,
        ):
            create_store()

        mock_get_settings.assert_called_once_with()
