"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Tests using them are
marked ``integration`` and deselected by default; run them with
``pytest -m integration``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from pydantic import SecretStr

from infrastructure.database import Base
from infrastructure.settings import DatabaseSettings
from membership.store import MembershipStore, create_store


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        MEMBERSHIP_DB_HOST, MEMBERSHIP_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("MEMBERSHIP_DB_HOST", "localhost"),
        port=int(os.getenv("MEMBERSHIP_DB_PORT", "5432")),
        database=os.getenv("MEMBERSHIP_DB_DATABASE", "membership"),
        username=os.getenv("MEMBERSHIP_DB_USERNAME", "membership"),
        password=SecretStr(
            os.getenv("MEMBERSHIP_DB_PASSWORD", "membership_dev_password")
        ),
        pool_max_connections=5,
    )


@pytest_asyncio.fixture
async def store(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[MembershipStore, None]:
    """Provide a store over freshly created tables.

    Tables are dropped and recreated around each test.
    """
    store = create_store(integration_db_settings)

    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield store

    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await store.close()
