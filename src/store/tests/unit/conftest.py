"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from pydantic import SecretStr


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password=SecretStr("testpass"),
        pool_max_connections=5,
    )


@pytest.fixture
def mock_session():
    """Create a mock async session whose transactions always commit."""
    session = MagicMock()
    session.execute = AsyncMock(return_value=MagicMock())

    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=transaction)

    return session


@pytest.fixture
def mock_session_factory(mock_session):
    """Create a mock sessionmaker yielding ``mock_session``."""
    factory = MagicMock()
    factory.return_value.__aenter__ = AsyncMock(return_value=mock_session)
    factory.return_value.__aexit__ = AsyncMock(return_value=False)
    return factory


@pytest.fixture
def make_result():
    """Build a mock statement result with rows and/or an affected-row count."""

    def _make(rows=None, rowcount=None):
        result = MagicMock()
        result.mappings.return_value.all.return_value = list(rows or [])
        result.rowcount = rowcount
        return result

    return _make


@pytest.fixture
def new_id():
    """Generate fresh entity identifiers."""
    return lambda: str(uuid4())


@pytest.fixture
def user_record():
    """A complete, valid user record without an id."""
    return {
        "auth_id": str(uuid4()),
        "email": "zed@acme.io",
        "first_name": "Zed",
        "last_name": "Shaw",
    }
