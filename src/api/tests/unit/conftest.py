"""Unit test fixtures with mocked dependencies."""

from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore, ITeamStore


@pytest.fixture
def mock_db_settings():
    """Provide test database settings."""
    from infrastructure.settings import DatabaseSettings

    return DatabaseSettings(
        host="testhost",
        port=5432,
        database="testdb",
        username="testuser",
        password="testpass",
    )


@pytest.fixture
def mock_identity_provider():
    """Create mock identity provider."""
    return create_autospec(IIdentityProvider, instance=True)


@pytest.fixture
def mock_profile_store():
    """Create mock profile store."""
    return create_autospec(IProfileStore, instance=True)


@pytest.fixture
def mock_team_store():
    """Create mock team store."""
    return create_autospec(ITeamStore, instance=True)


@pytest.fixture
def mock_session():
    """Create mock async session whose begin() works as an async context manager."""
    session = AsyncMock()
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=transaction)
    transaction.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=transaction)
    return session
