"""Unit tests for ProfileRepository.

The session is mocked, so these tests check statement shape and error
classification rather than SQL behaviour.
"""

from unittest.mock import create_autospec

import pytest
from sqlalchemy.dialects import postgresql

from provisioning.infrastructure.observability import ProfileRepositoryProbe
from provisioning.infrastructure.profile_repository import ProfileRepository
from provisioning.ports.exceptions import ProfileWriteError, ProfileWriteErrorKind
from provisioning.ports.repositories import IProfileStore


def compiled_sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def mock_probe():
    """Create mock profile repository probe."""
    return create_autospec(ProfileRepositoryProbe, instance=True)


@pytest.fixture
def repository(mock_session, mock_probe):
    """Create repository with mock session."""
    return ProfileRepository(session=mock_session, probe=mock_probe)


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_implements_protocol(self, repository):
        assert isinstance(repository, IProfileStore)


class TestGetRole:
    """Tests for get_role."""

    @pytest.mark.asyncio
    async def test_returns_role(self, repository, mock_session, result_returning):
        mock_session.execute.return_value = result_returning("admin")

        role = await repository.get_role("u-1")

        assert role == "admin"
        mock_session.begin.assert_called_once()
        assert "FROM profiles" in compiled_sql(mock_session.execute.await_args.args[0])

    @pytest.mark.asyncio
    async def test_returns_none_without_profile(
        self, repository, mock_session, mock_probe, result_returning
    ):
        mock_session.execute.return_value = result_returning(None)

        assert await repository.get_role("u-1") is None
        mock_probe.role_not_found.assert_called_once_with("u-1")


class TestUpsert:
    """Tests for upsert."""

    @pytest.mark.asyncio
    async def test_updates_only_given_columns_on_conflict(
        self, repository, mock_session, mock_probe
    ):
        await repository.upsert({"user_id": "u-1", "role": "learner", "full_name": "Ada"})

        sql = compiled_sql(mock_session.execute.await_args.args[0])
        assert sql.startswith("INSERT INTO profiles (user_id, role, full_name)")
        assert "ON CONFLICT (user_id) DO UPDATE SET" in sql
        assert "role = excluded.role" in sql
        assert "full_name = excluded.full_name" in sql
        assert "first_name" not in sql
        assert "mobile_number" not in sql
        mock_probe.profile_upserted.assert_called_once_with(
            "u-1", ["full_name", "role", "user_id"]
        )

    @pytest.mark.asyncio
    async def test_undefined_column_is_classified(
        self, repository, mock_session, make_db_error
    ):
        mock_session.execute.side_effect = make_db_error(
            'column "first_name" of relation "profiles" does not exist', "42703"
        )

        with pytest.raises(ProfileWriteError) as exc_info:
            await repository.upsert({"user_id": "u-1", "role": "learner", "first_name": "A"})

        assert exc_info.value.kind == ProfileWriteErrorKind.UNKNOWN_COLUMN
        assert exc_info.value.is_unknown_column
        assert str(exc_info.value) == (
            'column "first_name" of relation "profiles" does not exist'
        )

    @pytest.mark.asyncio
    async def test_unique_violation_is_a_conflict(
        self, repository, mock_session, make_db_error
    ):
        mock_session.execute.side_effect = make_db_error("duplicate key value", "23505")

        with pytest.raises(ProfileWriteError) as exc_info:
            await repository.upsert({"user_id": "u-1", "role": "learner"})

        assert exc_info.value.kind == ProfileWriteErrorKind.CONFLICT

    @pytest.mark.asyncio
    async def test_other_errors_are_classified_as_other(
        self, repository, mock_session, mock_probe, make_db_error
    ):
        mock_session.execute.side_effect = make_db_error("permission denied", "42501")

        with pytest.raises(ProfileWriteError) as exc_info:
            await repository.upsert({"user_id": "u-1", "role": "learner"})

        assert exc_info.value.kind == ProfileWriteErrorKind.OTHER
        mock_probe.profile_write_rejected.assert_called_once_with(
            user_id="u-1", kind="other", sqlstate="42501", error="permission denied"
        )


class TestMergePreferences:
    """Tests for merge_preferences."""

    @pytest.mark.asyncio
    async def test_merges_without_overwriting(self, repository, mock_session, mock_probe):
        await repository.merge_preferences("u-1", {"mobile_number": "555"})

        sql = compiled_sql(mock_session.execute.await_args.args[0])
        assert sql.startswith("UPDATE profiles SET preferences=")
        assert "||" in sql
        assert "coalesce(profiles.preferences" in sql
        mock_probe.preferences_merged.assert_called_once_with("u-1", ["mobile_number"])

    @pytest.mark.asyncio
    async def test_rejected_write_raises(self, repository, mock_session, make_db_error):
        mock_session.execute.side_effect = make_db_error(
            'column "preferences" does not exist', "42703"
        )

        with pytest.raises(ProfileWriteError) as exc_info:
            await repository.merge_preferences("u-1", {"mobile_number": "555"})

        assert exc_info.value.is_unknown_column
