"""Unit tests for ProfileLinker tier fallback."""

from unittest.mock import create_autospec

import pytest

from provisioning.application.observability import ProfileLinkProbe
from provisioning.application.profile_linker import ProfileLinker
from provisioning.domain.profile import ProfileDraft
from provisioning.domain.value_objects import AppRole, ProfileColumnTier
from provisioning.ports.exceptions import ProfileWriteError, ProfileWriteErrorKind

ALL_TIERS = (
    ProfileColumnTier.EXTENDED,
    ProfileColumnTier.REDUCED,
    ProfileColumnTier.MINIMAL,
)


def unknown_column(column: str = "first_name") -> ProfileWriteError:
    return ProfileWriteError(
        ProfileWriteErrorKind.UNKNOWN_COLUMN,
        f'column "{column}" of relation "profiles" does not exist',
    )


@pytest.fixture
def mock_probe():
    """Create mock profile link probe."""
    return create_autospec(ProfileLinkProbe, instance=True)


@pytest.fixture
def linker(mock_profile_store, mock_probe):
    """Create ProfileLinker with mock dependencies."""
    return ProfileLinker(mock_profile_store, probe=mock_probe)


@pytest.fixture
def draft():
    return ProfileDraft(
        user_id="u-1",
        role=AppRole.LEARNER,
        full_name="Ada Lovelace",
        first_name="Ada",
        last_name="Lovelace",
        mobile_number="555",
        is_active=True,
    )


class TestLink:
    """Tests for link."""

    @pytest.mark.asyncio
    async def test_writes_first_tier_when_accepted(
        self, linker, mock_profile_store, mock_probe, draft
    ):
        tier = await linker.link(draft, ALL_TIERS)

        assert tier == ProfileColumnTier.EXTENDED
        mock_profile_store.upsert.assert_awaited_once_with(
            draft.columns(ProfileColumnTier.EXTENDED)
        )
        mock_probe.profile_linked.assert_called_once_with(user_id="u-1", tier="extended")

    @pytest.mark.asyncio
    async def test_steps_down_on_unknown_column(
        self, linker, mock_profile_store, mock_probe, draft
    ):
        mock_profile_store.upsert.side_effect = [
            unknown_column("first_name"),
            unknown_column("is_active"),
            None,
        ]

        tier = await linker.link(draft, ALL_TIERS)

        assert tier == ProfileColumnTier.MINIMAL
        written = [call.args[0] for call in mock_profile_store.upsert.await_args_list]
        assert written == [draft.columns(t) for t in ALL_TIERS]
        assert mock_probe.profile_tier_rejected.call_count == 2

    @pytest.mark.asyncio
    async def test_other_errors_are_not_retried(self, linker, mock_profile_store, draft):
        mock_profile_store.upsert.side_effect = ProfileWriteError(
            ProfileWriteErrorKind.OTHER, "permission denied for table profiles"
        )

        with pytest.raises(ProfileWriteError, match="permission denied"):
            await linker.link(draft, ALL_TIERS)

        assert mock_profile_store.upsert.await_count == 1

    @pytest.mark.asyncio
    async def test_raises_when_last_tier_rejected(
        self, linker, mock_profile_store, mock_probe, draft
    ):
        mock_profile_store.upsert.side_effect = unknown_column("full_name")

        with pytest.raises(ProfileWriteError):
            await linker.link(draft, ALL_TIERS)

        assert mock_profile_store.upsert.await_count == 3
        mock_probe.profile_link_failed.assert_called_once()

    @pytest.mark.asyncio
    async def test_requires_at_least_one_tier(self, linker, draft):
        with pytest.raises(ValueError):
            await linker.link(draft, ())


class TestWithContext:
    """Tests for with_context."""

    def test_binds_context_to_probe(self, mock_profile_store, mock_probe):
        from shared_kernel.observability_context import ObservationContext

        context = ObservationContext(request_id="req-1")
        ProfileLinker(mock_profile_store, probe=mock_probe).with_context(context)

        mock_probe.with_context.assert_called_once_with(context)
