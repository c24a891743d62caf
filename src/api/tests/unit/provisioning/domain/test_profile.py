"""Unit tests for ProfileDraft column rendering."""

from provisioning.domain.profile import ProfileDraft
from provisioning.domain.value_objects import AppRole, ProfileColumnTier


def _full_draft(**overrides) -> ProfileDraft:
    values = dict(
        user_id="u-1",
        role=AppRole.MANAGER,
        full_name="Ada Lovelace",
        first_name="Ada",
        last_name="Lovelace",
        mobile_number="555",
        is_active=True,
    )
    values.update(overrides)
    return ProfileDraft(**values)


class TestColumns:
    """Tests for the per-tier column map."""

    def test_extended_tier_writes_every_set_field(self):
        assert _full_draft().columns(ProfileColumnTier.EXTENDED) == {
            "user_id": "u-1",
            "role": "manager",
            "full_name": "Ada Lovelace",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "mobile_number": "555",
            "is_active": True,
        }

    def test_reduced_tier_keeps_name_and_active_flag(self):
        assert _full_draft().columns(ProfileColumnTier.REDUCED) == {
            "user_id": "u-1",
            "role": "manager",
            "full_name": "Ada Lovelace",
            "is_active": True,
        }

    def test_minimal_tier_writes_identity_role_and_name(self):
        assert _full_draft().columns(ProfileColumnTier.MINIMAL) == {
            "user_id": "u-1",
            "role": "manager",
            "full_name": "Ada Lovelace",
        }

    def test_empty_fields_are_omitted(self):
        """Empty values never overwrite existing profile columns."""
        draft = ProfileDraft(user_id="u-1", role=AppRole.LEARNER, full_name="", mobile_number="")
        assert draft.columns() == {"user_id": "u-1", "role": "learner"}

    def test_is_active_false_is_written(self):
        draft = ProfileDraft(user_id="u-1", role=AppRole.LEARNER, is_active=False)
        assert draft.columns()["is_active"] is False


class TestDropsMobileNumber:
    """Tests for detecting a mobile number lost to a smaller tier."""

    def test_extended_keeps_mobile_number(self):
        assert not _full_draft().drops_mobile_number(ProfileColumnTier.EXTENDED)

    def test_smaller_tiers_drop_mobile_number(self):
        assert _full_draft().drops_mobile_number(ProfileColumnTier.REDUCED)
        assert _full_draft().drops_mobile_number(ProfileColumnTier.MINIMAL)

    def test_nothing_dropped_without_mobile_number(self):
        draft = _full_draft(mobile_number=None)
        assert not draft.drops_mobile_number(ProfileColumnTier.MINIMAL)
