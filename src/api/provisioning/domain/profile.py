"""Profile draft written after an identity has been provisioned."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from provisioning.domain.value_objects import AppRole, ProfileColumnTier

_TIER_COLUMNS: dict[ProfileColumnTier, frozenset[str] | None] = {
    ProfileColumnTier.EXTENDED: None,
    ProfileColumnTier.REDUCED: frozenset({"user_id", "role", "full_name", "is_active"}),
    ProfileColumnTier.MINIMAL: frozenset({"user_id", "role", "full_name"}),
}


@dataclass(frozen=True)
class ProfileDraft:
    """Application profile fields for one user, keyed by the identity id.

    Optional fields that are None or empty are never written, so an upsert
    against an existing profile leaves those columns untouched.
    """

    user_id: str
    role: AppRole
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    mobile_number: str | None = None
    is_active: bool | None = None

    def columns(
        self, tier: ProfileColumnTier = ProfileColumnTier.EXTENDED
    ) -> dict[str, Any]:
        """Render the column map to write for a given tier.

        Args:
            tier: Which column set the profile table is assumed to support

        Returns:
            Column name to value, always including user_id and role
        """
        values: dict[str, Any] = {
            "user_id": self.user_id,
            "role": self.role.value,
            "full_name": self.full_name or None,
            "first_name": self.first_name or None,
            "last_name": self.last_name or None,
            "mobile_number": self.mobile_number or None,
            "is_active": self.is_active,
        }
        allowed = _TIER_COLUMNS[tier]
        return {
            column: value
            for column, value in values.items()
            if value is not None and (allowed is None or column in allowed)
        }

    def drops_mobile_number(self, tier: ProfileColumnTier) -> bool:
        """Check if writing at this tier would lose the mobile number."""
        return bool(self.mobile_number) and "mobile_number" not in self.columns(tier)
