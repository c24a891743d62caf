"""Profile linkage with progressive column fallback.

Profile tables that predate the optional name and contact columns reject
writes naming them. The linker retries with smaller column sets in that
case, and only in that case.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from provisioning.application.observability import (
    DefaultProfileLinkProbe,
    ProfileLinkProbe,
)
from provisioning.domain.profile import ProfileDraft
from provisioning.domain.value_objects import ProfileColumnTier
from provisioning.ports.exceptions import ProfileWriteError
from provisioning.ports.repositories import IProfileStore

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProfileLinker:
    """Writes a ProfileDraft, stepping down column tiers on unknown columns."""

    def __init__(
        self,
        profile_store: IProfileStore,
        probe: ProfileLinkProbe | None = None,
    ):
        self._profile_store = profile_store
        self._probe = probe or DefaultProfileLinkProbe()

    def with_context(self, context: ObservationContext) -> ProfileLinker:
        """Create a linker over the same store with observation context bound."""
        return ProfileLinker(self._profile_store, probe=self._probe.with_context(context))

    async def link(
        self,
        draft: ProfileDraft,
        tiers: Sequence[ProfileColumnTier],
    ) -> ProfileColumnTier:
        """Upsert the draft at the first tier the profile table accepts.

        Args:
            draft: Profile fields keyed by the identity id
            tiers: Column tiers to try, largest first

        Returns:
            The tier that was written

        Raises:
            ProfileWriteError: If the last tier fails, or any tier fails for
                a reason other than an unknown column
        """
        for position, tier in enumerate(tiers):
            try:
                await self._profile_store.upsert(draft.columns(tier))
            except ProfileWriteError as e:
                is_last = position == len(tiers) - 1
                if is_last or not e.is_unknown_column:
                    self._probe.profile_link_failed(user_id=draft.user_id, error=str(e))
                    raise
                self._probe.profile_tier_rejected(
                    user_id=draft.user_id, tier=tier.value, error=str(e)
                )
                continue

            self._probe.profile_linked(user_id=draft.user_id, tier=tier.value)
            return tier

        raise ValueError("At least one profile column tier is required")
