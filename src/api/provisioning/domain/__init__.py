"""Domain layer for the provisioning bounded context.

Pure value objects and rules for turning admin-supplied user records into
provisioning outcomes. Nothing here performs I/O.
"""

from provisioning.domain.import_row import HEADER_ALIASES, ImportRow, normalize_row
from provisioning.domain.profile import ProfileDraft
from provisioning.domain.results import BatchSummary, ImportReport, RowResult
from provisioning.domain.value_objects import (
    AppRole,
    ImportMode,
    MembershipOutcome,
    ProfileColumnTier,
    RowStatus,
    TeamMatch,
)

__all__ = [
    "AppRole",
    "BatchSummary",
    "HEADER_ALIASES",
    "ImportMode",
    "ImportReport",
    "ImportRow",
    "MembershipOutcome",
    "ProfileColumnTier",
    "ProfileDraft",
    "RowResult",
    "RowStatus",
    "TeamMatch",
    "normalize_row",
]
