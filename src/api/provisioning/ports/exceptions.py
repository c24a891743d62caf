"""Exceptions raised by provisioning ports.

Adapters translate backend-specific failures (HTTP status codes, SQLSTATE
codes) into these types so that application services never inspect a
particular backend's error encoding.
"""

from __future__ import annotations

from enum import StrEnum


class IdentityProviderError(Exception):
    """Raised when the identity provider rejects or fails an operation.

    The message is the provider's own explanation (for example
    "A user with this email address has already been registered") and is
    safe to show to an administrator.
    """

    pass


class ProfileWriteErrorKind(StrEnum):
    """Why a profile write was rejected."""

    UNKNOWN_COLUMN = "unknown_column"
    CONFLICT = "conflict"
    OTHER = "other"


class ProfileWriteError(Exception):
    """Raised when the profile store rejects an upsert.

    Attributes:
        kind: Classified cause; UNKNOWN_COLUMN means the table lacks one of
            the written columns and a smaller column set may succeed.
    """

    def __init__(self, kind: ProfileWriteErrorKind, message: str):
        super().__init__(message)
        self.kind = kind

    @property
    def is_unknown_column(self) -> bool:
        """Check if a retry with fewer columns could succeed."""
        return self.kind == ProfileWriteErrorKind.UNKNOWN_COLUMN


class MembershipWriteError(Exception):
    """Raised when a team membership cannot be recorded.

    Duplicate memberships are not errors; the team store reports them as
    MembershipOutcome.ALREADY_MEMBER instead.
    """

    pass
