"""Value objects for the provisioning domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for roles, import options and outcomes.
"""

from __future__ import annotations

from enum import StrEnum


class AppRole(StrEnum):
    """Application roles stored on a user's profile.

    Owners and admins administer the organisation; managers oversee teams;
    learners take courses.
    """

    OWNER = "owner"
    ADMIN = "admin"
    MANAGER = "manager"
    LEARNER = "learner"

    @classmethod
    def parse(cls, value: str | None) -> AppRole:
        """Parse a loosely formatted role, defaulting to LEARNER.

        Args:
            value: Raw role text (any case, surrounding whitespace allowed)

        Returns:
            The matching role, or LEARNER when empty or unrecognised
        """
        normalized = (value or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.LEARNER

    def can_administer(self) -> bool:
        """Check if this role may provision other users."""
        return self in (AppRole.OWNER, AppRole.ADMIN)


class ImportMode(StrEnum):
    """How each imported row obtains an identity."""

    INVITE = "invite"
    CREATE = "create"


class TeamMatch(StrEnum):
    """Which row field identifies the team to join."""

    NAME = "name"
    ID = "id"


class RowStatus(StrEnum):
    """Outcome of provisioning a single row."""

    OK = "ok"
    ERROR = "error"


class MembershipOutcome(StrEnum):
    """Result of attaching a user to a team."""

    CREATED = "created"
    ALREADY_MEMBER = "already_member"


class ProfileColumnTier(StrEnum):
    """Progressively smaller column sets for profile writes.

    Lets imports succeed against profile tables that have not yet received
    the optional columns.
    """

    EXTENDED = "extended"
    REDUCED = "reduced"
    MINIMAL = "minimal"
