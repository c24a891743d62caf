"""Application-layer value objects for the provisioning bounded context.

These represent request-scoped concerns: who is calling, what they asked
for, and the working state of one bulk import.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from provisioning.application.exceptions import InvalidProvisioningRequestError
from provisioning.domain.value_objects import AppRole, ImportMode, TeamMatch


@dataclass(frozen=True)
class AuthorizedCaller:
    """A caller whose identity resolved and whose profile role may administer users.

    This is an application-layer concept (not domain) because it represents
    the authorization context of the request, not a business entity.
    """

    user_id: str
    role: AppRole


@dataclass(frozen=True)
class ImportBatch:
    """One bulk import request.

    Attributes:
        rows: Pre-parsed records; take precedence when non-empty. Entries
            that are not mappings are reported as rows without an email
        csv: Comma-separated text with a header line, used when rows is empty
        mode: Whether rows are invited or created directly
        team_match: Whether rows join teams by name or by id
    """

    rows: Sequence[Any] = ()
    csv: str | None = None
    mode: ImportMode = ImportMode.INVITE
    team_match: TeamMatch = TeamMatch.NAME


@dataclass
class BatchContext:
    """Mutable working state for a single batch.

    Created fresh for each import and threaded through row processing, so
    team lookups are shared across rows of one batch and never across
    batches.

    Attributes:
        team_ids_by_name: Team names already resolved to an id
        verified_team_ids: Team ids confirmed to exist
        missing_team_refs: Names or ids confirmed not to exist
    """

    mode: ImportMode
    team_match: TeamMatch
    team_ids_by_name: dict[str, str] = field(default_factory=dict)
    verified_team_ids: set[str] = field(default_factory=set)
    missing_team_refs: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class CreateUserCommand:
    """Direct creation of one unconfirmed user."""

    email: str
    role: AppRole
    first_name: str = ""
    last_name: str = ""
    mobile_number: str = ""
    team_id: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @classmethod
    def from_request(
        cls,
        email: str | None,
        role: str | None,
        first_name: str | None = None,
        last_name: str | None = None,
        mobile_number: str | None = None,
        team_id: str | None = None,
    ) -> CreateUserCommand:
        """Validate a create-user request.

        Raises:
            InvalidProvisioningRequestError: If email or role is missing, or
                the role is not a known application role
        """
        email, parsed_role = _require_email_and_role(email, role)
        return cls(
            email=email,
            role=parsed_role,
            first_name=(first_name or "").strip(),
            last_name=(last_name or "").strip(),
            mobile_number=(mobile_number or "").strip(),
            team_id=(team_id or "").strip(),
        )


@dataclass(frozen=True)
class InviteUserCommand:
    """Invitation of one user by email."""

    email: str
    role: AppRole
    full_name: str = ""

    @classmethod
    def from_request(
        cls, email: str | None, role: str | None, full_name: str | None = None
    ) -> InviteUserCommand:
        """Validate an invite-user request.

        Raises:
            InvalidProvisioningRequestError: If email or role is missing, or
                the role is not a known application role
        """
        email, parsed_role = _require_email_and_role(email, role)
        return cls(email=email, role=parsed_role, full_name=(full_name or "").strip())


@dataclass(frozen=True)
class ProvisionedUser:
    """Identity produced by a single-user operation."""

    user_id: str
    email: str


def _require_email_and_role(email: str | None, role: str | None) -> tuple[str, AppRole]:
    email = (email or "").strip()
    role = (role or "").strip().lower()
    if not email or not role:
        raise InvalidProvisioningRequestError("email and role are required")
    try:
        return email, AppRole(role)
    except ValueError:
        raise InvalidProvisioningRequestError("Invalid role") from None
