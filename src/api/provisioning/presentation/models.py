"""Pydantic models for provisioning API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from provisioning.application.value_objects import (
    CreateUserCommand,
    ImportBatch,
    InviteUserCommand,
)
from provisioning.domain.results import ImportReport, RowResult
from provisioning.domain.value_objects import ImportMode, RowStatus, TeamMatch


class BulkImportRequest(BaseModel):
    """Request model for importing many users.

    Non-empty `rows` take precedence over `csv`.
    """

    model_config = ConfigDict(populate_by_name=True)

    csv: str | None = Field(
        default=None, description="Comma-separated text with a header line"
    )
    rows: list[Any] | None = Field(
        default=None,
        description="Pre-parsed user records; an entry that is not an object fails only itself",
    )
    mode: ImportMode = Field(
        default=ImportMode.INVITE,
        description="invite sends an invitation email; create makes an unconfirmed user",
    )
    team_match: TeamMatch = Field(
        default=TeamMatch.NAME,
        alias="teamMatch",
        description="Whether rows name their team by team_name or team_id",
    )

    @field_validator("mode", mode="before")
    @classmethod
    def lenient_mode(cls, v: Any) -> ImportMode:
        # Anything other than "create" invites.
        if isinstance(v, str) and v.strip().lower() == ImportMode.CREATE.value:
            return ImportMode.CREATE
        return ImportMode.INVITE

    @field_validator("team_match", mode="before")
    @classmethod
    def lenient_team_match(cls, v: Any) -> TeamMatch:
        if isinstance(v, str) and v.strip().lower() == TeamMatch.ID.value:
            return TeamMatch.ID
        return TeamMatch.NAME

    def to_batch(self) -> ImportBatch:
        """Convert to the application's ImportBatch."""
        return ImportBatch(
            rows=self.rows or (),
            csv=self.csv,
            mode=self.mode,
            team_match=self.team_match,
        )


class RowResultResponse(BaseModel):
    """Outcome of one imported row."""

    email: str
    status: RowStatus
    message: str = ""
    team_assigned: bool = False

    @classmethod
    def from_domain(cls, result: RowResult) -> RowResultResponse:
        """Convert a domain RowResult to the API response."""
        return cls(
            email=result.email,
            status=result.status,
            message=result.message,
            team_assigned=result.team_assigned,
        )


class BatchSummaryResponse(BaseModel):
    """Counts of row outcomes."""

    total: int
    succeeded: int
    failed: int


class BulkImportResponse(BaseModel):
    """Response model for a bulk import."""

    summary: BatchSummaryResponse
    results: list[RowResultResponse] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, report: ImportReport) -> BulkImportResponse:
        """Convert a domain ImportReport to the API response.

        Args:
            report: Results of the import

        Returns:
            BulkImportResponse with one entry per input row
        """
        return cls(
            summary=BatchSummaryResponse(
                total=report.summary.total,
                succeeded=report.summary.succeeded,
                failed=report.summary.failed,
            ),
            results=[RowResultResponse.from_domain(result) for result in report.results],
        )


class CreateUserRequest(BaseModel):
    """Request model for creating one user directly.

    Presence of email and role is checked by the application layer so the
    error message matches the other provisioning functions.
    """

    email: str | None = Field(default=None, description="Email of the new user")
    role: str | None = Field(default=None, description="owner, admin, manager or learner")
    first_name: str | None = None
    last_name: str | None = None
    mobile_number: str | None = None
    team_id: str | None = Field(default=None, description="Team to join, if any")

    def to_command(self) -> CreateUserCommand:
        """Validate and convert to a CreateUserCommand.

        Raises:
            InvalidProvisioningRequestError: If email or role is missing or invalid
        """
        return CreateUserCommand.from_request(
            email=self.email,
            role=self.role,
            first_name=self.first_name,
            last_name=self.last_name,
            mobile_number=self.mobile_number,
            team_id=self.team_id,
        )


class InviteUserRequest(BaseModel):
    """Request model for inviting one user."""

    email: str | None = Field(default=None, description="Email to invite")
    role: str | None = Field(default=None, description="owner, admin, manager or learner")
    full_name: str | None = None

    def to_command(self) -> InviteUserCommand:
        """Validate and convert to an InviteUserCommand.

        Raises:
            InvalidProvisioningRequestError: If email or role is missing or invalid
        """
        return InviteUserCommand.from_request(
            email=self.email, role=self.role, full_name=self.full_name
        )


class ProvisionedUserResponse(BaseModel):
    """Response model for create-user and invite-user."""

    success: bool = True
    user_id: str
