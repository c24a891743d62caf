"""Per-row results and batch summary of a bulk import."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from provisioning.domain.value_objects import RowStatus


@dataclass(frozen=True)
class RowResult:
    """Outcome of provisioning one row, reported back to the caller."""

    email: str
    status: RowStatus
    message: str = ""
    team_assigned: bool = False

    @classmethod
    def ok(cls, email: str, message: str = "", team_assigned: bool = False) -> RowResult:
        """Build a successful result."""
        return cls(
            email=email,
            status=RowStatus.OK,
            message=message,
            team_assigned=team_assigned,
        )

    @classmethod
    def error(cls, email: str, message: str) -> RowResult:
        """Build a failed result."""
        return cls(email=email, status=RowStatus.ERROR, message=message)

    @property
    def succeeded(self) -> bool:
        """Check if the row was provisioned."""
        return self.status == RowStatus.OK


@dataclass(frozen=True)
class BatchSummary:
    """Counts of row outcomes. `succeeded + failed == total` always holds."""

    total: int
    succeeded: int
    failed: int

    @classmethod
    def from_results(cls, results: Sequence[RowResult]) -> BatchSummary:
        """Count statuses over a batch's results."""
        succeeded = sum(1 for result in results if result.succeeded)
        return cls(
            total=len(results),
            succeeded=succeeded,
            failed=len(results) - succeeded,
        )


@dataclass(frozen=True)
class ImportReport:
    """Everything returned to the caller for one batch."""

    summary: BatchSummary
    results: list[RowResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: Sequence[RowResult]) -> ImportReport:
        """Build the report, deriving the summary from the results."""
        return cls(summary=BatchSummary.from_results(results), results=list(results))
