"""Bulk import application service for the provisioning bounded context.

Turns a batch of admin-supplied user records into provisioned identities,
profiles and team memberships, one row at a time, reporting an outcome for
every row.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from ulid import ULID

from provisioning.application.csv_reader import parse_csv_rows
from provisioning.application.exceptions import EmptyBatchError
from provisioning.application.observability import (
    BulkImportProbe,
    DefaultBulkImportProbe,
)
from provisioning.application.profile_linker import ProfileLinker
from provisioning.application.value_objects import BatchContext, ImportBatch
from provisioning.domain.import_row import ImportRow, normalize_row
from provisioning.domain.profile import ProfileDraft
from provisioning.domain.results import ImportReport, RowResult
from provisioning.domain.value_objects import (
    ImportMode,
    ProfileColumnTier,
    TeamMatch,
)
from provisioning.ports.exceptions import (
    IdentityProviderError,
    ProfileWriteError,
)
from provisioning.ports.identity import IIdentityProvider
from provisioning.ports.repositories import IProfileStore, ITeamStore
from shared_kernel.observability_context import ObservationContext

BULK_PROFILE_TIERS = (ProfileColumnTier.EXTENDED, ProfileColumnTier.MINIMAL)

MISSING_EMAIL = "Missing email"
DEADLINE_EXCEEDED = "Batch deadline exceeded; row not processed"


class BulkImportService:
    """Application service for importing many users in one request.

    Rows are processed strictly in input order. A failure in one row is
    recorded on that row and never stops the batch. Identities that were
    provisioned are not rolled back when a later step of the same row fails;
    the row's message names the identity so it can be reconciled by hand.
    """

    def __init__(
        self,
        identity_provider: IIdentityProvider,
        profile_store: IProfileStore,
        team_store: ITeamStore,
        row_timeout_seconds: float | None = None,
        batch_timeout_seconds: float | None = None,
        probe: BulkImportProbe | None = None,
        profile_linker: ProfileLinker | None = None,
    ):
        """Initialize BulkImportService with dependencies.

        Args:
            identity_provider: Invites or creates identities
            profile_store: Holds application profiles
            team_store: Holds teams and memberships
            row_timeout_seconds: Limit for one row's external calls (None: no limit)
            batch_timeout_seconds: Time after which remaining rows are skipped
                (None: no limit)
            probe: Optional domain probe for observability
            profile_linker: Optional profile writer, built over profile_store
                when omitted
        """
        self._identity_provider = identity_provider
        self._team_store = team_store
        self._row_timeout = row_timeout_seconds
        self._batch_timeout = batch_timeout_seconds
        self._probe = probe or DefaultBulkImportProbe()
        self._profile_linker = profile_linker or ProfileLinker(profile_store)

    async def import_users(
        self,
        batch: ImportBatch,
        observation: ObservationContext | None = None,
    ) -> ImportReport:
        """Provision every row of a batch.

        Args:
            batch: Rows (or CSV text) plus import options
            observation: Request-scoped metadata bound to every event

        Returns:
            One result per input row, in input order, and their summary

        Raises:
            EmptyBatchError: If neither rows nor CSV text yield any record
        """
        raw_rows: list[Any] = list(batch.rows) or list(
            parse_csv_rows(batch.csv)
        )
        if not raw_rows:
            raise EmptyBatchError("No rows provided")

        bound = (observation or ObservationContext()).with_extra(batch_id=str(ULID()))
        probe = self._probe.with_context(bound)
        linker = self._profile_linker.with_context(bound)
        context = BatchContext(mode=batch.mode, team_match=batch.team_match)

        probe.batch_started(
            total=len(raw_rows),
            mode=batch.mode.value,
            team_match=batch.team_match.value,
        )

        loop = asyncio.get_running_loop()
        deadline = (
            loop.time() + self._batch_timeout
            if self._batch_timeout is not None
            else None
        )

        results: list[RowResult] = []
        for index, raw in enumerate(raw_rows):
            if deadline is not None and loop.time() >= deadline:
                remaining = raw_rows[index:]
                probe.batch_deadline_exceeded(
                    remaining=len(remaining), timeout_seconds=self._batch_timeout
                )
                results.extend(
                    RowResult.error(_email_of(row), DEADLINE_EXCEEDED)
                    for row in remaining
                )
                break
            results.append(await self._run_row(raw, context, probe, linker))

        report = ImportReport.from_results(results)
        probe.batch_completed(
            total=report.summary.total,
            succeeded=report.summary.succeeded,
            failed=report.summary.failed,
        )
        return report

    async def _run_row(
        self,
        raw: Any,
        context: BatchContext,
        probe: BulkImportProbe,
        linker: ProfileLinker,
    ) -> RowResult:
        """Process one row under the row time limit, containing any failure."""
        if not isinstance(raw, Mapping):
            probe.row_failed(email="", reason=MISSING_EMAIL)
            return RowResult.error("", MISSING_EMAIL)

        email = _email_of(raw)
        try:
            async with asyncio.timeout(self._row_timeout):
                return await self._process_row(raw, context, probe, linker)
        except TimeoutError as e:
            if self._row_timeout is None:
                # Raised by a collaborator, not by the row limit.
                probe.row_crashed(email=email, error=e)
                return RowResult.error(email, str(e) or "Timed out")
            probe.row_timed_out(email=email, timeout_seconds=self._row_timeout)
            return RowResult.error(email, f"Timed out after {self._row_timeout:g}s")
        except Exception as e:
            probe.row_crashed(email=email, error=e)
            return RowResult.error(email, str(e) or type(e).__name__)

    async def _process_row(
        self,
        raw: Mapping[str, Any],
        context: BatchContext,
        probe: BulkImportProbe,
        linker: ProfileLinker,
    ) -> RowResult:
        row = normalize_row(raw)
        if not row.email:
            probe.row_failed(email=row.email, reason=MISSING_EMAIL)
            return RowResult.error(row.email, MISSING_EMAIL)

        team_id, team_note = await self._resolve_team(row, context, probe)

        try:
            user_id = await self._provision_identity(row.email, context.mode)
        except IdentityProviderError as e:
            probe.row_failed(email=row.email, reason=str(e))
            return RowResult.error(row.email, str(e))

        draft = ProfileDraft(
            user_id=user_id,
            role=row.role,
            full_name=row.full_name,
            first_name=row.first_name,
            last_name=row.last_name,
            mobile_number=row.mobile_number,
        )
        try:
            await linker.link(draft, BULK_PROFILE_TIERS)
        except ProfileWriteError as e:
            probe.identity_orphaned(email=row.email, user_id=user_id, reason=str(e))
            return RowResult.error(
                row.email,
                f"Identity {user_id} was provisioned but profile linkage failed: {e}",
            )

        notes: list[str] = []
        team_assigned = False
        if team_id is not None:
            try:
                # A duplicate membership comes back as ALREADY_MEMBER.
                await self._team_store.insert_membership(team_id, user_id)
                team_assigned = True
            except Exception as e:
                # Identity and profile are already written; the row stays ok.
                reason = str(e) or type(e).__name__
                probe.membership_failed(team_id=team_id, user_id=user_id, error=reason)
                notes.append(f"Team assignment failed: {reason}")
        elif team_note is not None:
            notes.append(team_note)

        probe.row_provisioned(
            email=row.email, user_id=user_id, team_assigned=team_assigned
        )
        return RowResult.ok(
            row.email, message="; ".join(notes), team_assigned=team_assigned
        )

    async def _provision_identity(self, email: str, mode: ImportMode) -> str:
        if mode == ImportMode.CREATE:
            return await self._identity_provider.create_identity(email)
        return await self._identity_provider.invite_identity(email)

    async def _resolve_team(
        self,
        row: ImportRow,
        context: BatchContext,
        probe: BulkImportProbe,
    ) -> tuple[str | None, str | None]:
        """Resolve the row's team reference through the batch caches.

        Each distinct reference reaches the team store at most once per
        batch, whether it exists or not. A lookup that raises is treated as
        "no team" for this row and is not cached.

        Returns:
            (team_id, None) when resolved, (None, reference) when the row
            names a team that does not exist, (None, None) when it names none
        """
        by_id = context.team_match == TeamMatch.ID
        reference = row.team_id if by_id else row.team_name
        if not reference:
            return None, None
        if reference in context.missing_team_refs:
            return None, f"Team not found: {reference}"

        if by_id and reference in context.verified_team_ids:
            probe.team_resolved(reference=reference, team_id=reference, cached=True)
            return reference, None
        if not by_id and reference in context.team_ids_by_name:
            team_id = context.team_ids_by_name[reference]
            probe.team_resolved(reference=reference, team_id=team_id, cached=True)
            return team_id, None

        try:
            if by_id:
                found = reference if await self._team_store.team_exists(reference) else None
            else:
                found = await self._team_store.find_team_id_by_name(reference)
        except Exception as e:
            probe.team_lookup_failed(reference=reference, error=e)
            return None, f"Team lookup failed: {reference}"

        if found is None:
            context.missing_team_refs.add(reference)
            probe.team_not_found(reference=reference, team_match=context.team_match.value)
            return None, f"Team not found: {reference}"

        if by_id:
            context.verified_team_ids.add(found)
        else:
            context.team_ids_by_name[reference] = found
        probe.team_resolved(reference=reference, team_id=found, cached=False)
        return found, None


def _email_of(raw: Any) -> str:
    if not isinstance(raw, Mapping):
        return ""
    return normalize_row(raw).email
