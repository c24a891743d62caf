"""Unit tests for provisioning request and response models."""

import pytest

from provisioning.presentation.models import (
    BulkImportRequest,
    BulkImportResponse,
    CreateUserRequest,
)
from provisioning.domain.results import ImportReport, RowResult
from provisioning.domain.value_objects import ImportMode, TeamMatch


class TestBulkImportRequest:
    """Tests for BulkImportRequest."""

    def test_accepts_camel_case_team_match(self):
        request = BulkImportRequest.model_validate({"teamMatch": "id"})
        assert request.team_match == TeamMatch.ID

    def test_accepts_field_name_team_match(self):
        request = BulkImportRequest.model_validate({"team_match": "id"})
        assert request.team_match == TeamMatch.ID

    @pytest.mark.parametrize("value", ["ID", " id ", "Id"])
    def test_team_match_is_case_insensitive(self, value):
        request = BulkImportRequest.model_validate({"teamMatch": value})
        assert request.team_match == TeamMatch.ID

    @pytest.mark.parametrize("value", [None, "email", "", 3])
    def test_unknown_team_match_falls_back_to_name(self, value):
        request = BulkImportRequest.model_validate({"teamMatch": value})
        assert request.team_match == TeamMatch.NAME

    @pytest.mark.parametrize("value", ["create", "CREATE", " Create "])
    def test_create_mode_is_case_insensitive(self, value):
        request = BulkImportRequest.model_validate({"mode": value})
        assert request.mode == ImportMode.CREATE

    @pytest.mark.parametrize("value", [None, "upsert", "", 1])
    def test_unknown_mode_falls_back_to_invite(self, value):
        request = BulkImportRequest.model_validate({"mode": value})
        assert request.mode == ImportMode.INVITE

    def test_accepts_rows_that_are_not_objects(self):
        request = BulkImportRequest.model_validate(
            {"rows": [{"email": "a@x.com"}, "garbage", None]}
        )

        assert list(request.to_batch().rows) == [{"email": "a@x.com"}, "garbage", None]

    def test_to_batch_carries_rows_and_options(self):
        request = BulkImportRequest.model_validate(
            {"rows": [{"email": "a@x.com"}], "mode": "create"}
        )

        batch = request.to_batch()

        assert list(batch.rows) == [{"email": "a@x.com"}]
        assert batch.mode == ImportMode.CREATE
        assert batch.team_match == TeamMatch.NAME

    def test_to_batch_without_rows(self):
        batch = BulkImportRequest(csv="email\na@x.com").to_batch()
        assert list(batch.rows) == []
        assert batch.csv == "email\na@x.com"


class TestBulkImportResponse:
    """Tests for BulkImportResponse."""

    def test_from_domain(self):
        report = ImportReport.from_results(
            [RowResult.ok("a@x.com", team_assigned=True), RowResult.error("b", "x")]
        )

        response = BulkImportResponse.from_domain(report)

        assert response.summary.total == 2
        assert response.summary.failed == 1
        assert response.results[0].team_assigned is True
        assert response.results[1].status == "error"


class TestCreateUserRequest:
    """Tests for CreateUserRequest."""

    def test_to_command_builds_full_name(self):
        command = CreateUserRequest(
            email="a@x.com", role="learner", first_name="Ada", last_name="Lovelace"
        ).to_command()
        assert command.full_name == "Ada Lovelace"
