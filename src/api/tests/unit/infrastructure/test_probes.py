"""Unit tests for infrastructure domain probes."""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import DefaultConnectionProbe


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_engine_created_logs_info(self):
        """engine_created should log host, database and pool size."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created(host="localhost", database="lms", pool_size=5)

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            host="localhost",
            database="lms",
            pool_size=5,
        )

    def test_engine_disposed_logs_info(self):
        """engine_disposed should log info."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_disposed()

        mock_logger.info.assert_called_once_with("database_engine_disposed")

    def test_with_context_includes_context_metadata(self):
        """A probe bound to a context should log its metadata."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(request_id="req-1", caller_id="admin-1")
        probe = DefaultConnectionProbe(logger=mock_logger).with_context(context)

        probe.engine_disposed()

        mock_logger.info.assert_called_once_with(
            "database_engine_disposed",
            request_id="req-1",
            caller_id="admin-1",
        )


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_skips_unset_fields(self):
        """Unset identifiers should not appear in log kwargs."""
        assert ObservationContext().as_dict() == {}

    def test_with_caller_returns_new_context(self):
        """with_caller should not mutate the original context."""
        original = ObservationContext(request_id="req-1")
        updated = original.with_caller("admin-1")

        assert original.caller_id is None
        assert updated.as_dict() == {"request_id": "req-1", "caller_id": "admin-1"}

    def test_with_extra_merges_metadata(self):
        """Extra metadata should accumulate across calls."""
        context = ObservationContext().with_extra(batch_id="b1").with_extra(row=2)
        assert context.as_dict() == {"batch_id": "b1", "row": 2}
