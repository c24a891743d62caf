"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that every row event of one import batch
    can be correlated with the batch and the admin who submitted it.

    Attributes:
        request_id: Identifier of the current request or batch.
        caller_id: Identity of the admin performing the operation.
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="batch-123", caller_id="user-456")
        probe = DefaultBulkImportProbe().with_context(context)
    """

    request_id: str | None = None
    caller_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.caller_id is not None:
            result["caller_id"] = self.caller_id
        result.update(self.extra)
        return result

    def with_caller(self, caller_id: str) -> ObservationContext:
        """Create a new context with the caller identity set."""
        return replace(self, caller_id=caller_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
