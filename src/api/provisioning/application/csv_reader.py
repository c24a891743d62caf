"""CSV parsing for bulk import uploads."""

from __future__ import annotations

import csv
import io

_BOM = "\ufeff"


def parse_csv_rows(text: str | None) -> list[dict[str, str]]:
    """Parse comma-separated text whose first line names the columns.

    Header names are trimmed. Blank lines are skipped, surplus unnamed
    fields are dropped and missing trailing fields read as empty strings.

    Args:
        text: Raw CSV content, possibly prefixed with a UTF-8 byte order mark

    Returns:
        One dict per data line, keyed by header name
    """
    if not text or not text.strip():
        return []

    reader = csv.DictReader(io.StringIO(text.lstrip(_BOM)), restval="")
    if reader.fieldnames is None:
        return []
    reader.fieldnames = [name.strip() for name in reader.fieldnames]

    rows: list[dict[str, str]] = []
    for record in reader:
        # DictReader files surplus fields under the None key.
        record.pop(None, None)  # type: ignore[call-overload]
        if not any((value or "").strip() for value in record.values()):
            continue
        rows.append({key: value or "" for key, value in record.items()})
    return rows
