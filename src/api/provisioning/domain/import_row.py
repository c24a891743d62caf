"""ImportRow value object and normalisation of loosely-typed input records."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from provisioning.domain.value_objects import AppRole

# Accepted header spellings per field, compared after key normalisation.
HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    "email": ("email", "email_address", "e_mail"),
    "first_name": ("first_name", "firstname"),
    "last_name": ("last_name", "lastname"),
    "mobile_number": ("mobile_number", "mobile", "phone"),
    "role": ("role",),
    "team_name": ("team_name", "team"),
    "team_id": ("team_id",),
}

_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_key(key: str) -> str:
    """Fold a header name to its comparable form (`First-Name` -> `first_name`)."""
    return _SEPARATORS.sub("_", key.strip()).lower()


@dataclass(frozen=True)
class ImportRow:
    """One user to provision, after normalisation.

    String fields are trimmed and empty when absent. The row is a transient
    working unit: it is consumed by one provisioning attempt and never stored.
    """

    email: str
    role: AppRole = AppRole.LEARNER
    first_name: str = ""
    last_name: str = ""
    mobile_number: str = ""
    team_name: str = ""
    team_id: str = ""

    @property
    def full_name(self) -> str:
        """First and last name joined by a single space, skipping blanks."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_row(raw: Mapping[str, Any]) -> ImportRow:
    """Map an untyped input record onto an ImportRow.

    Keys are matched case-insensitively against HEADER_ALIASES, treating
    spaces and hyphens as underscores. The first alias with a non-empty
    value wins. Unrecognised roles become LEARNER.

    Args:
        raw: A JSON object or CSV record

    Returns:
        The normalised row
    """
    by_key: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            continue
        folded = normalize_key(key)
        text = _as_text(value)
        if text or folded not in by_key:
            by_key[folded] = text

    def read(field_name: str) -> str:
        for alias in HEADER_ALIASES[field_name]:
            value = by_key.get(alias, "")
            if value:
                return value
        return ""

    return ImportRow(
        email=read("email"),
        role=AppRole.parse(read("role")),
        first_name=read("first_name"),
        last_name=read("last_name"),
        mobile_number=read("mobile_number"),
        team_name=read("team_name"),
        team_id=read("team_id"),
    )
