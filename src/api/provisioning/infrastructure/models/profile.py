"""SQLAlchemy ORM model for the profiles table.

Application-level attributes of a user, keyed by the identity provider's
user id. Older deployments lack first_name, last_name, mobile_number and
is_active; writes must tolerate that.
"""

from typing import Any

from sqlalchemy import Boolean, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ProfileModel(Base, TimestampMixin):
    """ORM model for profiles table.

    Note: user_id references the identity provider's users and is unique;
    profile upserts conflict on it rather than on the surrogate id.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid()
    )
    user_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), nullable=False, unique=True
    )
    role: Mapped[str] = mapped_column(String(32), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mobile_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_active: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    preferences: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<ProfileModel(user_id={self.user_id}, role={self.role})>"
