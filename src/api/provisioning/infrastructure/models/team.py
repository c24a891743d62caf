"""SQLAlchemy ORM models for the teams and team_memberships tables."""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class TeamModel(Base, TimestampMixin):
    """ORM model for teams table.

    Note: names are not unique at the database level; lookups by name take
    the first match.
    """

    __tablename__ = "teams"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid()
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TeamModel(id={self.id}, name={self.name})>"


class TeamMembershipModel(Base):
    """ORM model for team_memberships table.

    The (team_id, user_id) pair is unique, so inserting an existing
    membership fails with a unique violation.
    """

    __tablename__ = "team_memberships"
    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_memberships_team_user"),
    )

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False), primary_key=True, server_default=func.gen_random_uuid()
    )
    team_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(Uuid(as_uuid=False), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<TeamMembershipModel(team_id={self.team_id}, user_id={self.user_id})>"
