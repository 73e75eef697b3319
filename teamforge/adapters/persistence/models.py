"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamforge.adapters.persistence.database import Base


class HackathonModel(Base):
    __tablename__ = "hackathons"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    settings: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    participants: Mapped[list["ParticipantModel"]] = relationship(back_populates="hackathon")
    teams: Mapped[list["TeamModel"]] = relationship(back_populates="hackathon")


class TeamModel(Base):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    hackathon_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    team_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    hackathon: Mapped["HackathonModel"] = relationship(back_populates="teams")
    members: Mapped[list["ParticipantModel"]] = relationship(back_populates="team")

    __table_args__ = (Index("idx_teams_hackathon", "hackathon_id"),)


class ParticipantModel(Base):
    __tablename__ = "participants"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    hackathon_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("hackathons.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    preferred_role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    team_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True
    )
    team_role: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Order inside the team as assigned by the engine
    team_position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    hackathon: Mapped["HackathonModel"] = relationship(back_populates="participants")
    team: Mapped["TeamModel | None"] = relationship(back_populates="members")

    __table_args__ = (
        Index("idx_participants_hackathon_status", "hackathon_id", "status"),
        Index("idx_participants_team", "team_id"),
    )
