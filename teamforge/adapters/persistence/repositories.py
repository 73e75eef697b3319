"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from teamforge.adapters.persistence.models import HackathonModel, ParticipantModel, TeamModel
from teamforge.application.ports.participant_repo import ParticipantRepository
from teamforge.application.ports.settings_repo import (
    HackathonSettings,
    HackathonSettingsRepository,
)
from teamforge.application.ports.team_repo import TeamRepository
from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.team import Team
from teamforge.domain.value_objects.enums import UNSPECIFIED_ATTRIBUTE, ParticipantStatus

# Keys inside hackathons.settings
TEAM_FORMATION_KEY = "teamFormationSettings"
EMAIL_NOTIFICATIONS_KEY = "emailNotifications"

# ─── Mappers ─────────────────────────────────────────────────────────


def _participant_to_domain(m: ParticipantModel) -> Participant:
    role = (m.preferred_role or "").strip()
    return Participant(
        id=m.id,
        attribute=role or UNSPECIFIED_ATTRIBUTE,
        display_name=m.name,
        email=m.email,
    )


def _team_to_domain(m: TeamModel) -> Team:
    members = sorted(
        m.members,
        key=lambda p: (p.team_position is None, p.team_position or 0, p.id),
    )
    return Team(
        number=m.team_number,
        members=[_participant_to_domain(p) for p in members],
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlParticipantRepository(ParticipantRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_assignable(self, hackathon_id: str) -> list[Participant]:
        result = await self._s.execute(
            select(ParticipantModel)
            .where(
                ParticipantModel.hackathon_id == hackathon_id,
                ParticipantModel.status == ParticipantStatus.APPROVED.value,
                ParticipantModel.team_id.is_(None),
            )
            .order_by(ParticipantModel.registered_at, ParticipantModel.id)
        )
        return [_participant_to_domain(m) for m in result.scalars()]


class SqlTeamRepository(TeamRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def clear_assignments(self, hackathon_id: str) -> int:
        existing = await self._s.scalar(
            select(func.count(TeamModel.id)).where(TeamModel.hackathon_id == hackathon_id)
        )
        await self._s.execute(
            update(ParticipantModel)
            .where(
                ParticipantModel.hackathon_id == hackathon_id,
                ParticipantModel.team_id.is_not(None),
            )
            .values(team_id=None, team_role=None, team_position=None)
        )
        await self._s.execute(delete(TeamModel).where(TeamModel.hackathon_id == hackathon_id))
        await self._s.flush()
        return existing or 0

    async def save_result(self, hackathon_id: str, result: AssignmentResult) -> None:
        """Replace the hackathon's assignment with `result`.

        Clears first, so a retried call after a rollback ends in the same state.
        """
        await self.clear_assignments(hackathon_id)
        for team in result.teams:
            m = TeamModel(
                hackathon_id=hackathon_id,
                name=f"Team {team.number}",
                team_number=team.number,
                status="active",
            )
            self._s.add(m)
            await self._s.flush()

            for position, member in enumerate(team.members):
                role = member.attribute if member.attribute != UNSPECIFIED_ATTRIBUTE else None
                await self._s.execute(
                    update(ParticipantModel)
                    .where(ParticipantModel.id == member.id)
                    .values(team_id=m.id, team_role=role, team_position=position)
                )
        await self._s.flush()

    async def get_teams(self, hackathon_id: str) -> list[Team]:
        result = await self._s.execute(
            select(TeamModel)
            .options(selectinload(TeamModel.members))
            .where(TeamModel.hackathon_id == hackathon_id)
            .order_by(TeamModel.team_number)
        )
        return [_team_to_domain(m) for m in result.scalars()]


class SqlHackathonSettingsRepository(HackathonSettingsRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_settings(self, hackathon_id: str) -> HackathonSettings | None:
        m = await self._s.get(HackathonModel, hackathon_id)
        if m is None:
            return None
        blob = m.settings or {}
        return HackathonSettings(
            hackathon_id=m.id,
            title=m.title,
            team_formation=blob.get(TEAM_FORMATION_KEY),
            email_notifications=blob.get(EMAIL_NOTIFICATIONS_KEY) or {},
        )

    async def save_team_formation_settings(self, hackathon_id: str, blob: dict) -> None:
        m = await self._s.get(HackathonModel, hackathon_id)
        if m is None:
            raise LookupError(f"Hackathon {hackathon_id} not found")
        # Reassign so the JSONB column is marked dirty
        m.settings = {**(m.settings or {}), TEAM_FORMATION_KEY: blob}
        await self._s.flush()
