"""NotifyTeamsUseCase — re-send assignment messages for persisted teams."""

from __future__ import annotations

import logging

from teamforge.application.ports.settings_repo import HackathonSettingsRepository
from teamforge.application.ports.team_repo import TeamRepository
from teamforge.application.services.notification_dispatcher import NotificationDispatcher
from teamforge.domain.entities.notification import DeliveryReport
from teamforge.domain.errors import HackathonNotFound
from teamforge.domain.policies.team_notifications import build_team_notifications

logger = logging.getLogger(__name__)


class NotifyTeamsUseCase:
    def __init__(
        self,
        team_repo: TeamRepository,
        settings_repo: HackathonSettingsRepository,
        dispatcher: NotificationDispatcher,
    ):
        self._teams = team_repo
        self._settings = settings_repo
        self._dispatcher = dispatcher

    async def execute(self, hackathon_id: str, team_number: int | None = None) -> DeliveryReport:
        """Notify every member of the hackathon's teams, or of one team only."""
        settings = await self._settings.get_settings(hackathon_id)
        if settings is None:
            raise HackathonNotFound(hackathon_id)

        teams = await self._teams.get_teams(hackathon_id)
        if team_number is not None:
            teams = [t for t in teams if t.number == team_number]
        logger.info("Hackathon %s: re-sending notifications for %d teams", hackathon_id, len(teams))

        return await self._dispatcher.dispatch(build_team_notifications(teams, settings.title))
