"""FormTeamsUseCase — full pipeline: settings → teardown → engine → persist → notify."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from teamforge.application.ports.participant_repo import ParticipantRepository
from teamforge.application.ports.settings_repo import HackathonSettingsRepository
from teamforge.application.ports.team_repo import TeamRepository
from teamforge.application.services.formation_lock import HackathonLockRegistry
from teamforge.application.services.notification_dispatcher import NotificationDispatcher
from teamforge.application.services.rule_set_parser import parse_rule_set
from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.notification import DeliveryReport
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.errors import HackathonNotFound, NoApprovedParticipants
from teamforge.domain.policies.team_formation import form_teams
from teamforge.domain.policies.team_notifications import build_team_notifications

logger = logging.getLogger(__name__)


@dataclass
class FormationReport:
    """Summary of one formation run."""

    hackathon_id: str
    result: AssignmentResult
    pool_size: int
    cleared_teams: int = 0
    emails_enabled: bool = False
    delivery: DeliveryReport = field(default_factory=DeliveryReport)

    def to_dict(self) -> dict:
        return {
            "hackathon_id": self.hackathon_id,
            "teams_created": len(self.result.teams),
            "total_participants": self.pool_size,
            "assigned_participants": self.result.assigned_count,
            "unassigned_participants": self.result.unassigned_count,
            "previous_teams_cleared": self.cleared_teams,
            "emails_enabled": self.emails_enabled,
            "email_stats": {
                "sent": self.delivery.sent,
                "failed": self.delivery.failed,
                "total": self.delivery.total,
            },
            "email_failures": [
                {"recipient_id": o.recipient_id, "reason": o.reason}
                for o in self.delivery.failures()
            ],
            **self.result.to_dict(),
        }


class FormTeamsUseCase:
    """Orchestrates automatic team formation for one hackathon."""

    def __init__(
        self,
        participant_repo: ParticipantRepository,
        team_repo: TeamRepository,
        settings_repo: HackathonSettingsRepository,
        locks: HackathonLockRegistry,
        default_rule_set: RuleSet,
        dispatcher: NotificationDispatcher | None = None,
        commit: Callable[[], Awaitable[None]] | None = None,
    ):
        self._participants = participant_repo
        self._teams = team_repo
        self._settings = settings_repo
        self._locks = locks
        self._default_rule_set = default_rule_set
        self._dispatcher = dispatcher
        self._commit = commit

    async def execute(self, hackathon_id: str, notify: bool = True) -> FormationReport:
        """Form teams for a hackathon end-to-end.

        Pipeline:
        1. Load settings, parse the rule set (InvalidRuleSet)
        2. Tear down the previous assignment
        3. Load the approved, unassigned pool
        4. Run the engine (InsufficientParticipants)
        5. Persist the result and commit
        6. Notify members (best effort, never raises)

        Raises:
            FormationInProgress: another run for this hackathon is active.
            HackathonNotFound, NoApprovedParticipants, InvalidRuleSet,
            InsufficientParticipants.
        """
        async with self._locks.hold(hackathon_id):
            settings = await self._settings.get_settings(hackathon_id)
            if settings is None:
                raise HackathonNotFound(hackathon_id)
            rule_set = parse_rule_set(settings.team_formation, self._default_rule_set)
            logger.info(
                "Hackathon %s: forming teams with %d quota rules",
                hackathon_id, len(rule_set.quota_rules),
            )

            cleared = await self._teams.clear_assignments(hackathon_id)
            if cleared:
                logger.info("Hackathon %s: cleared %d existing teams", hackathon_id, cleared)

            pool = await self._participants.get_assignable(hackathon_id)
            if not pool:
                raise NoApprovedParticipants(hackathon_id)

            result = form_teams(pool, rule_set)
            for warning in result.warnings:
                logger.warning("Hackathon %s: %s", hackathon_id, warning)

            await self._teams.save_result(hackathon_id, result)
            if self._commit is not None:
                await self._commit()

            report = FormationReport(
                hackathon_id=hackathon_id,
                result=result,
                pool_size=len(pool),
                cleared_teams=cleared,
                emails_enabled=bool(
                    notify and self._dispatcher and settings.team_formation_emails_enabled
                ),
            )

        if report.emails_enabled:
            notifications = build_team_notifications(result.teams, settings.title)
            report.delivery = await self._dispatcher.dispatch(notifications)
        else:
            logger.info("Hackathon %s: team formation emails disabled", hackathon_id)

        return report
