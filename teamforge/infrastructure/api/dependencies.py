"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from teamforge.adapters.mail.http_mail_adapter import HttpMailAdapter
from teamforge.adapters.mail.logging_mail_adapter import LoggingMailAdapter
from teamforge.adapters.persistence.database import get_session
from teamforge.adapters.persistence.repositories import (
    SqlHackathonSettingsRepository,
    SqlParticipantRepository,
    SqlTeamRepository,
)
from teamforge.adapters.persistence.retrying import RetryingTeamRepository
from teamforge.application.services.formation_lock import HackathonLockRegistry
from teamforge.application.services.notification_dispatcher import NotificationDispatcher
from teamforge.application.use_cases.form_teams import FormTeamsUseCase
from teamforge.application.use_cases.notify_teams import NotifyTeamsUseCase
from teamforge.config import settings

logger = logging.getLogger(__name__)

# Process-wide singletons
_locks = HackathonLockRegistry()

if settings.mail_api_url:
    _mail_transport = HttpMailAdapter()
else:
    logger.warning("MAIL_API_URL not set, team notifications will only be logged")
    _mail_transport = LoggingMailAdapter()

_dispatcher = NotificationDispatcher(
    _mail_transport,
    batch_size=settings.notify_batch_size,
    batch_delay=settings.notify_batch_delay_seconds,
    batch_timeout=settings.notify_batch_timeout_seconds,
)


def get_team_repo(session: AsyncSession = Depends(get_session)) -> RetryingTeamRepository:
    return RetryingTeamRepository(
        SqlTeamRepository(session),
        attempts=settings.persistence_retry_attempts,
        backoff_seconds=settings.persistence_retry_backoff_seconds,
        on_retry=session.rollback,
    )


def get_settings_repo(
    session: AsyncSession = Depends(get_session),
) -> SqlHackathonSettingsRepository:
    return SqlHackathonSettingsRepository(session)


def get_form_teams_uc(session: AsyncSession = Depends(get_session)) -> FormTeamsUseCase:
    return FormTeamsUseCase(
        participant_repo=SqlParticipantRepository(session),
        team_repo=get_team_repo(session),
        settings_repo=SqlHackathonSettingsRepository(session),
        locks=_locks,
        default_rule_set=settings.default_rule_set(),
        dispatcher=_dispatcher,
        commit=session.commit,
    )


def get_notify_teams_uc(session: AsyncSession = Depends(get_session)) -> NotifyTeamsUseCase:
    return NotifyTeamsUseCase(
        team_repo=get_team_repo(session),
        settings_repo=SqlHackathonSettingsRepository(session),
        dispatcher=_dispatcher,
    )
