"""Team endpoints — automatic formation, listing, notification re-send."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from teamforge.adapters.persistence.retrying import RetryingTeamRepository
from teamforge.application.use_cases.form_teams import FormTeamsUseCase
from teamforge.application.use_cases.notify_teams import NotifyTeamsUseCase
from teamforge.domain.errors import TeamFormationError
from teamforge.infrastructure.api.dependencies import (
    get_form_teams_uc,
    get_notify_teams_uc,
    get_team_repo,
)
from teamforge.infrastructure.api.errors import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hackathons", tags=["teams"])


@router.post("/{hackathon_id}/teams/auto-create")
async def auto_create_teams(
    hackathon_id: str,
    notify: bool = True,
    uc: FormTeamsUseCase = Depends(get_form_teams_uc),
):
    """Replace the hackathon's teams with a fresh automatic assignment."""
    try:
        report = await uc.execute(hackathon_id, notify=notify)
    except TeamFormationError as e:
        logger.warning("Team formation for %s failed: %s", hackathon_id, e)
        raise to_http_exception(e)

    unassigned = report.result.unassigned_count
    return {
        "status": "ok",
        "message": f"Created {len(report.result.teams)} teams",
        **report.to_dict(),
        "warning": f"{unassigned} participants could not be assigned" if unassigned else None,
    }


@router.get("/{hackathon_id}/teams")
async def list_teams(
    hackathon_id: str,
    team_repo: RetryingTeamRepository = Depends(get_team_repo),
):
    """List persisted teams with their members."""
    teams = await team_repo.get_teams(hackathon_id)
    return {
        "total": len(teams),
        "teams": [
            {
                "number": t.number,
                "size": t.size,
                "members": [
                    {"id": m.id, "name": m.display_name, "role": m.attribute}
                    for m in t.members
                ],
            }
            for t in teams
        ],
    }


@router.post("/{hackathon_id}/teams/notify")
async def notify_teams(
    hackathon_id: str,
    team_number: int | None = None,
    uc: NotifyTeamsUseCase = Depends(get_notify_teams_uc),
):
    """Re-send team assignment emails for all teams, or one team."""
    try:
        report = await uc.execute(hackathon_id, team_number=team_number)
    except TeamFormationError as e:
        raise to_http_exception(e)

    if team_number is not None and report.total == 0:
        raise HTTPException(status_code=404, detail=f"Team {team_number} has no members")

    return {
        "status": "ok",
        "email_stats": {"sent": report.sent, "failed": report.failed, "total": report.total},
        "email_failures": [
            {"recipient_id": o.recipient_id, "reason": o.reason} for o in report.failures()
        ],
    }
