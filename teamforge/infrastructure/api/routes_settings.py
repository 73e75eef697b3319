"""Team formation settings endpoints — read and validate-then-store."""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from teamforge.adapters.persistence.database import get_session
from teamforge.adapters.persistence.repositories import SqlHackathonSettingsRepository
from teamforge.application.services.rule_set_parser import parse_rule_set, rule_set_to_blob
from teamforge.config import settings
from teamforge.domain.errors import InvalidRuleSet
from teamforge.infrastructure.api.dependencies import get_settings_repo
from teamforge.infrastructure.api.errors import to_http_exception

router = APIRouter(prefix="/hackathons", tags=["settings"])


@router.get("/{hackathon_id}/team-formation-settings")
async def get_team_formation_settings(
    hackathon_id: str,
    repo: SqlHackathonSettingsRepository = Depends(get_settings_repo),
):
    stored = await repo.get_settings(hackathon_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="Hackathon not found")

    try:
        rule_set = parse_rule_set(stored.team_formation, settings.default_rule_set())
    except InvalidRuleSet as e:
        raise to_http_exception(e)

    return {
        "hackathon_id": hackathon_id,
        "is_default": stored.team_formation is None,
        "emails_enabled": stored.team_formation_emails_enabled,
        "settings": rule_set_to_blob(rule_set),
    }


@router.put("/{hackathon_id}/team-formation-settings")
async def put_team_formation_settings(
    hackathon_id: str,
    blob: dict = Body(...),
    repo: SqlHackathonSettingsRepository = Depends(get_settings_repo),
    session: AsyncSession = Depends(get_session),
):
    """Validate the settings blob and store its normalized form."""
    if await repo.get_settings(hackathon_id) is None:
        raise HTTPException(status_code=404, detail="Hackathon not found")

    try:
        rule_set = parse_rule_set(blob, settings.default_rule_set())
    except InvalidRuleSet as e:
        raise to_http_exception(e)

    normalized = rule_set_to_blob(rule_set)
    await repo.save_team_formation_settings(hackathon_id, normalized)
    await session.commit()
    return {"status": "ok", "settings": normalized}
