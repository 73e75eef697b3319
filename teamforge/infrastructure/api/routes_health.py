"""Liveness endpoint: database reachability and mail transport mode."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teamforge.adapters.persistence.database import get_session
from teamforge.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(response: Response, session: AsyncSession = Depends(get_session)):
    """503 while the database is unreachable, since no formation can run then."""
    mail_mode = "relay" if settings.mail_api_url else "log-only"
    try:
        await session.scalar(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: database unreachable: %s", e)
        response.status_code = 503
        return {"status": "unavailable", "database": str(e), "mail": mail_mode}

    return {"status": "ok", "database": "connected", "mail": mail_mode}
