"""TeamForge — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamforge.adapters.persistence.database import engine
from teamforge.config import settings
from teamforge.infrastructure.api.routes_health import router as health_router
from teamforge.infrastructure.api.routes_settings import router as settings_router
from teamforge.infrastructure.api.routes_teams import router as teams_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="TeamForge — Hackathon Team Assignment",
        description="Constrained team formation and assignment notifications",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the admin frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(settings_router, prefix="/api")
    app.include_router(teams_router, prefix="/api")

    return app


app = create_app()
