"""Tests for the health endpoint with a stubbed database session."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from teamforge.adapters.persistence.database import get_session
from teamforge.infrastructure.api.routes_health import router


class StubSession:
    def __init__(self, error: Exception | None = None):
        self._error = error

    async def scalar(self, statement):
        if self._error is not None:
            raise self._error
        return 1


def _client(session: StubSession) -> TestClient:
    app = FastAPI()
    app.include_router(router, prefix="/api")

    async def override():
        yield session

    app.dependency_overrides[get_session] = override
    return TestClient(app)


def test_healthy():
    response = _client(StubSession()).get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"
    assert body["mail"] in {"relay", "log-only"}


@pytest.mark.parametrize(
    "error",
    [OperationalError("SELECT 1", {}, Exception("connection refused")), ConnectionRefusedError()],
)
def test_database_down_reports_503(error):
    response = _client(StubSession(error)).get("/api/health")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
