"""Retry decorator around the team persistence port.

Transient database failures (dropped connections, serialization conflicts)
are retried with exponential backoff. The rollback hook runs between
attempts so the session is usable again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError

from teamforge.application.ports.team_repo import TeamRepository
from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.team import Team

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_BACKOFF_SECONDS = 10.0


def is_transient(error: BaseException) -> bool:
    if isinstance(error, (OperationalError, InterfaceError)):
        return True
    return isinstance(error, DBAPIError) and error.connection_invalidated


async def call_with_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    backoff_seconds: float = 0.5,
    on_retry: Callable[[], Awaitable[None]] | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    label: str = "operation",
) -> T:
    """Run `operation`, retrying transient failures up to `attempts` times in total.

    Non-transient errors propagate immediately; the last transient error
    propagates once attempts run out.
    """
    attempts = max(1, attempts)
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_transient(e) or attempt >= attempts:
                raise
            delay = min(MAX_BACKOFF_SECONDS, backoff_seconds * (2 ** (attempt - 1)))
            logger.warning(
                "%s failed (attempt %d/%d): %s; retrying in %.1fs",
                label, attempt, attempts, e, delay,
            )
            if on_retry is not None:
                await on_retry()
            await sleep(delay)
    raise AssertionError("unreachable")


class RetryingTeamRepository(TeamRepository):
    """Wraps any TeamRepository; every call is retried on transient errors."""

    def __init__(
        self,
        inner: TeamRepository,
        attempts: int = 3,
        backoff_seconds: float = 0.5,
        on_retry: Callable[[], Awaitable[None]] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._inner = inner
        self._attempts = attempts
        self._backoff = backoff_seconds
        self._on_retry = on_retry
        self._sleep = sleep

    async def _retry(self, label: str, operation: Callable[[], Awaitable[T]]) -> T:
        return await call_with_retry(
            operation,
            attempts=self._attempts,
            backoff_seconds=self._backoff,
            on_retry=self._on_retry,
            sleep=self._sleep,
            label=label,
        )

    async def clear_assignments(self, hackathon_id: str) -> int:
        return await self._retry(
            "clear_assignments", lambda: self._inner.clear_assignments(hackathon_id)
        )

    async def save_result(self, hackathon_id: str, result: AssignmentResult) -> None:
        await self._retry("save_result", lambda: self._inner.save_result(hackathon_id, result))

    async def get_teams(self, hackathon_id: str) -> list[Team]:
        return await self._retry("get_teams", lambda: self._inner.get_teams(hackathon_id))
