"""NotificationDispatcher — batched, rate-limited fan-out of team notifications."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from teamforge.application.ports.mail_port import MailDeliveryError, MailMessage, MailTransport
from teamforge.domain.entities.notification import (
    DeliveryOutcome,
    DeliveryReport,
    TeamNotification,
)
from teamforge.domain.value_objects.enums import DeliveryStatus

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_SECONDS = 3.0
DEFAULT_BATCH_TIMEOUT_SECONDS = 30.0


def compose_message(notification: TeamNotification) -> MailMessage:
    """Plain-text team assignment message for one recipient."""
    team_name = f"Team {notification.team_number}"
    subject = f"You have been assigned to {team_name}"
    if notification.hackathon_title:
        subject += f" - {notification.hackathon_title}"

    greeting = f"Hello {notification.recipient_name}!" if notification.recipient_name else "Hello!"
    lines = [greeting, "", f"You have been assigned to {team_name}"]
    if notification.hackathon_title:
        lines[-1] += f" for {notification.hackathon_title}"
    lines[-1] += "."
    if notification.recipient_role:
        lines += ["", f"Your role: {notification.recipient_role}"]
    lines += ["", "Team members:", *notification.teammate_summaries, "", "Good luck!"]

    return MailMessage(
        to=notification.recipient_email or "",
        subject=subject,
        text="\n".join(lines),
    )


class NotificationDispatcher:
    """Sends one message per notification in fixed-size batches.

    Messages inside a batch go out concurrently; batches are separated by a
    fixed delay. A failed message is recorded and never aborts the run. Each
    batch has its own timeout: recipients still pending when it expires are
    reported as failed, messages already sent stay sent. Cancelling
    dispatch() cancels every send still in flight before it returns.
    """

    def __init__(
        self,
        transport: MailTransport,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY_SECONDS,
        batch_timeout: float | None = DEFAULT_BATCH_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self._transport = transport
        self._batch_size = batch_size
        self._batch_delay = batch_delay
        self._batch_timeout = batch_timeout
        self._sleep = sleep

    async def dispatch(self, notifications: Sequence[TeamNotification]) -> DeliveryReport:
        report = DeliveryReport()
        total_batches = (len(notifications) + self._batch_size - 1) // self._batch_size
        logger.info(
            "Dispatching %d notifications in %d batches of %d",
            len(notifications), total_batches, self._batch_size,
        )

        for start in range(0, len(notifications), self._batch_size):
            batch = notifications[start:start + self._batch_size]
            batch_number = start // self._batch_size + 1
            logger.debug("Batch %d/%d (%d messages)", batch_number, total_batches, len(batch))

            report.outcomes.extend(await self._send_batch(batch))

            if start + self._batch_size < len(notifications):
                await self._sleep(self._batch_delay)

        logger.info(
            "Dispatch complete: %d sent, %d failed", report.sent, report.failed
        )
        return report

    async def _send_batch(self, batch: Sequence[TeamNotification]) -> list[DeliveryOutcome]:
        tasks = [asyncio.ensure_future(self._deliver(n)) for n in batch]
        try:
            done, _ = await asyncio.wait(tasks, timeout=self._batch_timeout)
        finally:
            # Also runs when the caller abandons dispatch(): no send outlives it
            unfinished = [t for t in tasks if not t.done()]
            for task in unfinished:
                task.cancel()
            if unfinished:
                await asyncio.gather(*unfinished, return_exceptions=True)

        outcomes = []
        for notification, task in zip(batch, tasks):
            if task in done:
                outcomes.append(task.result())
            else:
                logger.warning(
                    "Notification to %s timed out after %ss",
                    notification.recipient_id, self._batch_timeout,
                )
                outcomes.append(
                    DeliveryOutcome(notification.recipient_id, DeliveryStatus.FAILED, "timeout")
                )
        return outcomes

    async def _deliver(self, notification: TeamNotification) -> DeliveryOutcome:
        if not notification.recipient_email:
            logger.warning("Participant %s has no email address", notification.recipient_id)
            return DeliveryOutcome(
                notification.recipient_id, DeliveryStatus.FAILED, "no email address"
            )
        try:
            await self._transport.send(compose_message(notification))
        except MailDeliveryError as e:
            logger.warning("Failed to notify %s: %s", notification.recipient_id, e)
            return DeliveryOutcome(notification.recipient_id, DeliveryStatus.FAILED, str(e))
        except Exception as e:
            logger.exception("Unexpected error notifying %s", notification.recipient_id)
            return DeliveryOutcome(
                notification.recipient_id, DeliveryStatus.FAILED, f"{type(e).__name__}: {e}"
            )
        return DeliveryOutcome(notification.recipient_id, DeliveryStatus.SENT)
