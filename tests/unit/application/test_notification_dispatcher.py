"""Tests for NotificationDispatcher with an in-memory transport."""

from __future__ import annotations

import asyncio

import pytest

from teamforge.application.ports.mail_port import MailDeliveryError, MailMessage, MailTransport
from teamforge.application.services.notification_dispatcher import (
    NotificationDispatcher,
    compose_message,
)
from teamforge.domain.entities.notification import TeamNotification
from teamforge.domain.value_objects.enums import DeliveryStatus

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeTransport(MailTransport):
    def __init__(self, fail_for: set[str] | None = None, hang_for: set[str] | None = None,
                 crash_for: set[str] | None = None, delay: float = 0.0):
        self.sent: list[MailMessage] = []
        self._fail_for = fail_for or set()
        self._hang_for = hang_for or set()
        self._crash_for = crash_for or set()
        self._delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    async def send(self, message):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delay)
            if message.to in self._hang_for:
                await asyncio.sleep(3600)
            if message.to in self._fail_for:
                raise MailDeliveryError("relay rejected message: HTTP 550")
            if message.to in self._crash_for:
                raise RuntimeError("socket closed")
            self.sent.append(message)
        finally:
            self.in_flight -= 1


class RecordingSleep:
    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


def _notifications(count: int) -> list[TeamNotification]:
    return [
        TeamNotification(
            recipient_id=f"p{i}",
            team_number=i % 3 + 1,
            teammate_summaries=("Ann - dev",),
            recipient_name=f"Person {i}",
            recipient_email=f"p{i}@example.com",
        )
        for i in range(count)
    ]


# ─── Tests ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_all_sent_in_batches():
    transport = FakeTransport()
    sleep = RecordingSleep()
    dispatcher = NotificationDispatcher(transport, batch_size=5, batch_delay=3.0, sleep=sleep)

    report = await dispatcher.dispatch(_notifications(12))

    assert report.total == 12
    assert report.sent == 12
    assert report.failed == 0
    assert len(transport.sent) == 12
    # three batches, two pauses between them
    assert sleep.calls == [3.0, 3.0]
    assert transport.max_in_flight <= 5


@pytest.mark.asyncio
async def test_single_batch_does_not_sleep():
    sleep = RecordingSleep()
    dispatcher = NotificationDispatcher(FakeTransport(), batch_size=5, sleep=sleep)
    await dispatcher.dispatch(_notifications(5))
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_empty_input():
    sleep = RecordingSleep()
    dispatcher = NotificationDispatcher(FakeTransport(), sleep=sleep)
    report = await dispatcher.dispatch([])
    assert report.total == 0
    assert sleep.calls == []


@pytest.mark.asyncio
async def test_failures_collected_not_raised():
    transport = FakeTransport(fail_for={"p1@example.com"}, crash_for={"p3@example.com"})
    dispatcher = NotificationDispatcher(transport, batch_size=2, sleep=RecordingSleep())

    report = await dispatcher.dispatch(_notifications(5))

    assert report.sent == 3
    assert report.failed == 2
    failures = {o.recipient_id: o.reason for o in report.failures()}
    assert failures == {
        "p1": "relay rejected message: HTTP 550",
        "p3": "RuntimeError: socket closed",
    }


@pytest.mark.asyncio
async def test_outcomes_keep_input_order():
    transport = FakeTransport(fail_for={"p0@example.com"})
    dispatcher = NotificationDispatcher(transport, batch_size=3, sleep=RecordingSleep())
    report = await dispatcher.dispatch(_notifications(4))
    assert [o.recipient_id for o in report.outcomes] == ["p0", "p1", "p2", "p3"]
    assert report.outcomes[0].status == DeliveryStatus.FAILED


@pytest.mark.asyncio
async def test_missing_email_fails_without_sending():
    transport = FakeTransport()
    notification = TeamNotification(recipient_id="x", team_number=1, teammate_summaries=())
    dispatcher = NotificationDispatcher(transport, sleep=RecordingSleep())

    report = await dispatcher.dispatch([notification])

    assert transport.sent == []
    assert report.outcomes[0].status == DeliveryStatus.FAILED
    assert report.outcomes[0].reason == "no email address"


@pytest.mark.asyncio
async def test_batch_timeout_marks_pending_failed():
    transport = FakeTransport(hang_for={"p1@example.com"})
    dispatcher = NotificationDispatcher(
        transport, batch_size=3, batch_timeout=0.05, sleep=RecordingSleep(),
    )

    report = await dispatcher.dispatch(_notifications(3))

    assert report.sent == 2
    assert [(o.recipient_id, o.reason) for o in report.failures()] == [("p1", "timeout")]


def test_batch_size_must_be_positive():
    with pytest.raises(ValueError):
        NotificationDispatcher(FakeTransport(), batch_size=0)


def test_compose_message():
    message = compose_message(
        TeamNotification(
            recipient_id="p1",
            team_number=2,
            teammate_summaries=("Ann - designer", "Bob"),
            recipient_name="Ann",
            recipient_email="ann@example.com",
            recipient_role="designer",
            hackathon_title="Spring Jam",
        )
    )
    assert message.to == "ann@example.com"
    assert message.subject == "You have been assigned to Team 2 - Spring Jam"
    assert message.text.splitlines() == [
        "Hello Ann!",
        "",
        "You have been assigned to Team 2 for Spring Jam.",
        "",
        "Your role: designer",
        "",
        "Team members:",
        "Ann - designer",
        "Bob",
        "",
        "Good luck!",
    ]


def test_compose_message_without_title_or_role():
    message = compose_message(
        TeamNotification(recipient_id="p1", team_number=1, teammate_summaries=("p1",),
                         recipient_email="p1@example.com")
    )
    assert message.subject == "You have been assigned to Team 1"
    assert "Your role" not in message.text
    assert message.text.startswith("Hello!\n\nYou have been assigned to Team 1.")


@pytest.mark.asyncio
async def test_abandoned_dispatch_stops_in_flight_sends():
    transport = FakeTransport(delay=0.2)
    dispatcher = NotificationDispatcher(transport, batch_size=5, sleep=RecordingSleep())

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(dispatcher.dispatch(_notifications(3)), timeout=0.05)

    assert transport.in_flight == 0
    await asyncio.sleep(0.3)
    assert transport.sent == []
