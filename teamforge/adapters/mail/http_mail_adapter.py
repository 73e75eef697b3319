"""HTTP mail relay adapter — implements MailTransport."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from teamforge.application.ports.mail_port import MailDeliveryError, MailMessage, MailTransport
from teamforge.config import settings

logger = logging.getLogger(__name__)

# Relay answers meaning "slow down", retried with a growing delay
RATE_LIMIT_STATUSES = {421, 429, 503}
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 2.0


class HttpMailAdapter(MailTransport):
    """POSTs each message as JSON to a mail relay API."""

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        sender: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._api_url = api_url or settings.mail_api_url
        self._api_key = api_key if api_key is not None else settings.mail_api_key
        self._sender = sender or settings.mail_from
        self._timeout = timeout or settings.mail_timeout_seconds
        self._transport = transport
        self._sleep = sleep

    async def send(self, message: MailMessage) -> None:
        payload = {
            "from": self._sender,
            "to": message.to,
            "subject": message.subject,
            "text": message.text,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}

        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as client:
            for attempt in range(1, MAX_ATTEMPTS + 1):
                try:
                    response = await client.post(self._api_url, json=payload, headers=headers)
                except httpx.HTTPError as e:
                    raise MailDeliveryError(f"transport error: {e}") from e

                if response.status_code in RATE_LIMIT_STATUSES and attempt < MAX_ATTEMPTS:
                    delay = RETRY_DELAY_SECONDS * attempt
                    logger.info(
                        "Mail relay rate limited %s (HTTP %d), retrying in %.0fs",
                        message.to, response.status_code, delay,
                    )
                    await self._sleep(delay)
                    continue

                if response.is_success:
                    logger.debug("Mail sent to %s", message.to)
                    return
                raise MailDeliveryError(
                    f"relay rejected message: HTTP {response.status_code}"
                )
