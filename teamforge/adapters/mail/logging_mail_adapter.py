"""Development transport: logs messages instead of sending them."""

from __future__ import annotations

import logging

from teamforge.application.ports.mail_port import MailMessage, MailTransport

logger = logging.getLogger(__name__)


class LoggingMailAdapter(MailTransport):
    async def send(self, message: MailMessage) -> None:
        logger.info("Mail relay not configured, logging email to %s: %s", message.to, message.subject)
