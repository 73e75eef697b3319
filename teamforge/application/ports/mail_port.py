"""Port interface for the outgoing mail transport."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class MailDeliveryError(Exception):
    """A single message could not be delivered."""


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    text: str


class MailTransport(ABC):
    @abstractmethod
    async def send(self, message: MailMessage) -> None:
        """Deliver one message.

        Raises:
            MailDeliveryError: if the transport rejected the message.
        """
        ...
