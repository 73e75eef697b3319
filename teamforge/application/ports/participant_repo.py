"""Port interface for the participant pool."""

from abc import ABC, abstractmethod

from teamforge.domain.entities.participant import Participant


class ParticipantRepository(ABC):
    @abstractmethod
    async def get_assignable(self, hackathon_id: str) -> list[Participant]:
        """Return approved participants without a team, in registration order."""
        ...
