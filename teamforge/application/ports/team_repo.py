"""Port interface for team assignment persistence."""

from abc import ABC, abstractmethod

from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.team import Team


class TeamRepository(ABC):
    @abstractmethod
    async def clear_assignments(self, hackathon_id: str) -> int:
        """Unassign every participant and delete existing teams.

        Returns the number of teams deleted.
        """
        ...

    @abstractmethod
    async def save_result(self, hackathon_id: str, result: AssignmentResult) -> None:
        ...

    @abstractmethod
    async def get_teams(self, hackathon_id: str) -> list[Team]:
        ...
