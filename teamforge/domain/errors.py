"""Domain errors raised by the team assignment engine and its orchestration."""

from __future__ import annotations


class TeamFormationError(Exception):
    """Base class for every error the formation pipeline raises."""


class InvalidRuleSet(TeamFormationError):
    """Rule set is inconsistent or names an unknown distribution mode."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid rule set: {reason}")
        self.reason = reason


class InsufficientParticipants(TeamFormationError):
    """Not enough participants to form even one team."""

    def __init__(self, min_team_size: int, pool_size: int):
        super().__init__(
            f"Not enough participants to form a team: "
            f"{pool_size} available, minimum team size is {min_team_size}"
        )
        self.min_team_size = min_team_size
        self.pool_size = pool_size


class NoApprovedParticipants(TeamFormationError):
    def __init__(self, hackathon_id: str):
        super().__init__(f"No approved unassigned participants for hackathon {hackathon_id}")
        self.hackathon_id = hackathon_id


class HackathonNotFound(TeamFormationError):
    def __init__(self, hackathon_id: str):
        super().__init__(f"Hackathon {hackathon_id} not found")
        self.hackathon_id = hackathon_id


class FormationInProgress(TeamFormationError):
    """Another team formation for the same hackathon has not finished yet."""

    def __init__(self, hackathon_id: str):
        super().__init__(f"Team formation already running for hackathon {hackathon_id}")
        self.hackathon_id = hackathon_id
