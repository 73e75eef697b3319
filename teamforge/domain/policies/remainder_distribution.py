"""RemainderDistributionPolicy — balance leftover participants across teams."""

from __future__ import annotations

from collections.abc import Sequence

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.team import Team


def distribute_remainder(
    unclaimed: Sequence[Participant],
    teams: list[Team],
) -> list[Team]:
    """Deal participants round-robin over teams 0..N-1 in the given order.

    No attribute awareness, no reordering and no skipping: participant i goes
    to team i mod N.

    Raises:
        ValueError: if there are participants but no teams.
    """
    if not unclaimed:
        return teams
    if not teams:
        raise ValueError("Cannot distribute participants over an empty team list")

    for index, participant in enumerate(unclaimed):
        teams[index % len(teams)].add(participant)
    return teams
