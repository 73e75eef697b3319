"""QuotaDistributionPolicy — round-robin placement of quota-governed participants."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.entities.team import Team

logger = logging.getLogger(__name__)


def distribute_quotas(
    pool: Sequence[Participant],
    rule_set: RuleSet,
    teams: list[Team],
) -> tuple[list[Team], set[str]]:
    """Place participants matching capped quota rules into teams.

    Rules run in ascending priority (ties keep declaration order). For each
    rule, matching unclaimed participants are taken in pool order and dealt
    round-robin: round r gives one participant to every team 0..N-1 before
    round r+1 starts, for at most `max_per_team` rounds. A participant
    claimed by one rule is never reconsidered by a later one.

    Args:
        pool: participants in stable pool order.
        rule_set: validated rule set.
        teams: empty working teams, in planned order.

    Returns:
        (teams, ids of claimed participants)
    """
    claimed: set[str] = set()
    if not teams:
        return teams, claimed

    for rule in rule_set.capped_rules():
        matching = [
            p for p in pool if p.id not in claimed and rule.matches(p.attribute)
        ]
        queue = iter(matching)
        placed = 0

        for _round in range(rule.max_per_team):
            for team in teams:
                participant = next(queue, None)
                if participant is None:
                    break
                team.add(participant)
                claimed.add(participant.id)
                placed += 1
            if placed == len(matching):
                break

        logger.debug(
            "Quota %r (max %d/team, priority %d): placed %d of %d",
            rule.attribute_value, rule.max_per_team, rule.priority,
            placed, len(matching),
        )

    return teams, claimed
