"""TeamCountPolicy — how many teams a pool can be split into."""

from __future__ import annotations

import math
from collections.abc import Sequence

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.errors import InsufficientParticipants


def plan_team_count(pool: Sequence[Participant], rule_set: RuleSet) -> int:
    """Derive the number of teams to create.

    1. With capped quota rules: the minimum over rules of
       floor(matching participants / max_per_team). A team cannot be formed
       once any capped attribute runs out.
    2. Without them: ceil(pool size / ideal team size).
    3. Clamp so that team_count * min_team_size <= pool size.

    Raises:
        InsufficientParticipants: if the result is zero.
    """
    pool_size = len(pool)
    capped = rule_set.capped_rules()

    if capped:
        candidate = min(
            sum(1 for p in pool if rule.matches(p.attribute)) // rule.max_per_team
            for rule in capped
        )
    else:
        candidate = math.ceil(pool_size / rule_set.ideal_team_size)

    if candidate * rule_set.min_team_size > pool_size:
        candidate = pool_size // rule_set.min_team_size

    if candidate <= 0:
        raise InsufficientParticipants(
            min_team_size=rule_set.min_team_size, pool_size=pool_size
        )
    return candidate
