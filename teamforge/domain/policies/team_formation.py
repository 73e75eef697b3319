"""TeamFormationPolicy — the assignment engine: plan, quota pass, remainder pass, validate.

Pure and synchronous: plain data in, plain data out. Every call builds its own
working teams and claimed-id set, so concurrent calls share nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from teamforge.domain.entities.assignment_result import AssignmentResult
from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.entities.team import Team
from teamforge.domain.policies.quota_distribution import distribute_quotas
from teamforge.domain.policies.remainder_distribution import distribute_remainder
from teamforge.domain.policies.team_count import plan_team_count
from teamforge.domain.policies.team_validation import validate_teams
from teamforge.domain.value_objects.enums import FormationStage

logger = logging.getLogger(__name__)


def form_teams(pool: Sequence[Participant], rule_set: RuleSet) -> AssignmentResult:
    """Partition `pool` into teams according to `rule_set`.

    Pipeline:
    1. Validate the rule set (InvalidRuleSet)
    2. Plan the team count (InsufficientParticipants)
    3. Quota pass — capped rules, priority order
    4. Remainder pass — everyone not governed by a capped rule
    5. Validate / prune / renumber

    Participants whose attribute is governed by a capped rule but who did not
    fit under the cap are left unassigned with a warning, so no team ever
    exceeds a quota.

    Raises:
        InvalidRuleSet: before any assignment work.
        InsufficientParticipants: when not even one team can be formed.
    """
    rule_set.validate()
    snapshot = tuple(pool)

    stage = FormationStage.PLANNING
    logger.debug("Stage %s: %d participants", stage.value, len(snapshot))
    team_count = plan_team_count(snapshot, rule_set)
    teams = [Team(number=i + 1) for i in range(team_count)]
    logger.info(
        "Planned %d teams for %d participants (ideal %d, min %d, max %d)",
        team_count, len(snapshot), rule_set.ideal_team_size,
        rule_set.min_team_size, rule_set.max_team_size,
    )

    stage = FormationStage.QUOTA_PASS
    logger.debug("Stage %s", stage.value)
    teams, claimed = distribute_quotas(snapshot, rule_set, teams)

    stage = FormationStage.REMAINDER_PASS
    logger.debug("Stage %s", stage.value)
    governed = {rule.attribute_value for rule in rule_set.capped_rules()}
    unclaimed = [p for p in snapshot if p.id not in claimed]
    overflow = [p for p in unclaimed if p.attribute in governed]
    remainder = [p for p in unclaimed if p.attribute not in governed]
    teams = distribute_remainder(remainder, teams)

    stage = FormationStage.VALIDATING
    logger.debug("Stage %s", stage.value)
    validation = validate_teams(teams, rule_set)

    warnings = _overflow_warnings(overflow, rule_set) + validation.warnings
    result = AssignmentResult(
        teams=validation.teams,
        unassigned=overflow + validation.unassigned,
        warnings=warnings,
    )

    stage = FormationStage.DONE
    logger.info(
        "Stage %s: %d teams (%s), %d unassigned, %d warnings",
        stage.value, len(result.teams),
        ", ".join(f"#{t.number}={t.size}" for t in result.teams),
        result.unassigned_count, len(result.warnings),
    )
    return result


def _overflow_warnings(overflow: list[Participant], rule_set: RuleSet) -> list[str]:
    warnings = []
    for rule in rule_set.capped_rules():
        count = sum(1 for p in overflow if rule.matches(p.attribute))
        if count:
            warnings.append(
                f"{count} participant(s) with {rule.attribute_value} exceed the quota "
                f"of {rule.max_per_team} per team and were left unassigned"
            )
    return warnings
