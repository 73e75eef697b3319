"""TeamValidationPolicy — enforce the minimum-size policy and renumber teams."""

from __future__ import annotations

from dataclasses import dataclass, field

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.entities.team import Team


@dataclass
class TeamValidation:
    """Result of the validation pass."""

    teams: list[Team]
    unassigned: list[Participant] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_teams(teams: list[Team], rule_set: RuleSet) -> TeamValidation:
    """Prune or flag undersized teams and renumber survivors 1..K.

    Rules:
      1. allow_partial_teams=True  → keep every non-empty team, warn for each
         team below min_team_size.
      2. allow_partial_teams=False → drop teams below min_team_size, their
         members become unassigned, one warning per dropped team.
      3. An undersized team that got no member for a capped quota rule also
         gets a "quota ... could not be satisfied" warning.
      4. Teams above max_team_size are kept but flagged.

    Survivors keep their relative order.
    """
    survivors: list[Team] = []
    unassigned: list[Participant] = []
    warnings: list[str] = []
    min_size = rule_set.min_team_size

    for team in teams:
        if team.size == 0:
            continue

        undersized = team.size < min_size
        if undersized and not rule_set.allow_partial_teams:
            unassigned.extend(team.members)
            warnings.append(
                f"team {team.number} dropped: {team.size} member(s), "
                f"minimum is {min_size}"
            )
            warnings.extend(_quota_shortfalls(team, team.number, rule_set))
            continue

        final_number = len(survivors) + 1
        survivors.append(Team(number=final_number, members=list(team.members)))

        if undersized:
            warnings.append(
                f"team {final_number} has {team.size} member(s), "
                f"below minimum of {min_size}"
            )
            warnings.extend(_quota_shortfalls(team, final_number, rule_set))
        if team.size > rule_set.max_team_size:
            warnings.append(
                f"team {final_number} has {team.size} member(s), "
                f"above maximum of {rule_set.max_team_size}"
            )

    return TeamValidation(teams=survivors, unassigned=unassigned, warnings=warnings)


def _quota_shortfalls(team: Team, number: int, rule_set: RuleSet) -> list[str]:
    return [
        f"quota for {rule.attribute_value} could not be satisfied for team {number}"
        for rule in rule_set.capped_rules()
        if team.count_attribute(rule.attribute_value) == 0
    ]
