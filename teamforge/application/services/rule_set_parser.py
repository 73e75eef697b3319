"""Parse the stored team-formation settings blob into a typed RuleSet.

The blob is the JSON object the settings screen saves:

    {
      "teamSize": 4, "minTeamSize": 3, "maxTeamSize": 5,
      "allowPartialTeams": true,
      "rules": [
        {"fieldId": "preferredRole", "value": "Designer",
         "distribution": "one_per_team", "maxPerTeam": 1, "priority": 1}
      ]
    }

Rules marked "ignore" are dropped; any other distribution besides
"one_per_team" is rejected instead of silently defaulted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from teamforge.domain.entities.quota_rule import QuotaRule
from teamforge.domain.entities.rule_set import RuleSet
from teamforge.domain.errors import InvalidRuleSet
from teamforge.domain.value_objects.enums import DistributionMode

IGNORED_DISTRIBUTION = "ignore"
# Rules saved without a priority sort after every prioritised rule
DEFAULT_PRIORITY = 999


class QuotaRuleSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: str | None = None
    field_id: str | None = Field(default=None, alias="fieldId")
    distribution: str = DistributionMode.ONE_PER_TEAM.value
    max_per_team: int = Field(default=1, alias="maxPerTeam")
    priority: int | None = None


class TeamFormationSettingsSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    team_size: int = Field(alias="teamSize")
    min_team_size: int = Field(alias="minTeamSize")
    max_team_size: int = Field(alias="maxTeamSize")
    allow_partial_teams: bool = Field(default=True, alias="allowPartialTeams")
    rules: list[QuotaRuleSchema] = Field(default_factory=list)

    def to_rule_set(self) -> RuleSet:
        quota_rules = []
        for index, rule in enumerate(self.rules):
            if rule.distribution == IGNORED_DISTRIBUTION:
                continue
            try:
                mode = DistributionMode(rule.distribution)
            except ValueError:
                raise InvalidRuleSet(
                    f"rule {index + 1}: unknown distribution mode {rule.distribution!r}"
                ) from None
            if not rule.value:
                raise InvalidRuleSet(f"rule {index + 1}: missing attribute value")
            quota_rules.append(
                QuotaRule(
                    attribute_value=rule.value,
                    max_per_team=rule.max_per_team,
                    priority=DEFAULT_PRIORITY if rule.priority is None else rule.priority,
                    mode=mode,
                )
            )
        return RuleSet(
            ideal_team_size=self.team_size,
            min_team_size=self.min_team_size,
            max_team_size=self.max_team_size,
            allow_partial_teams=self.allow_partial_teams,
            quota_rules=tuple(quota_rules),
        )

    @classmethod
    def from_rule_set(cls, rule_set: RuleSet) -> "TeamFormationSettingsSchema":
        return cls(
            team_size=rule_set.ideal_team_size,
            min_team_size=rule_set.min_team_size,
            max_team_size=rule_set.max_team_size,
            allow_partial_teams=rule_set.allow_partial_teams,
            rules=[
                QuotaRuleSchema(
                    value=r.attribute_value,
                    distribution=r.mode.value,
                    max_per_team=r.max_per_team,
                    priority=r.priority,
                )
                for r in rule_set.quota_rules
            ],
        )


def parse_rule_set(blob: dict | None, default: RuleSet) -> RuleSet:
    """Validate a settings blob once, at the boundary.

    Args:
        blob: stored settings object, or None when the hackathon has none.
        default: rule set used when `blob` is None.

    Raises:
        InvalidRuleSet: on malformed input, unknown modes or inconsistent sizes.
    """
    if blob is None:
        rule_set = default
    else:
        try:
            schema = TeamFormationSettingsSchema.model_validate(blob)
        except ValidationError as e:
            raise InvalidRuleSet(_describe(e)) from e
        rule_set = schema.to_rule_set()
    rule_set.validate()
    return rule_set


def rule_set_to_blob(rule_set: RuleSet) -> dict:
    return TeamFormationSettingsSchema.from_rule_set(rule_set).model_dump(by_alias=True)


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
