"""RuleSet value object — size limits and quota rules for one formation run."""

from __future__ import annotations

from dataclasses import dataclass, field

from teamforge.domain.entities.quota_rule import QuotaRule
from teamforge.domain.errors import InvalidRuleSet
from teamforge.domain.value_objects.enums import DistributionMode


@dataclass(frozen=True)
class RuleSet:
    ideal_team_size: int
    min_team_size: int
    max_team_size: int
    allow_partial_teams: bool = True
    quota_rules: tuple[QuotaRule, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        """Raise InvalidRuleSet unless min <= ideal <= max, all positive,
        and every quota rule is unique, uses a known mode and has a positive cap."""
        if self.ideal_team_size <= 0:
            raise InvalidRuleSet("ideal team size must be positive")
        if self.min_team_size <= 0:
            raise InvalidRuleSet("minimum team size must be positive")
        if self.max_team_size <= 0:
            raise InvalidRuleSet("maximum team size must be positive")
        if self.min_team_size > self.ideal_team_size:
            raise InvalidRuleSet(
                f"minimum team size {self.min_team_size} exceeds "
                f"ideal team size {self.ideal_team_size}"
            )
        if self.ideal_team_size > self.max_team_size:
            raise InvalidRuleSet(
                f"ideal team size {self.ideal_team_size} exceeds "
                f"maximum team size {self.max_team_size}"
            )
        seen: set[str] = set()
        for rule in self.quota_rules:
            if rule.attribute_value in seen:
                raise InvalidRuleSet(f"duplicate quota rule for {rule.attribute_value!r}")
            seen.add(rule.attribute_value)
            if not isinstance(rule.mode, DistributionMode):
                raise InvalidRuleSet(f"unknown distribution mode {rule.mode!r}")
            if rule.max_per_team <= 0:
                raise InvalidRuleSet(
                    f"quota for {rule.attribute_value!r} must allow at least one member per team"
                )

    def capped_rules(self) -> list[QuotaRule]:
        """ONE_PER_TEAM rules ordered by priority; ties keep declaration order."""
        rules = [r for r in self.quota_rules if r.mode == DistributionMode.ONE_PER_TEAM]
        return sorted(rules, key=lambda r: r.priority)
