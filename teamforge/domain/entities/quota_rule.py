"""QuotaRule value object — caps how many members with one attribute a team may get."""

from dataclasses import dataclass

from teamforge.domain.value_objects.enums import DistributionMode


@dataclass(frozen=True)
class QuotaRule:
    attribute_value: str
    max_per_team: int = 1
    priority: int = 0
    mode: DistributionMode = DistributionMode.ONE_PER_TEAM

    def matches(self, attribute: str) -> bool:
        return self.attribute_value == attribute
