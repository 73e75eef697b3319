"""Participant entity — an approved hackathon attendee waiting for a team."""

from dataclasses import dataclass

from teamforge.domain.value_objects.enums import UNSPECIFIED_ATTRIBUTE


@dataclass(frozen=True)
class Participant:
    id: str
    attribute: str = UNSPECIFIED_ATTRIBUTE
    display_name: str = ""
    email: str | None = None

    def has_attribute(self, value: str) -> bool:
        return self.attribute == value

    def summary(self) -> str:
        """Short "Name - role" line used in teammate listings."""
        name = self.display_name or self.id
        if self.attribute and self.attribute != UNSPECIFIED_ATTRIBUTE:
            return f"{name} - {self.attribute}"
        return name
