"""Team entity — a numbered group of participants produced by the engine."""

from dataclasses import dataclass, field

from teamforge.domain.entities.participant import Participant


@dataclass
class Team:
    number: int
    members: list[Participant] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    def add(self, participant: Participant) -> None:
        self.members.append(participant)

    def count_attribute(self, value: str) -> int:
        return sum(1 for m in self.members if m.has_attribute(value))
