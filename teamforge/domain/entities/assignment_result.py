"""AssignmentResult — final output of one engine invocation."""

from dataclasses import dataclass, field

from teamforge.domain.entities.participant import Participant
from teamforge.domain.entities.team import Team


@dataclass
class AssignmentResult:
    teams: list[Team] = field(default_factory=list)
    unassigned: list[Participant] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def unassigned_count(self) -> int:
        return len(self.unassigned)

    @property
    def assigned_count(self) -> int:
        return sum(t.size for t in self.teams)

    def to_dict(self) -> dict:
        """Plain-data view; `unassigned_count` is always present, even when 0."""
        return {
            "teams": [
                {
                    "number": t.number,
                    "size": t.size,
                    "members": [_participant_to_dict(m) for m in t.members],
                }
                for t in self.teams
            ],
            "unassigned": [_participant_to_dict(p) for p in self.unassigned],
            "unassigned_count": self.unassigned_count,
            "warnings": list(self.warnings),
        }


def _participant_to_dict(p: Participant) -> dict:
    return {"id": p.id, "attribute": p.attribute, "display_name": p.display_name}
