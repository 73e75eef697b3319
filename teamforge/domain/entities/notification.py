"""Notification entities — what the dispatcher sends and what it reports back."""

from dataclasses import dataclass, field

from teamforge.domain.value_objects.enums import DeliveryStatus


@dataclass(frozen=True)
class TeamNotification:
    recipient_id: str
    team_number: int
    teammate_summaries: tuple[str, ...]
    recipient_name: str = ""
    recipient_email: str | None = None
    recipient_role: str | None = None
    hackathon_title: str = ""


@dataclass(frozen=True)
class DeliveryOutcome:
    recipient_id: str
    status: DeliveryStatus
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == DeliveryStatus.SENT


@dataclass
class DeliveryReport:
    outcomes: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def sent(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return self.total - self.sent

    def failures(self) -> list[DeliveryOutcome]:
        return [o for o in self.outcomes if not o.ok]
