"""Port interface for per-hackathon settings."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class HackathonSettings:
    """Raw settings as stored; `team_formation` is parsed at the boundary."""

    hackathon_id: str
    title: str
    team_formation: dict | None = None
    email_notifications: dict = field(default_factory=dict)

    @property
    def team_formation_emails_enabled(self) -> bool:
        return self.email_notifications.get("teamFormation") is not False


class HackathonSettingsRepository(ABC):
    @abstractmethod
    async def get_settings(self, hackathon_id: str) -> HackathonSettings | None:
        ...

    @abstractmethod
    async def save_team_formation_settings(self, hackathon_id: str, blob: dict) -> None:
        ...
