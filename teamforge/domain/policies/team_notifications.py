"""TeamNotificationPolicy — one notification per member of every final team."""

from __future__ import annotations

from collections.abc import Iterable

from teamforge.domain.entities.notification import TeamNotification
from teamforge.domain.entities.team import Team
from teamforge.domain.value_objects.enums import UNSPECIFIED_ATTRIBUTE


def build_team_notifications(
    teams: Iterable[Team],
    hackathon_title: str = "",
) -> list[TeamNotification]:
    """Build notifications in team order, then member order.

    `teammate_summaries` lists the whole team (recipient included) as
    "Name - role" lines, in assignment order.
    """
    notifications: list[TeamNotification] = []
    for team in teams:
        summaries = tuple(m.summary() for m in team.members)
        for member in team.members:
            role = member.attribute if member.attribute != UNSPECIFIED_ATTRIBUTE else None
            notifications.append(
                TeamNotification(
                    recipient_id=member.id,
                    team_number=team.number,
                    teammate_summaries=summaries,
                    recipient_name=member.display_name,
                    recipient_email=member.email,
                    recipient_role=role,
                    hackathon_title=hackathon_title,
                )
            )
    return notifications
