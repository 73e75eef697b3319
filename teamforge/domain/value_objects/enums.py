"""Domain enums — pure Python, no external dependencies."""

from enum import Enum

# Attribute value used when a participant did not declare one
UNSPECIFIED_ATTRIBUTE = "unspecified"


class DistributionMode(str, Enum):
    ONE_PER_TEAM = "one_per_team"


class FormationStage(str, Enum):
    PLANNING = "planning"
    QUOTA_PASS = "quota_pass"
    REMAINDER_PASS = "remainder_pass"
    VALIDATING = "validating"
    DONE = "done"


class DeliveryStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


class ParticipantStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
