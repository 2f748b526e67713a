from enum import Enum


class JobStatus(str, Enum):
    """Lifecycle states of a job."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    CONFIRMED = "confirmed"
    EN_ROUTE = "en_route"
    ON_SITE = "on_site"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class JobAction(str, Enum):
    """Actions that move a job between states."""

    ASSIGN = "assign"
    CLAIM = "claim"
    CONFIRM = "confirm"
    EN_ROUTE = "en-route"
    ARRIVE = "arrive"
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"


class JobPriority(str, Enum):
    """Urgency of a job."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


PRIORITY_ORDER = {
    JobPriority.URGENT.value: 0,
    JobPriority.HIGH.value: 1,
    JobPriority.NORMAL.value: 2,
    JobPriority.LOW.value: 3,
}

EMERGENCY_PRIORITIES = frozenset({JobPriority.URGENT.value, JobPriority.HIGH.value})

DEFAULT_SERVICE_TYPE = "Sewer Service"

MISSING_PHONE = "No phone provided"
