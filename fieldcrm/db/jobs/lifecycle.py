"""
Job status state machine.

Every action maps to exactly one forward edge. ``cancel`` is accepted from any
non-terminal state. ``assign`` may also re-assign a job that is already
assigned but not yet confirmed.
"""

from datetime import datetime

from fieldcrm.db.jobs.constants import JobAction, JobStatus
from fieldcrm.exceptions import InvalidTransitionError

TERMINAL_STATUSES = frozenset({JobStatus.COMPLETED, JobStatus.CANCELLED})

_NON_TERMINAL = frozenset(JobStatus) - TERMINAL_STATUSES

TRANSITIONS: dict[JobAction, tuple[frozenset[JobStatus], JobStatus]] = {
    JobAction.ASSIGN: (
        frozenset({JobStatus.PENDING, JobStatus.ASSIGNED}),
        JobStatus.ASSIGNED,
    ),
    JobAction.CLAIM: (frozenset({JobStatus.PENDING}), JobStatus.ASSIGNED),
    JobAction.CONFIRM: (frozenset({JobStatus.ASSIGNED}), JobStatus.CONFIRMED),
    JobAction.EN_ROUTE: (frozenset({JobStatus.CONFIRMED}), JobStatus.EN_ROUTE),
    JobAction.ARRIVE: (frozenset({JobStatus.EN_ROUTE}), JobStatus.ON_SITE),
    JobAction.START: (frozenset({JobStatus.ON_SITE}), JobStatus.IN_PROGRESS),
    JobAction.COMPLETE: (frozenset({JobStatus.IN_PROGRESS}), JobStatus.COMPLETED),
    JobAction.CANCEL: (_NON_TERMINAL, JobStatus.CANCELLED),
}

TIMESTAMP_FIELDS: dict[JobStatus, str] = {
    JobStatus.ASSIGNED: "assigned_at",
    JobStatus.CONFIRMED: "confirmed_at",
    JobStatus.EN_ROUTE: "en_route_at",
    JobStatus.ON_SITE: "arrived_at",
    JobStatus.IN_PROGRESS: "started_at",
    JobStatus.COMPLETED: "completed_at",
    JobStatus.CANCELLED: "cancelled_at",
}


def next_status(current: str | JobStatus, action: JobAction) -> JobStatus:
    """
    Resolve the status an action leads to.

    Args:
        current: The job's current status
        action: The requested action

    Returns:
        JobStatus: The status after the action

    Raises:
        InvalidTransitionError: If the action is not allowed from ``current``
    """
    current_status = JobStatus(current)
    allowed_from, target = TRANSITIONS[action]
    if current_status not in allowed_from:
        raise InvalidTransitionError("job", current_status.value, target.value)
    return target


def allowed_actions(current: str | JobStatus) -> list[JobAction]:
    """Actions that may be taken from the given status."""
    current_status = JobStatus(current)
    return [
        action
        for action, (allowed_from, _) in TRANSITIONS.items()
        if current_status in allowed_from
    ]


def apply_transition(job, action: JobAction, now: datetime) -> JobStatus:
    """Move ``job`` along ``action`` and stamp the matching timestamp."""
    target = next_status(job.status, action)
    job.status = target.value
    setattr(job, TIMESTAMP_FIELDS[target], now)
    return target
