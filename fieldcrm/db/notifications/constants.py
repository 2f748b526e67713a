from enum import Enum


class NotificationType(str, Enum):
    """Kinds of inbox notifications."""

    JOB_ASSIGNED = "job_assigned"
    JOB_CONFIRMED = "job_confirmed"
    JOB_ARRIVED = "job_arrived"
    JOB_COMPLETED = "job_completed"
    QUOTE_SENT = "quote_sent"
    QUOTE_ACCEPTED = "quote_accepted"
    MESSAGE = "message"
    ALERT = "alert"
    NEW_LEAD = "new_lead"
