from enum import Enum


class TechnicianStatus(str, Enum):
    """Availability of a technician."""

    AVAILABLE = "available"
    BUSY = "busy"
    OFF_DUTY = "off_duty"
    ON_BREAK = "on_break"


class TechnicianClassification(str, Enum):
    """Seniority tier of a technician."""

    SENIOR = "senior"
    JUNIOR = "junior"
    DIGGER = "digger"
