from enum import Enum


class LeadStatus(str, Enum):
    """Lifecycle of an inbound lead."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    SCHEDULED = "scheduled"
    CONVERTED = "converted"
    LOST = "lost"
    DUPLICATE = "duplicate"
    SPAM = "spam"


class LeadPriority(str, Enum):
    """Urgency of a lead or job."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class LeadSource(str, Enum):
    """Channels leads arrive through."""

    ELOCAL = "eLocal"
    NETWORX = "Networx"
    ANGI = "Angi"
    HOMEADVISOR = "HomeAdvisor"
    THUMBTACK = "Thumbtack"
    INQUIRLY = "Inquirly"
    ZAPIER = "Zapier"
    DIRECT = "Direct"
    REFERRAL = "Referral"
    WEBSITE = "Website"


class SlaState(str, Enum):
    """Response-time state of a lead."""

    OK = "ok"
    WARNING = "warning"
    BREACHED = "breached"
    CONTACTED = "contacted"


HIGH_VALUE_SERVICES = (
    "Sewer Main - Replace",
    "Sewer Main - Repair",
    "Water Heater - Replace",
    "Pipe Replacement",
)
MEDIUM_VALUE_SERVICES = (
    "Sewer Main - Clear",
    "Water Heater - Repair",
    "Hydro Jetting",
    "Camera Inspection",
    "Ejector Pump",
    "Sump Pump",
)
LOW_VALUE_SERVICES = ("Drain Cleaning", "Toilet Repair", "Faucet Repair")

HIGH_QUALITY_SOURCES = frozenset({"Direct", "Referral", "Website"})
MEDIUM_QUALITY_SOURCES = frozenset({"eLocal", "Networx"})
LOW_QUALITY_SOURCES = frozenset({"Thumbtack", "Angi", "HomeAdvisor", "Inquirly"})
