from enum import Enum


class Role(str, Enum):
    """User roles in the system."""

    ADMIN = "admin"
    DISPATCHER = "dispatcher"
    TECHNICIAN = "technician"
    SALESPERSON = "salesperson"


class CookieNames(str, Enum):
    """Cookie names used in the authentication system."""

    SESSION_TOKEN = "session_token"


class SameSite(str, Enum):
    """SameSite cookie settings."""

    LAX = "lax"
    STRICT = "strict"
    NONE = "none"


class TimeInSeconds(int):
    """Time constants in seconds."""

    ONE_HOUR = 3600
    ONE_DAY = 86400


ACT_AS_USER_HEADER = "X-Act-As-User"
