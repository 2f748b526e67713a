from enum import Enum


class QuoteStatus(str, Enum):
    """Lifecycle of a quote."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


PUBLIC_TOKEN_BYTES = 8
