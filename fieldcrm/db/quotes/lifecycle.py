"""Quote status transitions."""

from fieldcrm.db.quotes.constants import QuoteStatus
from fieldcrm.exceptions import InvalidTransitionError

QUOTE_TRANSITIONS: dict[QuoteStatus, frozenset[QuoteStatus]] = {
    QuoteStatus.DRAFT: frozenset(
        {
            QuoteStatus.SENT,
            QuoteStatus.VIEWED,
            QuoteStatus.ACCEPTED,
            QuoteStatus.DECLINED,
            QuoteStatus.EXPIRED,
        }
    ),
    QuoteStatus.SENT: frozenset(
        {
            QuoteStatus.VIEWED,
            QuoteStatus.ACCEPTED,
            QuoteStatus.DECLINED,
            QuoteStatus.EXPIRED,
        }
    ),
    QuoteStatus.VIEWED: frozenset(
        {QuoteStatus.ACCEPTED, QuoteStatus.DECLINED, QuoteStatus.EXPIRED}
    ),
    QuoteStatus.ACCEPTED: frozenset(),
    QuoteStatus.DECLINED: frozenset(),
    QuoteStatus.EXPIRED: frozenset(),
}

OPEN_STATUSES = frozenset({QuoteStatus.DRAFT, QuoteStatus.SENT, QuoteStatus.VIEWED})


def can_transition(current: str | QuoteStatus, target: str | QuoteStatus) -> bool:
    return QuoteStatus(target) in QUOTE_TRANSITIONS[QuoteStatus(current)]


def ensure_transition(current: str | QuoteStatus, target: str | QuoteStatus) -> QuoteStatus:
    """
    Validate a quote status change.

    Raises:
        InvalidTransitionError: If ``target`` is not reachable from ``current``
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(
            "quote", QuoteStatus(current).value, QuoteStatus(target).value
        )
    return QuoteStatus(target)


def is_open(status: str | QuoteStatus) -> bool:
    return QuoteStatus(status) in OPEN_STATUSES
