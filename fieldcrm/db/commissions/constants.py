from enum import Enum


class CommissionStatus(str, Enum):
    """Payment state of a sales commission."""

    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


COMMISSION_TRANSITIONS = {
    CommissionStatus.PENDING: {CommissionStatus.APPROVED},
    CommissionStatus.APPROVED: {CommissionStatus.PAID},
    CommissionStatus.PAID: set(),
}
