"""
Import every model so ``Base.metadata`` is complete.

Alembic and relationship resolution both rely on all tables being registered.
"""

from fieldcrm.db.business_intake.model import BusinessIntake
from fieldcrm.db.calls.model import Call
from fieldcrm.db.commissions.model import SalesCommission
from fieldcrm.db.jobs.model import Job, JobTimelineEvent
from fieldcrm.db.leads.model import Lead
from fieldcrm.db.ledger.model import JobLeadFee, JobRevenueEvent
from fieldcrm.db.marketing.model import MarketingCampaign, MarketingSpend
from fieldcrm.db.notifications.model import Notification
from fieldcrm.db.pricebook.model import PricebookCategory, PricebookItem
from fieldcrm.db.quotes.model import Quote
from fieldcrm.db.salespersons.model import Salesperson
from fieldcrm.db.technicians.model import Technician
from fieldcrm.db.users.model import User

__all__ = [
    "BusinessIntake",
    "Call",
    "Job",
    "JobLeadFee",
    "JobRevenueEvent",
    "JobTimelineEvent",
    "Lead",
    "MarketingCampaign",
    "MarketingSpend",
    "Notification",
    "PricebookCategory",
    "PricebookItem",
    "Quote",
    "SalesCommission",
    "Salesperson",
    "Technician",
    "User",
]
