import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldcrm.analytics.router import router as analytics_router
from fieldcrm.auth.router import router as auth_router
from fieldcrm.config import get_client_base_url
from fieldcrm.db.business_intake.router import router as business_intake_router
from fieldcrm.db.calls.router import router as calls_router
from fieldcrm.db.commissions.router import router as commissions_router
from fieldcrm.db.database import close_db
from fieldcrm.db.jobs.router import router as jobs_router
from fieldcrm.db.leads.router import router as leads_router
from fieldcrm.db.ledger.router import lead_fees_router, revenue_events_router
from fieldcrm.db.marketing.router import router as marketing_router
from fieldcrm.db.notifications.router import router as notifications_router
from fieldcrm.db.pricebook.router import router as pricebook_router
from fieldcrm.db.quotes.public_router import router as public_quotes_router
from fieldcrm.db.quotes.router import router as quotes_router
from fieldcrm.db.salespersons.router import router as salespersons_router
from fieldcrm.db.technicians.router import router as technicians_router
from fieldcrm.db.users.router import router as users_router
from fieldcrm.integrations.webhooks.router import router as webhooks_router
from fieldcrm.utils.logger import logger


def get_version():
    """Get version from pyproject.toml"""
    pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
    with open(pyproject_path, "rb") as f:
        data = tomllib.load(f)
    return data["project"]["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("FieldCRM API starting")
    yield
    await close_db()


app = FastAPI(
    title="FieldCRM API",
    description="API for the FieldCRM field-service application",
    version=get_version(),
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_client_base_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(technicians_router, prefix="/api")
app.include_router(salespersons_router, prefix="/api")
app.include_router(leads_router, prefix="/api")
app.include_router(calls_router, prefix="/api")
app.include_router(jobs_router, prefix="/api")
app.include_router(quotes_router, prefix="/api")
app.include_router(public_quotes_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(commissions_router, prefix="/api")
app.include_router(lead_fees_router, prefix="/api")
app.include_router(revenue_events_router, prefix="/api")
app.include_router(pricebook_router, prefix="/api")
app.include_router(marketing_router, prefix="/api")
app.include_router(business_intake_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")
app.include_router(webhooks_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "FieldCRM API is running"}


@app.get("/healthcheck")
async def healthcheck():
    """Health check endpoint."""
    return {"status": "ok", "message": "FieldCRM API is running"}
