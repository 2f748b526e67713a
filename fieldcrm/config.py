from decimal import Decimal
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "dev"
    STAGING = "staging"
    PRODUCTION = "prod"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current environment (dev, staging, or prod)",
    )
    client_base_url: str = Field(
        default="http://localhost:3000", description="Frontend base URL"
    )

    # Payroll
    lead_fee_per_job: Decimal = Field(
        default=Decimal("125.00"),
        description="Flat lead fee charged against a technician per completed job",
    )
    estimated_tax_rate: Decimal = Field(
        default=Decimal("0.22"), description="Flat estimated tax withholding rate"
    )

    # Technician defaults
    default_hourly_rate: Decimal = Field(
        default=Decimal("25.00"), description="Hourly rate when none is set"
    )
    default_commission_rate: Decimal = Field(
        default=Decimal("0.10"), description="Technician commission rate on revenue"
    )
    default_emergency_rate: Decimal = Field(
        default=Decimal("1.5"), description="Multiplier applied to emergency hours"
    )
    default_salesperson_commission_rate: Decimal = Field(
        default=Decimal("0.15"), description="Salesperson commission rate on net profit"
    )

    # Arrival verification
    arrival_radius_meters: float = Field(
        default=150.0,
        description="Max distance from the job address for a verified arrival",
    )

    # Lead handling
    sla_minutes_urgent: int = Field(default=15, description="SLA for urgent leads")
    sla_minutes_high: int = Field(default=30, description="SLA for high priority leads")
    sla_minutes_default: int = Field(default=60, description="SLA for other leads")
    sla_warning_minutes: int = Field(
        default=5, description="Minutes remaining at which an SLA is flagged as warning"
    )
    service_area_zip_codes: str = Field(
        default=(
            "60601,60602,60603,60604,60605,60606,60607,60608,60609,60610,"
            "60611,60612,60613,60614,60615,60616,60617,60618,60619,60620,"
            "60621,60622,60623,60624,60625,60626,60628,60629,60630,60631,"
            "60632,60633,60634,60636,60637,60638,60639,60640,60641,60642,"
            "60643,60644,60645,60646,60647,60649,60651,60652,60653,60654,"
            "60655,60656,60657,60659,60660,60661"
        ),
        description="Comma-separated zip codes inside the core service area",
    )

    def get_service_area_zip_codes(self) -> set[str]:
        """Get service area zip codes as a set."""
        return {
            code.strip()
            for code in self.service_area_zip_codes.split(",")
            if code.strip()
        }


_app_settings: AppSettings | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def set_app_settings(settings: AppSettings) -> None:
    """Replace the global app settings (used by tests)."""
    global _app_settings
    _app_settings = settings


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url
