"""Pydantic schemas for the Resend email API."""

from pydantic import BaseModel, Field


class SendEmailRequest(BaseModel):
    """Request body for sending one email."""

    from_address: str = Field(..., serialization_alias="from")
    to: list[str] = Field(..., min_length=1)
    subject: str
    html: str
    text: str | None = None
    reply_to: str | None = None


class SendEmailResponse(BaseModel):
    """Resend's acknowledgement of an accepted email."""

    id: str = Field(..., description="Resend message id")
