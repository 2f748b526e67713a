"""
Quote endpoints for staff: CRUD, public link generation and email delivery.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_staff
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.quotes.dependencies import get_quote_service
from fieldcrm.db.quotes.schemas import (
    GenerateLinkResponse,
    QuoteCreate,
    QuoteResponse,
    QuoteUpdate,
    ResendEmailResponse,
)
from fieldcrm.db.quotes.service import QuoteService, public_quote_path
from fieldcrm.integrations.email.client import ResendClient
from fieldcrm.integrations.email.dependencies import get_email_client

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.get("", response_model=list[QuoteResponse])
@handle_db_errors("list quotes")
async def list_quotes(
    job_id: str | None = None,
    status: str | None = None,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
) -> list[QuoteResponse]:
    quotes = await service.quotes.list_quotes(job_id=job_id, status=status)
    return [QuoteResponse.model_validate(quote) for quote in quotes]


@router.get("/{quote_id}", response_model=QuoteResponse)
@handle_db_errors("get quote")
async def get_quote(
    quote_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    quote = await service.get_quote(quote_id)
    return QuoteResponse.model_validate(quote)


@router.post("", response_model=QuoteResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create quote")
async def create_quote(
    request: QuoteCreate,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    quote = await service.create_quote(request)
    await service.session.commit()
    return QuoteResponse.model_validate(quote)


@router.patch("/{quote_id}", response_model=QuoteResponse)
@handle_db_errors("update quote")
async def update_quote(
    quote_id: str,
    request: QuoteUpdate,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    """
    Update a quote.

    Totals are recomputed from line items and labor entries. Moving the quote
    to ``accepted`` creates a pending job unless it is already linked to an
    active one.
    """
    result = await service.update_quote(quote_id, request)
    await service.session.commit()
    return QuoteResponse.model_validate(result.quote)


@router.delete("/{quote_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_db_errors("delete quote")
async def delete_quote(
    quote_id: str,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    service: QuoteService = Depends(get_quote_service),
) -> None:
    await service.delete_quote(quote_id)
    await service.session.commit()


@router.post("/{quote_id}/generate-link", response_model=GenerateLinkResponse)
@handle_db_errors("generate quote link")
async def generate_link(
    quote_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
) -> GenerateLinkResponse:
    quote = await service.generate_link(quote_id)
    await service.session.commit()
    return GenerateLinkResponse(
        token=quote.public_token,
        public_url=public_quote_path(quote.public_token),
        quote=QuoteResponse.model_validate(quote),
    )


@router.post("/{quote_id}/resend-email", response_model=ResendEmailResponse)
@handle_db_errors("send quote email")
async def resend_email(
    quote_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    service: QuoteService = Depends(get_quote_service),
    email_client: ResendClient = Depends(get_email_client),
) -> ResendEmailResponse:
    try:
        quote, message_id = await service.resend_email(quote_id, email_client)
    finally:
        await email_client.close()
    await service.session.commit()
    return ResendEmailResponse(
        success=True, message_id=message_id, quote=QuoteResponse.model_validate(quote)
    )
