"""
Unauthenticated quote endpoints reached through the customer's public link.
"""

from fastapi import APIRouter, Depends

from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.jobs.schemas import JobResponse
from fieldcrm.db.quotes.dependencies import get_quote_service
from fieldcrm.db.quotes.schemas import (
    QuoteAcceptance,
    QuoteResponse,
    QuoteWithJobResponse,
)
from fieldcrm.db.quotes.service import QuoteService

router = APIRouter(prefix="/public/quote", tags=["Public Quotes"])


@router.get("/{token}", response_model=QuoteResponse)
@handle_db_errors("get public quote")
async def get_public_quote(
    token: str,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    """Show a quote to the customer. The first view marks it as viewed."""
    quote = await service.get_public(token)
    await service.session.commit()
    return QuoteResponse.model_validate(quote)


@router.post("/{token}/accept", response_model=QuoteWithJobResponse)
@handle_db_errors("accept quote")
async def accept_quote(
    token: str,
    request: QuoteAcceptance,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteWithJobResponse:
    """
    Accept a quote with the customer's contact consent.

    An opt-in without its ownership confirmation is rejected with 422. An
    expired or closed quote is rejected with 400.
    """
    result = await service.accept_public(token, request)
    await service.session.commit()
    return QuoteWithJobResponse(
        quote=QuoteResponse.model_validate(result.quote),
        job=JobResponse.model_validate(result.job) if result.job else None,
    )


@router.post("/{token}/decline", response_model=QuoteResponse)
@handle_db_errors("decline quote")
async def decline_quote(
    token: str,
    service: QuoteService = Depends(get_quote_service),
) -> QuoteResponse:
    quote = await service.decline_public(token)
    await service.session.commit()
    return QuoteResponse.model_validate(quote)
