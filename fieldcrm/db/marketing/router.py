"""
Marketing campaign and spend endpoints. Admin only.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_admin
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import (
    get_marketing_campaign_repository,
    get_marketing_spend_repository,
)
from fieldcrm.db.marketing.repository import (
    MarketingCampaignRepository,
    MarketingSpendRepository,
)
from fieldcrm.db.marketing.schemas import (
    PERIOD_PATTERN,
    CampaignCreate,
    CampaignResponse,
    CampaignUpdate,
    SpendCreate,
    SpendResponse,
    SpendUpdate,
)

router = APIRouter(prefix="/marketing", tags=["Marketing"])


@router.get("/campaigns", response_model=list[CampaignResponse])
@handle_db_errors("list campaigns")
async def list_campaigns(
    source: str | None = None,
    active_only: bool = False,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingCampaignRepository = Depends(get_marketing_campaign_repository),
) -> list[CampaignResponse]:
    campaigns = await repository.list_campaigns(source=source, active_only=active_only)
    return [CampaignResponse.model_validate(c) for c in campaigns]


@router.get("/campaigns/{campaign_id}", response_model=CampaignResponse)
@handle_db_errors("get campaign")
async def get_campaign(
    campaign_id: str,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingCampaignRepository = Depends(get_marketing_campaign_repository),
) -> CampaignResponse:
    campaign = await repository.get_by_id(campaign_id)
    if not campaign:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Campaign not found")
    return CampaignResponse.model_validate(campaign)


@router.post(
    "/campaigns", response_model=CampaignResponse, status_code=HTTPStatus.CREATED
)
@handle_db_errors("create campaign")
async def create_campaign(
    request: CampaignCreate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingCampaignRepository = Depends(get_marketing_campaign_repository),
) -> CampaignResponse:
    campaign = await repository.create(request)
    await repository.session.commit()
    return CampaignResponse.model_validate(campaign)


@router.patch("/campaigns/{campaign_id}", response_model=CampaignResponse)
@handle_db_errors("update campaign")
async def update_campaign(
    campaign_id: str,
    request: CampaignUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingCampaignRepository = Depends(get_marketing_campaign_repository),
) -> CampaignResponse:
    campaign = await repository.update(campaign_id, request)
    if not campaign:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Campaign not found")
    await repository.session.commit()
    return CampaignResponse.model_validate(campaign)


@router.delete("/campaigns/{campaign_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_db_errors("delete campaign")
async def delete_campaign(
    campaign_id: str,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingCampaignRepository = Depends(get_marketing_campaign_repository),
) -> None:
    if not await repository.delete(campaign_id):
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Campaign not found")
    await repository.session.commit()


@router.get("/spend", response_model=list[SpendResponse])
@handle_db_errors("list marketing spend")
async def list_spend(
    campaign_id: str | None = None,
    period: str | None = Query(None, pattern=PERIOD_PATTERN),
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingSpendRepository = Depends(get_marketing_spend_repository),
) -> list[SpendResponse]:
    records = await repository.list_spend(campaign_id=campaign_id, period=period)
    return [SpendResponse.model_validate(r) for r in records]


@router.post("/spend", response_model=SpendResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("record marketing spend")
async def create_spend(
    request: SpendCreate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingSpendRepository = Depends(get_marketing_spend_repository),
) -> SpendResponse:
    record = await repository.create(request)
    await repository.session.commit()
    return SpendResponse.model_validate(record)


@router.patch("/spend/{spend_id}", response_model=SpendResponse)
@handle_db_errors("update marketing spend")
async def update_spend(
    spend_id: str,
    request: SpendUpdate,
    identity: EffectiveIdentity = Depends(require_admin),
    repository: MarketingSpendRepository = Depends(get_marketing_spend_repository),
) -> SpendResponse:
    record = await repository.update(spend_id, request)
    if not record:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND, detail="Spend record not found"
        )
    await repository.session.commit()
    return SpendResponse.model_validate(record)
