"""
Pricebook endpoints: categories and the priced items quotes are built from.

Everyone on staff can read the pricebook; only dispatchers and admins edit it.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException

from fieldcrm.auth.dataclasses import EffectiveIdentity
from fieldcrm.auth.dependencies import require_dispatcher, require_staff
from fieldcrm.db.decorators import handle_db_errors
from fieldcrm.db.dependencies import (
    get_pricebook_category_repository,
    get_pricebook_item_repository,
)
from fieldcrm.db.pricebook.repository import (
    PricebookCategoryRepository,
    PricebookItemRepository,
)
from fieldcrm.db.pricebook.schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ItemCreate,
    ItemResponse,
    ItemUpdate,
)

router = APIRouter(prefix="/pricebook", tags=["Pricebook"])


def _not_found(kind: str) -> HTTPException:
    return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=f"{kind} not found")


@router.get("/categories", response_model=list[CategoryResponse])
@handle_db_errors("list pricebook categories")
async def list_categories(
    identity: EffectiveIdentity = Depends(require_staff),
    repository: PricebookCategoryRepository = Depends(get_pricebook_category_repository),
) -> list[CategoryResponse]:
    categories = await repository.list_all()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/categories/{category_id}", response_model=CategoryResponse)
@handle_db_errors("get pricebook category")
async def get_category(
    category_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: PricebookCategoryRepository = Depends(get_pricebook_category_repository),
) -> CategoryResponse:
    category = await repository.get_by_id(category_id)
    if not category:
        raise _not_found("Category")
    return CategoryResponse.model_validate(category)


@router.post(
    "/categories", response_model=CategoryResponse, status_code=HTTPStatus.CREATED
)
@handle_db_errors("create pricebook category")
async def create_category(
    request: CategoryCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookCategoryRepository = Depends(get_pricebook_category_repository),
) -> CategoryResponse:
    category = await repository.create(request)
    await repository.session.commit()
    return CategoryResponse.model_validate(category)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
@handle_db_errors("update pricebook category")
async def update_category(
    category_id: str,
    request: CategoryUpdate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookCategoryRepository = Depends(get_pricebook_category_repository),
) -> CategoryResponse:
    category = await repository.update(category_id, request)
    if not category:
        raise _not_found("Category")
    await repository.session.commit()
    return CategoryResponse.model_validate(category)


@router.delete("/categories/{category_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_db_errors("delete pricebook category")
async def delete_category(
    category_id: str,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookCategoryRepository = Depends(get_pricebook_category_repository),
) -> None:
    if not await repository.delete(category_id):
        raise _not_found("Category")
    await repository.session.commit()


@router.get("/categories/{category_id}/items", response_model=list[ItemResponse])
@handle_db_errors("list pricebook items by category")
async def list_items_by_category(
    category_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> list[ItemResponse]:
    items = await repository.list_items(category_id=category_id)
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/items", response_model=list[ItemResponse])
@handle_db_errors("list pricebook items")
async def list_items(
    category_id: str | None = None,
    active_only: bool = False,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> list[ItemResponse]:
    items = await repository.list_items(category_id=category_id, active_only=active_only)
    return [ItemResponse.model_validate(item) for item in items]


@router.get("/items/{item_id}", response_model=ItemResponse)
@handle_db_errors("get pricebook item")
async def get_item(
    item_id: str,
    identity: EffectiveIdentity = Depends(require_staff),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> ItemResponse:
    item = await repository.get_by_id(item_id)
    if not item:
        raise _not_found("Item")
    return ItemResponse.model_validate(item)


@router.post("/items", response_model=ItemResponse, status_code=HTTPStatus.CREATED)
@handle_db_errors("create pricebook item")
async def create_item(
    request: ItemCreate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> ItemResponse:
    item = await repository.create(request)
    await repository.session.commit()
    return ItemResponse.model_validate(item)


@router.patch("/items/{item_id}", response_model=ItemResponse)
@handle_db_errors("update pricebook item")
async def update_item(
    item_id: str,
    request: ItemUpdate,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> ItemResponse:
    item = await repository.update(item_id, request)
    if not item:
        raise _not_found("Item")
    await repository.session.commit()
    return ItemResponse.model_validate(item)


@router.delete("/items/{item_id}", status_code=HTTPStatus.NO_CONTENT)
@handle_db_errors("delete pricebook item")
async def delete_item(
    item_id: str,
    identity: EffectiveIdentity = Depends(require_dispatcher),
    repository: PricebookItemRepository = Depends(get_pricebook_item_repository),
) -> None:
    if not await repository.delete(item_id):
        raise _not_found("Item")
    await repository.session.commit()
