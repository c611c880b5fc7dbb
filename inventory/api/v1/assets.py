"""
Asset endpoints.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.rate_limit import rate_limit
from inventory.schemas.asset import (
    AssetCreate,
    AssetEventResponse,
    AssetResponse,
    AssetUpdate,
    ExistsResponse,
    NextCodeResponse,
)
from inventory.schemas.common import PagedResponse
from inventory.services import asset_event_service, asset_service
from inventory.services.mapping import asset_to_response, event_to_response

router = APIRouter(
    prefix="/assets",
    tags=["assets"],
    dependencies=[Depends(rate_limit("general"))],
)


@router.get("", response_model=PagedResponse[AssetResponse])
async def list_assets(
    status: str | None = Query(None),
    page_number: int = Query(1, ge=1, alias="pageNumber"),
    page_size: int = Query(50, ge=1, le=200, alias="pageSize"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    assets, total = await asset_service.list_assets(db, status, page_number, page_size)
    return PagedResponse[AssetResponse].build(
        [asset_to_response(a) for a in assets], total, page_number, page_size
    )


@router.get("/all", response_model=list[AssetResponse])
async def list_all_assets(
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return [asset_to_response(a) for a in await asset_service.list_all_assets(db)]


@router.get("/search", response_model=list[AssetResponse])
async def search_assets(
    q: str = Query(""),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return [asset_to_response(a) for a in await asset_service.search_assets(db, q)]


@router.get("/next-code", response_model=NextCodeResponse)
async def preview_next_code(
    prefix: str = Query(""),
    brand: str | None = Query(None),
    is_dummy: bool = Query(False, alias="isDummy"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    code = await asset_service.preview_next_code(db, prefix, brand, is_dummy)
    return NextCodeResponse(asset_code=code)


@router.get("/code-exists", response_model=ExistsResponse)
async def asset_code_exists(
    code: str = Query(""),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return ExistsResponse(exists=await asset_service.asset_code_exists(db, code))


@router.get("/serial-exists", response_model=ExistsResponse)
async def serial_number_exists(
    serial_number: str = Query("", alias="serialNumber"),
    exclude_asset_id: UUID | None = Query(None, alias="excludeAssetId"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    exists = await asset_service.serial_number_exists(db, serial_number, exclude_asset_id)
    return ExistsResponse(exists=exists)


@router.get("/by-code/{code}", response_model=AssetResponse)
async def get_asset_by_code(
    code: str,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return asset_to_response(await asset_service.get_asset_by_code(db, code))


@router.get("/by-serial/{serial_number}", response_model=AssetResponse)
async def get_asset_by_serial(
    serial_number: str,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return asset_to_response(await asset_service.get_asset_by_serial(db, serial_number))


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return asset_to_response(await asset_service.get_asset(db, asset_id))


@router.get("/{asset_id}/events", response_model=list[AssetEventResponse])
async def list_asset_events(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    await asset_service.get_asset(db, asset_id)
    events = await asset_event_service.list_events_for_asset(db, asset_id)
    return [event_to_response(e) for e in events]


@router.post("", response_model=AssetResponse, status_code=201)
async def create_asset(
    data: AssetCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return asset_to_response(await asset_service.create_asset(db, data, user))


@router.put("/{asset_id}", response_model=AssetResponse)
async def update_asset(
    asset_id: UUID,
    data: AssetUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return asset_to_response(await asset_service.update_asset(db, asset_id, data, user))


@router.delete("/{asset_id}", status_code=204)
async def delete_asset(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    await asset_service.delete_asset(db, asset_id)
    return Response(status_code=204)
