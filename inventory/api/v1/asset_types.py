"""
Asset type management endpoints.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db, require_admin
from inventory.core.rate_limit import rate_limit
from inventory.schemas.asset_type import AssetTypeCreate, AssetTypeResponse, AssetTypeUpdate
from inventory.services import asset_type_service

router = APIRouter(
    prefix="/asset-types",
    tags=["asset-types"],
    dependencies=[Depends(rate_limit("general"))],
)


@router.get("", response_model=list[AssetTypeResponse])
async def list_asset_types(
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await asset_type_service.list_asset_types(db, include_inactive)


@router.get("/{asset_type_id}", response_model=AssetTypeResponse)
async def get_asset_type(
    asset_type_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return await asset_type_service.get_asset_type(db, asset_type_id)


@router.post("", response_model=AssetTypeResponse, status_code=201)
async def create_asset_type(
    data: AssetTypeCreate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    return await asset_type_service.create_asset_type(db, data)


@router.put("/{asset_type_id}", response_model=AssetTypeResponse)
async def update_asset_type(
    asset_type_id: UUID,
    data: AssetTypeUpdate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    return await asset_type_service.update_asset_type(db, asset_type_id, data)


@router.delete("/{asset_type_id}", status_code=204)
async def delete_asset_type(
    asset_type_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_admin),
):
    await asset_type_service.delete_asset_type(db, asset_type_id)
    return Response(status_code=204)
