from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.rate_limit import rate_limit
from inventory.schemas.lease_contract import LeaseContractCreate, LeaseContractResponse, LeaseContractUpdate
from inventory.services import lease_service
from inventory.services.mapping import lease_to_response

router = APIRouter(
    prefix="/lease-contracts",
    tags=["lease-contracts"],
    dependencies=[Depends(rate_limit("general"))],
)


@router.get("", response_model=list[LeaseContractResponse])
async def list_leases(
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return [lease_to_response(lease) for lease in await lease_service.list_leases(db)]


@router.get("/expiring", response_model=list[LeaseContractResponse])
async def list_expiring_leases(
    days_ahead: int = Query(lease_service.DEFAULT_EXPIRING_DAYS, alias="daysAhead"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    leases = await lease_service.list_expiring_leases(db, days_ahead)
    return [lease_to_response(lease) for lease in leases]


@router.get("/by-asset/{asset_id}", response_model=list[LeaseContractResponse])
async def list_leases_for_asset(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    leases = await lease_service.list_leases_for_asset(db, asset_id)
    return [lease_to_response(lease) for lease in leases]


@router.get("/active/{asset_id}", response_model=LeaseContractResponse)
async def get_active_lease(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return lease_to_response(await lease_service.get_active_lease_for_asset(db, asset_id))


@router.get("/{lease_id}", response_model=LeaseContractResponse)
async def get_lease(
    lease_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return lease_to_response(await lease_service.get_lease(db, lease_id))


@router.post("", response_model=LeaseContractResponse, status_code=201)
async def create_lease(
    data: LeaseContractCreate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return lease_to_response(await lease_service.create_lease(db, data))


@router.put("/{lease_id}", response_model=LeaseContractResponse)
async def update_lease(
    lease_id: UUID,
    data: LeaseContractUpdate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return lease_to_response(await lease_service.update_lease(db, lease_id, data))


@router.delete("/{lease_id}", status_code=204)
async def delete_lease(
    lease_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    await lease_service.delete_lease(db, lease_id)
    return Response(status_code=204)
