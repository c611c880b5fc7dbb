"""
Asset history across assets: recent activity, single events and manually logged events.
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.rate_limit import rate_limit
from inventory.schemas.asset import AssetEventCreate, AssetEventResponse
from inventory.services import asset_event_service, asset_service
from inventory.services.mapping import event_to_response

router = APIRouter(
    prefix="/asset-events",
    tags=["asset-events"],
    dependencies=[Depends(rate_limit("general"))],
)


@router.get("/recent", response_model=list[AssetEventResponse])
async def list_recent_events(
    count: int = Query(asset_event_service.DEFAULT_RECENT_COUNT),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return [event_to_response(e) for e in await asset_event_service.list_recent_events(db, count)]


@router.get("/by-asset/{asset_id}", response_model=list[AssetEventResponse])
async def list_events_for_asset(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    await asset_service.get_asset(db, asset_id)
    events = await asset_event_service.list_events_for_asset(db, asset_id)
    return [event_to_response(e) for e in events]


@router.get("/{event_id}", response_model=AssetEventResponse)
async def get_event(
    event_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return event_to_response(await asset_event_service.get_event(db, event_id))


@router.post("", response_model=AssetEventResponse, status_code=201)
async def create_event(
    data: AssetEventCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return event_to_response(await asset_event_service.create_event(db, data, user))
