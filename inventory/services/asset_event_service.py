import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser
from inventory.core.exceptions import BadRequestError, NotFoundError
from inventory.models.asset import Asset
from inventory.models.asset_event import AssetEvent, AssetEventType
from inventory.schemas.asset import AssetEventCreate
from inventory.services.mapping import parse_event_type
from inventory.validators.asset_events import asset_event_rules

logger = logging.getLogger(__name__)

DEFAULT_RECENT_COUNT = 50
MAX_RECENT_COUNT = 200


def _performed_by(user: CurrentUser | None) -> tuple[str | None, str | None]:
    if user is None:
        return None, None
    return user.name or user.email or user.oid, user.email


def record_event(
    db: AsyncSession,
    asset: Asset,
    event_type: AssetEventType,
    description: str,
    user: CurrentUser | None = None,
    old_value: str | None = None,
    new_value: str | None = None,
    notes: str | None = None,
) -> AssetEvent:
    performed_by, performed_by_email = _performed_by(user)
    event = AssetEvent(
        asset_id=asset.id,
        event_type=event_type,
        description=description,
        notes=notes,
        old_value=old_value,
        new_value=new_value,
        performed_by=performed_by,
        performed_by_email=performed_by_email,
    )
    db.add(event)
    return event


def record_created(
    db: AsyncSession, asset: Asset, user: CurrentUser | None = None, notes: str | None = None
) -> AssetEvent:
    return record_event(db, asset, AssetEventType.CREATED, f"Asset {asset.asset_code} created", user, notes=notes)


def _location(building: str | None, office_location: str | None) -> str | None:
    parts = [part for part in (building, office_location) if part]
    return " / ".join(parts) or None


def record_changes(db: AsyncSession, asset: Asset, before: dict, user: CurrentUser | None = None) -> list[AssetEvent]:
    """Compare a pre-update snapshot with the asset and log status, owner and location changes."""
    events = []

    if before["status"] != asset.status:
        events.append(record_event(
            db, asset, AssetEventType.STATUS_CHANGED,
            f"Status changed from {before['status'].value} to {asset.status.value}",
            user, before["status"].value, asset.status.value,
        ))

    if before["owner"] != asset.owner:
        events.append(record_event(
            db, asset, AssetEventType.OWNER_CHANGED,
            f"Owner changed from {before['owner'] or '(none)'} to {asset.owner or '(none)'}",
            user, before["owner"], asset.owner,
        ))

    old_location = _location(before["building"], before["office_location"])
    new_location = _location(asset.building, asset.office_location)
    if old_location != new_location:
        events.append(record_event(
            db, asset, AssetEventType.LOCATION_CHANGED,
            f"Location changed from {old_location or '(none)'} to {new_location or '(none)'}",
            user, old_location, new_location,
        ))

    return events


def snapshot(asset: Asset) -> dict:
    return {
        "status": asset.status,
        "owner": asset.owner,
        "building": asset.building,
        "office_location": asset.office_location,
    }


async def list_events_for_asset(db: AsyncSession, asset_id: uuid.UUID) -> list[AssetEvent]:
    stmt = (
        select(AssetEvent)
        .where(AssetEvent.asset_id == asset_id)
        .order_by(AssetEvent.event_date.desc(), AssetEvent.created_at.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_event(db: AsyncSession, event_id: uuid.UUID) -> AssetEvent:
    result = await db.execute(select(AssetEvent).where(AssetEvent.id == event_id))
    event = result.scalar_one_or_none()
    if not event:
        raise NotFoundError(f"Asset event with ID {event_id} not found")
    return event


async def list_recent_events(db: AsyncSession, count: int = DEFAULT_RECENT_COUNT) -> list[AssetEvent]:
    """Newest events across all assets."""
    if count < 1 or count > MAX_RECENT_COUNT:
        raise BadRequestError(f"Count must be between 1 and {MAX_RECENT_COUNT}")
    stmt = (
        select(AssetEvent)
        .order_by(AssetEvent.event_date.desc(), AssetEvent.created_at.desc())
        .limit(count)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_event(db: AsyncSession, data: AssetEventCreate, user: CurrentUser | None = None) -> AssetEvent:
    """Log a manual event (a note, maintenance, lease start or end) against an asset."""
    asset_event_rules.ensure_valid(data)
    event_type = parse_event_type(data.event_type)

    result = await db.execute(select(Asset).where(Asset.id == data.asset_id))
    asset = result.scalar_one_or_none()
    if not asset:
        raise NotFoundError(f"Asset with ID {data.asset_id} not found")

    event = record_event(
        db, asset, event_type, data.description.strip(), user,
        old_value=data.old_value, new_value=data.new_value, notes=data.notes,
    )
    await db.flush()
    await db.refresh(event)
    logger.info("Logged %s event for asset %s", event_type.value, asset.asset_code)
    return event
