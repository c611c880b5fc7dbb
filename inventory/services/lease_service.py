import logging
import uuid
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.exceptions import BadRequestError, NotFoundError
from inventory.db.base import utcnow
from inventory.models.asset import Asset
from inventory.models.lease_contract import OPEN_LEASE_STATUSES, LeaseContract
from inventory.schemas.lease_contract import LeaseContractCreate, LeaseContractUpdate
from inventory.services.mapping import apply_lease_update, lease_from_create
from inventory.validators.leases import lease_contract_rules

logger = logging.getLogger(__name__)

DEFAULT_EXPIRING_DAYS = 90
MAX_EXPIRING_DAYS = 365


async def list_leases(db: AsyncSession) -> list[LeaseContract]:
    result = await db.execute(select(LeaseContract).order_by(LeaseContract.end_date))
    return list(result.scalars().all())


async def get_lease(db: AsyncSession, lease_id: uuid.UUID) -> LeaseContract:
    result = await db.execute(select(LeaseContract).where(LeaseContract.id == lease_id))
    lease = result.scalar_one_or_none()
    if not lease:
        raise NotFoundError(f"Lease contract with ID {lease_id} not found")
    return lease


async def list_leases_for_asset(db: AsyncSession, asset_id: uuid.UUID) -> list[LeaseContract]:
    stmt = (
        select(LeaseContract)
        .where(LeaseContract.asset_id == asset_id)
        .order_by(LeaseContract.start_date.desc())
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_active_lease_for_asset(db: AsyncSession, asset_id: uuid.UUID) -> LeaseContract:
    today = utcnow().date()
    for lease in await list_leases_for_asset(db, asset_id):
        if lease.is_active_on(today):
            return lease
    raise NotFoundError(f"No active lease contract found for asset {asset_id}")


async def list_expiring_leases(db: AsyncSession, days_ahead: int = DEFAULT_EXPIRING_DAYS) -> list[LeaseContract]:
    if days_ahead < 1 or days_ahead > MAX_EXPIRING_DAYS:
        raise BadRequestError(f"daysAhead must be between 1 and {MAX_EXPIRING_DAYS}")
    today = utcnow().date()
    stmt = (
        select(LeaseContract)
        .where(
            LeaseContract.status.in_(OPEN_LEASE_STATUSES),
            LeaseContract.end_date >= today,
            LeaseContract.end_date <= today + timedelta(days=days_ahead),
        )
        .order_by(LeaseContract.end_date)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _ensure_asset_exists(db: AsyncSession, asset_id: uuid.UUID | None) -> None:
    if asset_id is None:
        return
    result = await db.execute(select(Asset.id).where(Asset.id == asset_id))
    if result.first() is None:
        raise NotFoundError(f"Asset with ID {asset_id} not found")


async def create_lease(db: AsyncSession, data: LeaseContractCreate) -> LeaseContract:
    lease_contract_rules.ensure_valid(data)
    await _ensure_asset_exists(db, data.asset_id)
    lease = lease_from_create(data)
    db.add(lease)
    await db.flush()
    await db.refresh(lease)
    logger.info("Created lease contract %s for asset %s", lease.id, lease.asset_id)
    return lease


async def update_lease(db: AsyncSession, lease_id: uuid.UUID, data: LeaseContractUpdate) -> LeaseContract:
    lease_contract_rules.ensure_valid(data)
    lease = await get_lease(db, lease_id)
    await _ensure_asset_exists(db, data.asset_id)
    apply_lease_update(lease, data)
    await db.flush()
    await db.refresh(lease)
    return lease


async def delete_lease(db: AsyncSession, lease_id: uuid.UUID) -> None:
    lease = await get_lease(db, lease_id)
    await db.delete(lease)
    await db.flush()
    logger.info("Deleted lease contract %s", lease_id)
