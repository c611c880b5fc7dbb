import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.exceptions import ConflictError, NotFoundError
from inventory.models.asset import Asset
from inventory.models.asset_type import DEFAULT_ASSET_TYPES, AssetType
from inventory.schemas.asset_type import AssetTypeCreate, AssetTypeUpdate
from inventory.validators.asset_types import asset_type_create_rules, asset_type_update_rules

logger = logging.getLogger(__name__)


async def list_asset_types(db: AsyncSession, include_inactive: bool = False) -> list[AssetType]:
    stmt = select(AssetType).order_by(AssetType.sort_order, AssetType.code)
    if not include_inactive:
        stmt = stmt.where(AssetType.is_active.is_(True))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_asset_type(db: AsyncSession, asset_type_id: uuid.UUID) -> AssetType:
    result = await db.execute(select(AssetType).where(AssetType.id == asset_type_id))
    record = result.scalar_one_or_none()
    if not record:
        raise NotFoundError(f"Asset type with ID {asset_type_id} not found")
    return record


async def create_asset_type(db: AsyncSession, data: AssetTypeCreate) -> AssetType:
    asset_type_create_rules.ensure_valid(data)
    code = data.code.strip()

    existing = await db.execute(select(AssetType.id).where(AssetType.code == code))
    if existing.first() is not None:
        raise ConflictError(f"Asset type with code {code} already exists")

    record = AssetType(
        code=code,
        name=data.name.strip(),
        description=data.description,
        is_active=data.is_active,
        sort_order=data.sort_order,
    )
    db.add(record)
    await db.flush()
    await db.refresh(record)
    logger.info("Created asset type %s", code)
    return record


async def update_asset_type(db: AsyncSession, asset_type_id: uuid.UUID, data: AssetTypeUpdate) -> AssetType:
    asset_type_update_rules.ensure_valid(data)
    record = await get_asset_type(db, asset_type_id)

    # The code is part of every issued asset code and never changes; nulls leave a field as is
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(record, key, value.strip() if isinstance(value, str) else value)

    await db.flush()
    await db.refresh(record)
    return record


async def delete_asset_type(db: AsyncSession, asset_type_id: uuid.UUID) -> None:
    record = await get_asset_type(db, asset_type_id)
    in_use = await db.execute(select(func.count()).select_from(Asset).where(Asset.asset_type_id == record.id))
    if in_use.scalar():
        raise ConflictError(f"Asset type {record.code} is still used by existing assets")
    await db.delete(record)
    await db.flush()


async def seed_asset_types(db: AsyncSession) -> int:
    """Insert any missing default asset types. Returns the number inserted."""
    result = await db.execute(select(AssetType.code))
    existing = set(result.scalars().all())
    created = 0
    for sort_order, (code, name) in enumerate(DEFAULT_ASSET_TYPES, start=1):
        if code in existing:
            continue
        db.add(AssetType(code=code, name=name, is_active=True, sort_order=sort_order))
        created += 1
    if created:
        await db.flush()
        logger.info("Seeded %d default asset types", created)
    return created
