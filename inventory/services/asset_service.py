import logging
import uuid

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser
from inventory.core.exceptions import BadRequestError, ConcurrencyError, ConflictError, NotFoundError
from inventory.models.asset import Asset
from inventory.models.asset_template import AssetTemplate
from inventory.models.asset_type import AssetType
from inventory.models.lease_contract import LeaseContract
from inventory.schemas.asset import (
    AssetCreate,
    AssetUpdate,
    BulkAssetCreate,
    BulkCreateResult,
)
from inventory.services import asset_code_service, asset_event_service
from inventory.services.mapping import (
    apply_asset_update,
    apply_template_defaults,
    asset_from_create,
    asset_to_response,
    generate_alias,
    parse_asset_status,
)
from inventory.validators.assets import asset_create_rules, asset_update_rules, bulk_asset_create_rules
from inventory.validators.formats import (
    validate_asset_code,
    validate_prefix,
    validate_search_term,
    validate_serial_number,
)

logger = logging.getLogger(__name__)

SEARCH_MAX_LENGTH = 100
SEARCH_RESULT_LIMIT = 100


def _ensure(result: tuple[bool, str | None]) -> None:
    ok, message = result
    if not ok:
        raise BadRequestError(message)


def _contains_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def get_asset(db: AsyncSession, asset_id: uuid.UUID) -> Asset:
    result = await db.execute(select(Asset).where(Asset.id == asset_id))
    asset = result.scalar_one_or_none()
    if not asset:
        raise NotFoundError(f"Asset with ID {asset_id} not found")
    return asset


async def list_assets(
    db: AsyncSession,
    status: str | None = None,
    page_number: int = 1,
    page_size: int = 50,
) -> tuple[list[Asset], int]:
    stmt = select(Asset)
    count_stmt = select(func.count()).select_from(Asset)
    if status:
        parsed = parse_asset_status(status)
        stmt = stmt.where(Asset.status == parsed)
        count_stmt = count_stmt.where(Asset.status == parsed)

    total = (await db.execute(count_stmt)).scalar() or 0
    stmt = stmt.order_by(Asset.asset_code).offset((page_number - 1) * page_size).limit(page_size)
    result = await db.execute(stmt)
    return list(result.scalars().all()), total


async def list_all_assets(db: AsyncSession) -> list[Asset]:
    result = await db.execute(select(Asset).order_by(Asset.asset_code))
    return list(result.scalars().all())


async def search_assets(db: AsyncSession, term: str) -> list[Asset]:
    _ensure(validate_search_term(term, SEARCH_MAX_LENGTH))
    pattern = _contains_pattern(term.strip().lower())
    stmt = (
        select(Asset)
        .where(
            or_(
                func.lower(Asset.asset_code).like(pattern, escape="\\"),
                func.lower(Asset.asset_name).like(pattern, escape="\\"),
                func.lower(Asset.serial_number).like(pattern, escape="\\"),
                func.lower(Asset.alias).like(pattern, escape="\\"),
                func.lower(Asset.owner).like(pattern, escape="\\"),
            )
        )
        .order_by(Asset.asset_code)
        .limit(SEARCH_RESULT_LIMIT)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_asset_by_code(db: AsyncSession, code: str) -> Asset:
    _ensure(validate_asset_code(code))
    result = await db.execute(select(Asset).where(func.upper(Asset.asset_code) == code.strip().upper()))
    asset = result.scalar_one_or_none()
    if not asset:
        raise NotFoundError(f"Asset with code {code} not found")
    return asset


async def get_asset_by_serial(db: AsyncSession, serial_number: str) -> Asset:
    _ensure(validate_serial_number(serial_number))
    result = await db.execute(select(Asset).where(Asset.serial_number == serial_number.strip()))
    asset = result.scalar_one_or_none()
    if not asset:
        raise NotFoundError(f"Asset with serial number {serial_number} not found")
    return asset


async def asset_code_exists(db: AsyncSession, code: str) -> bool:
    _ensure(validate_asset_code(code))
    result = await db.execute(select(Asset.id).where(func.upper(Asset.asset_code) == code.strip().upper()))
    return result.first() is not None


async def serial_number_exists(
    db: AsyncSession, serial_number: str | None, exclude_asset_id: uuid.UUID | None = None
) -> bool:
    if not serial_number or not serial_number.strip():
        return False
    stmt = select(Asset.id).where(Asset.serial_number == serial_number.strip())
    if exclude_asset_id is not None:
        stmt = stmt.where(Asset.id != exclude_asset_id)
    result = await db.execute(stmt)
    return result.first() is not None


async def _get_asset_type(db: AsyncSession, code: str | None) -> AssetType:
    _ensure(validate_prefix(code))
    result = await db.execute(select(AssetType).where(AssetType.code == code))
    asset_type = result.scalar_one_or_none()
    if not asset_type:
        raise BadRequestError(f"Unknown asset type code: {code}")
    if not asset_type.is_active:
        raise BadRequestError(f"Asset type {code} is not active")
    return asset_type


async def _apply_template(db: AsyncSession, request: AssetCreate | BulkAssetCreate) -> None:
    if request.template_id is None:
        return
    result = await db.execute(select(AssetTemplate).where(AssetTemplate.id == request.template_id))
    template = result.scalar_one_or_none()
    if not template:
        raise NotFoundError(f"Asset template with ID {request.template_id} not found")
    apply_template_defaults(request, template)


async def preview_next_code(db: AsyncSession, prefix: str, brand: str | None, is_dummy: bool) -> str:
    asset_type = await _get_asset_type(db, prefix)
    return await asset_code_service.generate_code(db, asset_type.code, brand, is_dummy)


async def create_asset(db: AsyncSession, data: AssetCreate, user: CurrentUser | None = None) -> Asset:
    await _apply_template(db, data)
    asset_create_rules.ensure_valid(data)
    _ensure(validate_serial_number(data.serial_number))

    asset_type = await _get_asset_type(db, data.asset_code_prefix)

    if await serial_number_exists(db, data.serial_number):
        raise ConflictError(f"An asset with serial number {data.serial_number.strip()} already exists")

    code = await asset_code_service.generate_code(db, asset_type.code, data.brand, data.is_dummy)
    alias = generate_alias(asset_type.name, data.owner, data.brand, data.model)
    asset = asset_from_create(data, code, asset_type.id, alias)
    asset.asset_type = asset_type

    db.add(asset)
    await db.flush()
    asset_event_service.record_created(db, asset, user)
    await db.flush()
    await db.refresh(asset)

    logger.info("Created asset %s (%s)", asset.asset_code, asset.id)
    return asset


async def update_asset(
    db: AsyncSession, asset_id: uuid.UUID, data: AssetUpdate, user: CurrentUser | None = None
) -> Asset:
    asset_update_rules.ensure_valid(data)
    _ensure(validate_serial_number(data.serial_number))

    asset = await get_asset(db, asset_id)
    if data.row_version is not None and data.row_version != asset.row_version:
        logger.warning(
            "Stale update for asset %s: client version %s, current %s",
            asset_id, data.row_version, asset.row_version,
        )
        raise ConcurrencyError()

    if await serial_number_exists(db, data.serial_number, exclude_asset_id=asset.id):
        raise ConflictError(f"An asset with serial number {data.serial_number.strip()} already exists")

    before = asset_event_service.snapshot(asset)
    apply_asset_update(asset, data)
    if not asset.alias:
        type_name = asset.asset_type.name if asset.asset_type else None
        asset.alias = generate_alias(type_name, asset.owner, asset.brand, asset.model)
    asset_event_service.record_changes(db, asset, before, user)

    await db.flush()
    await db.refresh(asset)

    logger.info("Updated asset %s (%s)", asset.asset_code, asset.id)
    return asset


async def delete_asset(db: AsyncSession, asset_id: uuid.UUID) -> None:
    asset = await get_asset(db, asset_id)
    # Lease contracts outlive the asset they covered
    await db.execute(update(LeaseContract).where(LeaseContract.asset_id == asset_id).values(asset_id=None))
    await db.delete(asset)
    await db.flush()
    logger.info("Deleted asset %s (%s)", asset.asset_code, asset_id)


async def bulk_create_assets(db: AsyncSession, data: BulkAssetCreate, user: CurrentUser | None = None) -> BulkCreateResult:
    """Create ``quantity`` assets with sequential codes. All are created or none."""
    await _apply_template(db, data)
    bulk_asset_create_rules.ensure_valid(data)

    asset_type = await _get_asset_type(db, data.asset_code_prefix)
    serial_prefix = data.serial_number_prefix.strip()
    serials = [f"{serial_prefix}-{i + 1:04d}" for i in range(data.quantity)]

    _ensure(validate_serial_number(serials[-1]))

    result = await db.execute(select(Asset.serial_number).where(Asset.serial_number.in_(serials)))
    taken = sorted(result.scalars().all())
    if taken:
        raise ConflictError(f"Serial numbers already in use: {', '.join(taken)}")

    codes = await asset_code_service.generate_codes(db, asset_type.code, data.brand, data.is_dummy, data.quantity)
    status = parse_asset_status(data.status)
    alias = data.alias.strip() if data.alias and data.alias.strip() else generate_alias(
        asset_type.name, data.owner, data.brand, data.model
    )

    assets = []
    for code, serial in zip(codes, serials):
        asset = Asset(
            asset_code=code,
            asset_name=data.asset_name.strip(),
            alias=alias,
            category=data.category.strip(),
            is_dummy=data.is_dummy,
            asset_type_id=asset_type.id,
            owner=data.owner,
            building=data.building,
            department=data.department,
            job_title=data.job_title,
            office_location=data.office_location,
            status=status,
            brand=data.brand,
            model=data.model,
            serial_number=serial,
            purchase_date=data.purchase_date,
            warranty_expiry=data.warranty_expiry,
            installation_date=data.installation_date,
        )
        asset.asset_type = asset_type
        assets.append(asset)

    db.add_all(assets)
    try:
        await db.flush()
    except Exception:
        logger.error("Bulk asset creation failed, rolling back %d asset(s)", len(assets), exc_info=True)
        raise

    for asset in assets:
        asset_event_service.record_created(db, asset, user)
    await db.flush()

    logger.info(
        "Bulk asset creation completed: %d of %d (dummy=%s)", len(assets), data.quantity, data.is_dummy,
    )
    return BulkCreateResult(
        total_requested=data.quantity,
        successfully_created=len(assets),
        failed=0,
        created_assets=[asset_to_response(asset) for asset in assets],
        errors=[],
        is_fully_successful=True,
    )

