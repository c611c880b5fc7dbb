"""
Explicit conversions between request/response schemas and ORM entities.

Each function names every field it copies. Identity and server-managed
fields (ids, asset codes, the dummy flag, timestamps) are only ever set by
the services, never copied from a request.
"""
from inventory.core.exceptions import BadRequestError, MappingError
from inventory.models.asset import Asset, AssetStatus
from inventory.models.asset_event import AssetEvent, AssetEventType
from inventory.models.asset_template import AssetTemplate
from inventory.models.lease_contract import LeaseContract, LeaseStatus
from inventory.schemas.asset import AssetCreate, AssetEventResponse, AssetResponse, AssetUpdate, BulkAssetCreate
from inventory.schemas.asset_template import AssetTemplateCreate, AssetTemplateResponse, AssetTemplateUpdate
from inventory.schemas.lease_contract import LeaseContractCreate, LeaseContractResponse, LeaseContractUpdate

MAX_ALIAS_LENGTH = 200

# Fields a template can pre-fill on an asset request
TEMPLATE_DEFAULT_FIELDS = (
    "asset_name",
    "category",
    "brand",
    "model",
    "owner",
    "building",
    "department",
    "office_location",
    "purchase_date",
    "warranty_expiry",
    "installation_date",
)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_asset_status(value: str | None) -> AssetStatus:
    """Case-insensitive; unknown or missing values fall back to Stock."""
    if value:
        wanted = value.strip().lower()
        for status in AssetStatus:
            if status.value.lower() == wanted or status.name.lower() == wanted:
                return status
    return AssetStatus.STOCK


def parse_lease_status(value: str | None) -> LeaseStatus:
    if value is None:
        return LeaseStatus.ACTIVE
    wanted = value.strip().lower()
    for status in LeaseStatus:
        if status.value.lower() == wanted:
            return status
    raise ValueError(f"Invalid lease status: {value}")


def generate_alias(type_name: str | None, owner: str | None, brand: str | None, model: str | None) -> str | None:
    """`<TypeName>-<Owner>-<Brand>-<Model>`, skipping blank parts and cut to fit the alias column."""
    parts = [_clean(part) for part in (type_name, owner, brand, model)]
    alias = "-".join(part for part in parts if part)
    return alias[:MAX_ALIAS_LENGTH].rstrip(" -") or None


def apply_template_defaults(request: AssetCreate | BulkAssetCreate, template: AssetTemplate) -> None:
    """Fill request fields the client left empty from the template."""
    for name in TEMPLATE_DEFAULT_FIELDS:
        current = getattr(request, name)
        if current is None or (isinstance(current, str) and not current.strip()):
            setattr(request, name, getattr(template, name))


def asset_from_create(request: AssetCreate, asset_code: str, asset_type_id, alias: str | None) -> Asset:
    return Asset(
        asset_code=asset_code,
        asset_name=request.asset_name.strip(),
        alias=_clean(request.alias) or alias,
        category=request.category.strip(),
        is_dummy=request.is_dummy,
        asset_type_id=asset_type_id,
        owner=_clean(request.owner),
        building=_clean(request.building),
        department=_clean(request.department),
        job_title=_clean(request.job_title),
        office_location=_clean(request.office_location),
        status=parse_asset_status(request.status),
        brand=_clean(request.brand),
        model=_clean(request.model),
        serial_number=request.serial_number.strip(),
        purchase_date=request.purchase_date,
        warranty_expiry=request.warranty_expiry,
        installation_date=request.installation_date,
    )


def apply_asset_update(asset: Asset, request: AssetUpdate) -> None:
    asset.asset_name = request.asset_name.strip()
    asset.alias = _clean(request.alias)
    asset.category = request.category.strip()
    asset.owner = _clean(request.owner)
    asset.building = _clean(request.building)
    asset.department = _clean(request.department)
    asset.job_title = _clean(request.job_title)
    asset.office_location = _clean(request.office_location)
    if request.status is not None:
        asset.status = parse_asset_status(request.status)
    asset.brand = _clean(request.brand)
    asset.model = _clean(request.model)
    asset.serial_number = request.serial_number.strip()
    asset.purchase_date = request.purchase_date
    asset.warranty_expiry = request.warranty_expiry
    asset.installation_date = request.installation_date


def parse_event_type(value: str) -> AssetEventType:
    wanted = value.strip().lower()
    for event_type in AssetEventType:
        if event_type.value.lower() == wanted:
            return event_type
    raise BadRequestError(f"Invalid event type: {value}")


def asset_to_response(asset: Asset) -> AssetResponse:
    if asset is None:
        raise MappingError("Cannot map an empty asset")
    asset_type = asset.asset_type
    return AssetResponse(
        id=asset.id,
        asset_code=asset.asset_code,
        asset_name=asset.asset_name,
        alias=asset.alias,
        category=asset.category,
        is_dummy=asset.is_dummy,
        asset_type_id=asset.asset_type_id,
        asset_type_code=asset_type.code if asset_type else None,
        asset_type_name=asset_type.name if asset_type else None,
        owner=asset.owner,
        building=asset.building,
        department=asset.department,
        job_title=asset.job_title,
        office_location=asset.office_location,
        status=asset.status.value,
        brand=asset.brand,
        model=asset.model,
        serial_number=asset.serial_number,
        purchase_date=asset.purchase_date,
        warranty_expiry=asset.warranty_expiry,
        installation_date=asset.installation_date,
        row_version=asset.row_version,
        created_at=asset.created_at,
        updated_at=asset.updated_at,
    )


def event_to_response(event: AssetEvent) -> AssetEventResponse:
    return AssetEventResponse(
        id=event.id,
        asset_id=event.asset_id,
        event_type=event.event_type.value,
        description=event.description,
        notes=event.notes,
        old_value=event.old_value,
        new_value=event.new_value,
        performed_by=event.performed_by,
        performed_by_email=event.performed_by_email,
        event_date=event.event_date,
    )


def template_from_create(request: AssetTemplateCreate) -> AssetTemplate:
    template = AssetTemplate(is_active=True)
    _copy_template_fields(template, request)
    return template


def apply_template_update(template: AssetTemplate, request: AssetTemplateUpdate) -> None:
    _copy_template_fields(template, request)
    if request.is_active is not None:
        template.is_active = request.is_active


def _copy_template_fields(template: AssetTemplate, request: AssetTemplateCreate) -> None:
    template.template_name = request.template_name.strip()
    template.asset_name = _clean(request.asset_name)
    template.category = request.category.strip()
    template.asset_type_id = request.asset_type_id
    template.brand = _clean(request.brand)
    template.model = _clean(request.model)
    template.owner = _clean(request.owner)
    template.building = _clean(request.building)
    template.department = _clean(request.department)
    template.office_location = _clean(request.office_location)
    template.purchase_date = request.purchase_date
    template.warranty_expiry = request.warranty_expiry
    template.installation_date = request.installation_date


def template_to_response(template: AssetTemplate) -> AssetTemplateResponse:
    return AssetTemplateResponse(
        id=template.id,
        template_name=template.template_name,
        asset_name=template.asset_name,
        category=template.category,
        asset_type_id=template.asset_type_id,
        brand=template.brand,
        model=template.model,
        owner=template.owner,
        building=template.building,
        department=template.department,
        office_location=template.office_location,
        purchase_date=template.purchase_date,
        warranty_expiry=template.warranty_expiry,
        installation_date=template.installation_date,
        is_active=template.is_active,
        created_at=template.created_at,
        updated_at=template.updated_at,
    )


def lease_from_create(request: LeaseContractCreate) -> LeaseContract:
    lease = LeaseContract()
    _copy_lease_fields(lease, request)
    lease.status = parse_lease_status(request.status)
    return lease


def apply_lease_update(lease: LeaseContract, request: LeaseContractUpdate) -> None:
    _copy_lease_fields(lease, request)
    if request.status is not None:
        lease.status = parse_lease_status(request.status)


def _copy_lease_fields(lease: LeaseContract, request: LeaseContractCreate) -> None:
    lease.asset_id = request.asset_id
    lease.contract_number = _clean(request.contract_number)
    lease.vendor = _clean(request.vendor)
    lease.start_date = request.start_date
    lease.end_date = request.end_date
    lease.monthly_rate = request.monthly_rate
    lease.total_value = request.total_value
    lease.notes = request.notes
    lease.is_active_override = request.is_active_override


def lease_to_response(lease: LeaseContract) -> LeaseContractResponse:
    return LeaseContractResponse(
        id=lease.id,
        asset_id=lease.asset_id,
        contract_number=lease.contract_number,
        vendor=lease.vendor,
        start_date=lease.start_date,
        end_date=lease.end_date,
        monthly_rate=lease.monthly_rate,
        total_value=lease.total_value,
        status=lease.status.value,
        notes=lease.notes,
        is_active_override=lease.is_active_override,
        is_active=lease.is_active,
        created_at=lease.created_at,
        updated_at=lease.updated_at,
    )
