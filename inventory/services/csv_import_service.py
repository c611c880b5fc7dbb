"""
Asset import from CSV files.

Rows are validated one by one and every row gets its own result, so a file
with a few bad rows still imports the good ones. The header must match
``CSV_HEADERS`` (case-insensitive); blank lines and lines starting with ``#``
are skipped.
"""
import csv
import io
import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser
from inventory.core.exceptions import BadRequestError
from inventory.models.asset import AssetStatus
from inventory.models.asset_type import AssetType
from inventory.schemas.asset import AssetCreate, CsvImportResult, CsvRowResult
from inventory.services import asset_code_service, asset_event_service
from inventory.services.asset_service import serial_number_exists
from inventory.services.mapping import asset_from_create, generate_alias
from inventory.validators.assets import asset_create_rules
from inventory.validators.formats import validate_serial_number

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024

CSV_HEADERS = [
    "SerialNumber",
    "AssetName",
    "Category",
    "AssetTypeCode",
    "Owner",
    "Building",
    "Department",
    "OfficeLocation",
    "Brand",
    "Model",
    "Status",
    "PurchaseDate",
    "WarrantyExpiry",
    "InstallationDate",
    "Notes",
]

TEMPLATE_EXAMPLE_ROW = [
    "ABC123",
    "Laptop IT-001",
    "Computing",
    "LAP",
    "Jan Janssen",
    "Gemeentehuis",
    "ICT",
    "Kantoor 101",
    "Dell",
    "Latitude 5520",
    "Stock",
    "2024-01-15",
    "2027-01-15",
    "2024-02-01",
    "Test import from CSV template",
]

TEMPLATE_NOTES = [
    "CSV Import Template for Djoppie Inventory",
    "",
    "Required columns:",
    "  - SerialNumber: Unique serial number",
    "  - Category: Asset category",
    "  - AssetTypeCode: Code of an active asset type (e.g. LAP, DESK, MON)",
    "",
    "Optional columns:",
    "  - AssetName: Device name (defaults to Brand and Model, or the category)",
    "  - Owner, Building, Department, OfficeLocation, Brand, Model",
    "  - Status: InGebruik, Stock, Herstelling, Defect, UitDienst or Nieuw (default: Stock)",
    "  - PurchaseDate, WarrantyExpiry, InstallationDate: Format yyyy-MM-dd",
    "  - Notes: Stored on the Created event of the asset",
]


@dataclass
class CsvRow:
    row_number: int
    values: dict[str, str | None] = field(default_factory=dict)

    def get(self, column: str) -> str | None:
        return self.values.get(column)


def _cell(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _is_skipped(cells: list[str]) -> bool:
    if not any(cell.strip() for cell in cells):
        return True
    return cells[0].lstrip().startswith("#")


def _check_headers(headers: list[str]) -> None:
    headers = [h.strip() for h in headers]
    if len(headers) != len(CSV_HEADERS):
        raise BadRequestError(
            f"CSV file has {len(headers)} columns, expected {len(CSV_HEADERS)}. "
            f"Expected headers: {', '.join(CSV_HEADERS)}"
        )
    for index, (actual, expected) in enumerate(zip(headers, CSV_HEADERS), start=1):
        if actual.lower() != expected.lower():
            raise BadRequestError(f"CSV header mismatch at column {index}. Expected '{expected}', got '{actual}'")


def parse_csv(content: bytes) -> list[CsvRow]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise BadRequestError("CSV file must be UTF-8 encoded") from e

    reader = csv.reader(io.StringIO(text))
    try:
        header = next((cells for cells in reader if any(cell.strip() for cell in cells)), None)
        if header is None:
            raise BadRequestError("CSV file is empty or has no header row")
        _check_headers(header)

        rows = []
        for cells in reader:
            if _is_skipped(cells):
                continue
            cells = cells + [""] * (len(CSV_HEADERS) - len(cells))
            rows.append(CsvRow(len(rows) + 1, {name: _cell(cells[i]) for i, name in enumerate(CSV_HEADERS)}))
    except csv.Error as e:
        raise BadRequestError(f"CSV file could not be parsed: {e}") from e
    return rows


def _parse_date(row: CsvRow, column: str, errors: list[str]) -> date | None:
    value = row.get(column)
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        errors.append(f"{column} '{value}' is not a valid date. Expected format: yyyy-MM-dd")
        return None


def _is_known_status(value: str) -> bool:
    wanted = value.lower()
    return any(wanted in (status.value.lower(), status.name.lower()) for status in AssetStatus)


def _default_name(row: CsvRow) -> str | None:
    parts = [part for part in (row.get("Brand"), row.get("Model")) if part]
    return " ".join(parts) or row.get("Category")


async def _validate_row(
    db: AsyncSession,
    row: CsvRow,
    asset_types: dict[str, AssetType],
    seen_serials: set[str],
) -> tuple[AssetCreate, AssetType | None, list[str]]:
    errors: list[str] = []
    serial = row.get("SerialNumber")
    type_code = row.get("AssetTypeCode")
    status = row.get("Status")

    request = AssetCreate(
        asset_code_prefix=type_code,
        asset_name=row.get("AssetName") or _default_name(row),
        category=row.get("Category"),
        owner=row.get("Owner"),
        building=row.get("Building"),
        department=row.get("Department"),
        office_location=row.get("OfficeLocation"),
        status=status,
        brand=row.get("Brand"),
        model=row.get("Model"),
        serial_number=serial,
        purchase_date=_parse_date(row, "PurchaseDate", errors),
        warranty_expiry=_parse_date(row, "WarrantyExpiry", errors),
        installation_date=_parse_date(row, "InstallationDate", errors),
    )
    if not type_code:
        errors.append("AssetTypeCode is required")
    errors.extend(
        failure.message for failure in asset_create_rules.validate(request) if failure.field != "assetCodePrefix"
    )

    if serial:
        ok, message = validate_serial_number(serial)
        if not ok:
            errors.append(message)
        elif serial.lower() in seen_serials:
            errors.append(f"SerialNumber '{serial}' is duplicated in this import")
        elif await serial_number_exists(db, serial):
            errors.append(f"SerialNumber '{serial}' already exists in the system")

    asset_type = asset_types.get(type_code.upper()) if type_code else None
    if type_code and asset_type is None:
        errors.append(f"AssetTypeCode '{type_code}' not found")

    if status and not _is_known_status(status):
        valid = ", ".join(s.value for s in AssetStatus)
        errors.append(f"Invalid Status '{status}'. Valid values: {valid}")

    return request, asset_type, errors


async def import_assets(db: AsyncSession, content: bytes, user: CurrentUser | None = None) -> CsvImportResult:
    rows = parse_csv(content)

    result = await db.execute(select(AssetType).where(AssetType.is_active.is_(True)))
    asset_types = {asset_type.code.upper(): asset_type for asset_type in result.scalars().all()}
    seen_serials: set[str] = set()
    results: list[CsvRowResult] = []

    for row in rows:
        request, asset_type, errors = await _validate_row(db, row, asset_types, seen_serials)
        if errors:
            results.append(
                CsvRowResult(
                    row_number=row.row_number, success=False, serial_number=row.get("SerialNumber"), errors=errors
                )
            )
            continue

        # Imported assets keep the year they were bought or installed in their code
        known_date = request.purchase_date or request.installation_date
        code = await asset_code_service.generate_code(
            db, asset_type.code, request.brand, False, year=known_date.year if known_date else None
        )
        alias = generate_alias(asset_type.name, request.owner, request.brand, request.model)
        asset = asset_from_create(request, code, asset_type.id, alias)
        asset.asset_type = asset_type
        db.add(asset)
        await db.flush()
        asset_event_service.record_created(db, asset, user, notes=row.get("Notes"))
        await db.flush()

        seen_serials.add(asset.serial_number.lower())
        logger.info(
            "CSV import: created %s for serial %s (row %d)", asset.asset_code, asset.serial_number, row.row_number
        )
        results.append(
            CsvRowResult(
                row_number=row.row_number, success=True, asset_code=asset.asset_code, serial_number=asset.serial_number
            )
        )

    success_count = sum(1 for r in results if r.success)
    error_count = len(results) - success_count
    logger.info("CSV import finished: %d imported, %d failed of %d rows", success_count, error_count, len(rows))
    return CsvImportResult(
        total_rows=len(rows),
        success_count=success_count,
        error_count=error_count,
        results=results,
        is_fully_successful=error_count == 0 and success_count == len(rows),
    )


def build_template() -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerow(TEMPLATE_EXAMPLE_ROW)
    buffer.write("\n")
    for line in TEMPLATE_NOTES:
        buffer.write(f"# {line}".rstrip() + "\n")
    return buffer.getvalue().encode("utf-8")
