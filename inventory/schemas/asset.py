from datetime import date, datetime
from uuid import UUID

from inventory.schemas.common import CamelModel


class AssetCreate(CamelModel):
    asset_code_prefix: str | None = None
    asset_name: str | None = None
    alias: str | None = None
    category: str | None = None
    is_dummy: bool = False
    template_id: UUID | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    job_title: str | None = None
    office_location: str | None = None
    status: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None


class AssetUpdate(CamelModel):
    asset_name: str | None = None
    alias: str | None = None
    category: str | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    job_title: str | None = None
    office_location: str | None = None
    status: str | None = None
    brand: str | None = None
    model: str | None = None
    serial_number: str | None = None
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None
    row_version: int | None = None


class BulkAssetCreate(CamelModel):
    asset_code_prefix: str | None = None
    asset_name: str | None = None
    category: str | None = None
    serial_number_prefix: str | None = None
    quantity: int | None = None
    alias: str | None = None
    is_dummy: bool = False
    template_id: UUID | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    job_title: str | None = None
    office_location: str | None = None
    status: str | None = None
    brand: str | None = None
    model: str | None = None
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None


class AssetResponse(CamelModel):
    id: UUID
    asset_code: str
    asset_name: str
    alias: str | None = None
    category: str
    is_dummy: bool
    asset_type_id: UUID | None = None
    asset_type_code: str | None = None
    asset_type_name: str | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    job_title: str | None = None
    office_location: str | None = None
    status: str
    brand: str | None = None
    model: str | None = None
    serial_number: str
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None
    row_version: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BulkCreateResult(CamelModel):
    total_requested: int
    successfully_created: int
    failed: int
    created_assets: list[AssetResponse]
    errors: list[str]
    is_fully_successful: bool


class AssetEventCreate(CamelModel):
    asset_id: UUID
    event_type: str | None = None
    description: str | None = None
    notes: str | None = None
    old_value: str | None = None
    new_value: str | None = None


class AssetEventResponse(CamelModel):
    id: UUID
    asset_id: UUID
    event_type: str
    description: str
    notes: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    performed_by: str | None = None
    performed_by_email: str | None = None
    event_date: datetime


class NextCodeResponse(CamelModel):
    asset_code: str


class ExistsResponse(CamelModel):
    exists: bool


class CsvRowResult(CamelModel):
    row_number: int
    success: bool
    asset_code: str | None = None
    serial_number: str | None = None
    errors: list[str] = []


class CsvImportResult(CamelModel):
    total_rows: int
    success_count: int
    error_count: int
    results: list[CsvRowResult]
    is_fully_successful: bool
