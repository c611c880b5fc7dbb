from datetime import date, datetime
from uuid import UUID

from inventory.schemas.common import CamelModel


class AssetTemplateCreate(CamelModel):
    template_name: str | None = None
    asset_name: str | None = None
    category: str | None = None
    asset_type_id: UUID | None = None
    brand: str | None = None
    model: str | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    office_location: str | None = None
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None


class AssetTemplateUpdate(AssetTemplateCreate):
    is_active: bool | None = None


class AssetTemplateResponse(CamelModel):
    id: UUID
    template_name: str
    asset_name: str | None = None
    category: str
    asset_type_id: UUID | None = None
    brand: str | None = None
    model: str | None = None
    owner: str | None = None
    building: str | None = None
    department: str | None = None
    office_location: str | None = None
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    installation_date: date | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
