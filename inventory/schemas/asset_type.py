"""Pydantic schemas for AssetType."""
from datetime import datetime
from uuid import UUID

from inventory.schemas.common import CamelModel


class AssetTypeCreate(CamelModel):
    code: str | None = None
    name: str | None = None
    description: str | None = None
    is_active: bool = True
    sort_order: int = 0


class AssetTypeUpdate(CamelModel):
    name: str | None = None
    description: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class AssetTypeResponse(CamelModel):
    id: UUID
    code: str
    name: str
    description: str | None = None
    is_active: bool
    sort_order: int
    created_at: datetime | None = None
