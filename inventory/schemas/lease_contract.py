from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from inventory.schemas.common import CamelModel


class LeaseContractCreate(CamelModel):
    asset_id: UUID | None = None
    contract_number: str | None = None
    vendor: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    monthly_rate: Decimal | None = None
    total_value: Decimal | None = None
    status: str | None = None
    notes: str | None = None
    is_active_override: bool | None = None


class LeaseContractUpdate(LeaseContractCreate):
    pass


class LeaseContractResponse(CamelModel):
    id: UUID
    asset_id: UUID | None = None
    contract_number: str | None = None
    vendor: str | None = None
    start_date: date
    end_date: date
    monthly_rate: Decimal | None = None
    total_value: Decimal | None = None
    status: str
    notes: str | None = None
    is_active_override: bool | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
