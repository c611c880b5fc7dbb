import enum
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class LeaseStatus(str, enum.Enum):
    ACTIVE = "Active"
    EXPIRING = "Expiring"
    EXPIRED = "Expired"
    TERMINATED = "Terminated"
    RENEWED = "Renewed"


OPEN_LEASE_STATUSES = (LeaseStatus.ACTIVE, LeaseStatus.EXPIRING)


class LeaseContract(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "lease_contracts"

    asset_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("assets.id", ondelete="SET NULL"), index=True, nullable=True
    )
    contract_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    vendor: Mapped[str | None] = mapped_column(String(200), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    monthly_rate: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    total_value: Mapped[Decimal | None] = mapped_column(Numeric(18, 2), nullable=True)
    status: Mapped[LeaseStatus] = mapped_column(
        Enum(LeaseStatus, name="lease_status", values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=LeaseStatus.ACTIVE,
        nullable=False,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active_override: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    asset = relationship("Asset", back_populates="leases", lazy="raise")

    def is_active_on(self, day: date) -> bool:
        if self.is_active_override is not None:
            return self.is_active_override
        return self.status in OPEN_LEASE_STATUSES and self.start_date <= day <= self.end_date

    @property
    def is_active(self) -> bool:
        return self.is_active_on(utcnow().date())
