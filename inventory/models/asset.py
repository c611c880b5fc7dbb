import enum
import uuid
from datetime import date

from sqlalchemy import Boolean, Date, Enum, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AssetStatus(str, enum.Enum):
    IN_GEBRUIK = "InGebruik"
    STOCK = "Stock"
    HERSTELLING = "Herstelling"
    DEFECT = "Defect"
    UIT_DIENST = "UitDienst"
    NIEUW = "Nieuw"


class Asset(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "assets"

    asset_code: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    asset_name: Mapped[str] = mapped_column(String(200), nullable=False)
    alias: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    is_dummy: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    asset_type_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("asset_types.id", ondelete="RESTRICT"), nullable=True
    )

    owner: Mapped[str | None] = mapped_column(String(200), nullable=True)
    building: Mapped[str | None] = mapped_column(String(200), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    office_location: Mapped[str | None] = mapped_column(String(100), nullable=True)

    status: Mapped[AssetStatus] = mapped_column(
        Enum(AssetStatus, name="asset_status", values_callable=lambda e: [m.value for m in e], native_enum=False),
        default=AssetStatus.STOCK,
        nullable=False,
    )
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(200), nullable=True)
    serial_number: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)

    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_expiry: Mapped[date | None] = mapped_column(Date, nullable=True)
    installation_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    # Optimistic concurrency token, bumped by the ORM on every UPDATE
    row_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    asset_type = relationship("AssetType", back_populates="assets", lazy="selectin")
    events = relationship(
        "AssetEvent", back_populates="asset", cascade="all, delete-orphan", passive_deletes=True, lazy="raise"
    )
    leases = relationship("LeaseContract", back_populates="asset", passive_deletes=True, lazy="raise")

    __mapper_args__ = {"version_id_col": row_version}
