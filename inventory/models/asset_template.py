import uuid
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class AssetTemplate(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "asset_templates"

    template_name: Mapped[str] = mapped_column(String(100), nullable=False)
    asset_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    asset_type_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("asset_types.id", ondelete="SET NULL"), nullable=True
    )
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    model: Mapped[str | None] = mapped_column(String(200), nullable=True)
    owner: Mapped[str | None] = mapped_column(String(200), nullable=True)
    building: Mapped[str | None] = mapped_column(String(200), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    office_location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_expiry: Mapped[date | None] = mapped_column(Date, nullable=True)
    installation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    asset_type = relationship("AssetType", lazy="selectin")
