from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

DEFAULT_ASSET_TYPES = [
    ("LAP", "Laptop"),
    ("DESK", "Desktop"),
    ("MON", "Monitor"),
    ("TAB", "Tablet"),
    ("PRN", "Printer"),
    ("TEL", "Telefoon"),
    ("NET", "Netwerk"),
]


class AssetType(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "asset_types"

    code: Mapped[str] = mapped_column(String(10), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    assets = relationship("Asset", back_populates="asset_type", passive_deletes=True, lazy="raise")
