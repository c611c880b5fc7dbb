"""Per-asset history: automatic change events and manually logged notes."""
import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utcnow


class AssetEventType(str, enum.Enum):
    CREATED = "Created"
    STATUS_CHANGED = "StatusChanged"
    OWNER_CHANGED = "OwnerChanged"
    LOCATION_CHANGED = "LocationChanged"
    LEASE_STARTED = "LeaseStarted"
    LEASE_ENDED = "LeaseEnded"
    MAINTENANCE = "Maintenance"
    NOTE = "Note"
    OTHER = "Other"


class AssetEvent(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "asset_events"

    asset_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("assets.id", ondelete="CASCADE"), index=True, nullable=False
    )
    event_type: Mapped[AssetEventType] = mapped_column(
        Enum(AssetEventType, name="asset_event_type", values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    old_value: Mapped[str | None] = mapped_column(String(500), nullable=True)
    new_value: Mapped[str | None] = mapped_column(String(500), nullable=True)
    performed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    performed_by_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    asset = relationship("Asset", back_populates="events", lazy="raise")
