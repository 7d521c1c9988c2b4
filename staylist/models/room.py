"""Room type model: the bookable units a property offers."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staylist.database import Base, UUIDPrimaryKeyMixin


class PropertyRoom(UUIDPrimaryKeyMixin, Base):
    """A room type of a property, with its nightly price in LKR."""

    __tablename__ = "property_rooms"
    __table_args__ = (
        CheckConstraint("bed_type IN ('Single', 'Double', 'Twin', 'Queen', 'King')", name="ck_property_rooms_bed_type"),
        CheckConstraint("max_guests >= 1 AND max_guests <= 9", name="ck_property_rooms_max_guests"),
        CheckConstraint("units_available >= 1 AND units_available <= 9", name="ck_property_rooms_units_available"),
    )

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_type: Mapped[str] = mapped_column(String(255), nullable=False)
    bed_type: Mapped[str] = mapped_column(String(20), nullable=False)
    max_guests: Mapped[int] = mapped_column(nullable=False)
    units_available: Mapped[int] = mapped_column(nullable=False)
    facilities: Mapped[list] = mapped_column(JSON, default=list)
    price_lkr: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    # Relationships
    property: Mapped["Property"] = relationship(back_populates="rooms")  # type: ignore[name-defined]  # noqa: F821
    photos: Mapped[list["RoomPhoto"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="room",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="[RoomPhoto.sort_order, RoomPhoto.created_at]",
    )

    def __repr__(self) -> str:
        return f"<PropertyRoom(id={self.id}, room_type={self.room_type!r}, price_lkr={self.price_lkr})>"
