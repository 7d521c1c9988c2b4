"""Property model: hotels and villas listed by their owners."""

import uuid
from datetime import time

from sqlalchemy import JSON, CheckConstraint, ForeignKey, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staylist.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Property(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A hotel or villa owned by a user. Rooms and photos are deleted with it."""

    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("property_type IN ('Hotel', 'Villa')", name="ck_properties_property_type"),
        CheckConstraint(
            "cancellation_policy IN ('Free', 'Non-refundable')",
            name="ck_properties_cancellation_policy",
        ),
        CheckConstraint("status IN ('draft', 'published')", name="ck_properties_status"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_type: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, default=None)
    street_address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(120), nullable=False)
    amenities: Mapped[dict] = mapped_column(JSON, default=dict)
    checkin_time: Mapped[time | None] = mapped_column(Time, default=None)
    checkout_time: Mapped[time | None] = mapped_column(Time, default=None)
    cancellation_policy: Mapped[str | None] = mapped_column(String(20), default=None)
    status: Mapped[str] = mapped_column(String(20), default="draft", server_default="draft")

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="properties")  # type: ignore[name-defined]  # noqa: F821
    rooms: Mapped[list["PropertyRoom"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="[PropertyRoom.created_at, PropertyRoom.id]",
    )
    photos: Mapped[list["PropertyPhoto"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="property",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="[PropertyPhoto.sort_order, PropertyPhoto.created_at]",
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, name={self.name!r}, type={self.property_type!r})>"
