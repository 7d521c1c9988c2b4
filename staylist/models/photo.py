"""Photo models: hosted image URLs attached to a property or to one of its rooms."""

import uuid
from datetime import datetime

from sqlalchemy import ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from staylist.database import Base, UUIDPrimaryKeyMixin


class PropertyPhoto(UUIDPrimaryKeyMixin, Base):
    """Property-level gallery photo. ``sort_order`` is the position at upload time."""

    __tablename__ = "property_photos"

    property_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    photo_url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, default=None)
    sort_order: Mapped[int] = mapped_column(default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    property: Mapped["Property"] = relationship(back_populates="photos")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<PropertyPhoto(id={self.id}, sort_order={self.sort_order})>"


class RoomPhoto(UUIDPrimaryKeyMixin, Base):
    """Photo of a single room type."""

    __tablename__ = "room_photos"

    room_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("property_rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    photo_url: Mapped[str] = mapped_column(Text, nullable=False)
    caption: Mapped[str | None] = mapped_column(Text, default=None)
    sort_order: Mapped[int] = mapped_column(default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    room: Mapped["PropertyRoom"] = relationship(back_populates="photos")  # type: ignore[name-defined]  # noqa: F821

    def __repr__(self) -> str:
        return f"<RoomPhoto(id={self.id}, sort_order={self.sort_order})>"
