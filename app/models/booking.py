"""Booking model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPK

if TYPE_CHECKING:
    from app.models.show import Show
    from app.models.user import User


class Booking(Base):
    """Booking model holding seats on a show until paid."""

    __tablename__ = "bookings"

    booking_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    show_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("shows.show_id")
    )
    user_id: Mapped[str | None] = mapped_column(
        String(50), ForeignKey("users.user_id", ondelete="SET NULL")
    )
    booked_seats: Mapped[list[str]] = mapped_column(JSON, default=list)
    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    show: Mapped["Show | None"] = relationship("Show", back_populates="bookings")
    user: Mapped["User | None"] = relationship("User", back_populates="bookings")

    __table_args__ = (
        Index("idx_user_id", "user_id"),
        Index("idx_is_paid", "is_paid"),
    )
