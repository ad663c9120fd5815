"""Booking service for confirmation lookups and seat release."""

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.booking import Booking
from app.models.show import Show

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Booking operation error."""

    pass


@dataclass
class SeatRelease:
    """Outcome of releasing an unpaid booking."""

    booking_id: int
    released: bool
    seats: list[str] = field(default_factory=list)
    reason: str | None = None

    def to_dict(self) -> dict:
        return {
            "bookingId": self.booking_id,
            "released": self.released,
            "seats": self.seats,
            "reason": self.reason,
        }


class BookingService:
    """Service for booking operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_booking_details(self, booking_id: int) -> Booking:
        """
        Get a booking with its show, the show's movie and its user loaded.

        Raises:
            BookingError: If the booking or any related record is missing
        """
        result = await self.db.execute(
            select(Booking)
            .where(Booking.booking_id == booking_id)
            .options(
                selectinload(Booking.show).selectinload(Show.movie),
                selectinload(Booking.user),
            )
        )
        booking = result.scalar_one_or_none()

        if booking is None:
            raise BookingError(f"Booking {booking_id} not found")
        if booking.show is None:
            raise BookingError(f"Show for booking {booking_id} not found")
        if booking.show.movie is None:
            raise BookingError(f"Movie for booking {booking_id} not found")
        if booking.user is None:
            raise BookingError(f"User for booking {booking_id} not found")

        return booking

    async def release_unpaid_booking(self, booking_id: int) -> SeatRelease:
        """
        Release the seats of an unpaid booking and delete it.

        Both rows are locked and changed in a single transaction. A seat is
        only freed while it is still held by the booking's user, or
        unconditionally once that user has been deleted. Running this again
        after a successful release is a no-op, so redelivery is safe.

        Args:
            booking_id: Booking ID

        Returns:
            What was released
        """
        try:
            result = await self.db.execute(
                select(Booking)
                .where(Booking.booking_id == booking_id)
                .with_for_update()
            )
            booking = result.scalar_one_or_none()

            if booking is None:
                logger.info(f"Booking {booking_id} already gone, nothing to release")
                await self.db.rollback()
                return SeatRelease(booking_id, released=False, reason="not_found")

            if booking.is_paid:
                await self.db.rollback()
                return SeatRelease(booking_id, released=False, reason="paid")

            released: list[str] = []
            if booking.show_id is not None:
                show_result = await self.db.execute(
                    select(Show).where(Show.show_id == booking.show_id).with_for_update()
                )
                show = show_result.scalar_one_or_none()

                if show is not None:
                    occupied = dict(show.occupied_seats or {})
                    for seat in booking.booked_seats or []:
                        if seat not in occupied:
                            continue
                        # user_id is NULL once the user has been deleted
                        if booking.user_id is None or occupied[seat] == booking.user_id:
                            del occupied[seat]
                            released.append(seat)
                    show.occupied_seats = occupied

            await self.db.delete(booking)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Released {len(released)} seat(s) and deleted unpaid booking {booking_id}"
        )
        return SeatRelease(booking_id, released=True, seats=released)
