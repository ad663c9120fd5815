"""Helpers for emitting the booking events consumed by the functions."""

import logging

import inngest

from app.schemas.events import PAYMENT_PENDING, SHOW_ADDED, SHOW_BOOKED

logger = logging.getLogger(__name__)


class EventPublisher:
    """Send application events through an Inngest client."""

    def __init__(self, client: inngest.Inngest):
        self.client = client

    async def _send(self, name: str, data: dict) -> list[str]:
        ids = await self.client.send(inngest.Event(name=name, data=data))
        logger.info(f"Sent event {name} ({', '.join(ids)})")
        return ids

    async def payment_pending(self, booking_id: int) -> list[str]:
        """Start the hold window for an unpaid booking."""
        return await self._send(PAYMENT_PENDING, {"bookingId": booking_id})

    async def show_booked(self, booking_id: int) -> list[str]:
        """Request the booking confirmation email."""
        return await self._send(SHOW_BOOKED, {"bookingId": booking_id})

    async def show_added(self, movie_title: str) -> list[str]:
        """Announce a new show to all users."""
        return await self._send(SHOW_ADDED, {"movieTitle": movie_title})
