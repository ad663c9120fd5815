"""Tests for the booking confirmation email."""

from datetime import datetime

import pytest

from app.models import Booking, Movie, Show, User
from app.schemas.events import MalformedPayloadError
from app.services.booking_service import BookingError
from app.workflows.handlers import BookingConfirmationHandler


@pytest.fixture
def handler(session_factory, email_service, settings):
    return BookingConfirmationHandler(session_factory, email_service, settings)


async def seed_confirmed_booking(seed, with_user=True):
    records = [
        Movie(movie_id=1, title="Dune: Part Two"),
        # 14:00 UTC is 7:30 PM in Asia/Kolkata
        Show(show_id=10, movie_id=1, show_date_time=datetime(2026, 10, 20, 14, 0)),
        Booking(booking_id=100, show_id=10, user_id="user_1", booked_seats=["A1"], is_paid=True),
    ]
    if with_user:
        records.append(User(user_id="user_1", email="asha@example.com", name="Asha Rao"))
    await seed(*records)


@pytest.mark.integration
class TestBookingConfirmationHandler:
    @pytest.mark.asyncio
    async def test_sends_one_email_to_booking_user(self, handler, seed, email_service):
        await seed_confirmed_booking(seed)

        result = await handler.handle({"bookingId": 100})

        assert result == {"bookingId": 100, "to": "asha@example.com"}
        email_service.send_email.assert_awaited_once()
        kwargs = email_service.send_email.await_args.kwargs
        assert kwargs["to"] == "asha@example.com"
        assert kwargs["subject"] == '🎉 Booking Confirmed: "Dune: Part Two" - See You Soon!'
        assert "Hi Asha Rao," in kwargs["body"]
        assert "10/20/2026" in kwargs["body"]
        assert "7:30:00 PM" in kwargs["body"]

    @pytest.mark.asyncio
    async def test_missing_booking_fails(self, handler, email_service):
        with pytest.raises(BookingError):
            await handler.handle({"bookingId": 404})

        email_service.send_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_user_fails(self, handler, seed, email_service):
        await seed_confirmed_booking(seed, with_user=False)

        with pytest.raises(BookingError, match="User"):
            await handler.handle({"bookingId": 100})

        email_service.send_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_payload(self, handler):
        with pytest.raises(MalformedPayloadError):
            await handler.handle({})
