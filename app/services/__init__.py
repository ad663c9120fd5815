"""Services package."""

from app.services.booking_service import BookingService
from app.services.email_service import EmailService
from app.services.show_service import ShowService
from app.services.user_service import UserService

__all__ = [
    "UserService",
    "ShowService",
    "BookingService",
    "EmailService",
]
