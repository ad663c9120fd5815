"""SQLAlchemy models."""

from app.models.base import Base
from app.models.booking import Booking
from app.models.movie import Movie
from app.models.show import Show
from app.models.user import User

__all__ = [
    "Base",
    "User",
    "Movie",
    "Show",
    "Booking",
]
