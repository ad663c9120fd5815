"""Show model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, BigInteger, DateTime, ForeignKey, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPK

if TYPE_CHECKING:
    from app.models.booking import Booking
    from app.models.movie import Movie


class Show(Base):
    """A scheduled screening of a movie.

    ``occupied_seats`` maps a seat label to the id of the user holding it.
    JSON columns are not mutation-tracked, so assign a new dict to persist
    changes.
    """

    __tablename__ = "shows"

    show_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    movie_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("movies.movie_id")
    )
    show_date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    occupied_seats: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    movie: Mapped["Movie | None"] = relationship("Movie", back_populates="shows")
    bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="show")

    __table_args__ = (Index("idx_show_date_time", "show_date_time"),)
