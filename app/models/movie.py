"""Movie model."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, BigIntPK

if TYPE_CHECKING:
    from app.models.show import Show


class Movie(Base):
    """Movie model."""

    __tablename__ = "movies"

    movie_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp()
    )

    # Relationships
    shows: Mapped[list["Show"]] = relationship("Show", back_populates="movie")
