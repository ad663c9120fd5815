"""Show service."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.show import Show


class ShowService:
    """Service for show queries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_shows_between(self, start: datetime, end: datetime) -> list[Show]:
        """Get shows scheduled within ``[start, end]`` with their movie loaded."""
        result = await self.db.execute(
            select(Show)
            .where(Show.show_date_time >= start, Show.show_date_time <= end)
            .options(selectinload(Show.movie))
            .order_by(Show.show_date_time)
        )
        return list(result.scalars().all())
