"""User service mirroring identity-provider accounts."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User

logger = logging.getLogger(__name__)


class UserError(Exception):
    """User operation error."""

    pass


class UserService:
    """Service for user record operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, user_id: str) -> User | None:
        """Get user by ID."""
        return await self.db.get(User, user_id)

    async def create_user(
        self,
        user_id: str,
        email: str,
        name: str,
        image: str | None = None,
    ) -> User:
        """
        Insert a new user record.

        Raises:
            UserError: If a user with this ID already exists
        """
        if await self.get_user(user_id) is not None:
            raise UserError(f"User {user_id} already exists")

        user = User(user_id=user_id, email=email, name=name, image=image)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise UserError(f"User {user_id} already exists") from e

        await self.db.refresh(user)
        return user

    async def upsert_user(
        self,
        user_id: str,
        email: str,
        name: str,
        image: str | None = None,
    ) -> User:
        """Update a user by ID, creating it if missing."""
        user = await self.get_user(user_id)
        if user is None:
            user = User(user_id=user_id)
            self.db.add(user)

        user.email = email
        user.name = name
        user.image = image

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def delete_user(self, user_id: str) -> bool:
        """
        Delete a user by ID.

        Returns:
            True if a record was removed, False if none existed
        """
        result = await self.db.execute(delete(User).where(User.user_id == user_id))
        await self.db.commit()

        if result.rowcount == 0:
            logger.info(f"User {user_id} not found, nothing to delete")
            return False
        return True

    async def get_users_by_ids(self, user_ids: list[str]) -> list[User]:
        """Get users whose ID is in the given list."""
        if not user_ids:
            return []

        result = await self.db.execute(
            select(User).where(User.user_id.in_(user_ids)).order_by(User.user_id)
        )
        return list(result.scalars().all())

    async def get_users_page(
        self,
        after_id: str | None = None,
        limit: int = 500,
    ) -> list[User]:
        """
        Get one page of users ordered by ID.

        Keyset pagination on ``user_id``: pass the last ID of the previous
        page to get the next one.

        Args:
            after_id: Last user ID already seen, or None for the first page
            limit: Page size

        Returns:
            Up to ``limit`` users with an ID greater than ``after_id``
        """
        query = select(User).order_by(User.user_id).limit(limit)
        if after_id is not None:
            query = query.where(User.user_id > after_id)

        result = await self.db.execute(query)
        return list(result.scalars().all())
