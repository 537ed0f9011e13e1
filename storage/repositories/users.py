"""
User Repository.

Read-only access to brokerage account holders.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain import User
from storage.models.brokerage import UserModel
from storage.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserModel]):
    """Repository for users."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, UserModel, "UserRepository")

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by id, or None."""
        model = await self._get_by_id(user_id)
        if model is None:
            return None
        return User(
            id=model.id,
            email=model.email,
            account_number=model.account_number,
        )
