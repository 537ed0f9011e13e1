"""
Reference Data - User Service.
"""

import logging

from core.domain import User
from core.exceptions import UserNotFoundError
from storage.repositories.users import UserRepository


logger = logging.getLogger(__name__)


class UserService:
    """Lookup of brokerage users."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def get(self, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = await self._repository.get_by_id(user_id)
        if user is None:
            logger.debug(f"User {user_id} not found")
            raise UserNotFoundError(user_id)
        return user
