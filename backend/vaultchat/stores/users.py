"""
VaultChat Backend — User Store
===============================

What:  Lookup and creation of user records.
Who:   Used by UserService (registration), AuthService (login, session
       resolution), ChatMessageService and ChatImageService (existence checks).
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vaultchat.exceptions import DuplicateUsernameError
from vaultchat.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """Persistence operations for the `users` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def exists_by_username(self, username: str) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.username == username).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> List[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def insert(self, user: User) -> User:
        """
        Persist a new user and return it with its generated id.

        Raises:
            DuplicateUsernameError: the unique constraint on username rejected
                the row (a concurrent registration won the race).
        """
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning("Username unique constraint rejected '%s'", user.username)
            raise DuplicateUsernameError(
                f"Username '{user.username}' is already taken",
                context={"constraint_error": type(e.orig).__name__ if e.orig else None},
            ) from e
        return user
