"""
VaultChat Backend — User Service
=================================

What:  User registration, username existence checks and user listing.
How:   Registration checks the username first, hashes the password with
       bcrypt, then inserts the user. The store's unique constraint catches
       a concurrent registration that slips past the existence check.
Who:   Called by POST /api/auth/register and GET /api/users.
"""

import logging
from typing import List

import bcrypt

from vaultchat.exceptions import DuplicateUsernameError, ValidationError
from vaultchat.models.user import User
from vaultchat.stores import UserStore

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class UserService:
    """Registration and lookup of users."""

    def __init__(self, user_store: UserStore):
        self.user_store = user_store

    async def register_user(self, username: str, password: str) -> User:
        """
        Register a new user.

        Steps:
            1. Reject the request if the username already exists
            2. Hash the plaintext password with bcrypt
            3. Insert the user

        Raises:
            ValidationError: blank username or password
            DuplicateUsernameError: the username is taken
        """
        if not username or not username.strip():
            raise ValidationError("Username must not be blank", field="username")
        if not password:
            raise ValidationError("Password must not be blank", field="password")
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                field="password",
            )

        if await self.username_exists(username):
            raise DuplicateUsernameError(f"Username '{username}' is already taken")

        user = User(username=username, password=hash_password(password))
        user = await self.user_store.insert(user)
        logger.info("User registered: id=%s username=%s", user.id, user.username)
        return user

    async def username_exists(self, username: str) -> bool:
        return await self.user_store.exists_by_username(username)

    async def get_all_users(self) -> List[User]:
        return await self.user_store.list_all()
