"""
VaultChat Backend — Authentication Service
===========================================

What:  Login with username/password and bearer-token session resolution.
How:   A successful login issues a random URL-safe token, kept in an
       in-process TokenStore with an expiry. Requests present it as
       `Authorization: Bearer <token>`; the token resolves back to a user id.
Who:   Used by POST /api/auth/login and by the `get_current_user` dependency.

Limitations:
    Tokens live in process memory: they are lost on restart and are not
    shared between workers.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from vaultchat.config import settings
from vaultchat.exceptions import BadCredentialsError, UnauthorizedError
from vaultchat.models.user import User
from vaultchat.services.user_service import verify_password
from vaultchat.stores import UserStore

logger = logging.getLogger(__name__)


@dataclass
class TokenEntry:
    user_id: int
    expires: datetime


class TokenStore:
    """In-memory map of bearer token -> (user id, expiry)."""

    def __init__(self, expiry_minutes: int):
        self.expiry = timedelta(minutes=expiry_minutes)
        self._tokens: Dict[str, TokenEntry] = {}

    def issue(self, user_id: int) -> str:
        self.prune_expired()
        token = secrets.token_urlsafe(32)
        self._tokens[token] = TokenEntry(
            user_id=user_id,
            expires=datetime.now(timezone.utc) + self.expiry,
        )
        return token

    def resolve(self, token: str) -> int:
        """
        Return the user id for a token.

        Raises:
            UnauthorizedError for unknown or expired tokens. Expired tokens are dropped.
        """
        entry = self._tokens.get(token)
        if entry is None:
            raise UnauthorizedError("Invalid token")
        if entry.expires < datetime.now(timezone.utc):
            self._tokens.pop(token, None)
            raise UnauthorizedError("Token expired")
        return entry.user_id

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def prune_expired(self) -> int:
        """Drop every expired entry, including tokens that were never presented again."""
        now = datetime.now(timezone.utc)
        expired = [token for token, entry in self._tokens.items() if entry.expires < now]
        for token in expired:
            del self._tokens[token]
        if expired:
            logger.debug("Pruned %d expired tokens", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._tokens)


def parse_bearer_token(authorization: Optional[str]) -> str:
    """Extract the token from an Authorization header value."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("user is not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise UnauthorizedError("user is not authenticated")
    return token


class AuthService:
    """Credential checks and session lookup."""

    def __init__(self, user_store: UserStore, token_store: TokenStore):
        self.user_store = user_store
        self.token_store = token_store

    async def login(self, username: str, password: str) -> tuple[str, User]:
        """
        Verify credentials and issue a session token.

        Raises:
            BadCredentialsError: unknown username or wrong password
        """
        user = await self.user_store.get_by_username(username)
        if user is None:
            logger.info("Login failed for %s: unknown username", username)
            raise BadCredentialsError()
        if not verify_password(password, user.password):
            logger.info("Login failed for %s: bad password", username)
            raise BadCredentialsError()

        token = self.token_store.issue(user.id)
        logger.info("Login succeeded: user_id=%s", user.id)
        return token, user

    async def get_current_user(self, authorization: Optional[str]) -> User:
        """
        Resolve the user behind an Authorization header.

        Raises:
            UnauthorizedError: header missing/malformed, token unknown/expired,
                or the token's user no longer exists
        """
        token = parse_bearer_token(authorization)
        user_id = self.token_store.resolve(token)
        user = await self.user_store.get_by_id(user_id)
        if user is None:
            logger.warning("Token refers to missing user_id=%s", user_id)
            self.token_store.revoke(token)
            raise UnauthorizedError("user is not authenticated")
        return user


# ── Singleton Instance ────────────────────────────────────────────────────
token_store = TokenStore(expiry_minutes=settings.token_expiry_minutes)
