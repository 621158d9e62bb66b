"""
VaultChat Backend — FastAPI Dependency Providers
=================================================

What:  Builds stores and services for each request, and resolves the
       authenticated user.
How:   Every provider receives the request's AsyncSession from
       `get_db_session` and wires it into fresh store instances. Tests replace
       any provider through `app.dependency_overrides`.
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from vaultchat.database import get_db_session
from vaultchat.models.user import User
from vaultchat.services.auth_service import AuthService, token_store
from vaultchat.services.chat_image_service import ChatImageService
from vaultchat.services.chat_service import ChatMessageService
from vaultchat.services.image_validator import ImageValidator
from vaultchat.services.user_service import UserService
from vaultchat.stores import (
    ChatImageStore,
    ChatMessageStore,
    GroupStore,
    PrivateChatStore,
    UserStore,
)


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService(UserStore(db))


def get_auth_service(db: AsyncSession = Depends(get_db_session)) -> AuthService:
    return AuthService(UserStore(db), token_store)


def get_chat_message_service(db: AsyncSession = Depends(get_db_session)) -> ChatMessageService:
    return ChatMessageService(
        message_store=ChatMessageStore(db),
        user_store=UserStore(db),
        group_store=GroupStore(db),
        private_chat_store=PrivateChatStore(db),
    )


def get_chat_image_service(db: AsyncSession = Depends(get_db_session)) -> ChatImageService:
    return ChatImageService(image_store=ChatImageStore(db), user_store=UserStore(db))


def get_image_validator() -> ImageValidator:
    return ImageValidator.from_settings()


async def get_current_user(
    authorization: Optional[str] = Header(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Resolve the authenticated user from the Authorization header.

    Raises:
        UnauthorizedError (→ 401) when no valid session is presented.
    """
    return await auth_service.get_current_user(authorization)
