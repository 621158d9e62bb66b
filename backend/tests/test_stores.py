"""
VaultChat Backend — Store Unit Tests
=====================================

What:  Tests that stores translate calls into session operations correctly.
How:   A mocked AsyncSession; result objects are MagicMocks.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from vaultchat.exceptions import DuplicateUsernameError
from vaultchat.models.chat import ChatMessage, Group, PrivateChat
from vaultchat.models.user import User
from vaultchat.stores import (
    ChatImageStore,
    ChatMessageStore,
    GroupStore,
    PrivateChatStore,
    UserStore,
)


class TestUserStore:

    @pytest.mark.asyncio
    async def test_get_by_id(self, mock_db_session, make_user):
        user = make_user()
        mock_db_session.get.return_value = user

        assert await UserStore(mock_db_session).get_by_id(1) is user
        mock_db_session.get.assert_awaited_once_with(User, 1)

    @pytest.mark.asyncio
    async def test_get_by_username(self, mock_db_session, make_user):
        user = make_user()
        result = MagicMock()
        result.scalar_one_or_none.return_value = user
        mock_db_session.execute.return_value = result

        assert await UserStore(mock_db_session).get_by_username("alice") is user

    @pytest.mark.asyncio
    async def test_exists_by_username(self, mock_db_session):
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = result

        assert await UserStore(mock_db_session).exists_by_username("ghost") is False

        result.scalar_one_or_none.return_value = 1
        assert await UserStore(mock_db_session).exists_by_username("alice") is True

    @pytest.mark.asyncio
    async def test_list_all(self, mock_db_session, make_user):
        users = [make_user(user_id=1), make_user(user_id=2, username="bob")]
        result = MagicMock()
        result.scalars.return_value.all.return_value = users
        mock_db_session.execute.return_value = result

        assert await UserStore(mock_db_session).list_all() == users

    @pytest.mark.asyncio
    async def test_insert_flushes(self, mock_db_session):
        user = User(username="alice", password="hash")

        assert await UserStore(mock_db_session).insert(user) is user
        mock_db_session.add.assert_called_once_with(user)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_unique_violation(self, mock_db_session):
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

        with pytest.raises(DuplicateUsernameError, match="'alice' is already taken"):
            await UserStore(mock_db_session).insert(User(username="alice", password="hash"))


class TestConversationStores:

    @pytest.mark.asyncio
    async def test_group_lookup(self, mock_db_session):
        mock_db_session.get.return_value = None

        assert await GroupStore(mock_db_session).get_by_id(99) is None
        mock_db_session.get.assert_awaited_once_with(Group, 99)

    @pytest.mark.asyncio
    async def test_private_chat_lookup(self, mock_db_session, make_private_chat):
        chat = make_private_chat()
        mock_db_session.get.return_value = chat

        assert await PrivateChatStore(mock_db_session).get_by_id(20) is chat
        mock_db_session.get.assert_awaited_once_with(PrivateChat, 20)


class TestChatStores:

    @pytest.mark.asyncio
    async def test_message_insert(self, mock_db_session):
        message = ChatMessage(content="hi", sender_id=1, group_id=10)

        assert await ChatMessageStore(mock_db_session).insert(message) is message
        mock_db_session.add.assert_called_once_with(message)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_image_insert_returns_generated_id(self, mock_db_session, png_bytes):
        result = MagicMock()
        result.scalar_one.return_value = 42
        mock_db_session.execute.return_value = result

        image_id = await ChatImageStore(mock_db_session).insert(
            image_content=png_bytes,
            sender_id=1,
            receiver_id=2,
            created_on=datetime.now(timezone.utc),
        )

        assert image_id == 42
        mock_db_session.execute.assert_awaited_once()
