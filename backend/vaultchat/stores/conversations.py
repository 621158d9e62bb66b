"""
VaultChat Backend — Group and PrivateChat Stores
=================================================

What:  Lookup of conversation containers by id.
Who:   Used by ChatMessageService to resolve a message's destination.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vaultchat.models.chat import Group, PrivateChat


class GroupStore:
    """Read access to the `groups` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, group_id: int) -> Optional[Group]:
        return await self.db.get(Group, group_id)


class PrivateChatStore:
    """Read access to the `private_chats` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, private_chat_id: int) -> Optional[PrivateChat]:
        return await self.db.get(PrivateChat, private_chat_id)
