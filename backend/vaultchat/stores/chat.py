"""
VaultChat Backend — Chat Message and Chat Image Stores
=======================================================

What:  Insert operations for chat messages and chat images.
How:   Messages are added through the ORM and flushed so the generated id is
       populated on the returned entity. Images use a single
       INSERT ... RETURNING id statement, so the payload bytes are sent once
       and never loaded back into the session.
"""

from datetime import datetime

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from vaultchat.models.chat import ChatImage, ChatMessage


class ChatMessageStore:
    """Write access to the `chat_messages` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, message: ChatMessage) -> ChatMessage:
        """Persist a message and return it with its generated id."""
        self.db.add(message)
        await self.db.flush()
        return message


class ChatImageStore:
    """Write access to the `chat_images` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self,
        image_content: bytes,
        sender_id: int,
        receiver_id: int,
        created_on: datetime,
    ) -> int:
        """
        Insert an image row and return the database-generated id.

        Args:
            image_content: Raw image bytes (already validated upstream)
            sender_id: Id of the sending user
            receiver_id: Id of the receiving user
            created_on: Server-assigned creation timestamp

        Returns:
            The generated primary key of the new row.
        """
        result = await self.db.execute(
            insert(ChatImage)
            .values(
                image_content=image_content,
                sender_id=sender_id,
                receiver_id=receiver_id,
                created_on=created_on,
            )
            .returning(ChatImage.id)
        )
        return result.scalar_one()
