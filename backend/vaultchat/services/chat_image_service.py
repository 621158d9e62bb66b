"""
VaultChat Backend — Chat Image Service
=======================================

What:  Persists a validated chat image and links it to its sender and receiver.
How:   Checks both ids are present and refer to existing users, then inserts
       the bytes with a server-assigned timestamp and returns the generated id.
Who:   Called by POST /api/chat/upload-image after ImageValidator accepted the payload.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from vaultchat.exceptions import UserNotFoundError, ValidationError
from vaultchat.stores import ChatImageStore, UserStore

logger = logging.getLogger(__name__)


class ChatImageService:
    """Stores chat images between two existing users."""

    def __init__(self, image_store: ChatImageStore, user_store: UserStore):
        self.image_store = image_store
        self.user_store = user_store

    async def upload_chat_image(
        self,
        image_bytes: bytes,
        sender_user_id: Optional[int],
        receiver_user_id: Optional[int],
    ) -> int:
        """
        Persist an image payload.

        Args:
            image_bytes: Raw image bytes (already validated for size/type)
            sender_user_id: Sending user; must exist
            receiver_user_id: Receiving user; must exist

        Returns:
            The generated image id.

        Raises:
            ValidationError: either id is None
            UserNotFoundError: sender or receiver does not exist
        """
        if sender_user_id is None:
            raise ValidationError("senderUserId must not be null", field="senderUserId")
        if receiver_user_id is None:
            raise ValidationError("receiverUserId must not be null", field="receiverUserId")

        if await self.user_store.get_by_id(sender_user_id) is None:
            raise UserNotFoundError(f"Sender with id {sender_user_id} not found")
        if await self.user_store.get_by_id(receiver_user_id) is None:
            raise UserNotFoundError(f"Receiver with id {receiver_user_id} not found")

        created_on = datetime.now(timezone.utc)
        image_id = await self.image_store.insert(
            image_content=image_bytes,
            sender_id=sender_user_id,
            receiver_id=receiver_user_id,
            created_on=created_on,
        )
        logger.info(
            "Chat image %s stored: sender_id=%s receiver_id=%s (%d bytes)",
            image_id,
            sender_user_id,
            receiver_user_id,
            len(image_bytes),
        )
        return image_id
