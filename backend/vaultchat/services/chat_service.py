"""
VaultChat Backend — Chat Message Service
=========================================

What:  Builds and persists chat messages addressed to a group or a private chat.
How:   Resolves the sender (by id, else by username), parses or assigns the
       timestamp, resolves exactly one destination, then inserts the row.
Who:   Called by POST /api/chat/messages.

Destination Rules:
    - group_id is checked first; if present only the group is resolved
    - otherwise private_chat_id must be present and resolve
    - neither present -> ValidationError
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from vaultchat.exceptions import (
    GroupNotFoundError,
    PrivateChatNotFoundError,
    SenderNotFoundError,
    ValidationError,
)
from vaultchat.models.chat import ChatMessage
from vaultchat.models.user import User
from vaultchat.stores import ChatMessageStore, GroupStore, PrivateChatStore, UserStore

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    A trailing "Z" is read as UTC; a value without an offset is taken as UTC.

    Raises:
        ValidationError for malformed input.
    """
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise ValidationError(
            message=f"Invalid timestamp '{value}'. Expected ISO-8601, e.g. 2024-01-15T12:00:00Z",
            field="timestamp",
        ) from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ChatMessageService:
    """Persists chat messages after resolving their sender and destination."""

    def __init__(
        self,
        message_store: ChatMessageStore,
        user_store: UserStore,
        group_store: GroupStore,
        private_chat_store: PrivateChatStore,
    ):
        self.message_store = message_store
        self.user_store = user_store
        self.group_store = group_store
        self.private_chat_store = private_chat_store

    async def _resolve_sender(
        self, sender_id: Optional[int], sender_username: Optional[str]
    ) -> User:
        if sender_id is not None:
            sender = await self.user_store.get_by_id(sender_id)
            if sender is None:
                raise SenderNotFoundError(
                    "Sender not found by ID", context={"sender_id": sender_id}
                )
            return sender
        if sender_username is not None:
            sender = await self.user_store.get_by_username(sender_username)
            if sender is None:
                raise SenderNotFoundError(
                    "Sender not found by username", context={"sender_username": sender_username}
                )
            return sender
        raise ValidationError("Sender information missing", field="sender")

    async def save_message(
        self,
        content: str,
        sender_id: Optional[int] = None,
        sender_username: Optional[str] = None,
        group_id: Optional[int] = None,
        private_chat_id: Optional[int] = None,
        timestamp: Optional[str] = None,
    ) -> ChatMessage:
        """
        Save a chat message.

        Args:
            content: Message text
            sender_id: Id of the sending user (takes precedence over username)
            sender_username: Username of the sending user
            group_id: Destination group (takes precedence over private_chat_id)
            private_chat_id: Destination private chat
            timestamp: Optional ISO-8601 timestamp; defaults to now (UTC)

        Returns:
            The persisted ChatMessage, including its generated id.

        Raises:
            ValidationError: no sender given, malformed timestamp, or no destination
            SenderNotFoundError: sender id/username does not resolve
            GroupNotFoundError: group_id does not resolve
            PrivateChatNotFoundError: private_chat_id does not resolve
        """
        sender = await self._resolve_sender(sender_id, sender_username)

        message = ChatMessage(content=content, sender=sender, sender_id=sender.id)
        if timestamp is not None:
            message.timestamp = parse_timestamp(timestamp)
        else:
            message.timestamp = datetime.now(timezone.utc)

        if group_id is not None:
            group = await self.group_store.get_by_id(group_id)
            if group is None:
                raise GroupNotFoundError(f"Group with id {group_id} not found")
            message.group = group
            message.group_id = group.id
        elif private_chat_id is not None:
            private_chat = await self.private_chat_store.get_by_id(private_chat_id)
            if private_chat is None:
                raise PrivateChatNotFoundError(
                    "PrivateChat not found", context={"private_chat_id": private_chat_id}
                )
            message.private_chat = private_chat
            message.private_chat_id = private_chat.id
        else:
            raise ValidationError(
                "Either group_id or private_chat_id must be provided",
                field="destination",
            )

        saved = await self.message_store.insert(message)
        logger.info(
            "Chat message %s saved: sender_id=%s group_id=%s private_chat_id=%s",
            saved.id,
            sender.id,
            saved.group_id,
            saved.private_chat_id,
        )
        return saved
