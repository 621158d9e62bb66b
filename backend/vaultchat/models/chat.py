"""
VaultChat Backend — Conversation and Chat SQLAlchemy Models
============================================================

What:  ORM models for groups, private chats, chat messages and chat images.
Who:   Read and written through the stores in `vaultchat.stores`.

Table Design:
    - groups / private_chats: opaque conversation containers, looked up by id
    - chat_messages: exactly one destination (group_id XOR private_chat_id),
      enforced by a CHECK constraint
    - chat_images: raw image bytes (bytea on PostgreSQL) with sender and
      receiver ids; the ids are checked by the service at write time only
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    TIMESTAMP,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vaultchat.database import Base
from vaultchat.models.user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Group(Base):
    """A group conversation."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}')>"


class PrivateChat(Base):
    """A one-to-one conversation between two users."""

    __tablename__ = "private_chats"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user1_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    user2_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<PrivateChat(id={self.id}, users=({self.user1_id}, {self.user2_id}))>"


class ChatMessage(Base):
    """
    A text message sent to a group or to a private chat.

    Created once and never modified. Exactly one of group_id and
    private_chat_id is set.
    """

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    sender_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    sender: Mapped[User] = relationship(User, lazy="joined")

    timestamp: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    group_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("groups.id"), nullable=True, default=None
    )
    group: Mapped[Optional[Group]] = relationship(Group)

    private_chat_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("private_chats.id"), nullable=True, default=None
    )
    private_chat: Mapped[Optional[PrivateChat]] = relationship(PrivateChat)

    __table_args__ = (
        CheckConstraint(
            "(group_id IS NULL) <> (private_chat_id IS NULL)",
            name="ck_chat_messages_single_destination",
        ),
        Index("idx_chat_messages_group_ts", "group_id", "timestamp"),
        Index("idx_chat_messages_private_chat_ts", "private_chat_id", "timestamp"),
    )

    def __repr__(self) -> str:
        destination = (
            f"group_id={self.group_id}"
            if self.group_id is not None
            else f"private_chat_id={self.private_chat_id}"
        )
        return f"<ChatMessage(id={self.id}, sender_id={self.sender_id}, {destination})>"


class ChatImage(Base):
    """An image attached to a chat between two users. Immutable."""

    __tablename__ = "chat_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Maps to bytea on PostgreSQL
    image_content: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    sender_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    receiver_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    created_on: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        return (
            f"<ChatImage(id={self.id}, sender_id={self.sender_id}, "
            f"receiver_id={self.receiver_id}, bytes={len(self.image_content or b'')})>"
        )
