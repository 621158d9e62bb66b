"""
VaultChat Backend — Chat Request/Response Schemas
==================================================

What:  Pydantic models for the chat message and chat image endpoints.
Who:   Used by `vaultchat.routes.chat` for request validation and response serialization.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ChatMessageCreate(BaseModel):
    """
    Body of POST /api/chat/messages.

    The sender is the authenticated user. Exactly one of group_id and
    private_chat_id should be given; group_id wins when both are.
    """
    content: str = Field(min_length=1, description="Message text")
    group_id: Optional[int] = Field(default=None, description="Destination group")
    private_chat_id: Optional[int] = Field(default=None, description="Destination private chat")
    timestamp: Optional[str] = Field(
        default=None,
        description="ISO-8601 send time (e.g. 2024-01-15T12:00:00Z). Defaults to server time.",
    )


class ChatMessageResponse(BaseModel):
    """A persisted chat message."""
    id: int
    content: str
    sender_id: int
    sender_username: Optional[str] = None
    timestamp: datetime
    group_id: Optional[int] = None
    private_chat_id: Optional[int] = None

    model_config = {"from_attributes": True}


class ChatImageUploadResponse(BaseModel):
    """
    Result of POST /api/chat/upload-image.

    Serialized with the `imageId` key; image_id is null when the upload failed.
    """
    message: str = Field(description="Human-readable outcome")
    image_id: Optional[int] = Field(
        default=None,
        serialization_alias="imageId",
        description="Generated id of the stored image",
    )
