"""
VaultChat Backend — Chat Route Handlers
========================================

What:  POST /api/chat/messages (send a message) and
       POST /api/chat/upload-image (upload an image for a chat).
How:   The sender is always the authenticated user; clients never supply it.
       Handlers read the request, delegate to services and shape the response.
Who:   Called by the chat frontend.

Upload Request Flow:
    1. Resolve the current user from the bearer token (401 if absent)
    2. Enforce the framework-level multipart limit (UploadTooLargeError)
    3. Read the file into memory once
    4. ImageValidator: empty/size/type checks (400 on failure)
    5. ChatImageService: check users, persist bytes, return generated id
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse

from vaultchat.config import settings
from vaultchat.dependencies import (
    get_chat_image_service,
    get_chat_message_service,
    get_current_user,
    get_image_validator,
)
from vaultchat.exceptions import UploadTooLargeError, ValidationError
from vaultchat.models.user import User
from vaultchat.schemas.chat import (
    ChatImageUploadResponse,
    ChatMessageCreate,
    ChatMessageResponse,
)
from vaultchat.schemas.common import ErrorResponse
from vaultchat.services.chat_image_service import ChatImageService
from vaultchat.services.chat_service import ChatMessageService
from vaultchat.services.image_validator import ImageValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["Chat"])


@router.post(
    "/messages",
    status_code=201,
    response_model=ChatMessageResponse,
    responses={
        400: {"description": "Invalid destination, timestamp or sender", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Group not found", "model": ErrorResponse},
    },
    summary="Send a chat message",
)
async def send_message(
    payload: ChatMessageCreate,
    current_user: User = Depends(get_current_user),
    chat_service: ChatMessageService = Depends(get_chat_message_service),
) -> ChatMessageResponse:
    """Persist a message from the current user to a group or private chat."""
    message = await chat_service.save_message(
        content=payload.content,
        sender_id=current_user.id,
        group_id=payload.group_id,
        private_chat_id=payload.private_chat_id,
        timestamp=payload.timestamp,
    )
    return ChatMessageResponse(
        id=message.id,
        content=message.content,
        sender_id=message.sender_id,
        sender_username=current_user.username,
        timestamp=message.timestamp,
        group_id=message.group_id,
        private_chat_id=message.private_chat_id,
    )


@router.post(
    "/upload-image",
    response_model=ChatImageUploadResponse,
    responses={
        400: {"description": "Empty, oversized or unsupported image", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        404: {"description": "Receiver not found", "model": ErrorResponse},
        500: {"description": "Image could not be read", "model": ChatImageUploadResponse},
    },
    summary="Upload Chat Image",
    description=(
        "Uploads an image to be used in chat messages. The sender is the currently "
        "authenticated user. Accepted formats are detected from the file content."
    ),
)
async def upload_chat_image(
    image: Optional[UploadFile] = File(default=None, description="Image file (field name: image)"),
    receiver_user_id: Optional[int] = Form(default=None, alias="receiverUserId"),
    current_user: User = Depends(get_current_user),
    validator: ImageValidator = Depends(get_image_validator),
    chat_image_service: ChatImageService = Depends(get_chat_image_service),
):
    """
    Validate and store an image sent by the current user to `receiverUserId`.

    Returns:
        ChatImageUploadResponse (HTTP 200) with the generated image id, or
        HTTP 500 with a null id if the upload could not be read.
    """
    if image is None:
        raise ValidationError("Image file cannot be empty", field="image")

    limit = settings.multipart_max_bytes
    if limit is not None and image.size is not None and image.size > limit:
        raise UploadTooLargeError(max_bytes=limit, actual_bytes=image.size)

    try:
        content = await image.read()
    except OSError:
        logger.error("Failed to read/process uploaded image file", exc_info=True)
        body = ChatImageUploadResponse(message="Failed to process image file", image_id=None)
        return JSONResponse(status_code=500, content=body.model_dump(by_alias=True))
    finally:
        await image.close()

    if limit is not None and len(content) > limit:
        raise UploadTooLargeError(max_bytes=limit, actual_bytes=len(content))

    logger.info(
        "Received chat image: sender_id=%s receiver_id=%s filename=%s size=%d bytes",
        current_user.id,
        receiver_user_id,
        image.filename or "unknown",
        len(content),
    )

    validated = validator.validate(content, image.content_type)
    image_id = await chat_image_service.upload_chat_image(
        validated.content, current_user.id, receiver_user_id
    )
    return ChatImageUploadResponse(message="Image uploaded successfully", image_id=image_id)
