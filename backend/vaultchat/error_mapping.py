"""
VaultChat Backend — Exception to HTTP Mapping
==============================================

What:  Fixed lookup from exception class to (HTTP status, error code, message prefix).
How:   `map_exception()` walks the exception's MRO and uses the first class
       found in ERROR_TABLE, so subclasses inherit their parent's entry.
       Anything unrecognized becomes a 500 "Internal error".
Who:   Called by the global exception handlers in `vaultchat.main`.

The mapping is a pure function: no state, no I/O. The only formatting
input from outside is the configured multipart upload limit.
"""

from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Type

from vaultchat.exceptions import (
    AccessDeniedError,
    AdminAccessDeniedError,
    AlreadyMemberError,
    AlreadyVotedError,
    BadCredentialsError,
    DecryptionFailedError,
    DuplicateUsernameError,
    EncryptionFailedError,
    GroupNotFoundError,
    NotMemberError,
    PollDoesNotBelongToGroupError,
    PollOptionNotFoundError,
    UnauthorizedError,
    UploadTooLargeError,
    UserNotFoundError,
    ValidationError,
)

KB = 1024
MB = 1024 * 1024

UPLOAD_TOO_LARGE_MESSAGE = "File size exceeds the maximum allowed limit"
GENERIC_INTERNAL_DETAIL = "An unexpected error occurred"


class ErrorEntry(NamedTuple):
    status_code: int
    error: str
    prefix: str
    # False: the body is the prefix alone, the exception message is dropped
    include_detail: bool = True


@dataclass(frozen=True)
class ErrorMapping:
    """Resolved HTTP response for one exception."""

    status_code: int
    error: str
    message: str


ERROR_TABLE: Dict[Type[Exception], ErrorEntry] = {
    UserNotFoundError: ErrorEntry(404, "user_not_found", "User not found: "),
    GroupNotFoundError: ErrorEntry(404, "group_not_found", "Group not found: "),
    UnauthorizedError: ErrorEntry(401, "unauthorized", "Unauthorized: "),
    AccessDeniedError: ErrorEntry(403, "access_denied", "Access denied: "),
    AdminAccessDeniedError: ErrorEntry(403, "admin_access_denied", "Admin access denied: "),
    AlreadyMemberError: ErrorEntry(409, "membership_error", "Membership error: "),
    NotMemberError: ErrorEntry(403, "membership_error", "Membership error: "),
    DuplicateUsernameError: ErrorEntry(409, "registration_error", "Registration error: "),
    BadCredentialsError: ErrorEntry(401, "authentication_failed", "Authentication failed", False),
    AlreadyVotedError: ErrorEntry(400, "poll_error", "Poll error: "),
    DecryptionFailedError: ErrorEntry(500, "chat_error", "Chat error: "),
    EncryptionFailedError: ErrorEntry(500, "chat_error", "Chat error: "),
    PollDoesNotBelongToGroupError: ErrorEntry(404, "poll_error", "Poll error: "),
    PollOptionNotFoundError: ErrorEntry(404, "poll_error", "Poll error: "),
    ValidationError: ErrorEntry(400, "bad_request", "Bad request: "),
}

INTERNAL_ERROR = ErrorEntry(500, "internal_error", "Internal error: ")


def format_size_label(size_bytes: Optional[int]) -> Optional[str]:
    """
    Render a byte count for the upload-limit message.

    Whole megabytes if evenly divisible, else whole kilobytes if evenly
    divisible, else raw bytes. Returns None when no positive limit is known.

    >>> format_size_label(10 * 1024 * 1024)
    '10MB'
    >>> format_size_label(1536)
    '1536B'
    """
    if size_bytes is None or size_bytes <= 0:
        return None
    if size_bytes % MB == 0:
        return f"{size_bytes // MB}MB"
    if size_bytes % KB == 0:
        return f"{size_bytes // KB}KB"
    return f"{size_bytes}B"


def _exception_text(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str):
        return message
    return str(exc)


def _lookup(exc: BaseException) -> Optional[ErrorEntry]:
    for cls in type(exc).__mro__:
        entry = ERROR_TABLE.get(cls)
        if entry is not None:
            return entry
    return None


def map_exception(
    exc: BaseException,
    upload_limit_bytes: Optional[int] = None,
    expose_internal_detail: bool = True,
) -> ErrorMapping:
    """
    Translate an exception into its HTTP status and response body.

    Args:
        exc: The exception raised while handling the request.
        upload_limit_bytes: Configured multipart limit, used only for
            UploadTooLargeError. Falls back to the limit carried by the exception.
        expose_internal_detail: Whether unclassified errors echo their message.
            The HTTP layer passes `settings.expose_internal_errors`.

    Returns:
        ErrorMapping(status_code, error, message)
    """
    if isinstance(exc, UploadTooLargeError):
        limit = upload_limit_bytes if upload_limit_bytes is not None else exc.max_bytes
        label = format_size_label(limit)
        message = UPLOAD_TOO_LARGE_MESSAGE
        if label is not None:
            message = f"{UPLOAD_TOO_LARGE_MESSAGE} of {label}"
        return ErrorMapping(400, "upload_too_large", message)

    entry = _lookup(exc)
    if entry is None:
        detail = _exception_text(exc) if expose_internal_detail else GENERIC_INTERNAL_DETAIL
        return ErrorMapping(INTERNAL_ERROR.status_code, INTERNAL_ERROR.error, INTERNAL_ERROR.prefix + detail)

    if not entry.include_detail:
        return ErrorMapping(entry.status_code, entry.error, entry.prefix)
    return ErrorMapping(entry.status_code, entry.error, entry.prefix + _exception_text(exc))
