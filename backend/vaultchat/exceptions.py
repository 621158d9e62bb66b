"""
VaultChat Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for every error kind the API reports.
How:   Each exception carries a client-safe message and an optional context
       dict. A single mapping table (`vaultchat.error_mapping`) translates the
       class of a raised exception into an HTTP status and response body.
Who:   Raised by services, stores and dependencies; translated by the global
       handlers registered in `vaultchat.main`.

Exception Hierarchy:
    VaultChatError (base)                      → 500
    ├── ValidationError                        → 400 "Bad request: "
    │   ├── SenderNotFoundError                → 400
    │   └── PrivateChatNotFoundError           → 400
    ├── UploadTooLargeError                    → 400 (fixed message + limit)
    ├── UserNotFoundError                      → 404 "User not found: "
    ├── GroupNotFoundError                     → 404 "Group not found: "
    ├── UnauthorizedError                      → 401 "Unauthorized: "
    ├── BadCredentialsError                    → 401 "Authentication failed"
    ├── AccessDeniedError                      → 403 "Access denied: "
    ├── AdminAccessDeniedError                 → 403 "Admin access denied: "
    ├── AlreadyMemberError                     → 409 "Membership error: "
    ├── NotMemberError                         → 403 "Membership error: "
    ├── DuplicateUsernameError                 → 409 "Registration error: "
    ├── AlreadyVotedError                      → 400 "Poll error: "
    ├── PollDoesNotBelongToGroupError          → 404 "Poll error: "
    ├── PollOptionNotFoundError                → 404 "Poll error: "
    ├── DecryptionFailedError                  → 500 "Chat error: "
    └── EncryptionFailedError                  → 500 "Chat error: "
"""

from typing import Any, Dict, Optional


class VaultChatError(Exception):
    """
    Base exception for all VaultChat application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


# ── Validation ────────────────────────────────────────────────────────────


class ValidationError(VaultChatError):
    """
    Raised when client input fails validation.

    When:    Missing ids, malformed timestamps, unsupported image types, empty
             or oversized image payloads.
    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class SenderNotFoundError(ValidationError):
    """The sender of a chat message could not be resolved by id or username."""


class PrivateChatNotFoundError(ValidationError):
    """The private chat a message is addressed to does not exist."""


class UploadTooLargeError(VaultChatError):
    """
    Raised when a multipart upload exceeds the framework-level size limit.

    HTTP:    400 Bad Request, with the configured limit in the message when known.
    """

    def __init__(
        self,
        max_bytes: Optional[int] = None,
        actual_bytes: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if max_bytes is not None:
            ctx["max_bytes"] = max_bytes
        if actual_bytes is not None:
            ctx["actual_bytes"] = actual_bytes
        super().__init__(message="Maximum upload size exceeded", context=ctx)
        self.max_bytes = max_bytes


# ── Not Found ─────────────────────────────────────────────────────────────


class UserNotFoundError(VaultChatError):
    """A referenced user does not exist. HTTP 404."""


class GroupNotFoundError(VaultChatError):
    """A referenced group does not exist. HTTP 404."""


# ── Authentication / Authorization ────────────────────────────────────────


class UnauthorizedError(VaultChatError):
    """
    Raised when a request carries no valid session.

    When:    Missing, unknown or expired bearer token.
    HTTP:    401 Unauthorized
    """


class BadCredentialsError(VaultChatError):
    """
    Raised on a failed login.

    HTTP:    401 with the fixed body "Authentication failed"; the message is
             never echoed so the response does not reveal which part was wrong.
    """

    def __init__(
        self,
        message: str = "Invalid username or password",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AccessDeniedError(VaultChatError):
    """The authenticated user may not perform this action. HTTP 403."""


class AdminAccessDeniedError(VaultChatError):
    """The action requires group admin rights. HTTP 403."""


# ── Conflicts ─────────────────────────────────────────────────────────────


class DuplicateUsernameError(VaultChatError):
    """
    Raised when registering a username that is already taken.

    When:    The application-level existence check finds the name, or the
             store's unique constraint rejects a concurrent insert.
    HTTP:    409 Conflict
    """


class AlreadyMemberError(VaultChatError):
    """The user is already a member of the group. HTTP 409."""


class NotMemberError(VaultChatError):
    """The user is not a member of the group. HTTP 403."""


# ── Polls ─────────────────────────────────────────────────────────────────


class AlreadyVotedError(VaultChatError):
    """HTTP 400."""


class PollDoesNotBelongToGroupError(VaultChatError):
    """HTTP 404."""


class PollOptionNotFoundError(VaultChatError):
    """HTTP 404."""


# ── Message Processing ────────────────────────────────────────────────────


class DecryptionFailedError(VaultChatError):
    """A stored chat message could not be decrypted. HTTP 500."""


class EncryptionFailedError(VaultChatError):
    """A chat message could not be encrypted before storage. HTTP 500."""
