"""
VaultChat Backend — Error Mapping Unit Tests
=============================================

What:  Tests for the exception → (status, body) table and the upload-limit label.
"""

import pytest

from vaultchat import exceptions as exc
from vaultchat.error_mapping import ERROR_TABLE, format_size_label, map_exception


class TestErrorTable:

    @pytest.mark.parametrize(
        "error, status, body",
        [
            (exc.UserNotFoundError("id 7"), 404, "User not found: id 7"),
            (exc.GroupNotFoundError("Group with id 3 not found"), 404, "Group not found: Group with id 3 not found"),
            (exc.UnauthorizedError("no token"), 401, "Unauthorized: no token"),
            (exc.AccessDeniedError("x"), 403, "Access denied: x"),
            (exc.AdminAccessDeniedError("x"), 403, "Admin access denied: x"),
            (exc.AlreadyMemberError("x"), 409, "Membership error: x"),
            (exc.NotMemberError("x"), 403, "Membership error: x"),
            (exc.DuplicateUsernameError("taken"), 409, "Registration error: taken"),
            (exc.AlreadyVotedError("x"), 400, "Poll error: x"),
            (exc.DecryptionFailedError("x"), 500, "Chat error: x"),
            (exc.EncryptionFailedError("x"), 500, "Chat error: x"),
            (exc.PollDoesNotBelongToGroupError("x"), 404, "Poll error: x"),
            (exc.PollOptionNotFoundError("x"), 404, "Poll error: x"),
            (exc.ValidationError("bad"), 400, "Bad request: bad"),
        ],
    )
    def test_mapped_errors(self, error, status, body):
        mapping = map_exception(error)

        assert mapping.status_code == status
        assert mapping.message == body

    def test_bad_credentials_never_echoes_message(self):
        mapping = map_exception(exc.BadCredentialsError("wrong password for alice"))

        assert mapping.status_code == 401
        assert mapping.message == "Authentication failed"

    def test_validation_subclasses_inherit_bad_request(self):
        assert map_exception(exc.SenderNotFoundError("Sender not found by ID")).message == (
            "Bad request: Sender not found by ID"
        )
        assert map_exception(exc.PrivateChatNotFoundError("PrivateChat not found")).status_code == 400

    def test_every_table_entry_is_a_vaultchat_error(self):
        assert all(issubclass(cls, exc.VaultChatError) for cls in ERROR_TABLE)


class TestUnclassifiedErrors:

    def test_runtime_error_exposes_message_by_default(self):
        mapping = map_exception(RuntimeError("boom"))

        assert mapping.status_code == 500
        assert mapping.message == "Internal error: boom"

    def test_runtime_error_hidden_when_detail_disabled(self):
        mapping = map_exception(RuntimeError("password=hunter2"), expose_internal_detail=False)

        assert mapping.status_code == 500
        assert "hunter2" not in mapping.message
        assert mapping.message.startswith("Internal error: ")

    def test_base_application_error_is_unclassified(self):
        mapping = map_exception(exc.VaultChatError("odd state"))

        assert mapping.status_code == 500
        assert mapping.message == "Internal error: odd state"


class TestUploadTooLarge:

    def test_message_without_known_limit(self):
        mapping = map_exception(exc.UploadTooLargeError())

        assert mapping.status_code == 400
        assert mapping.message == "File size exceeds the maximum allowed limit"

    def test_message_with_configured_limit(self):
        mapping = map_exception(exc.UploadTooLargeError(), upload_limit_bytes=10 * 1024 * 1024)

        assert mapping.message == "File size exceeds the maximum allowed limit of 10MB"

    def test_falls_back_to_limit_carried_by_exception(self):
        mapping = map_exception(exc.UploadTooLargeError(max_bytes=512 * 1024))

        assert mapping.message == "File size exceeds the maximum allowed limit of 512KB"


class TestFormatSizeLabel:

    @pytest.mark.parametrize(
        "size, label",
        [
            (5 * 1024 * 1024, "5MB"),
            (1024 * 1024, "1MB"),
            (1536 * 1024, "1536KB"),
            (1024, "1KB"),
            (1536, "1536B"),
            (1, "1B"),
            (0, None),
            (None, None),
        ],
    )
    def test_labels(self, size, label):
        assert format_size_label(size) == label
