"""
VaultChat Backend — User Service Unit Tests
============================================

What:  Tests for registration, password hashing and user listing.

Test Strategy:
    ✅ Registration stores a bcrypt hash, never the plaintext
    ✅ A taken username is rejected before any insert
    ✅ Blank and over-long inputs are rejected
"""

import bcrypt
import pytest

from vaultchat.exceptions import DuplicateUsernameError, ValidationError
from vaultchat.services.user_service import UserService, hash_password, verify_password


@pytest.fixture
def service(user_store):
    async def _insert(user):
        user.id = 7
        return user

    user_store.insert.side_effect = _insert
    return UserService(user_store=user_store)


class TestPasswordHashing:

    def test_hash_verifies(self):
        hashed = hash_password("s3cret")

        assert hashed != "s3cret"
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_salts_differ(self):
        assert hash_password("same") != hash_password("same")

    def test_non_bcrypt_hash_does_not_verify(self):
        assert verify_password("s3cret", "s3cret") is False


class TestRegisterUser:

    @pytest.mark.asyncio
    async def test_new_user_registered_with_hash(self, service, user_store):
        user = await service.register_user("alice", "pw123")

        assert user.id == 7
        assert user.username == "alice"
        assert user.password != "pw123"
        assert bcrypt.checkpw(b"pw123", user.password.encode("utf-8"))
        user_store.exists_by_username.assert_awaited_once_with("alice")
        user_store.insert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected(self, service, user_store):
        user_store.exists_by_username.return_value = True

        with pytest.raises(DuplicateUsernameError, match="'alice' is already taken"):
            await service.register_user("alice", "pw")

        user_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["", "   "])
    async def test_blank_username_rejected(self, service, user_store, username):
        with pytest.raises(ValidationError, match="Username"):
            await service.register_user(username, "pw")

        user_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_password_rejected(self, service):
        with pytest.raises(ValidationError, match="Password"):
            await service.register_user("alice", "")

    @pytest.mark.asyncio
    async def test_password_over_72_bytes_rejected(self, service, user_store):
        with pytest.raises(ValidationError, match="at most 72 bytes"):
            await service.register_user("alice", "x" * 73)

        user_store.exists_by_username.assert_not_awaited()


class TestLookups:

    @pytest.mark.asyncio
    async def test_username_exists(self, service, user_store):
        user_store.exists_by_username.return_value = True
        assert await service.username_exists("alice") is True

    @pytest.mark.asyncio
    async def test_get_all_users(self, service, user_store, make_user):
        users = [make_user(user_id=1), make_user(user_id=2, username="bob")]
        user_store.list_all.return_value = users

        assert await service.get_all_users() == users
