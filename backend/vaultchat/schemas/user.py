"""
VaultChat Backend — User and Auth Schemas
==========================================

What:  Pydantic models for registration, login and user listing.
"""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    # 72-byte bcrypt limit is enforced by UserService (bytes, not characters)
    password: str = Field(min_length=1, description="Plaintext; hashed before storage")


class LoginRequest(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    """Public view of a user. The password hash is never returned."""
    id: int
    username: str

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    message: str = Field(default="Registration successful")
    id: int
    username: str


class LoginResponse(BaseModel):
    token: str
    token_type: str = Field(default="bearer")
    user: UserOut
