"""
VaultChat Backend — Auth Route Handlers
========================================

What:  POST /api/auth/register and POST /api/auth/login.
"""

import logging

from fastapi import APIRouter, Depends

from vaultchat.dependencies import get_auth_service, get_user_service
from vaultchat.schemas.common import ErrorResponse
from vaultchat.schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserOut,
)
from vaultchat.services.auth_service import AuthService
from vaultchat.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    status_code=201,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Blank username or password", "model": ErrorResponse},
        409: {"description": "Username already taken", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    user_service: UserService = Depends(get_user_service),
) -> RegisterResponse:
    user = await user_service.register_user(payload.username, payload.password)
    return RegisterResponse(id=user.id, username=user.username)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Authentication failed", "model": ErrorResponse}},
    summary="Log in and obtain a bearer token",
)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    token, user = await auth_service.login(payload.username, payload.password)
    return LoginResponse(token=token, user=UserOut.model_validate(user))
