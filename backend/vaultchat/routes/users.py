"""User listing route."""

from typing import List

from fastapi import APIRouter, Depends

from vaultchat.dependencies import get_current_user, get_user_service
from vaultchat.models.user import User
from vaultchat.schemas.user import UserOut
from vaultchat.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserOut], summary="List all registered users")
async def list_users(
    _: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> List[UserOut]:
    users = await user_service.get_all_users()
    return [UserOut.model_validate(user) for user in users]
