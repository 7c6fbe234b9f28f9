from fastapi import APIRouter, Depends
from app.core.exceptions import ForbiddenError
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import UserUpdate, UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import get_current_user, user_can_access_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
    supabase: Client = Depends(get_supabase)
):
    """Get user by ID (only if same user or shares a workspace)"""
    if not user_can_access_user(current_user["id"], user_id, supabase):
        raise ForbiddenError("User not accessible")
    return service.get_user_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: Dict = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    """Update own profile name"""
    if current_user["id"] != user_id:
        raise ForbiddenError("You can only update your own profile")
    return service.update_user(user_id, user_data)
