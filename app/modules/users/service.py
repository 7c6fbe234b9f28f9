import logging
from supabase import Client
from app.core.exceptions import NotFoundError, translate_storage_error
from app.modules.users.schemas import UserUpdate, UserResponse
from typing import Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise NotFoundError("User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        """Get user profile by email; None when nobody registered with it"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("email", email.strip().lower())\
                .limit(1)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)

        if not result.data:
            return None
        return UserResponse(**result.data[0])

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user profile name"""
        try:
            result = self.supabase.table("users")\
                .update({"name": user_data.name.strip()})\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise NotFoundError("User not found")

            logger.info(f"Updated profile of user {user_id}")
            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)
