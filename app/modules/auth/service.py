import logging
from supabase import Client
from fastapi import HTTPException
from typing import Dict, Any

from app.core.exceptions import (
    ConflictError, RemoteFailureError, UnauthorizedError, translate_storage_error
)
from app.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, auth_client: Client, supabase: Client):
        self.auth_client = auth_client
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user with Supabase Auth and create their profile row"""
        email = register_data.email.strip().lower()
        name = register_data.name.strip()
        try:
            existing = self.supabase.table("users")\
                .select("id")\
                .eq("email", email)\
                .limit(1)\
                .execute()
            if existing.data:
                raise ConflictError("This email is already registered. Please sign in instead.")
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

        try:
            auth_response = self.auth_client.auth.sign_up({
                "email": email,
                "password": register_data.password,
                "options": {
                    "data": {"name": name}
                }
            })
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise ConflictError("This email is already registered. Please sign in instead.")
            logger.error(f"Sign up failed for {email}: {error_message}")
            raise RemoteFailureError(f"Registration failed: {error_message}")

        if not auth_response.user:
            raise RemoteFailureError("Failed to register user")

        user_id = auth_response.user.id
        try:
            self.supabase.table("users").insert({
                "id": user_id,
                "email": email,
                "name": name
            }).execute()
        except Exception as e:
            logger.error(f"Error creating user profile for {user_id}: {e}")
            self._drop_client_session()
            raise translate_storage_error(e, conflict_detail="This email is already registered. Please sign in instead.")

        logger.info(f"Registered user {user_id}")
        return RegisterResponse(
            user_id=user_id,
            email=email,
            message="Account created successfully. Please check your email for verification."
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        email = login_data.email.strip().lower()
        try:
            auth_response = self.auth_client.auth.sign_in_with_password({
                "email": email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise UnauthorizedError("Invalid email or password. Please check your credentials and try again.")
            logger.error(f"Sign in failed for {email}: {error_message}")
            raise RemoteFailureError(f"Login failed: {error_message}")

        if not auth_response.user or not auth_response.session:
            raise UnauthorizedError("Failed to create session. Please try again.")

        return TokenResponse(
            access_token=auth_response.session.access_token,
            token_type="bearer",
            user_id=auth_response.user.id,
            email=auth_response.user.email or email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve the user behind a Supabase Auth token"""
        try:
            user_response = self.auth_client.auth.get_user(jwt=token)
        except Exception as e:
            logger.info(f"Token rejected: {e}")
            raise UnauthorizedError("Invalid or expired token")

        if not user_response or not user_response.user:
            raise UnauthorizedError("Invalid or expired token")
        user = user_response.user
        return {
            "id": user.id,
            "email": (user.email or "").lower(),
            "user_metadata": user.user_metadata or {},
        }

    def logout(self, token: str) -> bool:
        """End the session behind the caller's access token.

        Goes through the admin API of the service-role client so only the
        session the token belongs to is revoked, whatever the shared auth
        client currently holds.
        """
        try:
            self.supabase.auth.admin.sign_out(token, "local")
        except Exception as e:
            logger.error(f"Sign out failed: {e}")
            raise RemoteFailureError("Logout failed")
        logger.info("Session signed out")
        return True

    def _drop_client_session(self) -> None:
        try:
            self.auth_client.auth.sign_out({"scope": "local"})
        except Exception as e:
            logger.warning(f"Dropping client session failed: {e}")
