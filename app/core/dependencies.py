"""
Core dependencies for route protection and access checks.

Workspace visibility is decided by the workspace_members row alone: every
accessor, owners included, needs one. Ownership is the membership role.
Boards are open to the owners of their workspace and to users holding a
board_members grant.
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.enums import WorkspaceRole
from app.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError, translate_storage_error
from app.database.supabase_client import get_auth_supabase, get_supabase
from app.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_auth_service(
    auth_client: Client = Depends(get_auth_supabase),
    supabase: Client = Depends(get_supabase)
) -> AuthService:
    return AuthService(auth_client, supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Current user info ({id, email, user_metadata}) from the bearer token"""
    return auth_service.get_current_user(token)


def _fetch_one(query) -> Optional[Dict[str, Any]]:
    try:
        result = query.limit(1).execute()
    except Exception as e:
        raise translate_storage_error(e)
    return result.data[0] if result.data else None


def get_workspace_row(workspace_id: str, supabase: Client) -> Dict[str, Any]:
    workspace = _fetch_one(
        supabase.table("workspaces").select("*").eq("id", workspace_id)
    )
    if not workspace:
        raise NotFoundError("Workspace not found")
    return workspace


def get_board_row(board_id: str, supabase: Client) -> Dict[str, Any]:
    board = _fetch_one(
        supabase.table("boards").select("*").eq("id", board_id)
    )
    if not board:
        raise NotFoundError("Board not found")
    return board


def get_membership(workspace_id: str, user_id: str, supabase: Client) -> Optional[Dict[str, Any]]:
    """Return the workspace_members row for (workspace, user), or None"""
    return _fetch_one(
        supabase.table("workspace_members")
        .select("id, workspace_id, user_id, role")
        .eq("workspace_id", workspace_id)
        .eq("user_id", user_id)
    )


def is_workspace_owner(workspace_id: str, user_id: str, supabase: Client) -> bool:
    membership = get_membership(workspace_id, user_id, supabase)
    return bool(membership) and membership["role"] == WorkspaceRole.OWNER.value


def has_board_grant(board_id: str, user_id: str, supabase: Client) -> bool:
    grant = _fetch_one(
        supabase.table("board_members")
        .select("id")
        .eq("board_id", board_id)
        .eq("user_id", user_id)
    )
    return grant is not None


def check_workspace_member(
    workspace_id: str,
    user_data: dict,
    supabase: Client
) -> Dict[str, Any]:
    """Require a membership row in the workspace. Returns the membership."""
    get_workspace_row(workspace_id, supabase)
    membership = get_membership(workspace_id, user_data["id"], supabase)
    if not membership:
        raise ForbiddenError("You must be a member of this workspace")
    return membership


def check_workspace_owner(
    workspace_id: str,
    user_data: dict,
    supabase: Client
) -> Dict[str, Any]:
    """Require the owner role in the workspace. Returns the membership."""
    membership = check_workspace_member(workspace_id, user_data, supabase)
    if membership["role"] != WorkspaceRole.OWNER.value:
        raise ForbiddenError("Only workspace owners can perform this action")
    return membership


def check_board_access(
    board_id: str,
    user_data: dict,
    supabase: Client
) -> Dict[str, Any]:
    """Allow workspace owners and users with a board grant. Returns the board."""
    board = get_board_row(board_id, supabase)
    user_id = user_data["id"]
    if is_workspace_owner(board["workspace_id"], user_id, supabase):
        return board
    if has_board_grant(board_id, user_id, supabase):
        return board
    logger.info(f"User {user_id} denied access to board {board_id}")
    raise ForbiddenError("You do not have access to this board")


def check_board_owner(
    board_id: str,
    user_data: dict,
    supabase: Client
) -> Dict[str, Any]:
    """Require the owner role in the board's workspace. Returns the board."""
    board = get_board_row(board_id, supabase)
    check_workspace_owner(board["workspace_id"], user_data, supabase)
    return board


def user_can_access_user(current_user_id: str, target_user_id: str, supabase: Client) -> bool:
    """True if target is self or shares at least one workspace with current user"""
    if current_user_id == target_user_id:
        return True
    try:
        my_result = supabase.table("workspace_members")\
            .select("workspace_id")\
            .eq("user_id", current_user_id)\
            .execute()
        workspace_ids = [m["workspace_id"] for m in my_result.data or []]
        if not workspace_ids:
            return False
        shared = supabase.table("workspace_members")\
            .select("id")\
            .eq("user_id", target_user_id)\
            .in_("workspace_id", workspace_ids)\
            .limit(1)\
            .execute()
    except Exception as e:
        raise translate_storage_error(e)
    return bool(shared.data)
