import logging
from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, List, Optional

from app.core.enums import WorkspaceRole
from app.core.exceptions import ConflictError, NotFoundError, RemoteFailureError, translate_storage_error
from app.database.supabase_client import rpc_row
from app.modules.members.schemas import (
    WorkspaceMemberResponse, WorkspaceMemberAddByEmail, BoardMemberResponse
)
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)

MEMBER_SELECT = "id, workspace_id, user_id, role, created_at, users(id, name, email)"
BOARD_MEMBER_SELECT = "id, board_id, user_id, created_at, users(id, name, email)"

LAST_OWNER_DETAIL = "A workspace must keep at least one owner"


def _member_response(row: Dict[str, Any]) -> WorkspaceMemberResponse:
    row = dict(row)
    row["user"] = row.pop("users", None)
    return WorkspaceMemberResponse(**row)


def _board_member_response(row: Dict[str, Any]) -> BoardMemberResponse:
    row = dict(row)
    row["user"] = row.pop("users", None)
    return BoardMemberResponse(**row)


class MemberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _count_owners(self, workspace_id: str) -> int:
        result = self.supabase.table("workspace_members")\
            .select("id")\
            .eq("workspace_id", workspace_id)\
            .eq("role", WorkspaceRole.OWNER.value)\
            .execute()
        return len(result.data or [])

    def _ensure_not_last_owner(self, member: Dict[str, Any]) -> None:
        if member["role"] != WorkspaceRole.OWNER.value:
            return
        if self._count_owners(member["workspace_id"]) <= 1:
            raise ConflictError(LAST_OWNER_DETAIL)

    def add_member(
        self,
        workspace_id: str,
        user_id: str,
        role: WorkspaceRole = WorkspaceRole.MEMBER,
        board_ids: Optional[List[str]] = None
    ) -> WorkspaceMemberResponse:
        """Add a registered user to the workspace, optionally granting board access"""
        board_ids = board_ids or []
        try:
            # Verify user exists
            UserService(self.supabase).get_user_by_id(user_id)

            existing = self.supabase.table("workspace_members")\
                .select("id")\
                .eq("workspace_id", workspace_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if existing.data:
                raise ConflictError("User is already a member of this workspace")

            if board_ids:
                boards_result = self.supabase.table("boards")\
                    .select("id")\
                    .eq("workspace_id", workspace_id)\
                    .in_("id", board_ids)\
                    .execute()
                found = {b["id"] for b in boards_result.data or []}
                missing = [b for b in board_ids if b not in found]
                if missing:
                    raise NotFoundError(f"Board not found in this workspace: {', '.join(missing)}")

            result = self.supabase.rpc("add_workspace_member", {
                "p_workspace_id": workspace_id,
                "p_user_id": user_id,
                "p_role": WorkspaceRole(role).value,
                "p_board_ids": board_ids
            }).execute()
            member = rpc_row(result.data)
            if not member:
                raise RemoteFailureError("Failed to add member")

            logger.info(f"Added user {user_id} to workspace {workspace_id} as {WorkspaceRole(role).value}")
            return self.get_member(member["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e, conflict_detail="User is already a member of this workspace")

    def add_member_by_email(self, workspace_id: str, member_data: WorkspaceMemberAddByEmail) -> WorkspaceMemberResponse:
        """Add a user who has already signed up, looked up by email"""
        user = UserService(self.supabase).get_user_by_email(member_data.email)
        if user is None:
            raise NotFoundError("User not found. Please ensure the email is correct and the user has signed up.")
        return self.add_member(workspace_id, user.id, WorkspaceRole.MEMBER, member_data.board_ids)

    def get_member_row(self, member_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("workspace_members")\
                .select("*")\
                .eq("id", member_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        if not result.data:
            raise NotFoundError("Workspace member not found")
        return result.data[0]

    def get_member(self, member_id: str) -> WorkspaceMemberResponse:
        try:
            result = self.supabase.table("workspace_members")\
                .select(MEMBER_SELECT)\
                .eq("id", member_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        if not result.data:
            raise NotFoundError("Workspace member not found")
        return _member_response(result.data[0])

    def list_members(self, workspace_id: str) -> List[WorkspaceMemberResponse]:
        """List members of a workspace with their user details"""
        try:
            result = self.supabase.table("workspace_members")\
                .select(MEMBER_SELECT)\
                .eq("workspace_id", workspace_id)\
                .order("created_at")\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        return [_member_response(m) for m in result.data or []]

    def remove_member(self, member: Dict[str, Any]) -> WorkspaceMemberResponse:
        """Delete one membership row and the user's board grants in that workspace.

        Memberships in other workspaces are untouched.
        """
        try:
            self._ensure_not_last_owner(member)
            result = self.supabase.rpc("remove_workspace_member", {
                "p_member_id": member["id"]
            }).execute()
            removed = rpc_row(result.data) or member
            logger.info(f"Removed user {member['user_id']} from workspace {member['workspace_id']}")
            return WorkspaceMemberResponse(**removed)
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def leave_workspace(self, workspace_id: str, user_id: str) -> WorkspaceMemberResponse:
        """Remove the caller's own membership"""
        try:
            result = self.supabase.table("workspace_members")\
                .select("*")\
                .eq("workspace_id", workspace_id)\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        if not result.data:
            raise NotFoundError("You are not a member of this workspace")
        return self.remove_member(result.data[0])

    def toggle_role(self, member: Dict[str, Any]) -> WorkspaceMemberResponse:
        """Flip member <-> owner, refusing to demote the last owner"""
        new_role = WorkspaceRole(member["role"]).toggled()
        try:
            self._ensure_not_last_owner(member)
            self.supabase.rpc("set_workspace_member_role", {
                "p_member_id": member["id"],
                "p_role": new_role.value
            }).execute()
            logger.info(f"Member {member['id']} role updated to {new_role.value}")
            return self.get_member(member["id"])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def grant_board_access(self, board: Dict[str, Any], user_id: str) -> BoardMemberResponse:
        """Grant a workspace member access to a board"""
        try:
            membership = self.supabase.table("workspace_members")\
                .select("id")\
                .eq("workspace_id", board["workspace_id"])\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if not membership.data:
                raise NotFoundError("User is not a member of this board's workspace")

            existing = self.supabase.table("board_members")\
                .select("id")\
                .eq("board_id", board["id"])\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
            if existing.data:
                raise ConflictError("User already has access to this board")

            result = self.supabase.table("board_members").insert({
                "board_id": board["id"],
                "user_id": user_id
            }).execute()
            if not result.data:
                raise RemoteFailureError("Failed to grant board access")

            logger.info(f"Granted user {user_id} access to board {board['id']}")
            return BoardMemberResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e, conflict_detail="User already has access to this board")

    def revoke_board_access(self, board_id: str, user_id: str) -> bool:
        """Remove a board grant. Revoking a grant that does not exist is not an error."""
        try:
            result = self.supabase.table("board_members")\
                .delete()\
                .eq("board_id", board_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        return len(result.data or []) > 0

    def list_board_members(self, board_id: str) -> List[BoardMemberResponse]:
        """List users holding a grant on the board"""
        try:
            result = self.supabase.table("board_members")\
                .select(BOARD_MEMBER_SELECT)\
                .eq("board_id", board_id)\
                .order("created_at")\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        return [_board_member_response(m) for m in result.data or []]
