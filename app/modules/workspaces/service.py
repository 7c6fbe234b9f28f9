import logging
from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, List

from app.core.enums import WorkspaceRole
from app.core.exceptions import NotFoundError, RemoteFailureError, translate_storage_error
from app.database.supabase_client import rpc_row
from app.modules.boards.service import BoardService
from app.modules.members.service import MemberService
from app.modules.workspaces.schemas import (
    WorkspaceCreate, WorkspaceUpdate, WorkspaceResponse, WorkspaceSummary, WorkspaceDetailsResponse
)

logger = logging.getLogger(__name__)


class WorkspaceService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_workspace(self, workspace_data: WorkspaceCreate, user_id: str) -> WorkspaceResponse:
        """Create a workspace with its creator as owner, in one transaction"""
        try:
            result = self.supabase.rpc("create_workspace", {
                "p_name": workspace_data.name,
                "p_owner_id": user_id
            }).execute()
            workspace = rpc_row(result.data)
            if not workspace:
                raise RemoteFailureError("Failed to create workspace")

            logger.info(f"User {user_id} created workspace {workspace['id']}")
            return WorkspaceResponse(**workspace)
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def list_workspaces(self, user_id: str) -> List[WorkspaceSummary]:
        """Workspaces the user holds a membership row in, newest first"""
        try:
            result = self.supabase.table("workspace_members")\
                .select("role, workspaces(*)")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)

        workspaces = []
        for item in result.data or []:
            if item.get("workspaces"):
                workspaces.append(WorkspaceSummary(**item["workspaces"], role=item["role"]))
        workspaces.sort(key=lambda w: w.created_at, reverse=True)
        return workspaces

    def get_workspace(self, workspace_id: str) -> WorkspaceResponse:
        """Get workspace by ID"""
        try:
            result = self.supabase.table("workspaces")\
                .select("*")\
                .eq("id", workspace_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise NotFoundError("Workspace not found")

            return WorkspaceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def update_workspace(self, workspace_id: str, workspace_data: WorkspaceUpdate) -> WorkspaceResponse:
        """Rename workspace"""
        try:
            result = self.supabase.table("workspaces")\
                .update({"name": workspace_data.name})\
                .eq("id", workspace_id)\
                .execute()

            if not result.data:
                raise NotFoundError("Workspace not found")

            return WorkspaceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def delete_workspace(self, workspace_id: str) -> bool:
        """Delete workspace; boards, members and invitations cascade"""
        try:
            result = self.supabase.table("workspaces")\
                .delete()\
                .eq("id", workspace_id)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)

        if not result.data:
            raise NotFoundError("Workspace not found")
        logger.info(f"Deleted workspace {workspace_id}")
        return True

    def get_workspace_details(self, workspace_id: str, membership: Dict[str, Any]) -> WorkspaceDetailsResponse:
        """Workspace with its members and the boards the caller can open"""
        role = WorkspaceRole(membership["role"])
        return WorkspaceDetailsResponse(
            workspace=self.get_workspace(workspace_id),
            role=role,
            members=MemberService(self.supabase).list_members(workspace_id),
            boards=BoardService(self.supabase).list_boards(
                workspace_id, membership["user_id"], role is WorkspaceRole.OWNER
            ),
        )
