from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.workspaces.schemas import (
    WorkspaceCreate, WorkspaceUpdate, WorkspaceResponse, WorkspaceSummary, WorkspaceDetailsResponse
)
from app.modules.workspaces.service import WorkspaceService
from app.core.dependencies import get_current_user, check_workspace_member, check_workspace_owner
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


def get_workspace_service(supabase: Client = Depends(get_supabase)) -> WorkspaceService:
    return WorkspaceService(supabase)


@router.post("", response_model=WorkspaceResponse, status_code=201)
async def create_workspace(
    workspace_data: WorkspaceCreate,
    current_user: Dict = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service)
):
    """Create a workspace; the caller becomes its owner"""
    return service.create_workspace(workspace_data, current_user["id"])


@router.get("", response_model=List[WorkspaceSummary])
async def list_workspaces(
    current_user: Dict = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service)
):
    """List workspaces the caller is a member of"""
    return service.list_workspaces(current_user["id"])


@router.get("/{workspace_id}", response_model=WorkspaceDetailsResponse)
async def get_workspace(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
    supabase: Client = Depends(get_supabase)
):
    """Workspace details with members and visible boards (members only)"""
    membership = check_workspace_member(workspace_id, current_user, supabase)
    return service.get_workspace_details(workspace_id, membership)


@router.put("/{workspace_id}", response_model=WorkspaceResponse)
async def update_workspace(
    workspace_id: str,
    workspace_data: WorkspaceUpdate,
    current_user: Dict = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
    supabase: Client = Depends(get_supabase)
):
    """Rename workspace (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.update_workspace(workspace_id, workspace_data)


@router.delete("/{workspace_id}", status_code=204)
async def delete_workspace(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: WorkspaceService = Depends(get_workspace_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete workspace with everything in it (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    service.delete_workspace(workspace_id)
    return None
