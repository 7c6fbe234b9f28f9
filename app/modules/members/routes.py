from fastapi import APIRouter, Depends
from app.core.exceptions import NotFoundError
from app.database.supabase_client import get_supabase
from app.modules.members.schemas import (
    WorkspaceMemberAdd, WorkspaceMemberAddByEmail, WorkspaceMemberResponse,
    BoardMemberGrant, BoardMemberResponse
)
from app.modules.members.service import MemberService
from app.core.dependencies import (
    get_current_user, check_workspace_member, check_workspace_owner,
    check_board_access, check_board_owner
)
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["members"])


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


@router.get("/workspaces/{workspace_id}/members", response_model=List[WorkspaceMemberResponse])
async def list_members(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """List workspace members (members only)"""
    check_workspace_member(workspace_id, current_user, supabase)
    return service.list_members(workspace_id)


@router.post("/workspaces/{workspace_id}/members", response_model=WorkspaceMemberResponse, status_code=201)
async def add_member(
    workspace_id: str,
    member_data: WorkspaceMemberAdd,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Add a registered user by id (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.add_member(workspace_id, member_data.user_id, member_data.role)


@router.post("/workspaces/{workspace_id}/members/by-email", response_model=WorkspaceMemberResponse, status_code=201)
async def add_member_by_email(
    workspace_id: str,
    member_data: WorkspaceMemberAddByEmail,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Add a registered user by email and grant the selected boards (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.add_member_by_email(workspace_id, member_data)


@router.post("/workspaces/{workspace_id}/leave", response_model=WorkspaceMemberResponse)
async def leave_workspace(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Leave a workspace"""
    check_workspace_member(workspace_id, current_user, supabase)
    return service.leave_workspace(workspace_id, current_user["id"])


@router.post("/workspaces/{workspace_id}/members/{member_id}/toggle-role", response_model=WorkspaceMemberResponse)
async def toggle_member_role(
    workspace_id: str,
    member_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Flip a member between owner and member (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    member = service.get_member_row(member_id)
    if member["workspace_id"] != workspace_id:
        raise NotFoundError("Workspace member not found")
    return service.toggle_role(member)


@router.delete("/workspaces/{workspace_id}/members/{member_id}", status_code=204)
async def remove_member(
    workspace_id: str,
    member_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Remove a member from the workspace (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    member = service.get_member_row(member_id)
    if member["workspace_id"] != workspace_id:
        raise NotFoundError("Workspace member not found")
    service.remove_member(member)
    return None


@router.get("/boards/{board_id}/members", response_model=List[BoardMemberResponse])
async def list_board_members(
    board_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """List users with a grant on the board (anyone who can open it)"""
    check_board_access(board_id, current_user, supabase)
    return service.list_board_members(board_id)


@router.post("/boards/{board_id}/members", response_model=BoardMemberResponse, status_code=201)
async def grant_board_access(
    board_id: str,
    grant: BoardMemberGrant,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Grant a workspace member access to the board (owners only)"""
    board = check_board_owner(board_id, current_user, supabase)
    return service.grant_board_access(board, grant.user_id)


@router.delete("/boards/{board_id}/members/{user_id}", status_code=204)
async def revoke_board_access(
    board_id: str,
    user_id: str,
    current_user: Dict = Depends(get_current_user),
    service: MemberService = Depends(get_member_service),
    supabase: Client = Depends(get_supabase)
):
    """Revoke a board grant (owners only); revoking a missing grant succeeds"""
    check_board_owner(board_id, current_user, supabase)
    service.revoke_board_access(board_id, user_id)
    return None
