from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.boards.schemas import BoardCreate, BoardUpdate, BoardResponse
from app.modules.boards.service import BoardService
from app.core.dependencies import (
    get_current_user, check_workspace_member, check_workspace_owner,
    check_board_access, check_board_owner
)
from app.core.enums import WorkspaceRole
from supabase import Client
from typing import List, Dict

router = APIRouter(tags=["boards"])


def get_board_service(supabase: Client = Depends(get_supabase)) -> BoardService:
    return BoardService(supabase)


@router.post("/workspaces/{workspace_id}/boards", response_model=BoardResponse, status_code=201)
async def create_board(
    workspace_id: str,
    board_data: BoardCreate,
    current_user: Dict = Depends(get_current_user),
    service: BoardService = Depends(get_board_service),
    supabase: Client = Depends(get_supabase)
):
    """Create a board in the workspace (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.create_board(workspace_id, board_data, current_user["id"])


@router.get("/workspaces/{workspace_id}/boards", response_model=List[BoardResponse])
async def list_boards(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: BoardService = Depends(get_board_service),
    supabase: Client = Depends(get_supabase)
):
    """List the workspace's boards the caller can open (members only)"""
    membership = check_workspace_member(workspace_id, current_user, supabase)
    is_owner = membership["role"] == WorkspaceRole.OWNER.value
    return service.list_boards(workspace_id, current_user["id"], is_owner)


@router.get("/boards/{board_id}", response_model=BoardResponse)
async def get_board(
    board_id: str,
    current_user: Dict = Depends(get_current_user),
    supabase: Client = Depends(get_supabase)
):
    """Open a board (workspace owners or users with a board grant)"""
    board = check_board_access(board_id, current_user, supabase)
    return BoardResponse(**board)


@router.put("/boards/{board_id}", response_model=BoardResponse)
async def rename_board(
    board_id: str,
    board_data: BoardUpdate,
    current_user: Dict = Depends(get_current_user),
    service: BoardService = Depends(get_board_service),
    supabase: Client = Depends(get_supabase)
):
    """Rename a board (owners only)"""
    check_board_owner(board_id, current_user, supabase)
    return service.rename_board(board_id, board_data)


@router.delete("/boards/{board_id}", status_code=204)
async def delete_board(
    board_id: str,
    current_user: Dict = Depends(get_current_user),
    service: BoardService = Depends(get_board_service),
    supabase: Client = Depends(get_supabase)
):
    """Delete a board and its access grants (owners only)"""
    check_board_owner(board_id, current_user, supabase)
    service.delete_board(board_id)
    return None
