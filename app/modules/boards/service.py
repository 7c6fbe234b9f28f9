import logging
from supabase import Client
from fastapi import HTTPException
from typing import List

from app.core.exceptions import NotFoundError, RemoteFailureError, translate_storage_error
from app.database.supabase_client import rpc_row
from app.modules.boards.schemas import BoardCreate, BoardUpdate, BoardResponse

logger = logging.getLogger(__name__)


class BoardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_board(self, workspace_id: str, board_data: BoardCreate, user_id: str) -> BoardResponse:
        """Create a board and grant its creator access, in one transaction"""
        try:
            result = self.supabase.rpc("create_board", {
                "p_workspace_id": workspace_id,
                "p_name": board_data.name,
                "p_user_id": user_id
            }).execute()
            board = rpc_row(result.data)
            if not board:
                raise RemoteFailureError("Failed to create board")

            logger.info(f"Created board {board['id']} in workspace {workspace_id}")
            return BoardResponse(**board)
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def list_boards(self, workspace_id: str, user_id: str, is_owner: bool) -> List[BoardResponse]:
        """Boards of a workspace the user can open: all of them for owners, granted ones otherwise"""
        try:
            query = self.supabase.table("boards")\
                .select("*")\
                .eq("workspace_id", workspace_id)
            if not is_owner:
                grants = self.supabase.table("board_members")\
                    .select("board_id")\
                    .eq("user_id", user_id)\
                    .execute()
                board_ids = [g["board_id"] for g in grants.data or []]
                if not board_ids:
                    return []
                query = query.in_("id", board_ids)
            result = query.order("created_at").execute()
            return [BoardResponse(**board) for board in result.data or []]
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def rename_board(self, board_id: str, board_data: BoardUpdate) -> BoardResponse:
        """Rename a board"""
        try:
            result = self.supabase.table("boards")\
                .update({"name": board_data.name})\
                .eq("id", board_id)\
                .execute()

            if not result.data:
                raise NotFoundError("Board not found")

            return BoardResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def delete_board(self, board_id: str) -> bool:
        """Delete board; its board_members rows go with it (on delete cascade)"""
        try:
            result = self.supabase.table("boards")\
                .delete()\
                .eq("id", board_id)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)

        if not result.data:
            raise NotFoundError("Board not found")
        logger.info(f"Deleted board {board_id}")
        return True
