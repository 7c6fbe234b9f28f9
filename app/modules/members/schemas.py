from pydantic import BaseModel, EmailStr
from typing import List, Optional
from datetime import datetime

from app.core.enums import WorkspaceRole
from app.modules.users.schemas import UserSummary


class WorkspaceMemberAdd(BaseModel):
    user_id: str
    role: WorkspaceRole = WorkspaceRole.MEMBER


class WorkspaceMemberAddByEmail(BaseModel):
    email: EmailStr
    board_ids: List[str] = []


class WorkspaceMemberResponse(BaseModel):
    id: str
    workspace_id: str
    user_id: str
    role: WorkspaceRole
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None


class BoardMemberGrant(BaseModel):
    user_id: str


class BoardMemberResponse(BaseModel):
    id: str
    board_id: str
    user_id: str
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
