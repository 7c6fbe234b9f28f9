from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from app.core.enums import WorkspaceRole
from app.core.types import NameStr
from app.modules.boards.schemas import BoardResponse
from app.modules.members.schemas import WorkspaceMemberResponse


class WorkspaceCreate(BaseModel):
    name: NameStr


class WorkspaceUpdate(BaseModel):
    name: NameStr


class WorkspaceResponse(BaseModel):
    id: str
    name: str
    owner_id: Optional[str] = None
    created_at: datetime


class WorkspaceSummary(WorkspaceResponse):
    role: WorkspaceRole  # caller's role in the workspace


class WorkspaceDetailsResponse(BaseModel):
    workspace: WorkspaceResponse
    role: WorkspaceRole
    members: List[WorkspaceMemberResponse]
    boards: List[BoardResponse]  # boards the caller can open
