from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime

from app.core.enums import InvitationStatus, WorkspaceRole


class InvitationCreate(BaseModel):
    email: EmailStr


class WorkspaceRef(BaseModel):
    id: str
    name: str


class InvitationResponse(BaseModel):
    id: str
    workspace_id: str
    invited_email: str
    invited_by: Optional[str] = None
    status: InvitationStatus
    role: WorkspaceRole = WorkspaceRole.MEMBER
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    workspace: Optional[WorkspaceRef] = None


class InviteUserRequest(BaseModel):
    """Body of the invite-user function: {email, workspaceId, invitedBy}"""
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    workspace_id: str = Field(alias="workspaceId")
    invited_by: Optional[str] = Field(default=None, alias="invitedBy")


class InviteUserResult(BaseModel):
    success: bool
    invitation: Optional[InvitationResponse] = None
    error: Optional[str] = None
