import logging
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse
from app.core.exceptions import ForbiddenError
from app.database.supabase_client import get_supabase
from app.modules.invitations.schemas import (
    InvitationCreate, InvitationResponse, InviteUserRequest, InviteUserResult
)
from app.modules.invitations.service import InvitationService
from app.core.dependencies import get_current_user, check_workspace_owner
from pydantic import ValidationError
from supabase import Client
from typing import Any, List, Dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["invitations"])


def get_invitation_service(supabase: Client = Depends(get_supabase)) -> InvitationService:
    return InvitationService(supabase)


@router.post("/workspaces/{workspace_id}/invitations", response_model=InvitationResponse, status_code=201)
async def create_invitation(
    workspace_id: str,
    invitation_data: InvitationCreate,
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase)
):
    """Invite an email address to the workspace (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.create_invitation(workspace_id, invitation_data.email, current_user["id"])


@router.get("/workspaces/{workspace_id}/invitations", response_model=List[InvitationResponse])
async def list_workspace_invitations(
    workspace_id: str,
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase)
):
    """Pending invitations of the workspace (owners only)"""
    check_workspace_owner(workspace_id, current_user, supabase)
    return service.list_workspace_invitations(workspace_id)


@router.get("/invitations", response_model=List[InvitationResponse])
async def list_my_invitations(
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service)
):
    """Pending invitations addressed to the caller's email"""
    return service.list_my_invitations(current_user["email"])


@router.post("/invitations/{invitation_id}/accept", response_model=InvitationResponse)
async def accept_invitation(
    invitation_id: str,
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service)
):
    """Accept an invitation and join the workspace (invitee only)"""
    invitation = service.get_invitation_row(invitation_id)
    return service.accept_invitation(invitation, current_user)


@router.post("/invitations/{invitation_id}/decline", response_model=InvitationResponse)
async def decline_invitation(
    invitation_id: str,
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service)
):
    """Decline an invitation (invitee only)"""
    invitation = service.get_invitation_row(invitation_id)
    return service.decline_invitation(invitation, current_user)


@router.delete("/invitations/{invitation_id}", status_code=204)
async def revoke_invitation(
    invitation_id: str,
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase)
):
    """Withdraw a pending invitation (owners of its workspace only)"""
    invitation = service.get_invitation_row(invitation_id)
    check_workspace_owner(invitation["workspace_id"], current_user, supabase)
    service.revoke_invitation(invitation)
    return None


def _invite_user_failure(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content=InviteUserResult(success=False, error=error).model_dump(mode="json"),
    )


def _validation_message(exc: ValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]


@router.post("/functions/invite-user", response_model=InviteUserResult)
async def invite_user(
    payload: Dict[str, Any] = Body(...),
    current_user: Dict = Depends(get_current_user),
    service: InvitationService = Depends(get_invitation_service),
    supabase: Client = Depends(get_supabase)
):
    """invite-user function: {email, workspaceId, invitedBy} -> {success, invitation | error}

    Every failure, a malformed body included, is answered with status 400
    and {success: false, error}.
    """
    try:
        request = InviteUserRequest.model_validate(payload)
    except ValidationError as e:
        logger.info(f"invite-user rejected a malformed body: {e.error_count()} error(s)")
        return _invite_user_failure(_validation_message(e))

    try:
        if request.invited_by and request.invited_by != current_user["id"]:
            raise ForbiddenError("invitedBy must be the authenticated user")
        check_workspace_owner(request.workspace_id, current_user, supabase)
        invitation = service.create_invitation(request.workspace_id, request.email, current_user["id"])
        return InviteUserResult(success=True, invitation=invitation)
    except HTTPException as e:
        logger.info(f"invite-user failed for {request.email}: {e.detail}")
        return _invite_user_failure(str(e.detail))
