import logging
from datetime import datetime, timezone
from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, List

from app.core.enums import InvitationStatus
from app.core.exceptions import (
    ConflictError, ForbiddenError, NotFoundError, RemoteFailureError, translate_storage_error
)
from app.database.supabase_client import rpc_row
from app.modules.invitations.schemas import InvitationResponse
from app.modules.users.service import UserService

logger = logging.getLogger(__name__)

INVITATION_SELECT = "*, workspaces(id, name)"

PENDING_EXISTS_DETAIL = "An invitation is already pending for this email"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _invitation_response(row: Dict[str, Any]) -> InvitationResponse:
    row = dict(row)
    row["workspace"] = row.pop("workspaces", None)
    return InvitationResponse(**row)


class InvitationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_invitation(self, workspace_id: str, email: str, invited_by: str) -> InvitationResponse:
        """Create a pending invitation for an email address.

        The invitee does not need an account yet. At most one pending
        invitation exists per workspace and email; the partial unique index
        on the table enforces it and the lookup below only gives a clearer
        error in the common case.
        """
        email = normalize_email(email)
        try:
            user = UserService(self.supabase).get_user_by_email(email)
            if user is not None:
                existing_member = self.supabase.table("workspace_members")\
                    .select("id")\
                    .eq("workspace_id", workspace_id)\
                    .eq("user_id", user.id)\
                    .limit(1)\
                    .execute()
                if existing_member.data:
                    raise ConflictError("User is already a member of this workspace")

            pending = self.supabase.table("workspace_invitations")\
                .select("id")\
                .eq("workspace_id", workspace_id)\
                .eq("invited_email", email)\
                .eq("status", InvitationStatus.PENDING.value)\
                .limit(1)\
                .execute()
            if pending.data:
                raise ConflictError(PENDING_EXISTS_DETAIL)

            result = self.supabase.table("workspace_invitations").insert({
                "workspace_id": workspace_id,
                "invited_email": email,
                "invited_by": invited_by,
                "status": InvitationStatus.PENDING.value
            }).execute()
            if not result.data:
                raise RemoteFailureError("Failed to create invitation")

            logger.info(f"User {invited_by} invited {email} to workspace {workspace_id}")
            return InvitationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e, conflict_detail=PENDING_EXISTS_DETAIL)

    def get_invitation_row(self, invitation_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("workspace_invitations")\
                .select("*")\
                .eq("id", invitation_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        if not result.data:
            raise NotFoundError("Invitation not found")
        return result.data[0]

    def list_my_invitations(self, email: str) -> List[InvitationResponse]:
        """Pending invitations addressed to the session email"""
        try:
            result = self.supabase.table("workspace_invitations")\
                .select(INVITATION_SELECT)\
                .eq("invited_email", normalize_email(email))\
                .eq("status", InvitationStatus.PENDING.value)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        return [_invitation_response(i) for i in result.data or []]

    def list_workspace_invitations(self, workspace_id: str) -> List[InvitationResponse]:
        """Pending invitations of a workspace"""
        try:
            result = self.supabase.table("workspace_invitations")\
                .select(INVITATION_SELECT)\
                .eq("workspace_id", workspace_id)\
                .eq("status", InvitationStatus.PENDING.value)\
                .order("created_at", desc=True)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)
        return [_invitation_response(i) for i in result.data or []]

    def _check_invitee(self, invitation: Dict[str, Any], user_data: dict) -> None:
        if normalize_email(user_data.get("email") or "") != invitation["invited_email"]:
            raise ForbiddenError("This invitation was sent to another email address")
        if invitation["status"] != InvitationStatus.PENDING.value:
            raise ConflictError(f"Invitation has already been {invitation['status']}")

    def accept_invitation(self, invitation: Dict[str, Any], user_data: dict) -> InvitationResponse:
        """Accept: mark accepted and add the invitee as member, in one transaction"""
        self._check_invitee(invitation, user_data)
        try:
            result = self.supabase.rpc("accept_workspace_invitation", {
                "p_invitation_id": invitation["id"],
                "p_user_id": user_data["id"]
            }).execute()
            accepted = rpc_row(result.data)
            if not accepted:
                raise RemoteFailureError("Failed to accept invitation")

            logger.info(f"User {user_data['id']} joined workspace {invitation['workspace_id']}")
            return InvitationResponse(**accepted)
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def decline_invitation(self, invitation: Dict[str, Any], user_data: dict) -> InvitationResponse:
        """Decline: mark rejected; membership is left as it is"""
        self._check_invitee(invitation, user_data)
        try:
            result = self.supabase.table("workspace_invitations")\
                .update({
                    "status": InvitationStatus.REJECTED.value,
                    "responded_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", invitation["id"])\
                .eq("status", InvitationStatus.PENDING.value)\
                .execute()

            if not result.data:
                raise ConflictError("Invitation is no longer pending")

            logger.info(f"User {user_data['id']} declined invitation {invitation['id']}")
            return InvitationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise translate_storage_error(e)

    def revoke_invitation(self, invitation: Dict[str, Any]) -> bool:
        """Withdraw a pending invitation"""
        try:
            result = self.supabase.table("workspace_invitations")\
                .delete()\
                .eq("id", invitation["id"])\
                .eq("status", InvitationStatus.PENDING.value)\
                .execute()
        except Exception as e:
            raise translate_storage_error(e)

        if not result.data:
            raise ConflictError("Invitation is no longer pending")
        logger.info(f"Revoked invitation {invitation['id']}")
        return True
