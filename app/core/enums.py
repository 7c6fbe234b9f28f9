"""Enumeration types shared by the modules."""

import enum


class WorkspaceRole(str, enum.Enum):
    """Role of a user within a workspace."""

    OWNER = "owner"  # Full mutation rights, sees every board
    MEMBER = "member"  # Sees boards they were granted

    def toggled(self) -> "WorkspaceRole":
        return WorkspaceRole.MEMBER if self is WorkspaceRole.OWNER else WorkspaceRole.OWNER


class InvitationStatus(str, enum.Enum):
    """Status of a workspace invitation. Accepted and rejected are terminal."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
