# Supabase table: workspace_invitations
# This file documents the expected database schema
# (supabase/migrations); operations go through the Supabase SDK in service.py

"""
Expected Supabase table structure:

workspace_invitations:
- id: uuid (primary key)
- workspace_id: uuid (foreign key to workspaces.id, on delete cascade)
- invited_email: text (not null, stored lowercase)
- invited_by: uuid (foreign key to users.id, on delete set null)
- status: text (not null, default: 'pending') - values: pending, accepted, rejected
- role: text (not null, default: 'member') - role granted on acceptance
- created_at: timestamp (default: now())
- responded_at: timestamp (nullable)
- partial unique index on (workspace_id, invited_email) where status = 'pending'

Lifecycle: pending -> accepted | rejected. Both end states are terminal.
The invited email does not need to belong to a registered user; the
invitation is matched against the session email when the invitee signs in.

Database function accept_workspace_invitation(p_invitation_id, p_user_id)
marks the invitation accepted and inserts the membership in one transaction.
"""
