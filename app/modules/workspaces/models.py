# Supabase table: workspaces
# This file documents the expected database schema
# (supabase/migrations); operations go through the Supabase SDK in service.py

"""
Expected Supabase table structure:

workspaces:
- id: uuid (primary key)
- name: text (not null, not blank)
- owner_id: uuid (foreign key to users.id, on delete set null) - creating user
- created_at: timestamp (default: now())

owner_id is informational. Who owns a workspace is decided by the
workspace_members rows with role 'owner'.

Deleting a workspace cascades to boards, board_members, workspace_members and
workspace_invitations.

Database function create_workspace(p_name, p_owner_id) -> jsonb inserts the
workspace and the creator's owner membership in one transaction.
"""
