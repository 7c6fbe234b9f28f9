# Supabase tables: workspace_members, board_members
# This file documents the expected database schema
# (supabase/migrations); operations go through the Supabase SDK in service.py

"""
Expected Supabase table structure:

workspace_members:
- id: uuid (primary key)
- workspace_id: uuid (foreign key to workspaces.id, on delete cascade)
- user_id: uuid (foreign key to users.id, on delete cascade)
- role: text (not null, default: 'member') - values: owner, member
- created_at: timestamp (default: now())
- unique constraint on (workspace_id, user_id)

board_members:
- id: uuid (primary key)
- board_id: uuid (foreign key to boards.id, on delete cascade)
- user_id: uuid (foreign key to users.id, on delete cascade)
- created_at: timestamp (default: now())
- unique constraint on (board_id, user_id)

Database functions (each one transaction):
- add_workspace_member(p_workspace_id, p_user_id, p_role, p_board_ids)
    inserts the membership and the board grants for the listed boards
- set_workspace_member_role(p_member_id, p_role)
- remove_workspace_member(p_member_id)
    also drops the user's board grants inside that workspace
Both of the latter refuse (check_violation) to leave a workspace without an
owner.
"""
