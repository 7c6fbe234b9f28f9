# Supabase table: boards
# This file documents the expected database schema
# (supabase/migrations); operations go through the Supabase SDK in service.py

"""
Expected Supabase table structure:

boards:
- id: uuid (primary key)
- name: text (not null, not blank)
- workspace_id: uuid (foreign key to workspaces.id, on delete cascade)
- created_at: timestamp (default: now())

Deleting a board cascades to its board_members rows.

Database function create_board(p_workspace_id, p_name, p_user_id) -> jsonb
inserts the board and a board_members grant for the creator in one
transaction.
"""
