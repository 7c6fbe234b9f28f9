# Supabase table: users
# This file documents the expected database schema
# (supabase/migrations); operations go through the Supabase SDK in service.py

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id, on delete cascade)
- email: text (unique, not null, stored lowercase)
- name: text (not null)
- created_at: timestamp (default: now())

The row is created at registration. Email is immutable; name can change.
"""
