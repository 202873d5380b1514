# Supabase tables: forums, comments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

forums:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null) - author, constraint forums_user_id_fkey
- title: text (not null)
- content: text (not null)
- community: text (nullable) - e.g. "Upcycling", "Local Swaps"
- created_at: timestamp (default: now())

comments:
- id: uuid (primary key)
- forum_id: uuid (foreign key to forums.id, not null) - constraint comments_forum_id_fkey
- user_id: uuid (foreign key to users.id, not null) - constraint comments_user_id_fkey
- content: text (not null)
- created_at: timestamp (default: now())
"""
