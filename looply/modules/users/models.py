# Supabase tables: users, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users
- name: text (nullable)
- role: role_enum (not null, default: 'user') - values: user, ngo
- location: text (nullable)
- bio: text (nullable)
- avatar_url: text (nullable)
- karma_points: integer (not null, default: 0)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Functions:
- adjust_karma(_user_id uuid, _delta integer) - atomically adds _delta to karma_points
"""
