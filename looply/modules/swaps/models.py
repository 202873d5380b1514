# Supabase tables: matches
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

matches:
- id: uuid (primary key)
- user_a_id: uuid (foreign key to users.id, not null) - offering user, constraint matches_user_a_id_fkey
- user_b_id: uuid (foreign key to users.id, not null) - receiving user, constraint matches_user_b_id_fkey
- item_a_id: uuid (foreign key to listings.id, not null) - listing offered by user_a
- item_b_id: uuid (foreign key to listings.id, not null) - listing wanted from user_b
- status: match_status (not null, default: 'pending') - values: pending, matched, cancelled
- message: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
