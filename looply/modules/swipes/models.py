# Supabase tables: swipes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

swipes:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null)
- listing_id: uuid (foreign key to listings.id, not null)
- action: swipe_action (not null) - values: like, reject
- created_at: timestamp (default: now())
- unique constraint on (user_id, listing_id)

The discovery deck's "pass" gesture is stored as 'reject'.
"""
