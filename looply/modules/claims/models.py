# Supabase tables: claims
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

claims:
- id: uuid (primary key)
- ngo_id: uuid (foreign key to users.id, not null) - claiming NGO, constraint claims_ngo_id_fkey
- listing_id: uuid (foreign key to listings.id, not null) - constraint claims_listing_id_fkey
- status: claim_status (not null, default: 'claimed') - values: claimed, pickup_arranged, received
- claimed_at: timestamp (default: now())
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Lifecycle: claimed -> pickup_arranged -> received. Creating a claim marks the
listing 'claimed'; cancelling a claim that is still 'claimed' makes it
'available' again.
"""
