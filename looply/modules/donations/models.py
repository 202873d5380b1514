# Supabase tables: donations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

donations:
- id: uuid (primary key)
- user_id: uuid (foreign key to users.id, not null) - donor, constraint donations_user_id_fkey
- ngo_drive_id: uuid (foreign key to ngo_drives.id, not null) - constraint donations_ngo_drive_id_fkey
- item_id: uuid (foreign key to listings.id, nullable) - optional listing being donated
- status: donation_status (not null, default: 'pledged') - values: pledged, delivered, received
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
