# Supabase tables: ngo_drives
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

ngo_drives:
- id: uuid (primary key)
- ngo_id: uuid (foreign key to users.id, not null) - constraint ngo_drives_ngo_id_fkey
- title: text (not null)
- description: text (nullable)
- priority: priority (not null, default: 'medium') - values: high, medium, low
- progress: integer (not null, default: 0) - fulfilment percentage 0..100
- status: drive_status (not null, default: 'active') - values: active, completed
- deadline: date (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
