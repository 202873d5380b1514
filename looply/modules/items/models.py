# Supabase tables: listings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

listings:
- id: uuid (primary key)
- title: text (not null)
- description: text (nullable)
- images: text[] (nullable) - public URLs (S3 or Supabase Storage)
- tags: text[] (nullable)
- category: text (nullable)
- condition: text (nullable) - values: new, excellent, good, fair, poor
- mode: text (not null, default: 'gift') - values: gift, barter, sell, buy
- price: numeric (nullable) - only set for mode 'sell'
- desired_tags: text[] (nullable) - only for mode 'barter'
- desired_text: text (nullable) - only for mode 'barter'
- location: text (nullable)
- status: listing_status (not null, default: 'available') - values: available, claimed, inactive
- views: integer (not null, default: 0)
- user_id: uuid (foreign key to users.id, not null) - constraint listings_user_id_fkey
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Storage bucket (when S3 is not configured):
- listing-images: public bucket, objects keyed listings/<listing_id>/<uuid><ext>
"""
