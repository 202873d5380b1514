# Supabase tables: chat_threads, messages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

chat_threads:
- id: uuid (primary key)
- user_a_id: uuid (foreign key to users.id, not null) - user who opened the thread
- user_b_id: uuid (foreign key to users.id, not null) - recipient
- listing_id: uuid (foreign key to listings.id, nullable) - listing the conversation is about
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now()) - bumped on every new message

messages:
- id: uuid (primary key)
- thread_id: uuid (foreign key to chat_threads.id, not null)
- sender_id: uuid (foreign key to users.id, not null)
- content: text (not null)
- type: message_type (default: 'text') - values: text, image, system
- is_read: boolean (default: false)
- created_at: timestamp (default: now())
"""
