# Supabase Auth
# This module uses Supabase's built-in authentication system.
# The public `users` table (see modules/users/models.py) mirrors each auth user
# with marketplace data: display name, role, location and karma.

"""
Supabase Auth provides:
- auth.sign_up() - Register new users (name, role, location stored in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Registration also upserts a row into public.users keyed by the auth user id
so listings, claims and drives can join the owner's profile.
"""
