"""
Auth Infrastructure

Supabase-backed implementations of the auth collaborator contracts:
- external.supabase_auth: IdentityService over GoTrue
- database.profile_repository_impl: ProfileStore over the user_profiles table
"""
