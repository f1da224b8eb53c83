from .supabase_auth import SupabaseIdentityService

__all__ = ["SupabaseIdentityService"]
