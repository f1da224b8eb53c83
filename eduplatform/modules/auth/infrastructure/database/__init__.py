from .profile_repository_impl import SupabaseProfileStore

__all__ = ["SupabaseProfileStore"]
