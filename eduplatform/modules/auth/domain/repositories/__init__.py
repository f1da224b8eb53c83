"""
Collaborator contracts of the auth module.

Implementations live in the infrastructure layer and return ServiceResult
values instead of raising.
"""

from .identity_service import AuthChangeCallback, IdentityService
from .profile_store import ProfileStore

__all__ = ["AuthChangeCallback", "IdentityService", "ProfileStore"]
