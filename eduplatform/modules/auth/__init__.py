# 📄 File: eduplatform/modules/auth/__init__.py
# 🧭 Purpose (Layman Explanation):
# The sign-in part of the platform: who is signed in, their profile, and the
# forms used to sign in, sign up and recover a password.
# 🧪 Purpose (Technical Summary):
# Package initialization for the auth module (session manager, identity/profile
# contracts, Supabase adapters, credentials form, password reset flow).
# 🔗 Dependencies:
# supabase, pydantic, eduplatform.shared
# 🔄 Connected Modules / Calls From:
# eduplatform.main, presentation layers

"""
Auth Module

Architecture:
- Domain: session/profile models, AuthError taxonomy, IdentityService and
  ProfileStore contracts, SessionManager
- Application: credentials form, password reset flow
- Infrastructure: Supabase identity service and profile store
"""

from .domain.events.auth_events import AuthChangeEvent, Subscription
from .domain.models.auth_error import AuthError, AuthErrorKind
from .domain.models.profile import Profile
from .domain.models.results import AuthResult, AuthState, ProfileResult, SignOutResult
from .domain.models.session import AuthUser, Session
from .domain.repositories.identity_service import IdentityService
from .domain.repositories.profile_store import ProfileStore
from .domain.services.session_manager import SessionManager

__version__ = "1.0.0"
__module_name__ = "auth"

__all__ = [
    "AuthChangeEvent",
    "AuthError",
    "AuthErrorKind",
    "AuthResult",
    "AuthState",
    "AuthUser",
    "IdentityService",
    "Profile",
    "ProfileResult",
    "ProfileStore",
    "Session",
    "SessionManager",
    "SignOutResult",
    "Subscription",
]
