"""
Auth Domain Models

- AuthUser / Session: the authenticated identity and its session
- Profile: application-specific user record keyed by the user id
- AuthError: classified, user-displayable error
- AuthResult / SignOutResult / ProfileResult / AuthState: operation outcomes
  and the state snapshot
"""

from .auth_error import AuthError, AuthErrorKind
from .profile import Profile
from .results import AuthResult, AuthState, ProfileResult, SignOutResult
from .session import AuthUser, Session

__all__ = [
    "AuthError",
    "AuthErrorKind",
    "AuthResult",
    "AuthState",
    "AuthUser",
    "Profile",
    "ProfileResult",
    "Session",
    "SignOutResult",
]
