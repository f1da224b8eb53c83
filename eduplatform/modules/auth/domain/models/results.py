"""
Result pairs returned by session manager operations and the state snapshot
handed to presentation code.
"""

from dataclasses import dataclass
from typing import Optional

from .auth_error import AuthError
from .profile import Profile
from .session import AuthUser


@dataclass(frozen=True)
class AuthResult:
    """Outcome of sign_up / sign_in"""
    user: Optional[AuthUser] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SignOutResult:
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ProfileResult:
    """Outcome of update_profile; ``data`` is the row the store returned"""
    data: Optional[Profile] = None
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class AuthState:
    """Read-only snapshot of the session manager state"""
    user: Optional[AuthUser] = None
    profile: Optional[Profile] = None
    loading: bool = True
    error: Optional[AuthError] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
