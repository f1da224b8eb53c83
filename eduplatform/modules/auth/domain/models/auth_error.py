# 📄 File: eduplatform/modules/auth/domain/models/auth_error.py
# 🧭 Purpose (Layman Explanation):
# The one message shown to the user when signing in, signing up or saving the
# profile goes wrong, plus a label saying what kind of problem it was.
# 🧪 Purpose (Technical Summary):
# AuthError value object with its implicit kind, the fixed user-facing messages,
# and the per-operation message sets used when classifying failures.
# 🔗 Dependencies:
# dataclasses, enum, typing
# 🔄 Connected Modules / Calls From:
# session_manager.py, credentials_form.py, password_reset.py

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthErrorKind(str, Enum):
    """What kind of condition an AuthError reports"""
    NETWORK_UNREACHABLE = "network_unreachable"
    INVALID_CREDENTIALS = "invalid_credentials"
    VALIDATION = "validation"
    PROFILE_MISSING = "profile_missing"  # never surfaced as an error
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AuthError:
    """
    Classified, user-displayable error.

    ``message`` is safe to show; ``detail`` holds the collaborator's own
    wording for connectivity and unexpected failures and is only logged.
    """
    kind: AuthErrorKind
    message: str
    detail: Optional[str] = None
    code: Optional[str] = None

    @property
    def is_connectivity(self) -> bool:
        return self.kind == AuthErrorKind.NETWORK_UNREACHABLE

    def __str__(self) -> str:
        return self.message


# =============================================================================
# USER-FACING MESSAGES
# =============================================================================

AUTH_SERVICE_UNREACHABLE = (
    "Cannot connect to authentication service. "
    "Your Supabase project may be paused or inactive."
)
AUTH_SERVICE_UNREACHABLE_SHORT = "Cannot connect to authentication service"
DATABASE_UNREACHABLE = "Cannot connect to database. Please check your internet connection."
DATABASE_UNREACHABLE_SHORT = "Cannot connect to database"

SESSION_LOAD_FAILED = "Failed to load user session"
PROFILE_LOAD_FAILED = "Failed to load user profile"
PROFILE_UPDATE_FAILED = "Profile update failed"
SIGN_UP_FAILED = "Sign up failed. Please try again."
SIGN_IN_FAILED = "Sign in failed. Please try again."
SIGN_OUT_FAILED = "Sign out failed"
NO_AUTHENTICATED_USER = "No authenticated user"


@dataclass(frozen=True)
class OperationMessages:
    """Messages used when one operation fails, by failure class"""
    unreachable: str
    generic: str
    rejected_kind: AuthErrorKind = AuthErrorKind.UNKNOWN
    # Format for passed-through rejections, {detail} is the service message
    rejected_format: str = "{detail}"


SESSION_LOAD_MESSAGES = OperationMessages(
    AUTH_SERVICE_UNREACHABLE, SESSION_LOAD_FAILED, AuthErrorKind.UNKNOWN,
    SESSION_LOAD_FAILED
)
SIGN_UP_MESSAGES = OperationMessages(
    AUTH_SERVICE_UNREACHABLE, SIGN_UP_FAILED, AuthErrorKind.VALIDATION
)
SIGN_IN_MESSAGES = OperationMessages(
    AUTH_SERVICE_UNREACHABLE, SIGN_IN_FAILED, AuthErrorKind.INVALID_CREDENTIALS
)
SIGN_OUT_MESSAGES = OperationMessages(
    AUTH_SERVICE_UNREACHABLE_SHORT, SIGN_OUT_FAILED
)
PROFILE_FETCH_MESSAGES = OperationMessages(
    DATABASE_UNREACHABLE, PROFILE_LOAD_FAILED, AuthErrorKind.UNKNOWN,
    "Failed to load user profile: {detail}"
)
PROFILE_UPDATE_MESSAGES = OperationMessages(
    DATABASE_UNREACHABLE_SHORT, PROFILE_UPDATE_FAILED, AuthErrorKind.VALIDATION,
    "Failed to update profile: {detail}"
)
