# 📄 File: eduplatform/modules/auth/domain/repositories/identity_service.py
# 🧭 Purpose (Layman Explanation):
# Defines what we expect from the outside sign-in service: create accounts, check
# passwords, sign out, tell us when the signed-in person changes, and handle
# email codes and password resets.
# 🧪 Purpose (Technical Summary):
# Contract for the remote identity/session service. Every call returns an explicit
# ServiceResult; implementations translate transport and API errors into typed
# failures instead of raising.
# 🔗 Dependencies:
# abc, typing, domain models, shared result types
# 🔄 Connected Modules / Calls From:
# Session manager, password reset flow, registration gateway, Supabase adapter

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from eduplatform.shared.core.results import ServiceResult
from ..events.auth_events import AuthChangeEvent, Subscription
from ..models.session import AuthUser, Session

AuthChangeCallback = Callable[[Optional[AuthChangeEvent], Optional[Session]], None]


class IdentityService(ABC):
    """
    Interface for the identity/session service.

    Implementation Notes:
    - Concrete implementations are in the infrastructure layer
    - Methods return domain models (AuthUser, Session), not client objects
    - "Could not reach the service" is reported as FailureKind.UNREACHABLE,
      refusals (bad credentials, duplicate email, expired code) as REJECTED
    """

    @abstractmethod
    async def get_current_session(self) -> ServiceResult[Session]:
        """
        Get the session recovered from storage, if any.

        Returns:
            Successful result whose value is the Session or None when signed out
        """
        pass

    @abstractmethod
    def subscribe(self, callback: AuthChangeCallback) -> Subscription:
        """
        Register for session-change notifications.

        Args:
            callback: Called with (event, session) on every change

        Returns:
            Subscription whose ``unsubscribe()`` stops further deliveries
        """
        pass

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any]
    ) -> ServiceResult[AuthUser]:
        """
        Create an account.

        Args:
            email: Account email
            password: Account password
            metadata: User metadata stored with the identity

        Returns:
            Result carrying the created user
        """
        pass

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> ServiceResult[AuthUser]:
        """Sign in with email and password."""
        pass

    @abstractmethod
    async def sign_out(self) -> ServiceResult[None]:
        """End the current session."""
        pass

    @abstractmethod
    async def verify_email_code(self, email: str, code: str) -> ServiceResult[Session]:
        """Confirm a sign-up with the code sent to ``email``."""
        pass

    @abstractmethod
    async def resend_signup_code(self, email: str) -> ServiceResult[None]:
        """Send a fresh sign-up confirmation code."""
        pass

    @abstractmethod
    async def request_password_reset(self, email: str) -> ServiceResult[None]:
        """Send a password recovery code to ``email``."""
        pass

    @abstractmethod
    async def verify_recovery_code(self, email: str, code: str) -> ServiceResult[Session]:
        """Exchange a recovery code for a recovery session."""
        pass

    @abstractmethod
    async def update_password(self, new_password: str) -> ServiceResult[AuthUser]:
        """Set a new password for the user of the current (recovery) session."""
        pass
