# 📄 File: eduplatform/modules/auth/domain/events/auth_events.py
# 🧭 Purpose (Layman Explanation):
# The kinds of "something changed about who is signed in" notices the sign-in
# service sends, and the ticket used to stop listening to them.
# 🧪 Purpose (Technical Summary):
# Session-change event types and the Subscription handle: a scoped resource whose
# disposer is idempotent and safe to call on every exit path.
# 🔗 Dependencies:
# enum, typing, logging
# 🔄 Connected Modules / Calls From:
# Identity service contract and adapter, session manager (auth change handler
# and state observers)

import logging
from enum import Enum
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)


class AuthChangeEvent(str, Enum):
    """Session-change notification types; only SIGNED_OUT is special-cased locally"""
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    USER_DELETED = "USER_DELETED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"

    @classmethod
    def parse(cls, value: Union[str, "AuthChangeEvent"]) -> Optional["AuthChangeEvent"]:
        """Parse an event name; unknown names map to None"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            logger.debug(f"Unknown auth change event: {value}")
            return None


class Subscription:
    """
    Handle returned by every subscribe/observe call.

    ``unsubscribe()`` runs the disposer at most once; later calls are no-ops.
    Usable as a context manager so the disposer runs on every exit path.
    """

    def __init__(self, disposer: Callable[[], None]):
        self._disposer = disposer
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._disposer()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()
