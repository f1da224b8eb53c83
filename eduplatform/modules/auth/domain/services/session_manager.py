# 📄 File: eduplatform/modules/auth/domain/services/session_manager.py
# 🧭 Purpose (Layman Explanation):
# Keeps track of who is signed in, their profile card, whether we are still busy
# talking to the server, and the last problem to show the user. Also does the
# signing up, signing in, signing out and profile saving.
# 🧪 Purpose (Technical Summary):
# Owned authentication state record with an explicit lifecycle: start() recovers the
# stored session and subscribes to session-change notifications, dispose() releases
# the subscription and cancels in-flight profile fetches. Every operation returns a
# result/error pair; collaborator failures are classified per operation into a single
# live AuthError.
# 🔗 Dependencies:
# asyncio, logging, IdentityService / ProfileStore contracts, shared error classifier
# 🔄 Connected Modules / Calls From:
# eduplatform.main lifespan, credentials form, presentation layers via observe()

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

from eduplatform.shared.core.error_classifier import classify_exception
from eduplatform.shared.core.exceptions import ResourceDisposedError
from eduplatform.shared.core.results import FailureKind, ServiceFailure, ServiceResult
from eduplatform.shared.utils.logging import get_security_logger

from ..events.auth_events import AuthChangeEvent, Subscription
from ..models.auth_error import (
    NO_AUTHENTICATED_USER,
    PROFILE_FETCH_MESSAGES,
    PROFILE_UPDATE_MESSAGES,
    SESSION_LOAD_MESSAGES,
    SIGN_IN_MESSAGES,
    SIGN_OUT_MESSAGES,
    SIGN_UP_MESSAGES,
    AuthError,
    AuthErrorKind,
    OperationMessages,
)
from ..models.profile import Profile
from ..models.results import AuthResult, AuthState, ProfileResult, SignOutResult
from ..models.session import AuthUser, Session
from ..repositories.identity_service import IdentityService
from ..repositories.profile_store import ProfileStore

logger = logging.getLogger(__name__)
security_logger = get_security_logger(__name__)

StateListener = Callable[[AuthState], None]

_UNSET = object()


class SessionManager:
    """
    Owner of the authentication state for the lifetime of the process.

    State:
    - user: authenticated identity or None
    - profile: profile row of that identity, None when absent
    - loading: True until the initial session is resolved, and while an
      auth operation is in flight
    - error: the single live AuthError

    Business rules:
    - A missing profile row is not an error
    - Connectivity failures always carry a fixed connectivity message; the
      collaborator's own wording is logged only
    - Events racing an operation: last writer wins, no version token
    - After dispose() no event or late completion mutates the state

    Usage:
        async with SessionManager(identity, profiles) as manager:
            result = await manager.sign_in(email, password)
    """

    def __init__(
        self,
        identity_service: IdentityService,
        profile_store: ProfileStore,
        default_role: str = "student"
    ):
        self._identity = identity_service
        self._profiles = profile_store
        self._default_role = default_role

        self._user: Optional[AuthUser] = None
        self._profile: Optional[Profile] = None
        self._loading = True
        self._error: Optional[AuthError] = None

        self._subscription: Optional[Subscription] = None
        self._listeners: List[StateListener] = []
        self._pending: Set[asyncio.Task] = set()
        self._started = False
        self._disposed = False

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[AuthError]:
        return self._error

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def started(self) -> bool:
        return self._started

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def state(self) -> AuthState:
        """Read-only snapshot of the current state"""
        return AuthState(
            user=self._user,
            profile=self._profile,
            loading=self._loading,
            error=self._error
        )

    def observe(self, listener: StateListener) -> Subscription:
        """
        Register a listener called with a fresh AuthState after every change.

        Args:
            listener: Callable receiving the snapshot

        Returns:
            Subscription that removes the listener
        """
        self._ensure_active("observe")
        self._listeners.append(listener)

        def _remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Subscription(_remove)

    def _set_state(
        self,
        user: Any = _UNSET,
        profile: Any = _UNSET,
        loading: Any = _UNSET,
        error: Any = _UNSET
    ) -> None:
        if self._disposed:
            return

        changed = False
        if user is not _UNSET and user != self._user:
            self._user = user
            changed = True
        if profile is not _UNSET and profile != self._profile:
            self._profile = profile
            changed = True
        if loading is not _UNSET and loading != self._loading:
            self._loading = loading
            changed = True
        if error is not _UNSET and error != self._error:
            self._error = error
            changed = True

        if changed:
            self._notify()

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Auth state listener failed")

    def _ensure_active(self, operation: str) -> None:
        if self._disposed:
            raise ResourceDisposedError("SessionManager", operation=operation)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def start(self) -> None:
        """
        Subscribe to session changes and resolve the stored session.

        Runs once per instance; later calls return immediately.
        """
        self._ensure_active("start")
        if self._started:
            return
        self._started = True

        try:
            self._subscription = self._identity.subscribe(self._handle_auth_change)
            await self._load_initial_session()
        except BaseException:
            self._release()
            raise

    async def _load_initial_session(self) -> None:
        try:
            result = await self._invoke("get_current_session", self._identity.get_current_session())

            if not result.ok:
                error = self._failure_to_error(result.failure, SESSION_LOAD_MESSAGES, "load_session")
                self._set_state(error=error)
                return

            session: Optional[Session] = result.value
            user = session.user if session else None
            self._set_state(user=user, loading=False)

            if user is not None:
                logger.info(f"Recovered session for user {user.id}")
                await self.fetch_profile(user.id)
            else:
                logger.debug("No stored session")
        finally:
            self._set_state(loading=False)

    def _release(self) -> List[asyncio.Task]:
        self._disposed = True
        self._listeners.clear()

        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

        tasks = list(self._pending)
        for task in tasks:
            task.cancel()
        return tasks

    async def dispose(self) -> None:
        """Unsubscribe and cancel in-flight profile fetches. Idempotent."""
        if self._disposed:
            return
        tasks = self._release()
        if tasks:
            await asyncio.wait(tasks)
        logger.debug("Session manager disposed")

    async def wait_for_pending(self) -> None:
        """Wait until profile fetches triggered by notifications have settled."""
        while self._pending:
            await asyncio.wait(set(self._pending))

    async def __aenter__(self) -> "SessionManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.dispose()

    # =========================================================================
    # SESSION-CHANGE NOTIFICATIONS
    # =========================================================================

    def _handle_auth_change(self, event: Optional[AuthChangeEvent], session: Optional[Session]) -> None:
        if self._disposed:
            return

        user = session.user if session else None
        logger.debug(f"Auth state change: {event.value if event else 'UNKNOWN'}")

        if user is not None:
            self._set_state(user=user, loading=False)
            self._schedule_profile_fetch(user.id)
        else:
            self._set_state(user=None, loading=False, profile=None)

        if event is AuthChangeEvent.SIGNED_OUT:
            self._set_state(profile=None, error=None)

    def _schedule_profile_fetch(self, user_id: str) -> None:
        task = asyncio.get_running_loop().create_task(self.fetch_profile(user_id))
        self._pending.add(task)
        task.add_done_callback(self._on_fetch_done)

    def _on_fetch_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background profile fetch failed", exc_info=exc)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def fetch_profile(self, user_id: str) -> Optional[Profile]:
        """
        Load the profile row of ``user_id`` into the state.

        Args:
            user_id: Authenticated user id

        Returns:
            The stored Profile, or None when absent or on failure
        """
        self._ensure_active("fetch_profile")
        result = await self._invoke("fetch_profile", self._profiles.get_profile_by_id(user_id))

        if result.ok:
            self._set_state(profile=result.value)
            return result.value

        if result.failure.kind == FailureKind.NOT_FOUND:
            logger.info(f"No profile row for user {user_id}")
            self._set_state(profile=None)
            return None

        error = self._failure_to_error(result.failure, PROFILE_FETCH_MESSAGES, "fetch_profile")
        self._set_state(error=error)
        return None

    async def sign_up(
        self,
        email: str,
        password: str,
        user_data: Optional[Dict[str, Any]] = None
    ) -> AuthResult:
        """
        Create an account.

        Args:
            email: Account email
            password: Account password
            user_data: Optional ``full_name`` and ``role``

        Returns:
            AuthResult with the created user or the classified error
        """
        self._ensure_active("sign_up")
        user_data = user_data or {}
        metadata = {
            "full_name": user_data.get("full_name") or "",
            "role": user_data.get("role") or self._default_role,
        }

        self._set_state(loading=True, error=None)
        try:
            result = await self._invoke("sign_up", self._identity.sign_up(email, password, metadata))
            if not result.ok:
                error = self._failure_to_error(result.failure, SIGN_UP_MESSAGES, "sign_up")
                self._set_state(error=error)
                security_logger.log_authentication("sign_up", False, email=email, reason=error.kind.value)
                return AuthResult(error=error)

            user = result.value
            security_logger.log_authentication("sign_up", True, user_id=user.id if user else None, email=email)
            return AuthResult(user=user)
        finally:
            self._set_state(loading=False)

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        self._ensure_active("sign_in")

        self._set_state(loading=True, error=None)
        try:
            result = await self._invoke(
                "sign_in", self._identity.sign_in_with_password(email, password)
            )
            if not result.ok:
                error = self._failure_to_error(result.failure, SIGN_IN_MESSAGES, "sign_in")
                self._set_state(error=error)
                security_logger.log_authentication("sign_in", False, email=email, reason=error.kind.value)
                return AuthResult(error=error)

            user = result.value
            security_logger.log_authentication("sign_in", True, user_id=user.id if user else None, email=email)
            return AuthResult(user=user)
        finally:
            self._set_state(loading=False)

    async def sign_out(self) -> SignOutResult:
        """End the session; user and profile are cleared only on success."""
        self._ensure_active("sign_out")
        user_id = self._user.id if self._user else None

        self._set_state(loading=True, error=None)
        try:
            result = await self._invoke("sign_out", self._identity.sign_out())
            if not result.ok:
                error = self._failure_to_error(result.failure, SIGN_OUT_MESSAGES, "sign_out")
                self._set_state(error=error)
                security_logger.log_authentication("sign_out", False, user_id=user_id, reason=error.kind.value)
                return SignOutResult(error=error)

            self._set_state(user=None, profile=None)
            security_logger.log_authentication("sign_out", True, user_id=user_id)
            return SignOutResult()
        finally:
            self._set_state(loading=False)

    async def update_profile(self, updates: Dict[str, Any]) -> ProfileResult:
        """
        Update the current user's profile row.

        The store is only called with an active session. ``id`` is never part
        of the patch; ``updated_at`` is always set to the current UTC time.

        Args:
            updates: Column values to change

        Returns:
            ProfileResult with the row as stored or the classified error
        """
        self._ensure_active("update_profile")

        if self._user is None:
            error = AuthError(AuthErrorKind.VALIDATION, NO_AUTHENTICATED_USER)
            self._set_state(error=error)
            return ProfileResult(error=error)

        self._set_state(error=None)
        patch = {key: value for key, value in updates.items() if key != "id"}
        patch["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = await self._invoke(
            "update_profile", self._profiles.update_profile_by_id(self._user.id, patch)
        )
        if not result.ok:
            error = self._failure_to_error(result.failure, PROFILE_UPDATE_MESSAGES, "update_profile")
            self._set_state(error=error)
            return ProfileResult(error=error)

        self._set_state(profile=result.value)
        return ProfileResult(data=result.value)

    def clear_error(self) -> None:
        self._set_state(error=None)

    # =========================================================================
    # FAILURE HANDLING
    # =========================================================================

    async def _invoke(self, operation: str, call: Awaitable[ServiceResult]) -> ServiceResult:
        """Await a collaborator call; unexpected exceptions become failures."""
        try:
            return await call
        except Exception as e:
            logger.exception(f"Unexpected failure during {operation}")
            return ServiceResult.from_failure(classify_exception(e))

    def _failure_to_error(
        self,
        failure: ServiceFailure,
        messages: OperationMessages,
        operation: str
    ) -> AuthError:
        if failure.kind == FailureKind.UNREACHABLE:
            logger.error(f"{operation}: service unreachable: {failure.message}")
            return AuthError(
                AuthErrorKind.NETWORK_UNREACHABLE,
                messages.unreachable,
                detail=failure.message,
                code=failure.code
            )

        if failure.kind in (FailureKind.REJECTED, FailureKind.NOT_FOUND):
            logger.warning(f"{operation}: rejected: {failure.message}")
            return AuthError(
                messages.rejected_kind,
                messages.rejected_format.format(detail=failure.message),
                detail=failure.message,
                code=failure.code
            )

        logger.error(f"{operation}: unexpected failure: {failure.message}")
        return AuthError(AuthErrorKind.UNKNOWN, messages.generic, detail=failure.message)
