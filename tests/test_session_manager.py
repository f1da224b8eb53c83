import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from eduplatform.modules.auth.domain.events.auth_events import AuthChangeEvent
from eduplatform.modules.auth.domain.models.auth_error import (
    AUTH_SERVICE_UNREACHABLE,
    AUTH_SERVICE_UNREACHABLE_SHORT,
    DATABASE_UNREACHABLE,
    DATABASE_UNREACHABLE_SHORT,
    NO_AUTHENTICATED_USER,
    PROFILE_LOAD_FAILED,
    SESSION_LOAD_FAILED,
    SIGN_OUT_FAILED,
    SIGN_UP_FAILED,
    AuthError,
    AuthErrorKind,
)
from eduplatform.modules.auth.domain.services.session_manager import SessionManager
from eduplatform.shared.core.exceptions import ResourceDisposedError
from eduplatform.shared.core.results import ServiceResult

from conftest import make_session, make_user, rejected, unreachable


async def signed_in(manager, identity, profiles, user_id="user-1"):
    """Start a manager with a recovered session and a stored profile row"""
    profiles.rows[user_id] = {"id": user_id, "full_name": "Ada Learner", "role": "student"}
    identity.session_result = ServiceResult.success(make_session(user_id))
    await manager.start()
    return manager


class TestStart:
    """Session bootstrap"""

    async def test_recovered_session_sets_user_and_loads_profile(self, manager, identity, profiles):
        """An active stored session sets the user and fetches its profile"""
        await signed_in(manager, identity, profiles)

        assert manager.user.id == "user-1"
        assert manager.profile.full_name == "Ada Learner"
        assert manager.loading is False
        assert manager.error is None
        assert profiles.calls == [("get_profile_by_id", "user-1")]

    async def test_no_session(self, manager, identity, profiles):
        await manager.start()

        assert manager.user is None
        assert manager.profile is None
        assert manager.loading is False
        assert profiles.calls == []

    async def test_unreachable_service(self, manager, identity):
        """Unreachability gets the paused-project message"""
        identity.session_result = unreachable()

        await manager.start()

        assert manager.error.kind == AuthErrorKind.NETWORK_UNREACHABLE
        assert manager.error.message == AUTH_SERVICE_UNREACHABLE
        assert manager.loading is False

    async def test_other_failure(self, manager, identity):
        identity.session_result = rejected("JWT expired")

        await manager.start()

        assert manager.error.message == SESSION_LOAD_FAILED
        assert manager.error.detail == "JWT expired"
        assert manager.loading is False

    async def test_raised_exception_is_classified(self, manager, identity):
        """Exceptions escaping the collaborator still end loading"""
        identity.get_current_session = AsyncMock(side_effect=httpx.ConnectError("refused"))

        await manager.start()

        assert manager.error.message == AUTH_SERVICE_UNREACHABLE
        assert manager.loading is False

    async def test_unexpected_exception(self, manager, identity):
        identity.get_current_session = AsyncMock(side_effect=RuntimeError("boom"))

        await manager.start()

        assert manager.error.kind == AuthErrorKind.UNKNOWN
        assert manager.error.message == SESSION_LOAD_FAILED
        assert manager.loading is False

    async def test_runs_once(self, manager, identity):
        await manager.start()
        await manager.start()

        assert identity.call_names().count("get_current_session") == 1
        assert len(identity.callbacks) == 1

    async def test_initially_loading(self, manager):
        assert manager.loading is True
        assert manager.state.is_authenticated is False


class TestAuthChangeNotifications:
    """Reaction to session-change events"""

    async def test_signed_in_event_sets_user_and_fetches_profile(self, manager, identity, profiles):
        await manager.start()
        profiles.rows["user-2"] = {"id": "user-2", "full_name": "Grace"}

        identity.emit(AuthChangeEvent.SIGNED_IN, make_session("user-2"))
        assert manager.user.id == "user-2"
        assert manager.loading is False

        await manager.wait_for_pending()
        assert manager.profile.full_name == "Grace"

    async def test_signed_out_event_clears_profile_and_error(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)
        manager._set_state(error=AuthError(AuthErrorKind.UNKNOWN, "stale"))

        identity.emit(AuthChangeEvent.SIGNED_OUT, None)

        assert manager.user is None
        assert manager.profile is None
        assert manager.error is None

    async def test_event_without_session_clears_profile(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)

        identity.emit(AuthChangeEvent.USER_DELETED, None)

        assert manager.user is None
        assert manager.profile is None

    async def test_token_refresh_keeps_error(self, manager, identity, profiles):
        """Only SIGNED_OUT clears the error"""
        await signed_in(manager, identity, profiles)
        error = AuthError(AuthErrorKind.UNKNOWN, "kept")
        manager._set_state(error=error)

        identity.emit(AuthChangeEvent.TOKEN_REFRESHED, make_session())
        await manager.wait_for_pending()

        assert manager.error == error

    async def test_no_mutation_after_teardown(self, manager, identity, profiles):
        """Events delivered after dispose change nothing"""
        await signed_in(manager, identity, profiles)
        callback = identity.callbacks[0]
        before = manager.state

        await manager.dispose()
        assert identity.callbacks == []

        callback(AuthChangeEvent.SIGNED_OUT, None)
        callback(AuthChangeEvent.SIGNED_IN, make_session("intruder"))

        assert manager.state == before
        assert manager.user.id == "user-1"

    async def test_dispose_cancels_pending_profile_fetch(self, manager, identity, profiles):
        await manager.start()
        identity.emit(AuthChangeEvent.SIGNED_IN, make_session("user-2"))
        assert manager._pending

        await manager.dispose()

        assert not manager._pending
        assert manager.profile is None

    async def test_last_writer_wins(self, manager, identity, profiles):
        """An event and a later completion race without a version guard"""
        await manager.start()
        identity.emit(AuthChangeEvent.SIGNED_IN, make_session("user-2"))
        identity.emit(AuthChangeEvent.SIGNED_IN, make_session("user-3"))
        await manager.wait_for_pending()

        assert manager.user.id == "user-3"


class TestFetchProfile:
    async def test_missing_row_is_not_an_error(self, manager, profiles):
        """The no-such-row outcome yields profile=None and error=None"""
        result = await manager.fetch_profile("ghost")

        assert result is None
        assert manager.profile is None
        assert manager.error is None

    async def test_store_error_keeps_profile(self, manager, identity, profiles):
        """Other store errors set the error and leave the profile unchanged"""
        await signed_in(manager, identity, profiles)
        profile = manager.profile
        profiles.fetch_result = rejected("permission denied for table user_profiles", code="42501")

        await manager.fetch_profile("user-1")

        assert manager.profile == profile
        assert manager.error.message == "Failed to load user profile: permission denied for table user_profiles"

    async def test_unreachable_database(self, manager, profiles):
        profiles.fetch_result = unreachable()

        await manager.fetch_profile("user-1")

        assert manager.error.message == DATABASE_UNREACHABLE
        assert manager.error.is_connectivity

    async def test_unexpected_failure(self, manager, profiles):
        profiles.get_profile_by_id = AsyncMock(side_effect=ValueError("bad row"))

        await manager.fetch_profile("user-1")

        assert manager.error.message == PROFILE_LOAD_FAILED


class TestSignUp:
    async def test_success(self, manager, identity):
        identity.set_result("sign_up", ServiceResult.success(make_user()))

        result = await manager.sign_up("learner@example.com", "Secret123!", {"full_name": "Ada"})

        assert result.ok
        assert result.user.id == "user-1"
        assert identity.calls[-1] == (
            "sign_up", "learner@example.com", "Secret123!", {"full_name": "Ada", "role": "student"}
        )

    async def test_metadata_defaults(self, manager, identity):
        await manager.sign_up("learner@example.com", "Secret123!")

        assert identity.calls[-1][3] == {"full_name": "", "role": "student"}

    async def test_explicit_role(self, manager, identity):
        await manager.sign_up("instructor@example.com", "Secret123!", {"full_name": "T", "role": "instructor"})

        assert identity.calls[-1][3]["role"] == "instructor"

    async def test_rejection_passes_service_message(self, manager, identity):
        identity.set_result("sign_up", rejected("User already registered"))

        result = await manager.sign_up("learner@example.com", "Secret123!")

        assert result.user is None
        assert result.error.message == "User already registered"
        assert result.error.kind == AuthErrorKind.VALIDATION
        assert manager.error == result.error

    async def test_unreachable(self, manager, identity):
        identity.set_result("sign_up", unreachable("getaddrinfo failed"))

        result = await manager.sign_up("learner@example.com", "Secret123!")

        assert result.error.message == AUTH_SERVICE_UNREACHABLE
        assert result.error.detail == "getaddrinfo failed"

    async def test_unexpected_exception(self, manager, identity):
        identity.sign_up = AsyncMock(side_effect=RuntimeError("boom"))

        result = await manager.sign_up("learner@example.com", "Secret123!")

        assert result.error.message == SIGN_UP_FAILED
        assert manager.loading is False

    async def test_loading_toggles_and_error_resets(self, manager, identity):
        """loading is true while in flight and the previous error is cleared"""
        await manager.start()
        manager._set_state(error=AuthError(AuthErrorKind.UNKNOWN, "old"))
        snapshots = []
        manager.observe(snapshots.append)

        await manager.sign_up("learner@example.com", "Secret123!")

        assert snapshots[0].loading is True
        assert snapshots[0].error is None
        assert snapshots[-1].loading is False


class TestSignIn:
    async def test_invalid_credentials(self, manager, identity):
        identity.set_result("sign_in_with_password", rejected("Invalid login credentials"))

        result = await manager.sign_in("learner@example.com", "wrong")

        assert result.error.kind == AuthErrorKind.INVALID_CREDENTIALS
        assert result.error.message == "Invalid login credentials"
        assert manager.loading is False

    async def test_success_does_not_set_user_directly(self, manager, identity):
        """The SIGNED_IN notification is what sets the user"""
        await manager.start()
        identity.set_result("sign_in_with_password", ServiceResult.success(make_user()))

        result = await manager.sign_in("learner@example.com", "Secret123!")

        assert result.ok
        assert manager.user is None


class TestSignOut:
    async def test_success_clears_user_and_profile(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)

        result = await manager.sign_out()

        assert result.ok
        assert manager.user is None
        assert manager.profile is None
        assert manager.loading is False

    async def test_failure_keeps_user_and_profile(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)
        user, profile = manager.user, manager.profile
        identity.set_result("sign_out", rejected("Session not found"))

        result = await manager.sign_out()

        assert result.error.message == "Session not found"
        assert manager.user == user
        assert manager.profile == profile
        assert manager.error == result.error

    async def test_unreachable(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)
        identity.set_result("sign_out", unreachable())

        result = await manager.sign_out()

        assert result.error.message == AUTH_SERVICE_UNREACHABLE_SHORT
        assert manager.user is not None

    async def test_unexpected(self, manager, identity):
        identity.sign_out = AsyncMock(side_effect=KeyError("session"))

        result = await manager.sign_out()

        assert result.error.message == SIGN_OUT_FAILED


class TestUpdateProfile:
    async def test_without_session_never_calls_store(self, manager, profiles):
        """No active session fails locally"""
        result = await manager.update_profile({"bio": "Hello"})

        assert result.data is None
        assert result.error.message == NO_AUTHENTICATED_USER
        assert result.error.kind == AuthErrorKind.VALIDATION
        assert profiles.calls == []

    async def test_success_uses_returned_row(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)

        result = await manager.update_profile({"bio": "Hello", "id": "someone-else"})

        operation, profile_id, patch = profiles.calls[-1]
        assert operation == "update_profile_by_id"
        assert profile_id == "user-1"
        assert "id" not in patch
        assert patch["bio"] == "Hello"
        assert "updated_at" in patch
        assert result.ok
        assert manager.profile == result.data
        assert manager.profile.bio == "Hello"
        assert manager.profile.updated_at is not None

    async def test_store_error(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)
        profile = manager.profile
        profiles.update_result = rejected('value too long for type character varying(500)')

        result = await manager.update_profile({"bio": "x" * 600})

        assert result.data is None
        assert result.error.message == "Failed to update profile: value too long for type character varying(500)"
        assert manager.profile == profile

    async def test_unreachable(self, manager, identity, profiles):
        await signed_in(manager, identity, profiles)
        profiles.update_result = unreachable()

        result = await manager.update_profile({"bio": "Hello"})

        assert result.error.message == DATABASE_UNREACHABLE_SHORT


class TestObserversAndLifecycle:
    async def test_clear_error(self, manager, identity):
        identity.session_result = unreachable()
        await manager.start()

        manager.clear_error()

        assert manager.error is None

    async def test_unsubscribed_listener_not_called(self, manager):
        seen = []
        subscription = manager.observe(seen.append)
        subscription.unsubscribe()
        subscription.unsubscribe()

        await manager.start()

        assert seen == []

    async def test_failing_listener_is_logged(self, manager, caplog):
        def broken(state):
            raise RuntimeError("listener bug")

        manager.observe(broken)
        with caplog.at_level(logging.ERROR):
            await manager.start()

        assert manager.loading is False
        assert "Auth state listener failed" in caplog.text

    async def test_operations_after_dispose_raise(self, manager):
        await manager.dispose()
        await manager.dispose()

        with pytest.raises(ResourceDisposedError):
            await manager.sign_in("learner@example.com", "Secret123!")
        with pytest.raises(ResourceDisposedError):
            await manager.start()

    async def test_context_manager(self, identity, profiles):
        async with SessionManager(identity, profiles) as manager:
            assert manager.started
            assert len(identity.callbacks) == 1

        assert manager.disposed
        assert identity.callbacks == []

    async def test_start_failure_releases_subscription(self, identity, profiles):
        identity.get_current_session = AsyncMock(side_effect=asyncio.CancelledError)
        manager = SessionManager(identity, profiles)

        with pytest.raises(asyncio.CancelledError):
            await manager.start()

        assert manager.disposed
        assert identity.callbacks == []

    async def test_subscribe_failure_releases_manager(self, identity, profiles):
        """A failed subscription leaves a disposed manager, not a half-started one"""
        identity.subscribe = MagicMock(side_effect=RuntimeError("realtime unavailable"))
        manager = SessionManager(identity, profiles)

        with pytest.raises(RuntimeError):
            await manager.start()

        assert manager.disposed
        assert identity.call_names() == []
        with pytest.raises(ResourceDisposedError):
            await manager.start()
