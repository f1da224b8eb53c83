from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from supabase import AuthApiError, AuthRetryableError, PostgrestAPIError

from eduplatform.modules.auth.domain.events.auth_events import AuthChangeEvent
from eduplatform.modules.auth.infrastructure.database.profile_repository_impl import SupabaseProfileStore
from eduplatform.modules.auth.infrastructure.external.supabase_auth import (
    SupabaseIdentityService,
    to_session,
)
from eduplatform.shared.core.results import FailureKind


def gotrue_user(user_id="user-1", email="learner@example.com", **metadata):
    return SimpleNamespace(id=user_id, email=email, user_metadata=metadata)


def gotrue_session(user=None):
    return SimpleNamespace(user=user or gotrue_user(), access_token="jwt", expires_at=1700000000)


@pytest.fixture
def client():
    client = MagicMock()
    client.auth = MagicMock()
    return client


@pytest.fixture
def identity_service(client):
    return SupabaseIdentityService(client)


@pytest.fixture
def profile_store(client):
    return SupabaseProfileStore(client)


class TestSupabaseIdentityService:
    async def test_current_session(self, client, identity_service):
        client.auth.get_session = AsyncMock(return_value=gotrue_session())

        result = await identity_service.get_current_session()

        assert result.ok
        assert result.value.user.id == "user-1"
        assert result.value.access_token == "jwt"

    async def test_no_current_session(self, client, identity_service):
        client.auth.get_session = AsyncMock(return_value=None)

        result = await identity_service.get_current_session()

        assert result.ok
        assert result.value is None

    async def test_sign_up_sends_metadata(self, client, identity_service):
        client.auth.sign_up = AsyncMock(
            return_value=SimpleNamespace(user=gotrue_user(full_name="Ada"), session=None)
        )

        result = await identity_service.sign_up(
            "learner@example.com", "secret12", {"full_name": "Ada", "role": "student"}
        )

        assert result.value.full_name == "Ada"
        client.auth.sign_up.assert_awaited_once_with({
            "email": "learner@example.com",
            "password": "secret12",
            "options": {"data": {"full_name": "Ada", "role": "student"}}
        })

    async def test_rejected_credentials(self, client, identity_service):
        client.auth.sign_in_with_password = AsyncMock(
            side_effect=AuthApiError("Invalid login credentials", 400, "invalid_credentials")
        )

        result = await identity_service.sign_in_with_password("learner@example.com", "wrong")

        assert result.failure.kind == FailureKind.REJECTED
        assert result.failure.message == "Invalid login credentials"

    async def test_unreachable(self, client, identity_service):
        client.auth.sign_out = AsyncMock(side_effect=AuthRetryableError("Failed to fetch", 0))

        result = await identity_service.sign_out()

        assert result.failure.kind == FailureKind.UNREACHABLE

    async def test_verify_email_code_uses_signup_otp(self, client, identity_service):
        client.auth.verify_otp = AsyncMock(
            return_value=SimpleNamespace(user=gotrue_user(), session=gotrue_session())
        )

        result = await identity_service.verify_email_code("learner@example.com", "123456")

        assert result.ok
        client.auth.verify_otp.assert_awaited_once_with(
            {"email": "learner@example.com", "token": "123456", "type": "signup"}
        )

    async def test_verify_recovery_code_uses_recovery_otp(self, client, identity_service):
        client.auth.verify_otp = AsyncMock(
            return_value=SimpleNamespace(user=gotrue_user(), session=gotrue_session())
        )

        await identity_service.verify_recovery_code("learner@example.com", "654321")

        assert client.auth.verify_otp.await_args.args[0]["type"] == "recovery"

    async def test_resend_signup_code(self, client, identity_service):
        client.auth.resend = AsyncMock(return_value=None)

        result = await identity_service.resend_signup_code("learner@example.com")

        assert result.ok
        client.auth.resend.assert_awaited_once_with({"type": "signup", "email": "learner@example.com"})

    async def test_update_password(self, client, identity_service):
        client.auth.update_user = AsyncMock(return_value=SimpleNamespace(user=gotrue_user()))

        result = await identity_service.update_password("N3w-secret")

        assert result.value.id == "user-1"
        client.auth.update_user.assert_awaited_once_with({"password": "N3w-secret"})

    def test_subscribe_maps_events(self, client, identity_service):
        handle = MagicMock()
        client.auth.on_auth_state_change = MagicMock(return_value=handle)
        received = []

        subscription = identity_service.subscribe(lambda event, session: received.append((event, session)))
        listener = client.auth.on_auth_state_change.call_args.args[0]
        listener("SIGNED_IN", gotrue_session())
        listener("SIGNED_OUT", None)

        assert received[0][0] == AuthChangeEvent.SIGNED_IN
        assert received[0][1].user.id == "user-1"
        assert received[1] == (AuthChangeEvent.SIGNED_OUT, None)

        subscription.unsubscribe()
        handle.unsubscribe.assert_called_once()

    def test_session_without_user(self):
        assert to_session(SimpleNamespace(user=None)) is None


class TestSupabaseProfileStore:
    async def test_get_profile(self, client, profile_store):
        query = client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute = AsyncMock(
            return_value=SimpleNamespace(data={"id": "user-1", "full_name": "Ada", "role": "student"})
        )

        result = await profile_store.get_profile_by_id("user-1")

        assert result.value.full_name == "Ada"
        client.table.assert_called_with("user_profiles")
        client.table.return_value.select.return_value.eq.assert_called_with("id", "user-1")

    async def test_missing_profile(self, client, profile_store):
        query = client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute = AsyncMock(side_effect=PostgrestAPIError({
            "message": "JSON object requested, multiple (or no) rows returned",
            "code": "PGRST116",
            "hint": None,
            "details": "The result contains 0 rows"
        }))

        result = await profile_store.get_profile_by_id("user-1")

        assert result.failure.kind == FailureKind.NOT_FOUND

    async def test_get_profile_unreachable(self, client, profile_store):
        query = client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute = AsyncMock(side_effect=httpx.ConnectError("All connection attempts failed"))

        result = await profile_store.get_profile_by_id("user-1")

        assert result.failure.kind == FailureKind.UNREACHABLE

    async def test_update_profile(self, client, profile_store):
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute = AsyncMock(
            return_value=SimpleNamespace(data=[{"id": "user-1", "bio": "Curious"}])
        )

        result = await profile_store.update_profile_by_id("user-1", {"bio": "Curious"})

        assert result.value.bio == "Curious"
        client.table.return_value.update.assert_called_with({"bio": "Curious"})

    async def test_update_matching_no_rows(self, client, profile_store):
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute = AsyncMock(return_value=SimpleNamespace(data=[]))

        result = await profile_store.update_profile_by_id("user-1", {"bio": "Curious"})

        assert result.failure.kind == FailureKind.NOT_FOUND
