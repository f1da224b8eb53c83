"""
Shared fixtures: in-memory collaborators standing in for Supabase.

Each fake records its calls and returns whatever ServiceResult the test
queued, so the managers under test see the exact outcomes they would get
from the real adapters.
"""

from typing import Any, Dict, List, Optional

import pytest

from eduplatform.modules.auth.domain.events.auth_events import AuthChangeEvent, Subscription
from eduplatform.modules.auth.domain.models.profile import Profile
from eduplatform.modules.auth.domain.models.session import AuthUser, Session
from eduplatform.modules.auth.domain.repositories.identity_service import IdentityService
from eduplatform.modules.auth.domain.repositories.profile_store import ProfileStore
from eduplatform.modules.auth.domain.services.session_manager import SessionManager
from eduplatform.modules.registration.domain.models.draft import RegistrationDraft
from eduplatform.modules.registration.domain.repositories.registration_gateway import RegistrationGateway
from eduplatform.shared.config.settings import get_settings
from eduplatform.shared.core.results import FailureKind, ServiceResult


def make_user(user_id: str = "user-1", email: str = "learner@example.com", **metadata) -> AuthUser:
    return AuthUser(id=user_id, email=email, user_metadata=metadata)


def make_session(user_id: str = "user-1", email: str = "learner@example.com") -> Session:
    return Session(user=make_user(user_id, email), access_token="token")


def make_profile(user_id: str = "user-1", **fields) -> Profile:
    return Profile(id=user_id, full_name=fields.pop("full_name", "Ada Learner"), role="student", **fields)


def unreachable(message: str = "Connection refused") -> ServiceResult:
    return ServiceResult.failed(FailureKind.UNREACHABLE, message)


def rejected(message: str, code: Optional[str] = None) -> ServiceResult:
    return ServiceResult.failed(FailureKind.REJECTED, message, code=code)


class FakeIdentityService(IdentityService):
    """Identity service driven by queued results"""

    def __init__(self):
        self.session_result: ServiceResult = ServiceResult.success(None)
        self.results: Dict[str, ServiceResult] = {}
        self.calls: List[tuple] = []
        self.callbacks: List[Any] = []

    def set_result(self, operation: str, result: ServiceResult) -> None:
        self.results[operation] = result

    def _result(self, operation: str, *args) -> ServiceResult:
        self.calls.append((operation, *args))
        return self.results.get(operation, ServiceResult.success())

    def emit(self, event: Optional[AuthChangeEvent], session: Optional[Session]) -> None:
        for callback in list(self.callbacks):
            callback(event, session)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def get_current_session(self):
        self.calls.append(("get_current_session",))
        return self.session_result

    def subscribe(self, callback):
        self.callbacks.append(callback)
        return Subscription(lambda: self.callbacks.remove(callback))

    async def sign_up(self, email, password, metadata):
        return self._result("sign_up", email, password, metadata)

    async def sign_in_with_password(self, email, password):
        return self._result("sign_in_with_password", email, password)

    async def sign_out(self):
        return self._result("sign_out")

    async def verify_email_code(self, email, code):
        return self._result("verify_email_code", email, code)

    async def resend_signup_code(self, email):
        return self._result("resend_signup_code", email)

    async def request_password_reset(self, email):
        return self._result("request_password_reset", email)

    async def verify_recovery_code(self, email, code):
        return self._result("verify_recovery_code", email, code)

    async def update_password(self, new_password):
        return self._result("update_password", new_password)


class FakeProfileStore(ProfileStore):
    """Profile store backed by a dict; queued failures take precedence"""

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.fetch_result: Optional[ServiceResult] = None
        self.update_result: Optional[ServiceResult] = None
        self.calls: List[tuple] = []

    async def get_profile_by_id(self, profile_id):
        self.calls.append(("get_profile_by_id", profile_id))
        if self.fetch_result is not None:
            return self.fetch_result
        if profile_id not in self.rows:
            return ServiceResult.failed(FailureKind.NOT_FOUND, "no rows", code="PGRST116")
        return ServiceResult.success(Profile.from_record(self.rows[profile_id]))

    async def update_profile_by_id(self, profile_id, patch):
        self.calls.append(("update_profile_by_id", profile_id, dict(patch)))
        if self.update_result is not None:
            return self.update_result
        row = {**self.rows.get(profile_id, {"id": profile_id}), **patch}
        self.rows[profile_id] = row
        return ServiceResult.success(Profile.from_record(row))


class FakeRegistrationGateway(RegistrationGateway):
    def __init__(self):
        self.submit_result: ServiceResult = ServiceResult.success("user-1")
        self.verify_result: ServiceResult = ServiceResult.success()
        self.resend_result: ServiceResult = ServiceResult.success()
        self.calls: List[tuple] = []

    async def submit_registration(self, draft: RegistrationDraft):
        self.calls.append(("submit_registration", draft))
        return self.submit_result

    async def verify_code(self, email, code):
        self.calls.append(("verify_code", email, code))
        return self.verify_result

    async def resend_code(self, email):
        self.calls.append(("resend_code", email))
        return self.resend_result


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def identity():
    return FakeIdentityService()


@pytest.fixture
def profiles():
    return FakeProfileStore()


@pytest.fixture
def manager(identity, profiles):
    return SessionManager(identity, profiles)


@pytest.fixture
def gateway():
    return FakeRegistrationGateway()
