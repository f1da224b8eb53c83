# 📄 File: eduplatform/modules/auth/infrastructure/external/supabase_auth.py
# 🧭 Purpose (Layman Explanation):
# Talks to Supabase's sign-in service on behalf of the app and translates its
# answers (and its failures) into the app's own words.
# 🧪 Purpose (Technical Summary):
# IdentityService implementation over the supabase-py async GoTrue client. Client
# exceptions are caught at this boundary and returned as classified ServiceResults.
# 🔗 Dependencies:
# supabase (AsyncClient), shared error classifier, auth domain models
# 🔄 Connected Modules / Calls From:
# modules/auth/dependencies.py, registration identity gateway

import logging
from typing import Any, Dict, Optional

from supabase import AsyncClient

from eduplatform.shared.core.error_classifier import SERVICE_ERRORS, failure_result
from eduplatform.shared.core.results import ServiceResult
from ...domain.events.auth_events import AuthChangeEvent, Subscription
from ...domain.models.session import AuthUser, Session
from ...domain.repositories.identity_service import AuthChangeCallback, IdentityService

logger = logging.getLogger(__name__)


def _dump(model: Any) -> Dict[str, Any]:
    if model is None:
        return {}
    if hasattr(model, "model_dump"):
        return model.model_dump(mode="json")
    return dict(vars(model))


def to_auth_user(user: Any) -> Optional[AuthUser]:
    """Map a GoTrue user to the domain AuthUser"""
    if user is None:
        return None
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        user_metadata=dict(getattr(user, "user_metadata", None) or {}),
        raw=_dump(user)
    )


def to_session(session: Any) -> Optional[Session]:
    """Map a GoTrue session to the domain Session"""
    if session is None or getattr(session, "user", None) is None:
        return None
    return Session(
        user=to_auth_user(session.user),
        access_token=getattr(session, "access_token", None),
        expires_at=getattr(session, "expires_at", None),
        raw=_dump(session)
    )


class SupabaseIdentityService(IdentityService):
    """
    Supabase implementation of IdentityService.

    Sign-up and recovery codes are the 6-digit email OTPs GoTrue sends;
    delivery itself is configured on the Supabase project.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    @property
    def auth(self):
        return self.client.auth

    async def get_current_session(self) -> ServiceResult[Session]:
        try:
            session = await self.auth.get_session()
            return ServiceResult.success(to_session(session))
        except SERVICE_ERRORS as e:
            return failure_result(e)

    def subscribe(self, callback: AuthChangeCallback) -> Subscription:
        def _on_change(event, session):
            callback(AuthChangeEvent.parse(event), to_session(session))

        handle = self.auth.on_auth_state_change(_on_change)
        logger.debug("Subscribed to auth state changes")
        return Subscription(handle.unsubscribe)

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Dict[str, Any]
    ) -> ServiceResult[AuthUser]:
        try:
            response = await self.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": metadata}
            })
            return ServiceResult.success(to_auth_user(response.user))
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def sign_in_with_password(self, email: str, password: str) -> ServiceResult[AuthUser]:
        try:
            response = await self.auth.sign_in_with_password({
                "email": email,
                "password": password
            })
            return ServiceResult.success(to_auth_user(response.user))
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def sign_out(self) -> ServiceResult[None]:
        try:
            await self.auth.sign_out()
            return ServiceResult.success()
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def verify_email_code(self, email: str, code: str) -> ServiceResult[Session]:
        return await self._verify_otp(email, code, "signup")

    async def resend_signup_code(self, email: str) -> ServiceResult[None]:
        try:
            await self.auth.resend({"type": "signup", "email": email})
            return ServiceResult.success()
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def request_password_reset(self, email: str) -> ServiceResult[None]:
        try:
            await self.auth.reset_password_for_email(email)
            return ServiceResult.success()
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def verify_recovery_code(self, email: str, code: str) -> ServiceResult[Session]:
        return await self._verify_otp(email, code, "recovery")

    async def update_password(self, new_password: str) -> ServiceResult[AuthUser]:
        try:
            response = await self.auth.update_user({"password": new_password})
            return ServiceResult.success(to_auth_user(response.user))
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def _verify_otp(self, email: str, code: str, otp_type: str) -> ServiceResult[Session]:
        try:
            response = await self.auth.verify_otp({
                "email": email,
                "token": code,
                "type": otp_type
            })
            return ServiceResult.success(to_session(response.session))
        except SERVICE_ERRORS as e:
            return failure_result(e)
