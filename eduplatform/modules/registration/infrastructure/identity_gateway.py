# 📄 File: eduplatform/modules/registration/infrastructure/identity_gateway.py
# 🧭 Purpose (Layman Explanation):
# Sends the finished registration form to the sign-in service and passes the
# emailed code back to it.
# 🧪 Purpose (Technical Summary):
# RegistrationGateway implementation delegating to the auth module's IdentityService
# (Supabase sign-up, signup OTP verification and resend).
# 🔗 Dependencies:
# Auth IdentityService contract, shared result types
# 🔄 Connected Modules / Calls From:
# modules/registration/dependencies.py

import logging
from typing import Optional

from eduplatform.modules.auth.domain.repositories.identity_service import IdentityService
from eduplatform.shared.core.results import ServiceResult
from ..domain.models.draft import RegistrationDraft
from ..domain.repositories.registration_gateway import RegistrationGateway

logger = logging.getLogger(__name__)


class IdentityRegistrationGateway(RegistrationGateway):
    """
    Registration through the identity service.

    The account is created pending email confirmation; the signup code sent
    by the identity service confirms it.
    """

    def __init__(self, identity_service: IdentityService, role: str = "student"):
        self.identity_service = identity_service
        self.role = role

    async def submit_registration(self, draft: RegistrationDraft) -> ServiceResult[Optional[str]]:
        email = draft.email.strip()
        result = await self.identity_service.sign_up(
            email,
            draft.password,
            draft.signup_metadata(self.role)
        )
        if not result.ok:
            return ServiceResult.from_failure(result.failure)

        user_id = result.value.id if result.value else None
        logger.info(f"Pending account created for {email} ({draft.account_type})")
        return ServiceResult.success(user_id)

    async def verify_code(self, email: str, code: str) -> ServiceResult[None]:
        result = await self.identity_service.verify_email_code(email, code)
        if not result.ok:
            return ServiceResult.from_failure(result.failure)
        return ServiceResult.success()

    async def resend_code(self, email: str) -> ServiceResult[None]:
        return await self.identity_service.resend_signup_code(email)
