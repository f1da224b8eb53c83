# 📄 File: eduplatform/modules/auth/application/password_reset.py
# 🧭 Purpose (Layman Explanation):
# The "forgot my password" steps: ask for the email, type in the code we mailed,
# then choose a new password.
# 🧪 Purpose (Technical Summary):
# Step machine REQUEST -> CODE_SENT -> RESET -> COMPLETED over the IdentityService
# recovery calls. Local validation short-circuits; collaborator failures become a
# single displayed message.
# 🔗 Dependencies:
# shared validators, shared results, IdentityService contract
# 🔄 Connected Modules / Calls From:
# Presentation layer (password reset page), modules/auth/dependencies.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from eduplatform.shared.core.exceptions import InvalidStateTransitionError
from eduplatform.shared.core.results import FailureKind, ServiceResult
from eduplatform.shared.utils.validators import (
    CREDENTIALS_EMAIL_PATTERN,
    PASSWORD_MIN_LENGTH,
    validate_email_address,
    validate_password_confirmation,
    validate_password_length,
)
from ..domain.models.auth_error import AUTH_SERVICE_UNREACHABLE_SHORT
from ..domain.repositories.identity_service import IdentityService

logger = logging.getLogger(__name__)

RESET_CODE_LENGTH = 6
RESET_CODE_INCOMPLETE = "Please enter the 6-digit code"
RESET_FAILED = "Password reset failed. Please try again."


class ResetStep(str, Enum):
    REQUEST = "request"
    CODE_SENT = "code_sent"
    RESET = "reset"
    COMPLETED = "completed"


@dataclass(frozen=True)
class ResetStepResult:
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PasswordResetFlow:
    """
    Password recovery by emailed code.

    Usage:
        flow = PasswordResetFlow(identity_service)
        flow.email = "learner@example.com"
        await flow.request_code()
        await flow.verify_code("123456")
        await flow.reset_password("N3w-password", "N3w-password")
    """

    def __init__(self, identity_service: IdentityService, min_password_length: int = PASSWORD_MIN_LENGTH):
        self.identity_service = identity_service
        self.min_password_length = min_password_length
        self.step = ResetStep.REQUEST
        self.email = ""
        self.code = ""
        self.loading = False
        self.error: Optional[str] = None

    def _require_step(self, operation: str, expected: ResetStep) -> None:
        if self.step != expected:
            raise InvalidStateTransitionError(operation, self.step.value, expected.value)

    def _fail(self, message: str) -> ResetStepResult:
        self.error = message
        return ResetStepResult(error=message)

    def _failure_message(self, result: ServiceResult, operation: str) -> str:
        failure = result.failure
        if failure.kind == FailureKind.UNREACHABLE:
            logger.error(f"Password reset {operation}: service unreachable: {failure.message}")
            return AUTH_SERVICE_UNREACHABLE_SHORT
        if failure.kind in (FailureKind.REJECTED, FailureKind.NOT_FOUND):
            logger.warning(f"Password reset {operation} rejected: {failure.message}")
            return failure.message
        logger.error(f"Password reset {operation} failed: {failure.message}")
        return RESET_FAILED

    async def _call(self, operation: str, call) -> ServiceResult:
        self.loading = True
        try:
            return await call
        finally:
            self.loading = False

    async def request_code(self, email: Optional[str] = None) -> ResetStepResult:
        """Send a recovery code to the entered email."""
        self._require_step("request_code", ResetStep.REQUEST)
        if email is not None:
            self.email = email
        self.error = None

        validation = validate_email_address(
            self.email,
            pattern=CREDENTIALS_EMAIL_PATTERN,
            message="Please enter a valid email address"
        )
        if not validation:
            return self._fail(validation.first_error)

        email = self.email.strip()
        result = await self._call("request", self.identity_service.request_password_reset(email))
        if not result.ok:
            return self._fail(self._failure_message(result, "request"))

        logger.info(f"Password reset code requested for {email}")
        self.email = email
        self.step = ResetStep.CODE_SENT
        return ResetStepResult()

    async def verify_code(self, code: Optional[str] = None) -> ResetStepResult:
        """Exchange the emailed code for a recovery session."""
        self._require_step("verify_code", ResetStep.CODE_SENT)
        if code is not None:
            self.code = code
        self.error = None

        code = (self.code or "").strip()
        if len(code) != RESET_CODE_LENGTH:
            return self._fail(RESET_CODE_INCOMPLETE)

        result = await self._call("verify", self.identity_service.verify_recovery_code(self.email, code))
        if not result.ok:
            return self._fail(self._failure_message(result, "verify"))

        self.step = ResetStep.RESET
        return ResetStepResult()

    async def reset_password(self, new_password: str, confirm_password: str) -> ResetStepResult:
        """Store the new password for the recovered account."""
        self._require_step("reset_password", ResetStep.RESET)
        self.error = None

        validation = validate_password_length(new_password, self.min_password_length).merge(
            validate_password_confirmation(new_password, confirm_password)
        )
        if not validation:
            return self._fail(validation.first_error)

        result = await self._call("update", self.identity_service.update_password(new_password))
        if not result.ok:
            return self._fail(self._failure_message(result, "update"))

        logger.info(f"Password reset completed for {self.email}")
        self.step = ResetStep.COMPLETED
        return ResetStepResult()

    def restart(self) -> None:
        """Go back to the email step, e.g. when the code never arrived."""
        self.step = ResetStep.REQUEST
        self.code = ""
        self.error = None
