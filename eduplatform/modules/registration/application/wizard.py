# 📄 File: eduplatform/modules/registration/application/wizard.py
# 🧭 Purpose (Layman Explanation):
# The two-screen "create your account" process: first fill in your details, then
# type the code we emailed you. Also handles asking for a new code.
# 🧪 Purpose (Technical Summary):
# Step machine ACCOUNT_INFO -> EMAIL_VERIFICATION -> VERIFIED over a
# RegistrationGateway. Validation runs on every field change; forward transitions
# happen only on collaborator success; the resend countdown and the transient
# notice are the only timers and both are released on back(), verification and
# dispose().
# 🔗 Dependencies:
# asyncio, logging, registration domain (draft, validation, strength, code slots),
# resend timer, shared results/exceptions
# 🔄 Connected Modules / Calls From:
# Presentation layer (register page), modules/registration/dependencies.py

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from eduplatform.shared.core.exceptions import InvalidStateTransitionError, ResourceDisposedError
from eduplatform.shared.core.results import FailureKind, ServiceFailure
from eduplatform.shared.utils.validators import PASSWORD_MIN_LENGTH, ValidationResult
from ..domain.models.draft import RegistrationDraft
from ..domain.models.verification_code import CODE_LENGTH, VerificationCode
from ..domain.repositories.registration_gateway import RegistrationGateway
from ..domain.services.draft_validation import validate_draft
from ..domain.services.password_strength import PasswordStrengthReport, evaluate_password_strength
from .resend_timer import DEFAULT_COOLDOWN_SECONDS, ResendCooldownTimer

logger = logging.getLogger(__name__)

REGISTRATION_UNREACHABLE = (
    "Cannot connect to the registration service. Please check your internet connection."
)
REGISTRATION_FAILED = "Registration failed. Please try again."
INVALID_CODE = "Invalid verification code. Please try again."
INCOMPLETE_CODE = "Please enter the complete 6-digit code"
CODE_SENT = "New code sent!"
RESEND_FAILED = "Failed to resend code. Please try again."
RESEND_UNAVAILABLE = "Please wait before requesting a new code"
IN_PROGRESS = "A request is already in progress"
STEP_LEFT = "The verification step was left before the request completed"


class WizardStep(str, Enum):
    ACCOUNT_INFO = "account_info"
    EMAIL_VERIFICATION = "email_verification"
    VERIFIED = "verified"


class MessageKind(str, Enum):
    ERROR = "error"
    SUCCESS = "success"


@dataclass(frozen=True)
class WizardMessage:
    """Content of the single message region"""
    kind: MessageKind
    text: str


@dataclass(frozen=True)
class WizardResult:
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class VerificationState:
    """Snapshot of the email verification step"""
    code: List[str]
    focus: int
    seconds_remaining: int
    can_resend: bool
    message: Optional[WizardMessage]


class RegistrationWizard:
    """
    Two-step registration flow.

    Account info:
        update_field() / submit()
    Email verification:
        enter_digit() / backspace() / paste() / verify() / resend() / back()

    Operations return WizardResult instead of raising; calling an operation
    from the wrong step raises InvalidStateTransitionError, and any operation
    after dispose() raises ResourceDisposedError.

    Usage:
        async with RegistrationWizard(gateway) as wizard:
            wizard.update_field("email", "learner@example.com")
            ...
            await wizard.submit()
    """

    def __init__(
        self,
        gateway: RegistrationGateway,
        min_password_length: int = PASSWORD_MIN_LENGTH,
        code_length: int = CODE_LENGTH,
        resend_cooldown: int = DEFAULT_COOLDOWN_SECONDS,
        notice_seconds: float = 3.0,
        tick_interval: float = 1.0
    ):
        self.gateway = gateway
        self.min_password_length = min_password_length
        self.notice_seconds = notice_seconds

        self.step = WizardStep.ACCOUNT_INFO
        self._step_token = 0
        self.draft = RegistrationDraft()
        self.validation: ValidationResult = validate_draft(self.draft, min_password_length)
        self.touched: Set[str] = set()
        self.code = VerificationCode(code_length)
        self.timer = ResendCooldownTimer(resend_cooldown, tick_interval)
        self.message: Optional[WizardMessage] = None
        self.email: Optional[str] = None
        self.user_id: Optional[str] = None

        self.submitting = False
        self.verifying = False
        self.resending = False

        self._notice_handle: Optional[asyncio.TimerHandle] = None
        self._disposed = False

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def password_strength(self) -> Optional[PasswordStrengthReport]:
        return evaluate_password_strength(self.draft.password, self.min_password_length)

    @property
    def field_errors(self) -> Dict[str, str]:
        """Errors of the fields the user has touched"""
        return {
            field: error
            for field, error in self.validation.errors.items()
            if field in self.touched
        }

    @property
    def can_submit(self) -> bool:
        return (
            self.step == WizardStep.ACCOUNT_INFO
            and self.validation.is_valid
            and not self.submitting
        )

    @property
    def can_verify(self) -> bool:
        return (
            self.step == WizardStep.EMAIL_VERIFICATION
            and self.code.is_complete
            and not self.verifying
        )

    @property
    def can_resend(self) -> bool:
        return self.timer.can_resend and not self.resending

    @property
    def seconds_remaining(self) -> int:
        return self.timer.seconds_remaining

    @property
    def verification_state(self) -> VerificationState:
        return VerificationState(
            code=list(self.code.slots),
            focus=self.code.focus,
            seconds_remaining=self.timer.seconds_remaining,
            can_resend=self.can_resend,
            message=self.message
        )

    def _require(self, operation: str, step: WizardStep) -> None:
        if self._disposed:
            raise ResourceDisposedError("RegistrationWizard", operation=operation)
        if self.step != step:
            raise InvalidStateTransitionError(operation, self.step.value, step.value)

    def _move_to(self, step: WizardStep) -> None:
        self.step = step
        self._step_token += 1

    def _superseded(self, token: int) -> bool:
        """True when dispose() or a step change happened while a request was awaited"""
        return self._disposed or self._step_token != token

    def _set_message(self, kind: MessageKind, text: str) -> None:
        self._cancel_notice()
        self.message = WizardMessage(kind, text)

    def _clear_message(self) -> None:
        self._cancel_notice()
        self.message = None

    def _cancel_notice(self) -> None:
        if self._notice_handle is not None:
            self._notice_handle.cancel()
            self._notice_handle = None

    def _show_notice(self, text: str) -> None:
        self._set_message(MessageKind.SUCCESS, text)
        notice = self.message

        def _expire():
            self._notice_handle = None
            if self.message is notice:
                self.message = None

        self._notice_handle = asyncio.get_running_loop().call_later(self.notice_seconds, _expire)

    def _failure_text(self, failure: ServiceFailure, fallback: str) -> str:
        if failure.kind == FailureKind.UNREACHABLE:
            logger.error(f"Registration service unreachable: {failure.message}")
            return REGISTRATION_UNREACHABLE
        logger.warning(f"Registration call failed ({failure.kind.value}): {failure.message}")
        return fallback

    # =========================================================================
    # ACCOUNT INFO
    # =========================================================================

    def update_field(self, name: str, value: Any) -> None:
        """
        Change one draft field and re-run validation.

        Raises:
            ValueError: for an unknown field name
        """
        self._require("update_field", WizardStep.ACCOUNT_INFO)
        self.draft = self.draft.updated(**{name: value})
        self.touched.add(name)
        self.validation = validate_draft(self.draft, self.min_password_length)
        self._clear_message()

    async def submit(self) -> WizardResult:
        """
        Create the pending account and move to email verification.

        Local validation failures never reach the gateway.
        """
        self._require("submit", WizardStep.ACCOUNT_INFO)
        if self.submitting:
            return WizardResult(error=IN_PROGRESS)

        self.touched.update(RegistrationDraft.model_fields)
        self.validation = validate_draft(self.draft, self.min_password_length)
        if not self.validation:
            return WizardResult(error=self.validation.first_error)

        self._clear_message()
        self.submitting = True
        try:
            result = await self.gateway.submit_registration(self.draft)
        finally:
            self.submitting = False

        if self._disposed:
            return WizardResult(error=REGISTRATION_FAILED)

        if not result.ok:
            failure = result.failure
            if failure.kind in (FailureKind.REJECTED, FailureKind.NOT_FOUND):
                text = failure.message
                logger.warning(f"Registration rejected: {failure.message}")
            else:
                text = self._failure_text(failure, REGISTRATION_FAILED)
            self._set_message(MessageKind.ERROR, text)
            return WizardResult(error=text)

        self.user_id = result.value
        self.email = self.draft.email.strip()
        self.code.clear()
        self._move_to(WizardStep.EMAIL_VERIFICATION)
        self.timer.start()
        logger.info(f"Registration submitted for {self.email}, awaiting verification")
        return WizardResult()

    # =========================================================================
    # EMAIL VERIFICATION
    # =========================================================================

    def back(self) -> None:
        """Return to account info; the pending remote account is kept."""
        self._require("back", WizardStep.EMAIL_VERIFICATION)
        self.timer.cancel()
        self.code.clear()
        self._clear_message()
        self._move_to(WizardStep.ACCOUNT_INFO)

    def enter_digit(self, index: int, char: str) -> None:
        self._require("enter_digit", WizardStep.EMAIL_VERIFICATION)
        if self.code.enter(index, char):
            self._clear_message()

    def backspace(self, index: int) -> None:
        self._require("backspace", WizardStep.EMAIL_VERIFICATION)
        self.code.backspace(index)

    def paste(self, text: str) -> None:
        self._require("paste", WizardStep.EMAIL_VERIFICATION)
        if self.code.paste(text):
            self._clear_message()

    async def verify(self) -> WizardResult:
        """Verify the entered code; success ends the wizard."""
        self._require("verify", WizardStep.EMAIL_VERIFICATION)

        if not self.code.is_complete:
            self._set_message(MessageKind.ERROR, INCOMPLETE_CODE)
            return WizardResult(error=INCOMPLETE_CODE)
        if self.verifying:
            return WizardResult(error=IN_PROGRESS)

        token = self._step_token
        self.verifying = True
        try:
            result = await self.gateway.verify_code(self.email, self.code.value)
        finally:
            self.verifying = False

        if self._superseded(token):
            logger.info(f"Verification result for {self.email} dropped: step left")
            return WizardResult(error=STEP_LEFT)

        if not result.ok:
            text = self._failure_text(result.failure, INVALID_CODE)
            self._set_message(MessageKind.ERROR, text)
            return WizardResult(error=text)

        self.timer.cancel()
        self._clear_message()
        self.draft = RegistrationDraft()
        self.touched.clear()
        self._move_to(WizardStep.VERIFIED)
        logger.info(f"Email verified for {self.email}")
        return WizardResult()

    async def resend(self) -> WizardResult:
        """
        Request a new code once the cooldown has run out.

        The countdown restarts only when the gateway confirms the resend.
        """
        self._require("resend", WizardStep.EMAIL_VERIFICATION)
        if not self.can_resend:
            return WizardResult(error=RESEND_UNAVAILABLE)

        token = self._step_token
        self.resending = True
        try:
            result = await self.gateway.resend_code(self.email)
        finally:
            self.resending = False

        if self._superseded(token):
            logger.info(f"Resend result for {self.email} dropped: step left")
            return WizardResult(error=STEP_LEFT)

        if not result.ok:
            text = self._failure_text(result.failure, RESEND_FAILED)
            self._set_message(MessageKind.ERROR, text)
            return WizardResult(error=text)

        self.timer.start()
        self._show_notice(CODE_SENT)
        logger.info(f"Verification code re-sent to {self.email}")
        return WizardResult()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def dispose(self) -> None:
        """Release the countdown and the notice timer. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        self.timer.cancel()
        self._cancel_notice()

    async def __aenter__(self) -> "RegistrationWizard":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.dispose()
