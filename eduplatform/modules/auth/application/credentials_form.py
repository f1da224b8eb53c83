# 📄 File: eduplatform/modules/auth/application/credentials_form.py
# 🧭 Purpose (Layman Explanation):
# The sign-in / create-account form: checks what was typed, shows one error at a
# time, and hands the details to the session manager when everything looks right.
# 🧪 Purpose (Technical Summary):
# Application-layer form state in front of SessionManager.sign_in / sign_up. Local
# validation short-circuits before any collaborator call; editing a field clears
# both the local validation error and the manager's error.
# 🔗 Dependencies:
# shared validators, SessionManager
# 🔄 Connected Modules / Calls From:
# Presentation layer (login page)

import logging
from enum import Enum
from typing import Optional

from eduplatform.shared.utils.validators import CREDENTIALS_EMAIL_PATTERN
from ..domain.models.results import AuthResult
from ..domain.services.session_manager import SessionManager

logger = logging.getLogger(__name__)

CREDENTIALS_PASSWORD_MIN_LENGTH = 6

MISSING_FIELDS = "Please fill in all required fields"
INVALID_EMAIL = "Please enter a valid email address"
PASSWORD_TOO_SHORT = "Password must be at least 6 characters long"
FULL_NAME_REQUIRED = "Full name is required"
PASSWORDS_DO_NOT_MATCH = "Passwords do not match"

FORM_FIELDS = ("email", "password", "full_name", "confirm_password")


class FormMode(str, Enum):
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"


class CredentialsForm:
    """
    Sign-in / sign-up form bound to a SessionManager.

    Only one message is displayed: the local validation error when present,
    otherwise the manager's current error.
    """

    def __init__(self, session_manager: SessionManager, mode: FormMode = FormMode.SIGN_IN):
        self.session_manager = session_manager
        self.mode = FormMode(mode)
        self.email = ""
        self.password = ""
        self.full_name = ""
        self.confirm_password = ""
        self.validation_error: Optional[str] = None

    @property
    def is_sign_up(self) -> bool:
        return self.mode == FormMode.SIGN_UP

    @property
    def loading(self) -> bool:
        return self.session_manager.loading

    @property
    def error_message(self) -> Optional[str]:
        """The single message shown by the form"""
        if self.validation_error:
            return self.validation_error
        auth_error = self.session_manager.error
        return auth_error.message if auth_error else None

    def _clear_errors(self) -> None:
        if self.session_manager.error is not None:
            self.session_manager.clear_error()
        self.validation_error = None

    def update_field(self, name: str, value: str) -> None:
        """Set a field value and clear any displayed error."""
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self, name, value)
        self._clear_errors()

    def switch_mode(self, mode: FormMode) -> None:
        self.mode = FormMode(mode)
        self._clear_errors()

    def validate(self) -> Optional[str]:
        """
        Run the local checks in order.

        Returns:
            First failing message, or None when the form may be submitted
        """
        if not self.email or not self.password:
            return MISSING_FIELDS
        if not CREDENTIALS_EMAIL_PATTERN.search(self.email):
            return INVALID_EMAIL
        if len(self.password) < CREDENTIALS_PASSWORD_MIN_LENGTH:
            return PASSWORD_TOO_SHORT

        if self.is_sign_up:
            if not self.full_name.strip():
                return FULL_NAME_REQUIRED
            if self.password != self.confirm_password:
                return PASSWORDS_DO_NOT_MATCH

        return None

    async def submit(self) -> Optional[AuthResult]:
        """
        Validate and submit.

        Returns:
            The manager's AuthResult, or None when local validation failed
        """
        self.validation_error = self.validate()
        if self.validation_error:
            logger.debug(f"Credentials form rejected locally: {self.validation_error}")
            return None

        if self.is_sign_up:
            return await self.session_manager.sign_up(
                self.email,
                self.password,
                {"full_name": self.full_name.strip()}
            )
        return await self.session_manager.sign_in(self.email, self.password)
