# 📄 File: eduplatform/modules/registration/__init__.py
# 🧭 Purpose (Layman Explanation):
# The "create your account" process: fill in details, then confirm the email code.
# 🧪 Purpose (Technical Summary):
# Package initialization for the registration module (draft model, validation,
# password strength, verification code slots, resend timer, wizard, gateway).
# 🔗 Dependencies:
# pydantic, eduplatform.shared, eduplatform.modules.auth (gateway adapter only)
# 🔄 Connected Modules / Calls From:
# Presentation layers

"""
Registration Module

Architecture:
- Domain: RegistrationDraft, VerificationCode, draft validation, password
  strength evaluation, RegistrationGateway contract
- Application: ResendCooldownTimer, RegistrationWizard
- Infrastructure: IdentityRegistrationGateway (auth IdentityService)
"""

from .application.resend_timer import ResendCooldownTimer
from .application.wizard import (
    MessageKind,
    RegistrationWizard,
    VerificationState,
    WizardMessage,
    WizardResult,
    WizardStep,
)
from .domain.models.draft import AccountType, RegistrationDraft
from .domain.models.verification_code import VerificationCode
from .domain.repositories.registration_gateway import RegistrationGateway
from .domain.services.password_strength import (
    PasswordStrengthReport,
    StrengthLevel,
    evaluate_password_strength,
)

__version__ = "1.0.0"
__module_name__ = "registration"

__all__ = [
    "AccountType",
    "MessageKind",
    "PasswordStrengthReport",
    "RegistrationDraft",
    "RegistrationGateway",
    "RegistrationWizard",
    "ResendCooldownTimer",
    "StrengthLevel",
    "VerificationCode",
    "VerificationState",
    "WizardMessage",
    "WizardResult",
    "WizardStep",
    "evaluate_password_strength",
]
