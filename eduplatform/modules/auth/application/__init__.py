# 📄 File: eduplatform/modules/auth/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The sign-in form and the "forgot password" steps.
# 🧪 Purpose (Technical Summary):
# Application layer of the auth module: form state machines in front of the
# SessionManager and the IdentityService recovery calls.
# 🔗 Dependencies:
# Auth domain layer, shared validators
# 🔄 Connected Modules / Calls From:
# Presentation layers

from .credentials_form import CredentialsForm, FormMode
from .password_reset import PasswordResetFlow, ResetStep, ResetStepResult

__all__ = [
    "CredentialsForm",
    "FormMode",
    "PasswordResetFlow",
    "ResetStep",
    "ResetStepResult",
]
