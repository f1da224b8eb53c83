from .draft_validation import validate_draft
from .password_strength import PasswordStrengthReport, StrengthLevel, evaluate_password_strength

__all__ = [
    "PasswordStrengthReport",
    "StrengthLevel",
    "evaluate_password_strength",
    "validate_draft",
]
