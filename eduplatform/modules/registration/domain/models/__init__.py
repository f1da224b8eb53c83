from .draft import AccountType, RegistrationDraft
from .verification_code import CODE_LENGTH, VerificationCode

__all__ = ["AccountType", "CODE_LENGTH", "RegistrationDraft", "VerificationCode"]
