# 📄 File: eduplatform/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Small checkers that make sure what people type into the sign-in, sign-up and
# registration forms is filled in and shaped correctly before anything is sent.
# 🧪 Purpose (Technical Summary):
# Client-side validation helpers returning ValidationResult objects with per-field
# error messages. Nothing in this module talks to a collaborator.
# 🔗 Dependencies:
# re, typing
# 🔄 Connected Modules / Calls From:
# Registration draft validation, credentials form, password reset flow,
# password strength evaluator

import re
from typing import Dict, List, Optional

# Password validation patterns
PASSWORD_MIN_LENGTH = 8
PASSWORD_PATTERNS = {
    'uppercase': re.compile(r'[A-Z]'),
    'lowercase': re.compile(r'[a-z]'),
    'number': re.compile(r'\d'),
    'special': re.compile(r'[!@#$%^&*()_+\-=\[\]{};\':"\\|,.<>/?]'),
}

# Registration form uses the strict shape, sign-in form the lenient one
REGISTRATION_EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
CREDENTIALS_EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')

REQUIRED_MESSAGE = "This field is required"


class ValidationResult:
    """Result object for validation operations"""
    def __init__(self, is_valid: bool = True, errors: Dict[str, str] = None):
        self.is_valid = is_valid
        self.errors: Dict[str, str] = dict(errors or {})

    def add_error(self, field: str, error: str):
        """Add validation error for a field; the first error per field wins"""
        self.errors.setdefault(field, error)
        self.is_valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Fold another result into this one"""
        for field, error in other.errors.items():
            self.add_error(field, error)
        return self

    def error_for(self, field: str) -> Optional[str]:
        return self.errors.get(field)

    @property
    def first_error(self) -> Optional[str]:
        """First error message in insertion order, if any"""
        return next(iter(self.errors.values()), None)

    @property
    def fields(self) -> List[str]:
        return list(self.errors)

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"


# ==============================================================================
# GENERIC FIELD VALIDATION
# ==============================================================================

def validate_required(value, field: str, message: str = REQUIRED_MESSAGE) -> ValidationResult:
    """
    Validate that a field has a value.

    Strings count as empty when blank, booleans when False.

    Args:
        value: Field value
        field: Field name used as the error key
        message: Error message to report

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult()
    if isinstance(value, str):
        if not value.strip():
            result.add_error(field, message)
    elif not value:
        result.add_error(field, message)
    return result


# ==============================================================================
# EMAIL VALIDATION
# ==============================================================================

def validate_email_address(
    email: str,
    field: str = 'email',
    pattern: re.Pattern = REGISTRATION_EMAIL_PATTERN,
    message: str = "Please enter a valid email"
) -> ValidationResult:
    """
    Validate email address shape

    Args:
        email: Email address to validate
        field: Field name used as the error key
        pattern: Shape the address has to match
        message: Error message for a malformed address

    Returns:
        ValidationResult with validation status and errors
    """
    result = validate_required(email, field)
    if not result:
        return result

    if not pattern.search(email):
        result.add_error(field, message)

    return result


# ==============================================================================
# PASSWORD VALIDATION
# ==============================================================================

def validate_password_length(
    password: str,
    min_length: int = PASSWORD_MIN_LENGTH,
    field: str = 'password'
) -> ValidationResult:
    """
    Validate that a password is present and long enough

    Args:
        password: Password to validate
        min_length: Minimum number of characters
        field: Field name used as the error key

    Returns:
        ValidationResult with validation status and errors
    """
    result = ValidationResult()

    if not password:
        result.add_error(field, REQUIRED_MESSAGE)
        return result

    if len(password) < min_length:
        result.add_error(field, f"Password must be at least {min_length} characters")

    return result


def validate_password_confirmation(
    password: str,
    confirmation: str,
    field: str = 'confirm_password'
) -> ValidationResult:
    """Validate that the confirmation repeats the password"""
    result = ValidationResult()
    if password != confirmation:
        result.add_error(field, "Passwords do not match")
    return result


def password_criteria(password: str, min_length: int = PASSWORD_MIN_LENGTH) -> Dict[str, bool]:
    """
    Evaluate every password strength criterion independently.

    Args:
        password: Password to check
        min_length: Length threshold for the ``length`` criterion

    Returns:
        Ordered mapping of criterion key to whether it is satisfied
    """
    password = password or ''
    criteria = {'length': len(password) >= min_length}
    for key, pattern in PASSWORD_PATTERNS.items():
        criteria[key] = bool(pattern.search(password))
    return criteria
