# 📄 File: eduplatform/modules/registration/domain/services/draft_validation.py
# 🧭 Purpose (Layman Explanation):
# Checks the "create your account" form every time something changes, so the
# person sees what is missing before anything is sent.
# 🧪 Purpose (Technical Summary):
# Local validation of a RegistrationDraft into per-field messages. Runs on every
# field change and once more on submit; never calls a collaborator.
# 🔗 Dependencies:
# shared validators, RegistrationDraft
# 🔄 Connected Modules / Calls From:
# Registration wizard

from eduplatform.shared.utils.validators import (
    PASSWORD_MIN_LENGTH,
    REQUIRED_MESSAGE,
    ValidationResult,
    validate_email_address,
    validate_password_length,
    validate_required,
)
from ..models.draft import AccountType, RegistrationDraft

INVALID_ACCOUNT_TYPE = "Please select a valid account type"
INVITATION_CODE_REQUIRED = "Invitation code is required for corporate accounts"


def validate_draft(
    draft: RegistrationDraft,
    min_password_length: int = PASSWORD_MIN_LENGTH
) -> ValidationResult:
    """
    Validate every registration field.

    Rules:
    - full name, email, password and account type are required
    - email must look like local@domain.tld
    - password needs at least ``min_length`` characters
    - invitation code is required only for corporate accounts
    - both consents must be given

    Args:
        draft: Current form contents
        min_password_length: Minimum password length

    Returns:
        ValidationResult keyed by draft field name
    """
    result = ValidationResult()

    result.merge(validate_required(draft.full_name, "full_name"))
    result.merge(validate_email_address(draft.email, "email"))
    result.merge(validate_password_length(draft.password, min_password_length, "password"))

    if not draft.account_type:
        result.add_error("account_type", REQUIRED_MESSAGE)
    elif draft.account_type not in AccountType.values():
        result.add_error("account_type", INVALID_ACCOUNT_TYPE)

    if draft.is_corporate and not draft.invitation_code.strip():
        result.add_error("invitation_code", INVITATION_CODE_REQUIRED)

    result.merge(validate_required(draft.agreed_to_terms, "agreed_to_terms"))
    result.merge(validate_required(draft.agreed_to_privacy, "agreed_to_privacy"))

    return result
