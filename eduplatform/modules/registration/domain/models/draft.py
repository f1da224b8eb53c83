# 📄 File: eduplatform/modules/registration/domain/models/draft.py
# 🧭 Purpose (Layman Explanation):
# Everything a person types into the "create your account" form before we send it:
# name, email, password, personal or company account, company code and the two
# agreement checkboxes.
# 🧪 Purpose (Technical Summary):
# Immutable RegistrationDraft value object. Field changes produce a new draft;
# switching to a non-corporate account type clears the invitation code.
# 🔗 Dependencies:
# pydantic, enum, typing
# 🔄 Connected Modules / Calls From:
# Draft validation, registration wizard, registration gateway adapter

from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class AccountType(str, Enum):
    """Account types offered at registration"""
    INDIVIDUAL = "individual"
    CORPORATE = "corporate"

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class RegistrationDraft(BaseModel):
    """
    Registration form contents.

    ``account_type`` stays a plain string so an unselected ("") or unknown
    value can be reported by validation instead of failing construction.
    The invitation code only means something for corporate accounts.
    """

    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    email: str = ""
    password: str = Field("", repr=False)
    account_type: str = ""
    invitation_code: str = ""
    agreed_to_terms: bool = False
    agreed_to_privacy: bool = False

    @property
    def is_corporate(self) -> bool:
        return self.account_type == AccountType.CORPORATE.value

    def updated(self, **changes: Any) -> "RegistrationDraft":
        """
        Return a copy with ``changes`` applied.

        Raises:
            ValueError: if a change names an unknown field
        """
        unknown = set(changes) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown registration field(s): {', '.join(sorted(unknown))}")

        data = self.model_dump()
        data.update(changes)

        if "account_type" in changes and data["account_type"] != AccountType.CORPORATE.value:
            data["invitation_code"] = ""

        return type(self).model_validate(data)

    def signup_metadata(self, role: str = "student") -> Dict[str, Any]:
        """User metadata sent with the sign-up call"""
        metadata = {
            "full_name": self.full_name.strip(),
            "role": role,
            "account_type": self.account_type,
        }
        if self.is_corporate:
            metadata["invitation_code"] = self.invitation_code.strip()
        return metadata
