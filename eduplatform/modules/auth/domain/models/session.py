# 📄 File: eduplatform/modules/auth/domain/models/session.py
# 🧭 Purpose (Layman Explanation):
# Describes who is signed in right now: the user's id, email and the extra details
# the sign-in service keeps about them.
# 🧪 Purpose (Technical Summary):
# Domain models for the authenticated identity (AuthUser) and the session record
# (Session) held exclusively by the session manager.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# session_manager.py, identity service adapters, registration gateway

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated identity as reported by the identity service.

    ``user_metadata`` carries the data attached at sign-up
    (``full_name``, ``role``, ``account_type``...).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def role(self) -> Optional[str]:
        return self.user_metadata.get("role")

    @property
    def full_name(self) -> Optional[str]:
        return self.user_metadata.get("full_name")


class Session(BaseModel):
    """
    Authenticated session for the current process.

    Exists only while authenticated; ``raw`` keeps the identity record
    exactly as the service returned it.
    """

    model_config = ConfigDict(frozen=True)

    user: AuthUser
    access_token: Optional[str] = Field(None, repr=False)
    expires_at: Optional[int] = None
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def email(self) -> Optional[str]:
        return self.user.email
