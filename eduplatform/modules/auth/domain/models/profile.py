# 📄 File: eduplatform/modules/auth/domain/models/profile.py
# 🧭 Purpose (Layman Explanation):
# The learner's profile card: name, role, phone, short bio and picture,
# stored next to their account.
# 🧪 Purpose (Technical Summary):
# Domain model for the one-to-one profile row keyed by the session's user id.
# Unknown columns are preserved so the local copy always mirrors the stored record.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# session_manager.py, profile store contract and Supabase adapter

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Profile(BaseModel):
    """
    Profile domain model representing the application-specific user record.

    ``id`` equals the authenticated user's id. The model is only ever built
    from a row returned by the profile store; local edits go through
    ``SessionManager.update_profile``.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    full_name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Row ids come back as UUID strings; accept UUID objects too"""
        return str(v)

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Profile":
        """Build a profile from a raw store row."""
        return cls.model_validate(record)
