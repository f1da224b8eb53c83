# 📄 File: eduplatform/modules/auth/domain/repositories/profile_store.py
# 🧭 Purpose (Layman Explanation):
# Defines how we read and save a learner's profile card in the remote database.
# 🧪 Purpose (Technical Summary):
# Contract for the remote profile store. "No such row" is a distinguished
# FailureKind.NOT_FOUND outcome, not an error.
# 🔗 Dependencies:
# abc, typing, Profile model, shared result types
# 🔄 Connected Modules / Calls From:
# Session manager, Supabase profile store adapter

from abc import ABC, abstractmethod
from typing import Any, Dict

from eduplatform.shared.core.results import ServiceResult
from ..models.profile import Profile


class ProfileStore(ABC):
    """
    Interface for profile record access, keyed by the authenticated user id.
    """

    @abstractmethod
    async def get_profile_by_id(self, profile_id: str) -> ServiceResult[Profile]:
        """
        Get exactly one profile record.

        Args:
            profile_id: User id the profile belongs to

        Returns:
            Result carrying the Profile, or a NOT_FOUND failure when no row exists
        """
        pass

    @abstractmethod
    async def update_profile_by_id(
        self,
        profile_id: str,
        patch: Dict[str, Any]
    ) -> ServiceResult[Profile]:
        """
        Apply a partial update and return the stored row.

        Args:
            profile_id: User id the profile belongs to
            patch: Column values to write

        Returns:
            Result carrying the canonical row as stored
        """
        pass
