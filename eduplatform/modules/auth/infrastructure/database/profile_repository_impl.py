# 📄 File: eduplatform/modules/auth/infrastructure/database/profile_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and saves learner profile cards in the Supabase database.
# 🧪 Purpose (Technical Summary):
# ProfileStore implementation over the PostgREST table API of the supabase-py async
# client. Zero matching rows is reported as FailureKind.NOT_FOUND.
# 🔗 Dependencies:
# supabase (AsyncClient), shared error classifier, Profile model
# 🔄 Connected Modules / Calls From:
# modules/auth/dependencies.py, session manager (through the ProfileStore contract)

import logging
from typing import Any, Dict

from supabase import AsyncClient

from eduplatform.shared.core.error_classifier import POSTGREST_NO_ROWS, SERVICE_ERRORS, failure_result
from eduplatform.shared.core.results import FailureKind, ServiceResult
from ...domain.models.profile import Profile
from ...domain.repositories.profile_store import ProfileStore

logger = logging.getLogger(__name__)


class SupabaseProfileStore(ProfileStore):
    """
    Supabase implementation of ProfileStore.

    Table: user_profiles (configurable), primary key ``id`` equal to the
    auth user id.
    """

    def __init__(self, client: AsyncClient, table: str = "user_profiles"):
        self.client = client
        self.table = table

    async def get_profile_by_id(self, profile_id: str) -> ServiceResult[Profile]:
        try:
            response = await self.client.table(self.table).select("*").eq(
                "id", profile_id
            ).single().execute()
            return ServiceResult.success(Profile.from_record(response.data))
        except SERVICE_ERRORS as e:
            return failure_result(e)

    async def update_profile_by_id(
        self,
        profile_id: str,
        patch: Dict[str, Any]
    ) -> ServiceResult[Profile]:
        try:
            response = await self.client.table(self.table).update(patch).eq(
                "id", profile_id
            ).execute()
        except SERVICE_ERRORS as e:
            return failure_result(e)

        if not response.data:
            logger.warning(f"Profile update matched no rows: {profile_id}")
            return ServiceResult.failed(
                FailureKind.NOT_FOUND,
                "Profile not found",
                code=POSTGREST_NO_ROWS
            )

        return ServiceResult.success(Profile.from_record(response.data[0]))
