# 📄 File: eduplatform/modules/auth/dependencies.py
# 🧭 Purpose (Layman Explanation):
# One place that knows how to build the sign-in pieces and plug them into the
# real Supabase connection.
# 🧪 Purpose (Technical Summary):
# Factories wiring the Supabase adapters into SessionManager and PasswordResetFlow
# using the shared Supabase client manager and settings.
# 🔗 Dependencies:
# supabase (AsyncClient), shared config, auth adapters
# 🔄 Connected Modules / Calls From:
# eduplatform.main lifespan, registration dependencies

import logging
from typing import Optional

from supabase import AsyncClient

from eduplatform.shared.config.settings import Settings, get_settings
from eduplatform.shared.config.supabase import get_supabase_client
from .application.password_reset import PasswordResetFlow
from .domain.services.session_manager import SessionManager
from .infrastructure.database.profile_repository_impl import SupabaseProfileStore
from .infrastructure.external.supabase_auth import SupabaseIdentityService

logger = logging.getLogger(__name__)


async def get_identity_service(client: Optional[AsyncClient] = None) -> SupabaseIdentityService:
    """Build the Supabase identity service on the shared client"""
    client = client or await get_supabase_client()
    return SupabaseIdentityService(client)


async def get_profile_store(
    client: Optional[AsyncClient] = None,
    settings: Optional[Settings] = None
) -> SupabaseProfileStore:
    """Build the Supabase profile store for the configured table"""
    settings = settings or get_settings()
    client = client or await get_supabase_client()
    return SupabaseProfileStore(client, table=settings.SUPABASE_PROFILE_TABLE)


async def create_session_manager(
    client: Optional[AsyncClient] = None,
    settings: Optional[Settings] = None
) -> SessionManager:
    """
    Build an unstarted SessionManager backed by Supabase.

    Args:
        client: Supabase client; the shared one when omitted
        settings: Settings; the cached ones when omitted

    Returns:
        SessionManager; call ``start()`` or use it with ``async with``
    """
    settings = settings or get_settings()
    client = client or await get_supabase_client()

    manager = SessionManager(
        identity_service=await get_identity_service(client),
        profile_store=await get_profile_store(client, settings),
        default_role=settings.DEFAULT_USER_ROLE
    )
    logger.debug("Session manager created")
    return manager


async def create_password_reset_flow(
    client: Optional[AsyncClient] = None,
    settings: Optional[Settings] = None
) -> PasswordResetFlow:
    settings = settings or get_settings()
    return PasswordResetFlow(
        await get_identity_service(client),
        min_password_length=settings.PASSWORD_MIN_LENGTH
    )
