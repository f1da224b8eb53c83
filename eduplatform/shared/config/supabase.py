"""
Supabase client configuration for the identity service and profile store.
Handles async Supabase initialization with proper error handling and connection management.
"""

import logging
from typing import Optional

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from eduplatform.shared.core.exceptions import ConfigurationError
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Supabase client manager with lazy async initialization.
    Provides the auth (identity) client and the PostgREST (profile store) client.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._client: Optional[AsyncClient] = None
        self.settings = settings or get_settings()

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def get_client(self) -> AsyncClient:
        """Get or create the async Supabase client."""
        if self._client is None:
            self._client = await self._create_client()
        return self._client

    async def _create_client(self) -> AsyncClient:
        """Create Supabase client with proper configuration."""
        if self.settings.uses_placeholder_credentials and self.settings.is_production:
            raise ConfigurationError(
                "Supabase credentials are not configured",
                setting="SUPABASE_URL"
            )
        if self.settings.uses_placeholder_credentials and self.settings.is_development:
            logger.warning(
                "Using placeholder Supabase credentials. "
                "Please set SUPABASE_URL and SUPABASE_ANON_KEY in .env"
            )

        try:
            client_options = AsyncClientOptions(
                schema="public",
                headers={
                    "User-Agent": f"EduPlatform/{self.settings.APP_VERSION}",
                },
                auto_refresh_token=self.settings.AUTH_AUTO_REFRESH_TOKEN,
                persist_session=self.settings.AUTH_PERSIST_SESSION,
            )

            client = await acreate_client(
                self.settings.SUPABASE_URL,
                self.settings.SUPABASE_ANON_KEY,
                options=client_options
            )

            logger.info("Supabase client initialized successfully")
            return client

        except Exception as e:
            logger.error(f"Failed to initialize Supabase client: {e}")
            raise ConfigurationError(
                f"Supabase initialization failed: {e}",
                setting="SUPABASE_URL"
            ) from e

    def close(self):
        """Close Supabase client connections."""
        if self._client is not None:
            # Supabase client doesn't require explicit closing
            # but we can clear the cached client
            self._client = None
            logger.info("Supabase client connections closed")


# Global Supabase manager instance
_supabase_manager: Optional[SupabaseManager] = None


def get_supabase_manager() -> SupabaseManager:
    """
    Get the process-wide Supabase manager instance.

    Returns:
        SupabaseManager: Singleton Supabase manager
    """
    global _supabase_manager
    if _supabase_manager is None:
        _supabase_manager = SupabaseManager()
    return _supabase_manager


def configure_supabase(settings: Settings) -> SupabaseManager:
    """
    Install a process-wide Supabase manager built from explicit settings.

    Args:
        settings: Settings the client is built from

    Returns:
        SupabaseManager: The newly installed manager
    """
    global _supabase_manager
    if _supabase_manager is not None:
        _supabase_manager.close()
    _supabase_manager = SupabaseManager(settings)
    return _supabase_manager


async def get_supabase_client() -> AsyncClient:
    """
    Get Supabase client for direct usage.

    Returns:
        AsyncClient: Supabase client instance
    """
    return await get_supabase_manager().get_client()


async def cleanup_supabase():
    """Cleanup Supabase connections on shutdown."""
    global _supabase_manager
    if _supabase_manager:
        _supabase_manager.close()
        _supabase_manager = None
        logger.info("Supabase cleanup completed")
