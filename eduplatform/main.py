# 📄 File: eduplatform/main.py
#
# 🧭 Purpose (Layman Explanation):
# Starts the sign-in machinery when the app launches (logging, Supabase
# connection, recovering whoever was signed in) and shuts it down cleanly.
#
# 🧪 Purpose (Technical Summary):
# Process lifespan async context manager: configures logging, builds the Supabase
# client, starts the SessionManager and yields it; on exit disposes the manager and
# releases the client on every exit path.
#
# 🔗 Dependencies:
# - eduplatform.shared.config (settings, Supabase manager)
# - eduplatform.shared.utils.logging
# - eduplatform.modules.auth.dependencies
#
# 🔄 Connected Modules / Calls From:
# - Client application entry point

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from eduplatform.modules.auth.dependencies import create_session_manager
from eduplatform.modules.auth.domain.services.session_manager import SessionManager
from eduplatform.shared.config.settings import Settings, get_settings
from eduplatform.shared.config.supabase import cleanup_supabase, configure_supabase, get_supabase_client
from eduplatform.shared.utils.logging import (
    log_shutdown_event,
    log_startup_event,
    reset_logging,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(settings: Optional[Settings] = None) -> AsyncGenerator[SessionManager, None]:
    """
    Process lifespan context manager.

    Usage:
        async with lifespan() as session_manager:
            state = session_manager.state
    """
    settings = settings or get_settings()
    reset_logging()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)
    log_startup_event(settings.APP_NAME, settings.APP_VERSION, {"environment": settings.ENVIRONMENT})

    manager: Optional[SessionManager] = None
    try:
        try:
            configure_supabase(settings)
            client = await get_supabase_client()
            logger.info("✅ Supabase client initialized")

            manager = await create_session_manager(client, settings)
            await manager.start()
            logger.info("✅ Session manager started")
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            raise

        yield manager

    finally:
        logger.info("🔄 Auth core shutting down...")

        if manager is not None:
            await manager.dispose()
            logger.info("✅ Session manager disposed")

        await cleanup_supabase()
        log_shutdown_event(settings.APP_NAME)
