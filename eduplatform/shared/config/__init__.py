# 📄 File: eduplatform/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The settings that tell the app which Supabase project to use and how to
# behave, plus the shared connection to it.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exporting settings management and the Supabase
# client manager.
#
# 🔗 Dependencies:
# - settings.py (application settings)
# - supabase.py (Supabase client manager)
#
# 🔄 Connected Modules / Calls From:
# - eduplatform.main (process lifespan)
# - Module dependency factories

from .settings import Settings, get_settings
from .supabase import (
    SupabaseManager,
    cleanup_supabase,
    configure_supabase,
    get_supabase_client,
    get_supabase_manager,
)

__all__ = [
    "Settings",
    "SupabaseManager",
    "cleanup_supabase",
    "configure_supabase",
    "get_settings",
    "get_supabase_client",
    "get_supabase_manager",
]
