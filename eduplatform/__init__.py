# 📄 File: eduplatform/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the EduPlatform sign-in and registration code
# and records its version.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version metadata for the EduPlatform client
# authentication core (session manager and registration wizard).
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - eduplatform.main (process lifespan)
# - Presentation layers importing the auth and registration modules

"""
EduPlatform - Client Authentication Core

Session lifecycle, profile synchronization and the two-step registration
wizard of the EduPlatform learning platform, backed by Supabase.
"""

__version__ = "1.0.0"
__title__ = "EduPlatform Auth Core"
__description__ = "Session manager and registration wizard for EduPlatform"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
