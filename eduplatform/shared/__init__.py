# 📄 File: eduplatform/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Common tools every part of the platform uses: settings, the Supabase
# connection, logging, form checks and error types.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for cross-cutting concerns used by the auth and
# registration modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel

- config: settings and the Supabase client manager
- core: exceptions, service results and failure classification
- utils: logging setup and form validators
"""

__all__ = []
