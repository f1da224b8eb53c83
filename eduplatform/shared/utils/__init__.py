# 📄 File: eduplatform/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Helpful tools other parts of the app use for writing logs and checking what
# people type into forms.

# 🧪 Purpose (Technical Summary):
# Initializes the utilities package: structured logging setup and client-side
# form validators.

# 🔗 Dependencies:
# - logging: Structured logging utilities
# - validators: Form validation functions

# 🔄 Connected Modules / Calls From:
# Used by: Auth and registration modules, process lifespan

from .logging import setup_logging, get_security_logger
from .validators import ValidationResult

__all__ = [
    "setup_logging",
    "get_security_logger",
    "ValidationResult",
]
