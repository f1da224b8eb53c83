# 📄 File: eduplatform/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the few error types that mean "the program itself was used wrongly",
# like asking a closed session manager to sign someone in.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy for programmer-error conditions. Collaborator failures
# (network, rejected credentials, missing rows) never raise; they travel as
# ServiceResult values and are classified at the operation boundary.
# 🔗 Dependencies:
# typing
# 🔄 Connected Modules / Calls From:
# Session manager, registration wizard, Supabase client manager

from typing import Any, Dict, Optional


class EduPlatformException(Exception):
    """
    Base exception class for the EduPlatform client core.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(EduPlatformException):
    """
    Exception raised when a client cannot be built from the current settings.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        setting: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if setting:
            details["setting"] = setting

        super().__init__(
            message=message,
            details=details,
            error_code="CONFIGURATION_ERROR"
        )


# =============================================================================
# LIFECYCLE EXCEPTIONS
# =============================================================================

class ResourceDisposedError(EduPlatformException):
    """
    Exception raised when an operation is invoked on a disposed instance.
    Used by the session manager and the registration wizard after teardown.
    """

    def __init__(
        self,
        resource: str,
        operation: Optional[str] = None,
        message: Optional[str] = None
    ):
        details = {"resource": resource}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message or f"{resource} has been disposed",
            details=details,
            error_code="RESOURCE_DISPOSED"
        )


class InvalidStateTransitionError(EduPlatformException):
    """
    Exception raised when a step-machine operation is invoked from the wrong step.
    """

    def __init__(
        self,
        operation: str,
        current_state: str,
        expected_state: Optional[str] = None,
        message: Optional[str] = None
    ):
        details = {"operation": operation, "current_state": current_state}
        if expected_state:
            details["expected_state"] = expected_state

        if not message:
            message = f"Cannot {operation} while in state {current_state}"

        super().__init__(
            message=message,
            details=details,
            error_code="INVALID_STATE_TRANSITION"
        )

