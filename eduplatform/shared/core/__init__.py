"""
Core utilities package for EduPlatform.
Provides exceptions, explicit service results and failure classification.
"""

from .exceptions import (
    EduPlatformException,
    ConfigurationError,
    ResourceDisposedError,
    InvalidStateTransitionError
)

from .results import (
    FailureKind,
    ServiceFailure,
    ServiceResult
)

from .error_classifier import (
    classify_exception,
    failure_result,
    is_connectivity_error
)

__all__ = [
    # Exceptions
    "EduPlatformException",
    "ConfigurationError",
    "ResourceDisposedError",
    "InvalidStateTransitionError",

    # Results
    "FailureKind",
    "ServiceFailure",
    "ServiceResult",

    # Classification
    "classify_exception",
    "failure_result",
    "is_connectivity_error",
]
