"""
Failure classification for Supabase collaborator errors.

Transport-level failures ("could not reach the service") are told apart from
application-level rejections so callers can show a fixed connectivity message
and pass rejection messages through.
"""

import logging
from typing import Optional

import httpx
from supabase import AuthError as GoTrueError
from supabase import AuthRetryableError, PostgrestAPIError

from .results import FailureKind, ServiceFailure, ServiceResult

logger = logging.getLogger(__name__)

# PostgREST answers .single() with this code when zero rows matched
POSTGREST_NO_ROWS = "PGRST116"

CONNECTIVITY_ERRORS = (httpx.TransportError, OSError, AuthRetryableError)

# Everything an adapter is expected to translate into a ServiceResult
SERVICE_ERRORS = (GoTrueError, PostgrestAPIError, httpx.HTTPError, OSError)


def is_connectivity_error(exc: BaseException) -> bool:
    """Check whether an exception means the service could not be reached."""
    if isinstance(exc, CONNECTIVITY_ERRORS):
        return True
    # Some client layers re-raise transport errors wrapped in their own type
    return isinstance(exc.__cause__, CONNECTIVITY_ERRORS)


def _error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


def _error_code(exc: BaseException) -> Optional[str]:
    code = getattr(exc, "code", None)
    return str(code) if code is not None else None


def classify_exception(exc: BaseException) -> ServiceFailure:
    """
    Map a raw exception to a ServiceFailure.

    Args:
        exc: Exception raised by the Supabase client or the transport

    Returns:
        ServiceFailure with kind UNREACHABLE, NOT_FOUND, REJECTED or UNKNOWN
    """
    message = _error_message(exc)

    if is_connectivity_error(exc):
        return ServiceFailure(FailureKind.UNREACHABLE, message, cause=exc)

    if isinstance(exc, PostgrestAPIError):
        code = _error_code(exc)
        kind = FailureKind.NOT_FOUND if code == POSTGREST_NO_ROWS else FailureKind.REJECTED
        return ServiceFailure(kind, message, code=code, cause=exc)

    if isinstance(exc, GoTrueError):
        return ServiceFailure(
            FailureKind.REJECTED,
            message,
            code=_error_code(exc),
            status=getattr(exc, "status", None),
            cause=exc
        )

    if isinstance(exc, httpx.HTTPStatusError):
        return ServiceFailure(
            FailureKind.REJECTED,
            message,
            status=exc.response.status_code,
            cause=exc
        )

    return ServiceFailure(FailureKind.UNKNOWN, message, cause=exc)


def failure_result(exc: BaseException) -> ServiceResult:
    """Wrap a classified exception into a failed ServiceResult."""
    failure = classify_exception(exc)
    logger.debug(f"Collaborator call failed ({failure.kind.value}): {failure.message}")
    return ServiceResult.from_failure(failure)
