# 📄 File: eduplatform/shared/core/results.py
# 🧭 Purpose (Layman Explanation):
# Every call to the sign-in service or the profile database comes back as a
# "here is the answer" or "here is what went wrong" envelope instead of crashing.
# 🧪 Purpose (Technical Summary):
# Explicit result variants for collaborator calls: ServiceResult carries either a
# value or a typed ServiceFailure whose FailureKind separates transport-level
# unreachability from application-level rejections and benign absence.
# 🔗 Dependencies:
# dataclasses, enum, typing
# 🔄 Connected Modules / Calls From:
# Identity service / profile store / registration gateway contracts and adapters,
# session manager, registration wizard, password reset flow

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class FailureKind(str, Enum):
    """Classification of a failed collaborator call."""
    UNREACHABLE = "unreachable"  # transport error, service could not be reached
    REJECTED = "rejected"        # service answered and refused the request
    NOT_FOUND = "not_found"      # the requested row does not exist
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ServiceFailure:
    """Typed failure returned by a collaborator."""
    kind: FailureKind
    message: str
    code: Optional[str] = None
    status: Optional[int] = None
    cause: Optional[BaseException] = field(default=None, compare=False, repr=False)

    @property
    def is_connectivity(self) -> bool:
        return self.kind == FailureKind.UNREACHABLE


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a collaborator call.

    ``ok`` results may still carry ``None`` as value (e.g. "no active session").
    """
    value: Optional[T] = None
    failure: Optional[ServiceFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failed(
        cls,
        kind: FailureKind,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        cause: Optional[BaseException] = None
    ) -> "ServiceResult[T]":
        return cls(failure=ServiceFailure(kind, message, code=code, status=status, cause=cause))

    @classmethod
    def from_failure(cls, failure: ServiceFailure) -> "ServiceResult[T]":
        return cls(failure=failure)
