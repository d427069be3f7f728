# Standard library imports
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

# Local application imports
from ..domain.errors import DeviceErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class DeviceFailure:
    """Why a device operation did not complete"""
    kind: DeviceErrorKind
    message: str
    # Store exception behind a STORE_FAILURE, kept for the traceback
    error: Optional[BaseException] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Outcome of a device use case: either a value or a tagged failure.

    Use cases return failures instead of raising so the caller can branch
    on `failure.kind` (the API layer maps each kind to a status code).
    """
    value: Optional[T] = None
    failure: Optional[DeviceFailure] = None

    @classmethod
    def success(cls, value: T = None) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def fail(
        cls,
        kind: DeviceErrorKind,
        message: str,
        error: Optional[BaseException] = None,
    ) -> "OperationResult[T]":
        return cls(failure=DeviceFailure(kind=kind, message=message, error=error))

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> Optional[DeviceErrorKind]:
        return self.failure.kind if self.failure else None
