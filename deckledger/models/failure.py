"""
Failure classification for remote-backed operations.

Every operation that talks to the remote store reports its result as an
`Outcome`: either the value it produced or the `KnownError` that stopped it.
Remote adapters translate their library errors into one of three kinds:

- RemoteUnavailableError: network/backend failure, or no signed-in identity
- ValidationRejectedError: a constraint on the record was violated
- RecordNotFoundError: the mutation target does not exist remotely

INVARIANT: A failed operation never changes a local mirror.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    VALIDATION_FAILED = "validation_failed"

    # Resource failures
    NOT_FOUND = "not_found"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"
    NOT_AUTHENTICATED = "not_authenticated"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a serializable FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RemoteUnavailableError(KnownError):
    """The remote store could not be reached or refused to serve the identity."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=message,
            detail=detail,
            suggestion="Check your connection and try again.",
            status_code=503,
        )

    @classmethod
    def no_identity(cls) -> "RemoteUnavailableError":
        """Raised when an operation is attempted with nobody signed in."""
        error = cls("Not signed in.", detail="No current identity")
        error.kind = FailureKind.NOT_AUTHENTICATED
        error.suggestion = "Sign in and reload your data."
        return error


class ValidationRejectedError(KnownError):
    """A record was rejected because it violates a constraint."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=message,
            detail=detail,
            suggestion="Correct the highlighted fields and try again.",
            status_code=422,
        )


class RecordNotFoundError(KnownError):
    """The record targeted by a mutation does not exist remotely."""

    def __init__(self, resource: str, record_id: str):
        self.resource = resource
        self.record_id = record_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"No record '{record_id}' in {resource}.",
            detail=f"{resource}/{record_id}",
            suggestion="Reload your data; the record may have been removed.",
            status_code=404,
        )


T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a remote-backed operation.

    Exactly one of `value` or `error` is meaningful: `ok` tells which.
    A successful outcome may still carry `value=None` (e.g. an update of a
    record that is not mirrored locally).
    """

    value: T | None = None
    error: KnownError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: KnownError) -> "Outcome[T]":
        return cls(error=error)

    def unwrap(self) -> T | None:
        """Return the value, or raise the error."""
        if self.error is not None:
            raise self.error
        return self.value
