"""Result type returned by every client call.

A call either produces a typed response or fails. Failures are never
raised to the caller; they come back as an :class:`Outcome` whose
``response`` is ``None`` and whose ``failure`` says what went wrong.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from ...exceptions import AfterbuyClientError

T = TypeVar("T")


class FailureKind(str, Enum):
    """Stage at which a call failed."""

    TRANSPORT = "transport"
    MARSHALLING = "marshalling"


@dataclass(frozen=True)
class Failure:
    """Why a call produced no response.

    :param kind: Stage that failed
    :type kind: FailureKind
    :param message: Human-readable description, as logged
    :type message: str
    :param status_code: HTTP status for bad-status transport failures
    :type status_code: Optional[int]
    :param cause: Exception that triggered the failure, if any
    :type cause: Optional[BaseException]
    """

    kind: FailureKind
    message: str
    status_code: Optional[int] = None
    cause: Optional[BaseException] = None

    @classmethod
    def from_error(cls, kind: FailureKind, error: BaseException) -> "Failure":
        message = error.message if isinstance(error, AfterbuyClientError) else str(error)
        return cls(
            kind=kind,
            message=message,
            status_code=getattr(error, "status_code", None),
            cause=error,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.status_code is not None:
            data["status_code"] = self.status_code
        return data


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a typed response or a :class:`Failure`, never both.

    ``response`` is ``None`` whenever the call failed, so code that only
    cares about "result or nothing" can read it directly.
    """

    response: Optional[T] = None
    failure: Optional[Failure] = None

    def __post_init__(self):
        if (self.response is None) == (self.failure is None):
            raise ValueError("Outcome needs exactly one of response or failure")

    @classmethod
    def success(cls, response: T) -> "Outcome[T]":
        return cls(response=response)

    @classmethod
    def failed(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def __bool__(self) -> bool:
        return self.ok
