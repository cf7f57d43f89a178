"""Structured exception classes for the Afterbuy client.

Only :class:`InvalidArgumentError` and :class:`ConfigurationError` ever
reach the caller of :class:`~afterbuy_client.client.AfterbuyClient`.
Transport and marshalling errors are raised internally and converted into
a failed :class:`~afterbuy_client.utils.http.outcome.Outcome` by the
dispatcher.
"""

import json
from typing import Any, Dict, Optional


class AfterbuyClientError(Exception):
    """Base exception for all Afterbuy client errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class InvalidArgumentError(AfterbuyClientError, ValueError):
    """Raised when a caller passes a malformed request parameter.

    Raised synchronously while the request object is built, before any
    network activity takes place.

    :param message: Description of the invalid argument
    :param field: Optional name of the offending parameter
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize invalid argument error with message and optional field."""
        details = {}
        if field:
            details["field"] = field
        super().__init__(message=message, code="INVALID_ARGUMENT", details=details)
        self.field = field


class TransportError(AfterbuyClientError):
    """Raised when the HTTP exchange with Afterbuy fails.

    Covers both network-level faults and non-2xx status codes.

    :param message: Description of the transport failure
    :param status_code: Optional HTTP status code returned by the server
    :param cause: Optional underlying exception
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        """Initialize transport error with message and optional status/cause."""
        details: Dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if cause is not None:
            details["error_type"] = type(cause).__name__
        super().__init__(message=message, code="TRANSPORT_ERROR", details=details)
        self.status_code = status_code
        self.cause = cause


class MarshallingError(AfterbuyClientError):
    """Raised when converting between model objects and XML fails.

    :param message: Description of the marshalling failure
    :param path: Optional element path where the failure occurred
    """

    def __init__(self, message: str, path: Optional[str] = None):
        """Initialize marshalling error with message and optional path."""
        details = {}
        if path:
            details["path"] = path
        super().__init__(message=message, code="MARSHALLING_ERROR", details=details)
        self.path = path


class ConfigurationError(AfterbuyClientError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
