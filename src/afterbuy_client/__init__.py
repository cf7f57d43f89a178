"""Typed client for the Afterbuy XML API.

Build an :class:`AfterbuyClient` from credentials or from ``AFTERBUY_*``
environment variables and call one of its methods. Every call returns an
:class:`Outcome` holding either the typed response or a failure.
"""

import logging

from .client import AfterbuyClient
from .config.settings import Settings, get_settings
from .exceptions import (
    AfterbuyClientError,
    ConfigurationError,
    InvalidArgumentError,
    MarshallingError,
    TransportError,
)
from .models import *  # noqa: F401,F403
from .models import __all__ as _models_all
from .serializer import XmlMarshaller
from .utils.http import Failure, FailureKind, HttpTransport, HttpxTransport, Outcome
from .utils.security import setup_logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AfterbuyClient",
    "AfterbuyClientError",
    "ConfigurationError",
    "Failure",
    "FailureKind",
    "HttpTransport",
    "HttpxTransport",
    "InvalidArgumentError",
    "MarshallingError",
    "Outcome",
    "Settings",
    "TransportError",
    "XmlMarshaller",
    "get_settings",
    "setup_logging",
] + list(_models_all)
