"""Shared Pydantic models for the Afterbuy client.

This module contains the pieces every call has in common:

- :class:`CredentialContext`, the account and partner credentials
- :class:`AfterbuyGlobal`, the credential block sent with each request
- :class:`AbstractRequest` and :class:`AbstractResponse` base shapes
- The error and warning lists carried by every response
"""

from enum import Enum, IntEnum, IntFlag
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..serializer.fields import (
    WireField,
    int_field,
    list_field,
    object_field,
    string_field,
)


class WireModel(BaseModel):
    """Base for every model that is marshalled to or from XML.

    Subclasses list their wire layout in ``__wire_fields__``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    __wire_fields__: ClassVar[Tuple[WireField, ...]] = ()


class DetailLevel(IntFlag):
    """How much payload Afterbuy returns. Levels can be combined with ``|``."""

    PROCESS_DATA = 0
    ORDER_DATA = 2
    VENDOR_DATA = 4
    SHIPPING_DATA = 8
    BUYER_DATA = 16


class OrderDirection(IntEnum):
    """Sort order of ``GetSoldItems`` results."""

    ASCENDING = 0
    DESCENDING = 1


class CallStatus(str, Enum):
    SUCCESS = "Success"
    WARNING = "Warning"
    ERROR = "Error"


class CredentialContext(BaseModel):
    """Account and partner credentials shared by all requests of a client.

    The client does not check the values; Afterbuy rejects bad credentials
    with an error response.

    :param user_id: Afterbuy user name
    :type user_id: str
    :param user_password: Afterbuy user password
    :type user_password: str
    :param partner_id: Partner ID assigned by Afterbuy
    :type partner_id: int
    :param partner_password: Partner password assigned by Afterbuy
    :type partner_password: str
    :param error_language: Language of error descriptions (e.g. "DE", "EN")
    :type error_language: str
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    user_password: str
    partner_id: int
    partner_password: str
    error_language: str = "DE"

    def __repr__(self) -> str:
        return (
            f"CredentialContext(user_id={self.user_id!r}, partner_id={self.partner_id!r}, "
            f"error_language={self.error_language!r})"
        )


class AfterbuyGlobal(WireModel):
    """The ``<AfterbuyGlobal>`` block at the top of every request."""

    partner_id: int
    partner_password: str
    user_id: str
    user_password: str
    call_name: str
    detail_level: int
    error_language: str

    __wire_fields__ = (
        int_field("partner_id", "PartnerID"),
        string_field("partner_password", "PartnerPassword"),
        string_field("user_id", "UserID"),
        string_field("user_password", "UserPassword"),
        string_field("call_name", "CallName"),
        int_field("detail_level", "DetailLevel"),
        string_field("error_language", "ErrorLanguage"),
    )

    @classmethod
    def build(
        cls, credentials: CredentialContext, call_name: str, detail_level: int
    ) -> "AfterbuyGlobal":
        return cls(
            partner_id=credentials.partner_id,
            partner_password=credentials.partner_password,
            user_id=credentials.user_id,
            user_password=credentials.user_password,
            call_name=call_name,
            detail_level=int(detail_level),
            error_language=credentials.error_language,
        )


class AbstractRequest(WireModel):
    """Base shape of every request: credentials plus detail level.

    Subclasses set ``call_name`` and append their own fields after
    :data:`GLOBAL_FIELD` in ``__wire_fields__``.
    """

    __wire_root__: ClassVar[str] = "Request"
    call_name: ClassVar[str] = ""

    credentials: CredentialContext
    detail_level: int = DetailLevel.PROCESS_DATA

    @field_validator("detail_level", mode="before")
    @classmethod
    def _non_negative_detail_level(cls, v):
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("detail_level must be an integer")
        if v < 0:
            raise ValueError("detail_level must not be negative")
        return int(v)

    @property
    def afterbuy_global(self) -> AfterbuyGlobal:
        return AfterbuyGlobal.build(self.credentials, self.call_name, self.detail_level)


GLOBAL_FIELD = object_field("afterbuy_global", "AfterbuyGlobal", AfterbuyGlobal)


class ErrorEntry(WireModel):
    code: Optional[int] = None
    description: Optional[str] = None
    long_description: Optional[str] = None

    __wire_fields__ = (
        int_field("code", "ErrorCode"),
        string_field("description", "ErrorDescription"),
        string_field("long_description", "ErrorLongDescription"),
    )


class WarningEntry(WireModel):
    code: Optional[int] = None
    description: Optional[str] = None
    long_description: Optional[str] = None

    __wire_fields__ = (
        int_field("code", "WarningCode"),
        string_field("description", "WarningDescription"),
        string_field("long_description", "WarningLongDescription"),
    )


RESULT_MESSAGE_FIELDS = (
    list_field("errors", "ErrorList", "Error", model=ErrorEntry),
    list_field("warnings", "WarningList", "Warning", model=WarningEntry),
)


class ResultBase(WireModel):
    """Content of ``<Result>``; subclasses add the call's payload."""

    errors: Tuple[ErrorEntry, ...] = Field(default_factory=tuple)
    warnings: Tuple[WarningEntry, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS


class AbstractResponse(WireModel):
    """Base shape of every response document (root ``<Afterbuy>``).

    Responses are only ever built by the marshaller.
    """

    __wire_root__: ClassVar[str] = "Afterbuy"

    call_status: Optional[str] = None
    call_name: Optional[str] = None
    version_id: Optional[int] = None
    result: ResultBase = Field(default_factory=ResultBase)

    __wire_fields__ = (
        string_field("call_status", "CallStatus"),
        string_field("call_name", "CallName"),
        int_field("version_id", "VersionID"),
        object_field("result", "Result", ResultBase),
    )

    @property
    def is_success(self) -> bool:
        return self.call_status == CallStatus.SUCCESS.value

    @property
    def errors(self) -> Tuple[ErrorEntry, ...]:
        return self.result.errors

    @property
    def warnings(self) -> Tuple[WarningEntry, ...]:
        return self.result.warnings


def response_fields(result_model: type) -> Tuple[WireField, ...]:
    """Wire table of a response whose ``<Result>`` is ``result_model``."""
    return AbstractResponse.__wire_fields__[:-1] + (
        object_field("result", "Result", result_model),
    )
