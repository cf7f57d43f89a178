"""XML marshalling for Afterbuy request and response models.

Recommended import pattern:
    from afterbuy_client.serializer import XmlMarshaller, FieldKind
"""

from .engine import XmlMarshaller
from .fields import (
    FieldKind,
    WireField,
    bool_field,
    date_field,
    float_field,
    group_field,
    int_field,
    list_field,
    object_field,
    string_field,
    wire_fields_of,
)
from .handlers import (
    AFTERBUY_DATE_FORMAT,
    AFTERBUY_TIMEZONE,
    BooleanHandler,
    CollectionHandler,
    DateHandler,
    FloatHandler,
    IntegerHandler,
    ScalarHandler,
    StringHandler,
    default_handlers,
)

__all__ = [
    "XmlMarshaller",
    "FieldKind",
    "WireField",
    "bool_field",
    "date_field",
    "float_field",
    "group_field",
    "int_field",
    "list_field",
    "object_field",
    "string_field",
    "wire_fields_of",
    "AFTERBUY_DATE_FORMAT",
    "AFTERBUY_TIMEZONE",
    "ScalarHandler",
    "StringHandler",
    "IntegerHandler",
    "BooleanHandler",
    "DateHandler",
    "FloatHandler",
    "CollectionHandler",
    "default_handlers",
]
