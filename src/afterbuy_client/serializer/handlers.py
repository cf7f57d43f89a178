"""Field handlers used by the XML marshaller.

Scalar handlers turn one attribute value into element text and back.
The collection handler expands a sequence into repeated elements. Handlers
are picked by :class:`~afterbuy_client.serializer.fields.FieldKind` only.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Callable, ClassVar, List, Optional, Sequence
from zoneinfo import ZoneInfo

from lxml import etree

from ..exceptions import MarshallingError
from .fields import FieldKind, WireField

AFTERBUY_DATE_FORMAT = "%d.%m.%Y %H:%M:%S"
AFTERBUY_TIMEZONE = "Europe/Berlin"


class ScalarHandler(ABC):
    """Converts a single value to element text and back."""

    kind: ClassVar[FieldKind]

    @abstractmethod
    def to_text(self, value: Any) -> str:
        """Format ``value`` for the wire."""

    @abstractmethod
    def from_text(self, text: str) -> Any:
        """Parse element text read from the wire."""


class StringHandler(ScalarHandler):
    kind = FieldKind.STRING

    def to_text(self, value: Any) -> str:
        if isinstance(value, (str, int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        raise MarshallingError(f"Cannot write {type(value).__name__} as text")

    def from_text(self, text: str) -> str:
        return text


class IntegerHandler(ScalarHandler):
    kind = FieldKind.INTEGER

    def to_text(self, value: Any) -> str:
        # bool is an int subclass; flags go through BooleanHandler
        if isinstance(value, bool) or not isinstance(value, int):
            raise MarshallingError(f"Cannot write {type(value).__name__} as integer")
        return str(int(value))

    def from_text(self, text: str) -> int:
        try:
            return int(text)
        except ValueError as e:
            raise MarshallingError(f"Invalid integer value: {text!r}") from e


class BooleanHandler(ScalarHandler):
    """Afterbuy flags are ``1``/``0``; some responses say ``true``/``false``."""

    kind = FieldKind.BOOLEAN

    _TRUE = frozenset({"1", "true", "-1"})
    _FALSE = frozenset({"0", "false"})

    def to_text(self, value: Any) -> str:
        if isinstance(value, bool) or value in (0, 1):
            return "1" if value else "0"
        raise MarshallingError(f"Cannot write {value!r} as boolean")

    def from_text(self, text: str) -> bool:
        lowered = text.lower()
        if lowered in self._TRUE:
            return True
        if lowered in self._FALSE:
            return False
        raise MarshallingError(f"Invalid boolean value: {text!r}")


class DateHandler(ScalarHandler):
    """Formats timestamps as ``dd.mm.YYYY HH:MM:SS`` in Afterbuy local time.

    Only timezone-aware datetimes are written; they are converted to the
    handler's timezone first. Naive datetimes and plain dates carry no
    instant and are rejected. Parsed values are aware datetimes in the
    handler's timezone, so a written value reads back as the same instant.

    The wire format cannot express:

    - sub-second precision, which is dropped;
    - the second pass through the repeated hour when clocks fall back
      (``fold=1``). Such a time reads back as the first pass, one hour
      earlier.

    :param timezone: IANA timezone name of the remote service
    :type timezone: str
    :param fmt: ``strftime`` pattern used in both directions
    :type fmt: str
    """

    kind = FieldKind.DATE

    def __init__(self, timezone: str = AFTERBUY_TIMEZONE, fmt: str = AFTERBUY_DATE_FORMAT):
        self.tz = ZoneInfo(timezone)
        self.fmt = fmt

    def to_text(self, value: Any) -> str:
        if not isinstance(value, datetime):
            raise MarshallingError(f"Cannot write {type(value).__name__} as date")
        if value.tzinfo is None or value.utcoffset() is None:
            raise MarshallingError(
                f"Cannot write naive datetime {value.isoformat()}, a timezone is required"
            )
        return value.astimezone(self.tz).strftime(self.fmt)

    def from_text(self, text: str) -> datetime:
        try:
            parsed = datetime.strptime(text, self.fmt)
        except ValueError as e:
            raise MarshallingError(
                f"Date {text!r} does not match format {self.fmt!r}"
            ) from e
        return parsed.replace(tzinfo=self.tz)


class FloatHandler(ScalarHandler):
    """Formats numbers with a fixed precision and decimal comma.

    Values with more decimals than ``precision`` are truncated toward zero.
    Truncation starts from the shortest decimal form of the float
    (``repr``), so ``0.29`` stays ``0,29`` instead of ``0,28``.

    :param precision: Number of decimal places written
    :type precision: int
    :param decimal_separator: Separator written between integer and fraction
    :type decimal_separator: str
    """

    kind = FieldKind.FLOAT

    def __init__(self, precision: int = 2, decimal_separator: str = ","):
        self.precision = precision
        self.decimal_separator = decimal_separator
        self._quantum = Decimal(1).scaleb(-precision)

    def to_text(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise MarshallingError(f"Cannot write {type(value).__name__} as float")
        number = value if isinstance(value, Decimal) else Decimal(repr(value))
        if not number.is_finite():
            raise MarshallingError(f"Cannot write non-finite number {value!r}")
        try:
            truncated = number.quantize(self._quantum, rounding=ROUND_DOWN)
        except InvalidOperation as e:
            raise MarshallingError(f"Number {value!r} is out of range") from e
        if truncated.is_zero():
            truncated = abs(truncated)
        return format(truncated, "f").replace(".", self.decimal_separator)

    def from_text(self, text: str) -> float:
        normalized = text.strip().replace(" ", "")
        if "," in normalized:
            normalized = normalized.replace(".", "").replace(",", ".")
        try:
            number = Decimal(normalized)
        except InvalidOperation as e:
            raise MarshallingError(f"Invalid number: {text!r}") from e
        if not number.is_finite():
            raise MarshallingError(f"Invalid number: {text!r}")
        return float(number)


WriteItem = Callable[[etree._Element, WireField, Any], None]
ReadItem = Callable[[etree._Element, WireField], Any]


class CollectionHandler:
    """Expands sequences into repeated elements and collects them back.

    An empty sequence writes nothing, not even the container element.
    Empty items are skipped when reading.
    """

    kind = FieldKind.COLLECTION

    def write(
        self,
        parent: etree._Element,
        field: WireField,
        values: Sequence[Any],
        write_item: WriteItem,
    ) -> None:
        if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
            raise MarshallingError(
                f"Field {field.name!r} expects a sequence, got {type(values).__name__}",
                path=field.path,
            )
        if not values:
            return
        target = parent if field.wire_name is None else etree.SubElement(parent, field.wire_name)
        for value in values:
            item = etree.SubElement(target, field.item_name)
            write_item(item, field, value)

    def read(
        self,
        parent: etree._Element,
        field: WireField,
        read_item: ReadItem,
    ) -> List[Any]:
        source: Optional[etree._Element] = (
            parent if field.wire_name is None else parent.find(field.wire_name)
        )
        if source is None:
            return []
        values = (read_item(item, field) for item in source.findall(field.item_name))
        return [value for value in values if value is not None]


def default_handlers() -> List[ScalarHandler]:
    return [
        StringHandler(),
        IntegerHandler(),
        BooleanHandler(),
        DateHandler(),
        FloatHandler(),
    ]
