"""Wire field descriptors.

Every model that travels over the wire declares a ``__wire_fields__`` tuple
of :class:`WireField` entries. The marshaller only touches attributes that
appear in that table, in table order. Attributes without an entry are never
written, and XML elements without an entry are ignored when reading.

Examples:
    >>> class Pagination(WireModel):
    ...     page: int
    ...     __wire_fields__ = (int_field("page", "PageNumber"),)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class FieldKind(str, Enum):
    """Semantic type of a wire field.

    The kind, not the runtime value, decides which handler formats a field.
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATE = "date"
    OBJECT = "object"
    COLLECTION = "collection"
    GROUP = "group"


SCALAR_KINDS = frozenset(
    {
        FieldKind.STRING,
        FieldKind.INTEGER,
        FieldKind.FLOAT,
        FieldKind.BOOLEAN,
        FieldKind.DATE,
    }
)


@dataclass(frozen=True)
class WireField:
    """Describes how one model attribute maps onto XML.

    :param name: Attribute name on the model
    :type name: str
    :param wire_name: Element name on the wire. For collections this is the
        optional container element; ``None`` repeats items in the parent
    :type wire_name: Optional[str]
    :param kind: Semantic type used to pick the handler
    :type kind: FieldKind
    :param model: Model class for ``OBJECT`` fields and object collections
    :type model: Optional[type]
    :param item_name: Repeated element name for collections
    :type item_name: Optional[str]
    :param item_kind: Kind of each collection item
    :type item_kind: Optional[FieldKind]
    :param children: Fields nested under a ``GROUP`` wrapper element
    :type children: Tuple[WireField, ...]
    """

    name: str
    wire_name: Optional[str]
    kind: FieldKind
    model: Optional[type] = None
    item_name: Optional[str] = None
    item_kind: Optional[FieldKind] = None
    children: Tuple["WireField", ...] = ()

    @property
    def path(self) -> str:
        return self.wire_name or self.item_name or self.name


def string_field(name: str, wire_name: str) -> WireField:
    return WireField(name, wire_name, FieldKind.STRING)


def int_field(name: str, wire_name: str) -> WireField:
    return WireField(name, wire_name, FieldKind.INTEGER)


def float_field(name: str, wire_name: str) -> WireField:
    return WireField(name, wire_name, FieldKind.FLOAT)


def bool_field(name: str, wire_name: str) -> WireField:
    return WireField(name, wire_name, FieldKind.BOOLEAN)


def date_field(name: str, wire_name: str) -> WireField:
    return WireField(name, wire_name, FieldKind.DATE)


def object_field(name: str, wire_name: str, model: Optional[type] = None) -> WireField:
    """Nested element built from another wire model.

    ``model`` may be omitted for write-only fields; the value's own
    ``__wire_fields__`` are used then.
    """
    return WireField(name, wire_name, FieldKind.OBJECT, model=model)


def list_field(
    name: str,
    container: Optional[str],
    item_name: str,
    item_kind: FieldKind = FieldKind.OBJECT,
    model: Optional[type] = None,
) -> WireField:
    """Sequence rendered as one ``item_name`` element per entry.

    :param container: Wrapper element, or ``None`` to repeat items in place
    """
    return WireField(
        name,
        container,
        FieldKind.COLLECTION,
        model=model,
        item_name=item_name,
        item_kind=item_kind,
    )


def group_field(wire_name: str, *children: WireField) -> WireField:
    """Wrapper element whose children live on the same model."""
    return WireField(wire_name, wire_name, FieldKind.GROUP, children=tuple(children))


def wire_fields_of(target: Any) -> Optional[Tuple[WireField, ...]]:
    """Return the descriptor table of a model class or instance."""
    cls = target if isinstance(target, type) else type(target)
    return getattr(cls, "__wire_fields__", None)
