"""Generic XML marshaller driven by wire field tables.

:class:`XmlMarshaller` walks a model's ``__wire_fields__`` table and
delegates each field to the handler registered for its kind. The same
tables drive both directions, so request and response models share one
code path.

Examples:
    >>> marshaller = XmlMarshaller()
    >>> xml = marshaller.serialize(request)
    >>> response = marshaller.deserialize(body, GetSoldItemsResponse)
"""

import re
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Type, TypeVar, Union

from lxml import etree
from pydantic import ValidationError

from ..exceptions import MarshallingError
from .fields import SCALAR_KINDS, FieldKind, WireField, wire_fields_of
from .handlers import CollectionHandler, ScalarHandler, default_handlers

T = TypeVar("T")

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


class XmlMarshaller:
    """Serializes request models to XML and XML to response models.

    The handler set is fixed at construction time, so one marshaller can
    be shared by independent calls.

    :param handlers: Scalar handlers in registration order. A later handler
        replaces an earlier one registered for the same kind. Defaults to
        :func:`~afterbuy_client.serializer.handlers.default_handlers`
    :type handlers: Optional[Iterable[ScalarHandler]]
    :param collection_handler: Handler for ``COLLECTION`` fields
    :type collection_handler: Optional[CollectionHandler]
    """

    def __init__(
        self,
        handlers: Optional[Iterable[ScalarHandler]] = None,
        collection_handler: Optional[CollectionHandler] = None,
    ):
        registry: Dict[FieldKind, ScalarHandler] = {}
        for handler in default_handlers() if handlers is None else handlers:
            registry[handler.kind] = handler
        self._handlers: Mapping[FieldKind, ScalarHandler] = registry
        self._collections = collection_handler or CollectionHandler()

    @property
    def handlers(self) -> Mapping[FieldKind, ScalarHandler]:
        return dict(self._handlers)

    def handler_for(self, kind: FieldKind) -> ScalarHandler:
        try:
            return self._handlers[kind]
        except KeyError:
            raise MarshallingError(f"No handler registered for {kind.value!r} fields") from None

    # Serialization

    def serialize(self, obj: Any) -> str:
        """Render a wire model as an XML document.

        :param obj: Model instance with ``__wire_root__`` and ``__wire_fields__``
        :type obj: Any
        :return: UTF-8 XML document text including the declaration
        :rtype: str
        :raises MarshallingError: If a field cannot be formatted
        """
        root_name = getattr(type(obj), "__wire_root__", None)
        if not root_name:
            raise MarshallingError(f"{type(obj).__name__} has no wire root element")
        root = etree.Element(root_name)
        self._write_object(root, obj, root_name)
        return etree.tostring(root, xml_declaration=True, encoding="UTF-8").decode("utf-8")

    def _write_object(self, element: etree._Element, obj: Any, path: str) -> None:
        fields = wire_fields_of(obj)
        if fields is None:
            raise MarshallingError(
                f"{type(obj).__name__} is not a wire model", path=path
            )
        self._write_fields(element, obj, fields, path)

    def _write_fields(
        self,
        element: etree._Element,
        obj: Any,
        fields: Tuple[WireField, ...],
        path: str,
    ) -> None:
        for field in fields:
            field_path = f"{path}/{field.path}"
            if field.kind is FieldKind.GROUP:
                group = etree.SubElement(element, field.wire_name)
                self._write_fields(group, obj, field.children, field_path)
                continue

            value = getattr(obj, field.name, None)
            if value is None:
                continue

            if field.kind is FieldKind.COLLECTION:
                self._collections.write(element, field, value, self._write_item)
            elif field.kind is FieldKind.OBJECT:
                child = etree.SubElement(element, field.wire_name)
                self._write_object(child, value, field_path)
            else:
                child = etree.SubElement(element, field.wire_name)
                self._set_text(child, self._to_text(field.kind, value, field_path), field_path)

    def _write_item(self, element: etree._Element, field: WireField, value: Any) -> None:
        path = f"{field.path}/{field.item_name}"
        if value is None:
            raise MarshallingError(f"Field {field.name!r} contains a null item", path=path)
        if field.item_kind is FieldKind.OBJECT:
            self._write_object(element, value, path)
        else:
            self._set_text(element, self._to_text(field.item_kind, value, path), path)

    def _to_text(self, kind: FieldKind, value: Any, path: str) -> str:
        try:
            return self.handler_for(kind).to_text(value)
        except MarshallingError as e:
            raise MarshallingError(e.message, path=path) from e

    @staticmethod
    def _set_text(element: etree._Element, text: str, path: str) -> None:
        try:
            element.text = text
        except ValueError as e:
            # lxml refuses control characters that XML 1.0 cannot carry
            raise MarshallingError(f"Value is not valid XML text: {e}", path=path) from e

    # Deserialization

    def deserialize(self, xml: Union[str, bytes], response_type: Type[T]) -> T:
        """Build a response model from an XML document.

        :param xml: Raw response body
        :type xml: Union[str, bytes]
        :param response_type: Model class to build, its ``__wire_root__``
            must match the document's root element
        :type response_type: Type[T]
        :return: Fully validated model instance
        :rtype: T
        :raises MarshallingError: On malformed XML, an unexpected root
            element, or values that fail conversion or validation
        """
        if isinstance(xml, str):
            # already decoded; a declared encoding no longer applies
            data = _XML_DECLARATION.sub("", xml, count=1).encode("utf-8")
        else:
            data = xml
        try:
            root = etree.fromstring(data, parser=_parser())
        except etree.XMLSyntaxError as e:
            raise MarshallingError(f"Malformed XML: {e}") from e
        if root is None:
            raise MarshallingError("Empty XML document")

        expected = getattr(response_type, "__wire_root__", None)
        if root.tag != expected:
            raise MarshallingError(
                f"Unexpected root element <{root.tag}>, expected <{expected}>",
                path=str(root.tag),
            )
        return self._build(root, response_type, expected)

    def _build(self, element: etree._Element, model: Type[T], path: str) -> T:
        fields = wire_fields_of(model)
        if fields is None:
            raise MarshallingError(f"{model.__name__} is not a wire model", path=path)
        values = self._read_fields(element, fields, path)
        try:
            return model.model_validate(values)
        except ValidationError as e:
            raise MarshallingError(
                f"Invalid {model.__name__} at {path}: {e.error_count()} validation error(s)",
                path=path,
            ) from e

    def _read_fields(
        self,
        element: etree._Element,
        fields: Tuple[WireField, ...],
        path: str,
    ) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field in fields:
            field_path = f"{path}/{field.path}"
            if field.kind is FieldKind.GROUP:
                group = element.find(field.wire_name)
                if group is not None:
                    values.update(self._read_fields(group, field.children, field_path))
                continue

            if field.kind is FieldKind.COLLECTION:
                values[field.name] = self._collections.read(element, field, self._read_item)
                continue

            child = element.find(field.wire_name)
            if child is None:
                continue
            if field.kind is FieldKind.OBJECT:
                if field.model is None:
                    raise MarshallingError(
                        f"Field {field.name!r} has no model to read into", path=field_path
                    )
                values[field.name] = self._build(child, field.model, field_path)
                continue

            text = self._text(child)
            if text is not None:
                values[field.name] = self._from_text(field.kind, text, field_path)
        return values

    def _read_item(self, element: etree._Element, field: WireField) -> Any:
        path = f"{field.path}/{field.item_name}"
        if field.item_kind is FieldKind.OBJECT:
            if field.model is None:
                raise MarshallingError(
                    f"Field {field.name!r} has no item model to read into", path=path
                )
            return self._build(element, field.model, path)
        if field.item_kind not in SCALAR_KINDS:
            raise MarshallingError(f"Unsupported item kind {field.item_kind!r}", path=path)
        text = self._text(element)
        if text is None:
            return None
        return self._from_text(field.item_kind, text, path)

    def _from_text(self, kind: FieldKind, text: str, path: str) -> Any:
        try:
            return self.handler_for(kind).from_text(text)
        except MarshallingError as e:
            raise MarshallingError(e.message, path=path) from e

    @staticmethod
    def _text(element: etree._Element) -> Optional[str]:
        text = (element.text or "").strip()
        return text or None
