"""Query filters for the Afterbuy ``DataFilter`` block.

Every filter is rendered as one ``<Filter>`` element::

    <Filter>
      <FilterName>CatalogID</FilterName>
      <FilterValues>
        <FilterValue>12</FilterValue>
      </FilterValues>
    </Filter>

``FilterName`` comes from the class, the content of ``FilterValues`` from
the fields each variant passes to :func:`filter_fields`.
"""

from typing import ClassVar, Optional, Tuple

from pydantic import AwareDatetime, Field, model_validator

from ..serializer.fields import (
    FieldKind,
    WireField,
    date_field,
    group_field,
    int_field,
    list_field,
    string_field,
)
from .base import WireModel


def filter_fields(*value_fields: WireField) -> Tuple[WireField, ...]:
    """Wire table shared by all ``<Filter>`` elements."""
    return (
        string_field("filter_name", "FilterName"),
        group_field("FilterValues", *value_fields),
    )


def _values(kind: FieldKind) -> WireField:
    return list_field("values", None, "FilterValue", item_kind=kind)


class DataFilter(WireModel):
    """Base class of all ``DataFilter`` entries."""

    filter_name: ClassVar[str] = ""


class IntValuesFilter(DataFilter):
    """Filter matching any of a list of numeric IDs."""

    values: Tuple[int, ...] = Field(min_length=1)

    __wire_fields__ = filter_fields(_values(FieldKind.INTEGER))

    def __init__(self, *values: int, **data):
        if values:
            data["values"] = values
        super().__init__(**data)


class StringValuesFilter(DataFilter):
    """Filter matching any of a list of string values."""

    values: Tuple[str, ...] = Field(min_length=1)

    __wire_fields__ = filter_fields(_values(FieldKind.STRING))

    def __init__(self, *values: str, **data):
        if values:
            data["values"] = values
        super().__init__(**data)


class CatalogIdFilter(IntValuesFilter):
    filter_name = "CatalogID"


class ProductIdFilter(IntValuesFilter):
    filter_name = "ProductID"


class OrderIdFilter(IntValuesFilter):
    filter_name = "OrderID"


class AnrFilter(StringValuesFilter):
    """Filters by Afterbuy article number (``Anr``)."""

    filter_name = "Anr"


class EanFilter(StringValuesFilter):
    filter_name = "Ean"


class TagFilter(StringValuesFilter):
    filter_name = "Tag"


class PlatformFilter(StringValuesFilter):
    # Afterbuy spells it with a double "t"
    filter_name = "Plattform"


class UserDefinedFlagFilter(StringValuesFilter):
    filter_name = "UserDefinedFlag"


class DefaultFilter(DataFilter):
    """One of Afterbuy's predefined filters, e.g. ``"not_completed"``."""

    filter_name = "DefaultFilter"

    value: str = Field(min_length=1)

    __wire_fields__ = filter_fields(string_field("value", "FilterValue"))

    def __init__(self, value: Optional[str] = None, **data):
        if value is not None:
            data["value"] = value
        super().__init__(**data)


class DateRangeFilter(DataFilter):
    """Restricts results to a date window on one of the date columns.

    Both bounds must be timezone-aware.

    :param date_from: Start of the window, inclusive
    :type date_from: Optional[AwareDatetime]
    :param date_to: End of the window, inclusive
    :type date_to: Optional[AwareDatetime]
    :param date_column: Which date column to filter on, e.g.
        ``"AuctionEndDate"``, ``"ModDate"`` or ``"PayDate"``
    :type date_column: str
    """

    filter_name = "DateFilter"

    date_from: Optional[AwareDatetime] = None
    date_to: Optional[AwareDatetime] = None
    date_column: str = "AuctionEndDate"

    __wire_fields__ = filter_fields(
        date_field("date_from", "DateFrom"),
        date_field("date_to", "DateTo"),
        string_field("date_column", "FilterValue"),
    )

    @model_validator(mode="after")
    def _check_window(self):
        if self.date_from is None and self.date_to is None:
            raise ValueError("DateRangeFilter needs date_from or date_to")
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class RangeIdFilter(DataFilter):
    filter_name = "RangeID"

    value_from: int
    value_to: int

    __wire_fields__ = filter_fields(
        int_field("value_from", "ValueFrom"),
        int_field("value_to", "ValueTo"),
    )


class RangeAnrFilter(DataFilter):
    filter_name = "RangeAnr"

    value_from: str
    value_to: str

    __wire_fields__ = filter_fields(
        string_field("value_from", "ValueFrom"),
        string_field("value_to", "ValueTo"),
    )


class LevelFilter(DataFilter):
    """Restricts shop catalogs or products to a range of tree levels."""

    filter_name = "Level"

    level_from: int = Field(ge=0)
    level_to: int = Field(ge=0)

    __wire_fields__ = filter_fields(
        int_field("level_from", "LevelFrom"),
        int_field("level_to", "LevelTo"),
    )


class StockProductFilter(WireModel):
    """Selects one product for ``GetStockInfo`` by ID, article number or EAN."""

    product_id: Optional[int] = None
    anr: Optional[str] = None
    ean: Optional[str] = None

    __wire_fields__ = (
        int_field("product_id", "ProductID"),
        string_field("anr", "Anr"),
        string_field("ean", "EAN"),
    )

    @model_validator(mode="after")
    def _needs_identifier(self):
        if self.product_id is None and not self.anr and not self.ean:
            raise ValueError("StockProductFilter needs product_id, anr or ean")
        return self


SOLD_ITEMS_FILTERS = (
    DateRangeFilter,
    OrderIdFilter,
    PlatformFilter,
    RangeIdFilter,
    DefaultFilter,
    UserDefinedFlagFilter,
)

SHOP_PRODUCTS_FILTERS = (
    ProductIdFilter,
    AnrFilter,
    EanFilter,
    TagFilter,
    DefaultFilter,
    LevelFilter,
    RangeIdFilter,
    RangeAnrFilter,
    DateRangeFilter,
)

SHOP_CATALOGS_FILTERS = (CatalogIdFilter, RangeIdFilter, LevelFilter)

PAYMENT_SERVICES_FILTERS = (PlatformFilter, DefaultFilter)
