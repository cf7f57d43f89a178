"""Request models, one per Afterbuy call.

Requests are immutable once built. Invalid parameters raise
``pydantic.ValidationError`` at construction time, which the client turns
into :class:`~afterbuy_client.exceptions.InvalidArgumentError`.
Date fields only accept timezone-aware datetimes.
"""

from typing import ClassVar, Optional, Tuple

from pydantic import AwareDatetime, BaseModel, Field, field_validator

from ..serializer.fields import (
    FieldKind,
    bool_field,
    date_field,
    float_field,
    int_field,
    list_field,
    object_field,
    string_field,
)
from .base import GLOBAL_FIELD, AbstractRequest, OrderDirection, WireModel
from .filters import (
    PAYMENT_SERVICES_FILTERS,
    SHOP_CATALOGS_FILTERS,
    SHOP_PRODUCTS_FILTERS,
    SOLD_ITEMS_FILTERS,
    DataFilter,
    StockProductFilter,
)

DATA_FILTER_FIELD = list_field("filters", "DataFilter", "Filter", item_kind=FieldKind.OBJECT)


def _check_items(values, allowed: Tuple[type, ...], label: str):
    """Reject anything that is not an instance of one of ``allowed``."""
    if values is None:
        return ()
    if isinstance(values, (str, bytes, BaseModel)) or not hasattr(values, "__iter__"):
        raise ValueError(f"{label} must be a sequence")
    items = tuple(values)
    names = ", ".join(cls.__name__ for cls in allowed)
    for index, item in enumerate(items):
        if not isinstance(item, allowed):
            raise ValueError(
                f"{label}[{index}] is {type(item).__name__}, expected one of: {names}"
            )
    return items


class FilteredRequest(AbstractRequest):
    """Request carrying a ``DataFilter`` block.

    ``allowed_filters`` lists the filter classes the call understands.
    """

    allowed_filters: ClassVar[Tuple[type, ...]] = ()

    filters: Tuple[DataFilter, ...] = Field(default_factory=tuple)

    @field_validator("filters", mode="before")
    @classmethod
    def _check_filters(cls, v):
        return _check_items(v, cls.allowed_filters, "filters")


class GetPaymentServicesRequest(FilteredRequest):
    call_name = "GetPaymentServices"
    allowed_filters = PAYMENT_SERVICES_FILTERS

    __wire_fields__ = (GLOBAL_FIELD, DATA_FILTER_FIELD)


class GetShippingServicesRequest(AbstractRequest):
    call_name = "GetShippingServices"

    __wire_fields__ = (GLOBAL_FIELD,)


class GetStockInfoRequest(AbstractRequest):
    """Stock levels for up to 500 products."""

    call_name = "GetStockInfo"

    products: Tuple[StockProductFilter, ...] = Field(min_length=1)

    __wire_fields__ = (
        GLOBAL_FIELD,
        list_field("products", "Products", "Product", model=StockProductFilter),
    )

    @field_validator("products", mode="before")
    @classmethod
    def _check_products(cls, v):
        return _check_items(v, (StockProductFilter,), "products")


class GetShopProductsRequest(FilteredRequest):
    """One page of shop products.

    :param max_shop_items: Page size
    :type max_shop_items: int
    :param pagination_enabled: Whether ``page_number`` is honoured
    :type pagination_enabled: bool
    :param page_number: 1-based page index
    :type page_number: int
    """

    call_name = "GetShopProducts"
    allowed_filters = SHOP_PRODUCTS_FILTERS

    max_shop_items: int = Field(250, ge=1)
    suppress_base_product_related_data: Optional[bool] = None
    pagination_enabled: bool = True
    page_number: int = Field(1, ge=1)
    return_shop20_container: Optional[bool] = None

    __wire_fields__ = (
        GLOBAL_FIELD,
        int_field("max_shop_items", "MaxShopItems"),
        bool_field("suppress_base_product_related_data", "SuppressBaseProductRelatedData"),
        bool_field("pagination_enabled", "PaginationEnabled"),
        int_field("page_number", "PageNumber"),
        bool_field("return_shop20_container", "ReturnShop20Container"),
        DATA_FILTER_FIELD,
    )


class GetShopCatalogsRequest(FilteredRequest):
    call_name = "GetShopCatalogs"
    allowed_filters = SHOP_CATALOGS_FILTERS

    max_catalogs: int = Field(200, ge=1)

    __wire_fields__ = (
        GLOBAL_FIELD,
        int_field("max_catalogs", "MaxCatalogs"),
        DATA_FILTER_FIELD,
    )


class GetSoldItemsRequest(FilteredRequest):
    call_name = "GetSoldItems"
    allowed_filters = SOLD_ITEMS_FILTERS

    request_all_items: Optional[bool] = None
    max_sold_items: int = Field(250, ge=1)
    order_direction: OrderDirection = OrderDirection.ASCENDING
    return_hidden_items: Optional[bool] = None

    __wire_fields__ = (
        GLOBAL_FIELD,
        bool_field("request_all_items", "RequestAllItems"),
        int_field("max_sold_items", "MaxSoldItems"),
        int_field("order_direction", "OrderDirection"),
        bool_field("return_hidden_items", "ReturnHiddenItems"),
        DATA_FILTER_FIELD,
    )

    @field_validator("order_direction", mode="before")
    @classmethod
    def _bool_direction(cls, v):
        # True/False select descending/ascending
        if isinstance(v, bool):
            return OrderDirection(int(v))
        return v


class UpdatePaymentInfo(WireModel):
    payment_method: Optional[str] = None
    payment_date: Optional[AwareDatetime] = None
    already_paid: Optional[float] = None
    payment_additional_cost: Optional[float] = None

    __wire_fields__ = (
        string_field("payment_method", "PaymentMethod"),
        date_field("payment_date", "PaymentDate"),
        float_field("already_paid", "AlreadyPaid"),
        float_field("payment_additional_cost", "PaymentAdditionalCost"),
    )


class UpdateShippingInfo(WireModel):
    shipping_method: Optional[str] = None
    shipping_cost: Optional[float] = None
    delivery_date: Optional[AwareDatetime] = None

    __wire_fields__ = (
        string_field("shipping_method", "ShippingMethod"),
        float_field("shipping_cost", "ShippingCost"),
        date_field("delivery_date", "DeliveryDate"),
    )


class UpdateOrder(WireModel):
    """Changes to apply to one sold order. Unset fields are left untouched."""

    order_id: int
    additional_info: Optional[str] = None
    mail_date: Optional[AwareDatetime] = None
    reminder_date: Optional[AwareDatetime] = None
    user_comment: Optional[str] = None
    order_memo: Optional[str] = None
    invoice_memo: Optional[str] = None
    invoice_number: Optional[str] = None
    order_exported: Optional[bool] = None
    invoice_date: Optional[AwareDatetime] = None
    hide_order: Optional[bool] = None
    reminder: Optional[bool] = None
    payment_info: Optional[UpdatePaymentInfo] = None
    shipping_info: Optional[UpdateShippingInfo] = None

    __wire_fields__ = (
        int_field("order_id", "OrderID"),
        string_field("additional_info", "AdditionalInfo"),
        date_field("mail_date", "MailDate"),
        date_field("reminder_date", "ReminderDate"),
        string_field("user_comment", "UserComment"),
        string_field("order_memo", "OrderMemo"),
        string_field("invoice_memo", "InvoiceMemo"),
        string_field("invoice_number", "InvoiceNumber"),
        bool_field("order_exported", "OrderExported"),
        date_field("invoice_date", "InvoiceDate"),
        bool_field("hide_order", "HideOrder"),
        bool_field("reminder", "Reminder"),
        object_field("payment_info", "PaymentInfo", UpdatePaymentInfo),
        object_field("shipping_info", "ShippingInfo", UpdateShippingInfo),
    )


class UpdateSoldItemsRequest(AbstractRequest):
    call_name = "UpdateSoldItems"

    orders: Tuple[UpdateOrder, ...] = Field(min_length=1)

    __wire_fields__ = (
        GLOBAL_FIELD,
        list_field("orders", "Orders", "Order", model=UpdateOrder),
    )

    @field_validator("orders", mode="before")
    @classmethod
    def _check_orders(cls, v):
        return _check_items(v, (UpdateOrder,), "orders")
