"""Response models for the Afterbuy calls.

Every response document looks like::

    <Afterbuy>
      <CallStatus>Success</CallStatus>
      <CallName>GetSoldItems</CallName>
      <VersionID>12</VersionID>
      <Result>...</Result>
    </Afterbuy>

Only the elements listed in the wire tables are read; Afterbuy sends many
more, and they are ignored.
"""

from datetime import datetime
from typing import Optional, Tuple

from pydantic import Field

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
from .base import RESULT_MESSAGE_FIELDS, AbstractResponse, ResultBase, WireModel, response_fields


# Payment services


class PaymentService(WireModel):
    payment_service_id: Optional[int] = None
    name: Optional[str] = None
    function_name: Optional[str] = None
    surcharge: Optional[float] = None
    surcharge_percent: Optional[float] = None
    discount: Optional[float] = None
    discount_percent: Optional[float] = None
    position: Optional[int] = None

    __wire_fields__ = (
        int_field("payment_service_id", "PaymentServiceID"),
        string_field("name", "Name"),
        string_field("function_name", "FunctionName"),
        float_field("surcharge", "Surcharge"),
        float_field("surcharge_percent", "SurchargePercent"),
        float_field("discount", "Discount"),
        float_field("discount_percent", "DiscountPercent"),
        int_field("position", "Position"),
    )


class PaymentServicesResult(ResultBase):
    payment_services: Tuple[PaymentService, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        list_field("payment_services", "PaymentServices", "PaymentService", model=PaymentService),
    )


class GetPaymentServicesResponse(AbstractResponse):
    result: PaymentServicesResult = Field(default_factory=PaymentServicesResult)

    __wire_fields__ = response_fields(PaymentServicesResult)


# Shipping services


class ShippingMethod(WireModel):
    shipping_method_id: Optional[int] = None
    name: Optional[str] = None
    price_from: Optional[float] = None
    price_to: Optional[float] = None
    shipping_price: Optional[float] = None
    weight_from: Optional[float] = None
    weight_to: Optional[float] = None
    country_group: Optional[str] = None

    __wire_fields__ = (
        int_field("shipping_method_id", "ShippingMethodID"),
        string_field("name", "Name"),
        float_field("price_from", "PriceFrom"),
        float_field("price_to", "PriceTo"),
        float_field("shipping_price", "ShippingPrice"),
        float_field("weight_from", "WeightFrom"),
        float_field("weight_to", "WeightTo"),
        string_field("country_group", "CountryGroup"),
    )


class ShippingService(WireModel):
    name: Optional[str] = None
    display_area: Optional[str] = None
    group_priority: Optional[int] = None
    shipping_methods: Tuple[ShippingMethod, ...] = Field(default_factory=tuple)

    __wire_fields__ = (
        string_field("name", "Name"),
        string_field("display_area", "DisplayArea"),
        int_field("group_priority", "GroupPriority"),
        list_field("shipping_methods", "ShippingMethods", "ShippingMethod", model=ShippingMethod),
    )


class ShippingServicesResult(ResultBase):
    shipping_services: Tuple[ShippingService, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        list_field("shipping_services", "ShippingServices", "ShippingService", model=ShippingService),
    )


class GetShippingServicesResponse(AbstractResponse):
    result: ShippingServicesResult = Field(default_factory=ShippingServicesResult)

    __wire_fields__ = response_fields(ShippingServicesResult)


# Stock info


class StockInfo(WireModel):
    product_id: Optional[int] = None
    anr: Optional[str] = None
    ean: Optional[str] = None
    name: Optional[str] = None
    quantity: Optional[int] = None
    auction_quantity: Optional[int] = None
    available_shop_quantity: Optional[int] = None
    minimum_stock: Optional[int] = None
    discontinued: Optional[bool] = None
    merge_stock: Optional[bool] = None

    __wire_fields__ = (
        int_field("product_id", "ProductID"),
        string_field("anr", "Anr"),
        string_field("ean", "EAN"),
        string_field("name", "Name"),
        int_field("quantity", "Quantity"),
        int_field("auction_quantity", "AuctionQuantity"),
        int_field("available_shop_quantity", "AvailableShopQuantity"),
        int_field("minimum_stock", "MinimumStock"),
        bool_field("discontinued", "Discontinued"),
        bool_field("merge_stock", "MergeStock"),
    )


class StockInfoResult(ResultBase):
    products: Tuple[StockInfo, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        list_field("products", "Products", "Product", model=StockInfo),
    )


class GetStockInfoResponse(AbstractResponse):
    result: StockInfoResult = Field(default_factory=StockInfoResult)

    __wire_fields__ = response_fields(StockInfoResult)


# Shop products


class PaginationResult(WireModel):
    total_number_of_entries: Optional[int] = None
    total_number_of_pages: Optional[int] = None
    items_per_page: Optional[int] = None
    page_number: Optional[int] = None

    __wire_fields__ = (
        int_field("total_number_of_entries", "TotalNumberOfEntries"),
        int_field("total_number_of_pages", "TotalNumberOfPages"),
        int_field("items_per_page", "ItemsPerPage"),
        int_field("page_number", "PageNumber"),
    )


class ShopProduct(WireModel):
    product_id: Optional[int] = None
    anr: Optional[str] = None
    ean: Optional[str] = None
    name: Optional[str] = None
    short_description: Optional[str] = None
    tags: Tuple[str, ...] = Field(default_factory=tuple)
    quantity: Optional[int] = None
    available_shop_quantity: Optional[int] = None
    unit_of_quantity: Optional[str] = None
    selling_price: Optional[float] = None
    buying_price: Optional[float] = None
    dealer_price: Optional[float] = None
    tax_rate: Optional[float] = None
    weight: Optional[float] = None
    stock: Optional[bool] = None
    discontinued: Optional[bool] = None
    level: Optional[int] = None
    mod_date: Optional[datetime] = None
    catalog_ids: Tuple[int, ...] = Field(default_factory=tuple)

    __wire_fields__ = (
        int_field("product_id", "ProductID"),
        string_field("anr", "Anr"),
        string_field("ean", "EAN"),
        string_field("name", "Name"),
        string_field("short_description", "ShortDescription"),
        list_field("tags", "Tags", "Tag", item_kind=FieldKind.STRING),
        int_field("quantity", "Quantity"),
        int_field("available_shop_quantity", "AvailableShopQuantity"),
        string_field("unit_of_quantity", "UnitOfQuantity"),
        float_field("selling_price", "SellingPrice"),
        float_field("buying_price", "BuyingPrice"),
        float_field("dealer_price", "DealerPrice"),
        float_field("tax_rate", "TaxRate"),
        float_field("weight", "Weight"),
        bool_field("stock", "Stock"),
        bool_field("discontinued", "Discontinued"),
        int_field("level", "Level"),
        date_field("mod_date", "ModDate"),
        list_field("catalog_ids", "Catalogs", "CatalogID", item_kind=FieldKind.INTEGER),
    )


class ShopProductsResult(ResultBase):
    has_more_products: Optional[bool] = None
    last_product_id: Optional[int] = None
    pagination: Optional[PaginationResult] = None
    products: Tuple[ShopProduct, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        bool_field("has_more_products", "HasMoreProducts"),
        int_field("last_product_id", "LastProductID"),
        object_field("pagination", "PaginationResult", PaginationResult),
        list_field("products", "Products", "Product", model=ShopProduct),
    )


class GetShopProductsResponse(AbstractResponse):
    result: ShopProductsResult = Field(default_factory=ShopProductsResult)

    __wire_fields__ = response_fields(ShopProductsResult)

    @property
    def products(self) -> Tuple[ShopProduct, ...]:
        return self.result.products


# Shop catalogs


class ShopCatalog(WireModel):
    catalog_id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    level: Optional[int] = None
    position: Optional[int] = None
    additional_text: Optional[str] = None
    show: Optional[bool] = None
    picture: Optional[str] = None

    __wire_fields__ = (
        int_field("catalog_id", "CatalogID"),
        string_field("name", "Name"),
        string_field("description", "Description"),
        int_field("parent_id", "ParentID"),
        int_field("level", "Level"),
        int_field("position", "Position"),
        string_field("additional_text", "AdditionalText"),
        bool_field("show", "Show"),
        string_field("picture", "Picture1"),
    )


class ShopCatalogsResult(ResultBase):
    has_more_catalogs: Optional[bool] = None
    last_catalog_id: Optional[int] = None
    catalogs: Tuple[ShopCatalog, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        bool_field("has_more_catalogs", "HasMoreCatalogs"),
        int_field("last_catalog_id", "LastCatalogID"),
        list_field("catalogs", "Catalogs", "Catalog", model=ShopCatalog),
    )


class GetShopCatalogsResponse(AbstractResponse):
    result: ShopCatalogsResult = Field(default_factory=ShopCatalogsResult)

    __wire_fields__ = response_fields(ShopCatalogsResult)

    @property
    def catalogs(self) -> Tuple[ShopCatalog, ...]:
        return self.result.catalogs


# Sold items


class PaymentInfo(WireModel):
    payment_id: Optional[str] = None
    payment_method: Optional[str] = None
    payment_function: Optional[str] = None
    payment_transaction_id: Optional[str] = None
    payment_status: Optional[str] = None
    payment_date: Optional[datetime] = None
    already_paid: Optional[float] = None
    full_amount: Optional[float] = None
    payment_instruction: Optional[str] = None
    invoice_date: Optional[datetime] = None

    __wire_fields__ = (
        string_field("payment_id", "PaymentID"),
        string_field("payment_method", "PaymentMethod"),
        string_field("payment_function", "PaymentFunction"),
        string_field("payment_transaction_id", "PaymentTransactionID"),
        string_field("payment_status", "PaymentStatus"),
        date_field("payment_date", "PaymentDate"),
        float_field("already_paid", "AlreadyPaid"),
        float_field("full_amount", "FullAmount"),
        string_field("payment_instruction", "PaymentInstruction"),
        date_field("invoice_date", "InvoiceDate"),
    )


class Address(WireModel):
    afterbuy_user_id: Optional[int] = None
    user_id_platform: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    street: Optional[str] = None
    street2: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    country_iso: Optional[str] = None
    phone: Optional[str] = None
    mail: Optional[str] = None

    __wire_fields__ = (
        int_field("afterbuy_user_id", "AfterbuyUserID"),
        string_field("user_id_platform", "UserIDPlattform"),
        string_field("first_name", "FirstName"),
        string_field("last_name", "LastName"),
        string_field("company", "Company"),
        string_field("street", "Street"),
        string_field("street2", "Street2"),
        string_field("postal_code", "PostalCode"),
        string_field("city", "City"),
        string_field("country", "Country"),
        string_field("country_iso", "CountryISO"),
        string_field("phone", "Phone"),
        string_field("mail", "Mail"),
    )


class BuyerInfo(WireModel):
    billing_address: Optional[Address] = None
    shipping_address: Optional[Address] = None

    __wire_fields__ = (
        object_field("billing_address", "BillingAddress", Address),
        object_field("shipping_address", "ShippingAddress", Address),
    )


class ShopProductDetails(WireModel):
    product_id: Optional[int] = None
    ean: Optional[str] = None
    anr: Optional[str] = None

    __wire_fields__ = (
        int_field("product_id", "ProductID"),
        string_field("ean", "EAN"),
        string_field("anr", "Anr"),
    )


class SoldItem(WireModel):
    item_id: Optional[int] = None
    anr: Optional[str] = None
    item_title: Optional[str] = None
    item_quantity: Optional[int] = None
    item_price: Optional[float] = None
    item_end_date: Optional[datetime] = None
    tax_rate: Optional[float] = None
    item_weight: Optional[float] = None
    item_platform_name: Optional[str] = None
    shop_product_details: Optional[ShopProductDetails] = None

    __wire_fields__ = (
        int_field("item_id", "ItemID"),
        string_field("anr", "Anr"),
        string_field("item_title", "ItemTitle"),
        int_field("item_quantity", "ItemQuantity"),
        float_field("item_price", "ItemPrice"),
        date_field("item_end_date", "ItemEndDate"),
        float_field("tax_rate", "TaxRate"),
        float_field("item_weight", "ItemWeight"),
        string_field("item_platform_name", "ItemPlatformName"),
        object_field("shop_product_details", "ShopProductDetails", ShopProductDetails),
    )


class ShippingInfo(WireModel):
    shipping_method: Optional[str] = None
    shipping_cost: Optional[float] = None
    shipping_total_cost: Optional[float] = None
    delivery_date: Optional[datetime] = None

    __wire_fields__ = (
        string_field("shipping_method", "ShippingMethod"),
        float_field("shipping_cost", "ShippingCost"),
        float_field("shipping_total_cost", "ShippingTotalCost"),
        date_field("delivery_date", "DeliveryDate"),
    )


class SoldOrder(WireModel):
    """One order as returned by ``GetSoldItems``."""

    order_id: Optional[int] = None
    order_date: Optional[datetime] = None
    invoice_number: Optional[str] = None
    additional_info: Optional[str] = None
    user_comment: Optional[str] = None
    memo: Optional[str] = None
    invoice_memo: Optional[str] = None
    order_exported: Optional[bool] = None
    feedback_date: Optional[datetime] = None
    tracking_link: Optional[str] = None
    payment_info: Optional[PaymentInfo] = None
    buyer_info: Optional[BuyerInfo] = None
    sold_items: Tuple[SoldItem, ...] = Field(default_factory=tuple)
    shipping_info: Optional[ShippingInfo] = None

    __wire_fields__ = (
        int_field("order_id", "OrderID"),
        date_field("order_date", "OrderDate"),
        string_field("invoice_number", "InvoiceNumber"),
        string_field("additional_info", "AdditionalInfo"),
        string_field("user_comment", "UserComment"),
        string_field("memo", "Memo"),
        string_field("invoice_memo", "InvoiceMemo"),
        bool_field("order_exported", "OrderExported"),
        date_field("feedback_date", "FeedbackDate"),
        string_field("tracking_link", "TrackingLink"),
        object_field("payment_info", "PaymentInfo", PaymentInfo),
        object_field("buyer_info", "BuyerInfo", BuyerInfo),
        list_field("sold_items", "SoldItems", "SoldItem", model=SoldItem),
        object_field("shipping_info", "ShippingInfo", ShippingInfo),
    )


class SoldItemsResult(ResultBase):
    has_more_items: Optional[bool] = None
    orders_count: Optional[int] = None
    last_order_id: Optional[int] = None
    items_count: Optional[int] = None
    orders: Tuple[SoldOrder, ...] = Field(default_factory=tuple)

    __wire_fields__ = RESULT_MESSAGE_FIELDS + (
        bool_field("has_more_items", "HasMoreItems"),
        list_field("orders", "Orders", "Order", model=SoldOrder),
        int_field("orders_count", "OrdersCount"),
        int_field("last_order_id", "LastOrderID"),
        int_field("items_count", "ItemsCount"),
    )


class GetSoldItemsResponse(AbstractResponse):
    result: SoldItemsResult = Field(default_factory=SoldItemsResult)

    __wire_fields__ = response_fields(SoldItemsResult)

    @property
    def orders(self) -> Tuple[SoldOrder, ...]:
        return self.result.orders


class UpdateSoldItemsResponse(AbstractResponse):
    """Afterbuy only reports errors and warnings for updates."""
