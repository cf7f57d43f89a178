"""Afterbuy client models package.

Request, response and filter models, plus the shared credential block.
"""

from .base import (
    AbstractRequest,
    AbstractResponse,
    AfterbuyGlobal,
    CallStatus,
    CredentialContext,
    DetailLevel,
    ErrorEntry,
    OrderDirection,
    ResultBase,
    WarningEntry,
    WireModel,
)
from .filters import (
    AnrFilter,
    CatalogIdFilter,
    DataFilter,
    DateRangeFilter,
    DefaultFilter,
    EanFilter,
    LevelFilter,
    OrderIdFilter,
    PlatformFilter,
    ProductIdFilter,
    RangeAnrFilter,
    RangeIdFilter,
    StockProductFilter,
    TagFilter,
    UserDefinedFlagFilter,
)
from .requests import (
    GetPaymentServicesRequest,
    GetShippingServicesRequest,
    GetShopCatalogsRequest,
    GetShopProductsRequest,
    GetSoldItemsRequest,
    GetStockInfoRequest,
    UpdateOrder,
    UpdatePaymentInfo,
    UpdateShippingInfo,
    UpdateSoldItemsRequest,
)
from .responses import (
    Address,
    BuyerInfo,
    GetPaymentServicesResponse,
    GetShippingServicesResponse,
    GetShopCatalogsResponse,
    GetShopProductsResponse,
    GetSoldItemsResponse,
    GetStockInfoResponse,
    PaginationResult,
    PaymentInfo,
    PaymentService,
    ShippingInfo,
    ShippingMethod,
    ShippingService,
    ShopCatalog,
    ShopProduct,
    SoldItem,
    SoldOrder,
    StockInfo,
    UpdateSoldItemsResponse,
)

__all__ = [
    "AbstractRequest",
    "AbstractResponse",
    "AfterbuyGlobal",
    "CallStatus",
    "CredentialContext",
    "DetailLevel",
    "ErrorEntry",
    "OrderDirection",
    "ResultBase",
    "WarningEntry",
    "WireModel",
    "AnrFilter",
    "CatalogIdFilter",
    "DataFilter",
    "DateRangeFilter",
    "DefaultFilter",
    "EanFilter",
    "LevelFilter",
    "OrderIdFilter",
    "PlatformFilter",
    "ProductIdFilter",
    "RangeAnrFilter",
    "RangeIdFilter",
    "StockProductFilter",
    "TagFilter",
    "UserDefinedFlagFilter",
    "GetPaymentServicesRequest",
    "GetShippingServicesRequest",
    "GetShopCatalogsRequest",
    "GetShopProductsRequest",
    "GetSoldItemsRequest",
    "GetStockInfoRequest",
    "UpdateOrder",
    "UpdatePaymentInfo",
    "UpdateShippingInfo",
    "UpdateSoldItemsRequest",
    "Address",
    "BuyerInfo",
    "GetPaymentServicesResponse",
    "GetShippingServicesResponse",
    "GetShopCatalogsResponse",
    "GetShopProductsResponse",
    "GetSoldItemsResponse",
    "GetStockInfoResponse",
    "PaginationResult",
    "PaymentInfo",
    "PaymentService",
    "ShippingInfo",
    "ShippingMethod",
    "ShippingService",
    "ShopCatalog",
    "ShopProduct",
    "SoldItem",
    "SoldOrder",
    "StockInfo",
    "UpdateSoldItemsResponse",
]
