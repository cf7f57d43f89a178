"""Client for the Afterbuy XML interface.

:class:`AfterbuyClient` offers one method per supported Afterbuy call.
Each method builds the request, submits it once and returns an
:class:`~afterbuy_client.utils.http.outcome.Outcome`. Only invalid
arguments raise; transport and marshalling failures are logged and come
back as a failed outcome.

Examples:
    >>> with AfterbuyClient("user", "secret", 1234, "partner-secret", "DE") as client:
    ...     outcome = client.get_sold_items(filters=[DefaultFilter("not_completed")])
    ...     if outcome:
    ...         for order in outcome.response.orders:
    ...             print(order.order_id)
"""

import logging
from typing import Any, Optional, Sequence, Type, TypeVar, Union

from pydantic import ValidationError

from .config.settings import DEFAULT_API_URL, Settings, get_settings
from .exceptions import ConfigurationError, InvalidArgumentError
from .models.base import AbstractRequest, AbstractResponse, CredentialContext, DetailLevel
from .models.filters import DataFilter, StockProductFilter
from .models.requests import (
    GetPaymentServicesRequest,
    GetShippingServicesRequest,
    GetShopCatalogsRequest,
    GetShopProductsRequest,
    GetSoldItemsRequest,
    GetStockInfoRequest,
    UpdateOrder,
    UpdateSoldItemsRequest,
)
from .models.responses import (
    GetPaymentServicesResponse,
    GetShippingServicesResponse,
    GetShopCatalogsResponse,
    GetShopProductsResponse,
    GetSoldItemsResponse,
    GetStockInfoResponse,
    UpdateSoldItemsResponse,
)
from .serializer import DateHandler, XmlMarshaller, default_handlers
from .utils.http import (
    HttpTransport,
    HttpxTransport,
    Outcome,
    RequestDispatcher,
    create_timeout,
)

logger = logging.getLogger(__name__)

Req = TypeVar("Req", bound=AbstractRequest)
Resp = TypeVar("Resp", bound=AbstractResponse)


class AfterbuyClient:
    """Typed facade over the Afterbuy XML interface.

    :param user_id: Afterbuy user name
    :type user_id: str
    :param user_password: Afterbuy user password
    :type user_password: str
    :param partner_id: Partner ID assigned by Afterbuy
    :type partner_id: int
    :param partner_password: Partner password assigned by Afterbuy
    :type partner_password: str
    :param error_language: Language of error descriptions
    :type error_language: str
    :param transport: HTTP capability; an :class:`HttpxTransport` owned by
        the client is created when omitted
    :type transport: Optional[HttpTransport]
    :param endpoint: URL of the Afterbuy XML interface
    :type endpoint: str
    :param marshaller: Marshaller to use instead of the default one
    :type marshaller: Optional[XmlMarshaller]
    :param log: Logger for request/response and failure messages
    :type log: Optional[Union[logging.Logger, logging.LoggerAdapter]]
    """

    DEFAULT_ENDPOINT = DEFAULT_API_URL

    def __init__(
        self,
        user_id: str,
        user_password: str,
        partner_id: int,
        partner_password: str,
        error_language: str = "DE",
        *,
        transport: Optional[HttpTransport] = None,
        endpoint: str = DEFAULT_API_URL,
        marshaller: Optional[XmlMarshaller] = None,
        log: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        try:
            self.credentials = CredentialContext(
                user_id=user_id,
                user_password=user_password,
                partner_id=partner_id,
                partner_password=partner_password,
                error_language=error_language,
            )
        except ValidationError as e:
            raise _invalid_argument(e) from None

        self._owned_transport: Optional[HttpxTransport] = None
        if transport is None:
            transport = self._owned_transport = HttpxTransport()

        self.dispatcher = RequestDispatcher(
            transport=transport,
            endpoint=endpoint,
            marshaller=marshaller,
            log=log,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "AfterbuyClient":
        """Build a client from :class:`~afterbuy_client.config.settings.Settings`.

        Keyword arguments are passed on to the constructor and win over
        the settings.

        :raises ConfigurationError: If a credential is not configured
        """
        settings = settings or get_settings()
        missing = settings.missing_credentials
        if missing:
            raise ConfigurationError(
                f"Missing Afterbuy credentials: {', '.join(missing)}",
                setting=missing[0],
            )

        if "transport" not in kwargs:
            kwargs["transport"] = HttpxTransport(timeout=create_timeout(read=settings.timeout))
            owns_transport = True
        else:
            owns_transport = False
        kwargs.setdefault("endpoint", settings.api_url)
        if "marshaller" not in kwargs and settings.timezone:
            handlers = [h for h in default_handlers() if not isinstance(h, DateHandler)]
            handlers.append(DateHandler(timezone=settings.timezone))
            kwargs["marshaller"] = XmlMarshaller(handlers)

        client = cls(
            settings.user_id,
            settings.user_password,
            settings.partner_id,
            settings.partner_password,
            settings.error_language,
            **kwargs,
        )
        if owns_transport:
            client._owned_transport = kwargs["transport"]
        return client

    # Operations

    def get_payment_services(
        self,
        filters: Sequence[DataFilter] = (),
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[GetPaymentServicesResponse]:
        """List the payment services configured in the Afterbuy account."""
        request = self._build(
            GetPaymentServicesRequest, filters=filters, detail_level=detail_level
        )
        return self._submit(request, GetPaymentServicesResponse)

    def get_shipping_services(
        self, detail_level: int = DetailLevel.PROCESS_DATA
    ) -> Outcome[GetShippingServicesResponse]:
        """List shipping services and their shipping methods."""
        request = self._build(GetShippingServicesRequest, detail_level=detail_level)
        return self._submit(request, GetShippingServicesResponse)

    def get_stock_info(
        self,
        products: Sequence[StockProductFilter],
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[GetStockInfoResponse]:
        """Fetch stock levels of the given products.

        :param products: Products selected by ID, article number or EAN
        :type products: Sequence[StockProductFilter]
        """
        request = self._build(GetStockInfoRequest, products=products, detail_level=detail_level)
        return self._submit(request, GetStockInfoResponse)

    def get_shop_products(
        self,
        filters: Sequence[DataFilter] = (),
        page: int = 1,
        max_shop_products: int = 250,
        enable_pagination: bool = True,
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[GetShopProductsResponse]:
        """Fetch one page of shop products.

        No paging loop is run; check ``result.has_more_products`` and call
        again with the next page.

        :param filters: Product filters
        :type filters: Sequence[DataFilter]
        :param page: 1-based page number
        :type page: int
        :param max_shop_products: Page size
        :type max_shop_products: int
        :param enable_pagination: Whether Afterbuy honours ``page``
        :type enable_pagination: bool
        :param detail_level: Payload richness
        :type detail_level: int
        """
        request = self._build(
            GetShopProductsRequest,
            filters=filters,
            detail_level=detail_level,
            max_shop_items=max_shop_products,
            pagination_enabled=enable_pagination,
            page_number=page,
        )
        return self._submit(request, GetShopProductsResponse)

    def get_shop_catalogs(
        self,
        filters: Sequence[DataFilter] = (),
        max_catalogs: int = 200,
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[GetShopCatalogsResponse]:
        request = self._build(
            GetShopCatalogsRequest,
            filters=filters,
            detail_level=detail_level,
            max_catalogs=max_catalogs,
        )
        return self._submit(request, GetShopCatalogsResponse)

    def get_sold_items(
        self,
        filters: Sequence[DataFilter] = (),
        order_direction: Union[bool, int] = False,
        max_sold_items: int = 250,
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[GetSoldItemsResponse]:
        """Fetch sold orders.

        :param order_direction: ``False``/0 for ascending, ``True``/1 for
            descending order
        :type order_direction: Union[bool, int]
        """
        request = self._build(
            GetSoldItemsRequest,
            filters=filters,
            detail_level=detail_level,
            max_sold_items=max_sold_items,
            order_direction=order_direction,
        )
        return self._submit(request, GetSoldItemsResponse)

    def update_sold_items(
        self,
        orders: Sequence[UpdateOrder],
        detail_level: int = DetailLevel.PROCESS_DATA,
    ) -> Outcome[UpdateSoldItemsResponse]:
        request = self._build(UpdateSoldItemsRequest, orders=orders, detail_level=detail_level)
        return self._submit(request, UpdateSoldItemsResponse)

    # Plumbing

    def _build(self, request_type: Type[Req], **fields: Any) -> Req:
        try:
            return request_type(credentials=self.credentials, **fields)
        except ValidationError as e:
            raise _invalid_argument(e) from None

    def _submit(self, request: AbstractRequest, response_type: Type[Resp]) -> Outcome[Resp]:
        return self.dispatcher.submit(request, response_type)

    def close(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> "AfterbuyClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _invalid_argument(error: ValidationError) -> InvalidArgumentError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = f"Invalid {field or 'argument'}: {first.get('msg', error)}"
    logger.debug("Rejected request arguments: %s", error)
    return InvalidArgumentError(message, field=field)
