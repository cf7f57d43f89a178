"""Unit tests for AfterbuyClient.

Each call runs against an ``httpx.MockTransport`` that records the posted
document and answers with a canned response from ``tests/fixtures``.
"""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
import pytest
from lxml import etree

from afterbuy_client import AfterbuyClient, FailureKind, InvalidArgumentError
from afterbuy_client.exceptions import ConfigurationError
from afterbuy_client.models import (
    DateRangeFilter,
    DefaultFilter,
    DetailLevel,
    OrderIdFilter,
    PlatformFilter,
    StockProductFilter,
    TagFilter,
    UpdateOrder,
    UpdateShippingInfo,
)


def posted(handler) -> etree._Element:
    return etree.fromstring(handler.requests[-1].content)


class TestOperations:

    @pytest.mark.unit
    def test_get_payment_services(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_payment_services_response.xml"))
        client = make_client(handler)

        outcome = client.get_payment_services(filters=[PlatformFilter("ebay")])

        assert [s.name for s in outcome.response.result.payment_services] == ["Vorkasse", "PayPal"]
        assert outcome.response.result.payment_services[1].surcharge == pytest.approx(0.35)
        root = posted(handler)
        assert root.findtext("AfterbuyGlobal/CallName") == "GetPaymentServices"
        assert root.findtext("DataFilter/Filter/FilterName") == "Plattform"

    @pytest.mark.unit
    def test_get_shipping_services(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_shipping_services_response.xml"))
        outcome = make_client(handler).get_shipping_services()

        service = outcome.response.result.shipping_services[0]
        assert service.name == "DHL Paket"
        assert [m.shipping_price for m in service.shipping_methods] == pytest.approx([4.9, 14.9])
        root = posted(handler)
        assert [child.tag for child in root] == ["AfterbuyGlobal"]

    @pytest.mark.unit
    def test_get_stock_info(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_stock_info_response.xml"))
        outcome = make_client(handler).get_stock_info([StockProductFilter(product_id=42)])

        assert outcome.response.result.products[0].quantity == 17
        assert posted(handler).findtext("Products/Product/ProductID") == "42"

    @pytest.mark.unit
    def test_get_shop_products_page_and_size(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_shop_products_response.xml"))
        client = make_client(handler)

        outcome = client.get_shop_products(filters=[TagFilter("kueche")], page=2, max_shop_products=50)

        root = posted(handler)
        assert root.findtext("PageNumber") == "2"
        assert root.findtext("MaxShopItems") == "50"
        assert root.findtext("PaginationEnabled") == "1"
        assert root.findtext("AfterbuyGlobal/DetailLevel") == "0"
        assert root.findtext("AfterbuyGlobal/UserID") == "test-user"
        assert root.findtext("AfterbuyGlobal/UserPassword") == "test-user-secret"
        assert root.findtext("AfterbuyGlobal/PartnerID") == "1234"
        assert root.findtext("AfterbuyGlobal/PartnerPassword") == "test-partner-secret"
        assert [p.product_id for p in outcome.response.products] == [42, 43]
        assert outcome.response.result.has_more_products is True

    @pytest.mark.unit
    def test_get_shop_catalogs(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_shop_catalogs_response.xml"))
        outcome = make_client(handler).get_shop_catalogs(max_catalogs=10)

        assert [c.name for c in outcome.response.catalogs] == ["Kueche", "Geschirr"]
        assert posted(handler).findtext("MaxCatalogs") == "10"

    @pytest.mark.unit
    def test_get_sold_items(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_sold_items_response.xml"))
        client = make_client(handler)

        outcome = client.get_sold_items(
            filters=[
                DefaultFilter("not_completed"),
                DateRangeFilter(date_from=datetime(2024, 3, 1, tzinfo=ZoneInfo("Europe/Berlin")), date_column="ModDate"),
            ],
            order_direction=True,
            max_sold_items=100,
            detail_level=DetailLevel.ORDER_DATA | DetailLevel.BUYER_DATA,
        )

        assert len(outcome.response.orders) == 2
        assert outcome.response.orders[0].order_id == 300100
        assert outcome.response.orders[1].order_exported is True
        root = posted(handler)
        assert root.findtext("OrderDirection") == "1"
        assert root.findtext("MaxSoldItems") == "100"
        assert root.findtext("AfterbuyGlobal/DetailLevel") == "18"
        filters = root.findall("DataFilter/Filter")
        assert [f.findtext("FilterName") for f in filters] == ["DefaultFilter", "DateFilter"]
        assert filters[1].findtext("FilterValues/FilterValue") == "ModDate"

    @pytest.mark.unit
    def test_latin1_response_keeps_umlauts(self, make_client, http_handler):
        body = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            "<Afterbuy><CallStatus>Success</CallStatus><CallName>GetShopCatalogs</CallName>"
            "<Result><Catalogs><Catalog><CatalogID>7</CatalogID><Name>Küche</Name></Catalog>"
            "</Catalogs></Result></Afterbuy>"
        ).encode("latin-1")

        outcome = make_client(http_handler(body)).get_shop_catalogs()

        assert [c.name for c in outcome.response.catalogs] == ["Küche"]

    @pytest.mark.unit
    def test_empty_list_items_do_not_fail_the_call(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("get_shop_products_empty_items.xml"))

        outcome = make_client(handler).get_shop_products()

        assert outcome.ok
        assert outcome.response.products[0].tags == ("kueche",)
        assert outcome.response.products[0].catalog_ids == ()

    @pytest.mark.unit
    def test_update_sold_items(self, make_client, http_handler, xml_fixture):
        handler = http_handler(xml_fixture("update_sold_items_response.xml"))
        client = make_client(handler)

        outcome = client.update_sold_items(
            [
                UpdateOrder(order_id=300100, invoice_number="R-1001"),
                UpdateOrder(
                    order_id=300101,
                    shipping_info=UpdateShippingInfo(shipping_method="DHL", shipping_cost=4.9),
                ),
            ]
        )

        assert outcome.ok
        assert outcome.response.is_success
        orders = posted(handler).findall("Orders/Order")
        assert [o.findtext("OrderID") for o in orders] == ["300100", "300101"]
        assert orders[1].findtext("ShippingInfo/ShippingCost") == "4,90"

    @pytest.mark.unit
    def test_each_call_posts_once_to_the_endpoint(self, make_client, http_handler):
        handler = http_handler(status_code=500)
        client = make_client(handler)

        outcome = client.get_shipping_services()

        assert outcome.response is None
        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == AfterbuyClient.DEFAULT_ENDPOINT
        assert request.headers["content-type"] == "text/xml; charset=utf-8"


class TestFailures:

    @pytest.mark.unit
    def test_server_error_is_absent_and_logged_once(self, make_client, http_handler, caplog):
        client = make_client(http_handler("oops", status_code=500))

        outcome = client.get_sold_items()

        assert outcome.response is None
        assert outcome.failure.kind is FailureKind.TRANSPORT
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert "500" in errors[0].getMessage()

    @pytest.mark.unit
    def test_timeout_is_absent(self, make_client, http_handler, caplog):
        client = make_client(http_handler(error=httpx.ConnectTimeout("timed out")))

        outcome = client.get_shop_catalogs()

        assert outcome.response is None
        assert outcome.failure.kind is FailureKind.TRANSPORT
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1

    @pytest.mark.unit
    def test_garbage_body_is_absent(self, make_client, http_handler):
        outcome = make_client(http_handler("<<<")).get_stock_info([StockProductFilter(anr="1001")])

        assert outcome.response is None
        assert outcome.failure.kind is FailureKind.MARSHALLING

    @pytest.mark.unit
    def test_malformed_endpoint_is_absent(self, make_client, http_handler, caplog):
        handler = http_handler()
        client = make_client(handler, endpoint="http://[::1")

        outcome = client.get_shipping_services()

        assert outcome.response is None
        assert outcome.failure.kind is FailureKind.TRANSPORT
        assert isinstance(outcome.failure.cause.cause, httpx.InvalidURL)
        assert handler.requests == []
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1

    @pytest.mark.unit
    def test_transport_bug_is_absent(self, caplog):
        class BrokenTransport:
            def post(self, url, body, headers):
                raise AttributeError("post")

        client = AfterbuyClient("u", "p", 1, "pp", transport=BrokenTransport())

        outcome = client.get_shipping_services()

        assert outcome.response is None
        assert outcome.failure.kind is FailureKind.TRANSPORT
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1


class TestInvalidArguments:

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs,field",
        [
            ({"page": 0}, "page_number"),
            ({"max_shop_products": -5}, "max_shop_items"),
            ({"detail_level": -1}, "detail_level"),
            ({"filters": [OrderIdFilter(1), "Tag"]}, "filters"),
        ],
    )
    def test_shop_products_raise_before_network(self, make_client, http_handler, kwargs, field):
        handler = http_handler()
        client = make_client(handler)

        with pytest.raises(InvalidArgumentError) as exc_info:
            client.get_shop_products(**kwargs)

        assert exc_info.value.field == field
        assert exc_info.value.code == "INVALID_ARGUMENT"
        assert handler.requests == []

    @pytest.mark.unit
    def test_empty_update_list(self, make_client, http_handler):
        handler = http_handler()
        with pytest.raises(InvalidArgumentError):
            make_client(handler).update_sold_items([])
        assert handler.requests == []

    @pytest.mark.unit
    def test_invalid_argument_is_a_value_error(self, make_client, http_handler):
        with pytest.raises(ValueError):
            make_client(http_handler()).get_stock_info([])

    @pytest.mark.unit
    def test_bad_partner_id(self):
        with pytest.raises(InvalidArgumentError):
            AfterbuyClient("u", "p", "not-a-number", "pp", transport=object())


class TestConstruction:

    @pytest.mark.unit
    def test_from_settings_reads_environment(self):
        client = AfterbuyClient.from_settings()
        try:
            assert client.credentials.user_id == "test-user"
            assert client.credentials.partner_id == 1234
            assert client.dispatcher.endpoint == AfterbuyClient.DEFAULT_ENDPOINT
        finally:
            client.close()

    @pytest.mark.unit
    def test_from_settings_missing_credentials(self, monkeypatch):
        monkeypatch.delenv("AFTERBUY_PARTNER_PASSWORD")

        with pytest.raises(ConfigurationError) as exc_info:
            AfterbuyClient.from_settings()

        assert exc_info.value.details["setting"] == "AFTERBUY_PARTNER_PASSWORD"

    @pytest.mark.unit
    def test_from_settings_overrides(self, monkeypatch, http_handler, xml_fixture):
        monkeypatch.setenv("AFTERBUY_API_URL", "https://sandbox.example.test/ABInterface.aspx")
        handler = http_handler(xml_fixture("get_sold_items_response.xml"))
        transport_client = httpx.Client(transport=httpx.MockTransport(handler))

        from afterbuy_client import HttpxTransport

        with AfterbuyClient.from_settings(transport=HttpxTransport(client=transport_client)) as client:
            client.get_sold_items()

        assert str(handler.requests[0].url) == "https://sandbox.example.test/ABInterface.aspx"
        # a borrowed transport stays open
        assert not transport_client.is_closed
        transport_client.close()

    @pytest.mark.unit
    def test_context_manager_closes_owned_transport(self):
        with AfterbuyClient("u", "p", 1, "pp") as client:
            owned = client._owned_transport
        assert owned.client.is_closed
