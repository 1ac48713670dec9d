"""Tests for REST request building and response unwrapping."""

import base64
import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar
from urllib.parse import parse_qsl, urlsplit

import pytest
from pydantic import ValidationError

from max_sdk import (
    ApiError,
    ClearOrders,
    CreateOrder,
    Credentials,
    GetAccountOfCurrency,
    GetCurrencies,
    GetDepth,
    GetMarketsSummary,
    GetMyTrades,
    GetMyTradesOfOrder,
    GetOrders,
    GetPublicTrades,
    GetTickersOfMarket,
    GetTimestamp,
    GetVIPByLevel,
    OrderBy,
    OrderSide,
    OrderState,
    OrderType,
    ReadResponseError,
    RestApi,
    TradeSide,
    build_auth_get,
    build_auth_post,
    build_unauth_get,
    read_response,
)
from max_sdk.rest import encode_query
from max_sdk.signing import hmac_sha256_hex
from max_sdk.types import RespAccountCurrencyInfo, RespDepth, RespOrder


@pytest.fixture
def credentials():
    """Credentials with a frozen clock."""
    return Credentials("my-access", "my-secret", clock=lambda: 1000)


def signed_document(req):
    return json.loads(base64.b64decode(req.headers["X-MAX-PAYLOAD"]))


class TestEncodeQuery:
    """Test query string encoding."""

    def test_scalars(self):
        assert encode_query({"market": "btctwd", "limit": 5}) == "market=btctwd&limit=5"

    def test_booleans(self):
        assert encode_query({"a": True, "b": False}) == "a=true&b=false"

    def test_none_skipped(self):
        assert encode_query({"a": None, "b": 1}) == "b=1"

    def test_list_repeats_key(self):
        assert encode_query({"state": ["wait", "done"]}) == "state%5B%5D=wait&state%5B%5D=done"

    def test_nested_rejected(self):
        with pytest.raises(TypeError):
            encode_query({"a": {"b": 1}})


class TestRequestBuilders:
    """Test request builders."""

    def test_unauth_get(self):
        """Test that public requests carry plain query params and no headers."""
        req = build_unauth_get("https://example.com/api/v2/depth", {"market": "btctwd"})

        assert req.method == "GET"
        assert req.url == "https://example.com/api/v2/depth?market=btctwd"
        assert req.headers == {}
        assert req.body is None

    def test_unauth_get_without_params(self):
        req = build_unauth_get("https://example.com/api/v2/markets", {})
        assert req.url == "https://example.com/api/v2/markets"

    def test_auth_get(self, credentials):
        """Test that signed GET requests carry auth headers and the nonce in the query."""
        req = build_auth_get(
            "https://example.com/api/v2/orders",
            {"market": "btctwd", "state": ["wait", "done"]},
            credentials,
        )

        assert req.method == "GET"
        assert req.body is None
        assert req.url == (
            "https://example.com/api/v2/orders"
            "?market=btctwd&state%5B%5D=wait&state%5B%5D=done&nonce=1000"
        )
        assert req.headers["X-MAX-ACCESSKEY"] == "my-access"
        assert req.headers["Content-Type"] == "application/json"
        assert base64.b64decode(req.headers["X-MAX-PAYLOAD"]).decode() == (
            '{"market":"btctwd","state":["wait","done"],"nonce":1000,"path":"/api/v2/orders"}'
        )
        assert req.headers["X-MAX-SIGNATURE"] == hmac_sha256_hex(
            "my-secret", req.headers["X-MAX-PAYLOAD"].encode()
        )

    def test_auth_post(self, credentials):
        """Test that signed POST requests send params and nonce as the JSON body."""
        req = build_auth_post(
            "https://example.com/api/v2/order/delete", {"id": 87}, credentials
        )

        assert req.method == "POST"
        assert req.url == "https://example.com/api/v2/order/delete"
        assert req.body == b'{"id":87,"nonce":1000}'
        assert signed_document(req) == {
            "id": 87,
            "nonce": 1000,
            "path": "/api/v2/order/delete",
        }
        assert req.headers["X-MAX-SIGNATURE"] == hmac_sha256_hex(
            "my-secret", req.headers["X-MAX-PAYLOAD"].encode()
        )

    def test_consecutive_requests_use_new_nonces(self, credentials):
        first = build_auth_post("https://example.com/api/v2/orders/clear", {}, credentials)
        second = build_auth_post("https://example.com/api/v2/orders/clear", {}, credentials)

        assert signed_document(first)["nonce"] == 1000
        assert signed_document(second)["nonce"] == 1001


class TestReadResponse:
    """Test response unwrapping."""

    def test_success(self):
        assert read_response(b"1637998469", int) == 1637998469

    def test_model(self):
        body = '{"currency":"btc","balance":"1.5","locked":"0.1","type":"exchange","extra":1}'
        account = read_response(body, RespAccountCurrencyInfo)

        assert account.currency == "btc"
        assert account.balance == Decimal("1.5")
        assert account.wallet_type == "exchange"

    def test_api_error(self):
        """Test that an error envelope raises ApiError."""
        body = '{"error":{"code":2006,"message":"The nonce has already been used."}}'

        with pytest.raises(ApiError) as exc_info:
            read_response(body, int)

        assert exc_info.value.code == 2006
        assert exc_info.value.message == "The nonce has already been used."
        assert "2006" in str(exc_info.value)

    def test_invalid_json(self):
        with pytest.raises(ReadResponseError):
            read_response("<html>502 Bad Gateway</html>", int)

    def test_shape_mismatch(self):
        """Test that a body matching neither shape raises ReadResponseError."""
        with pytest.raises(ReadResponseError):
            read_response('{"foo":1}', RespDepth)

    def test_malformed_error_envelope(self):
        with pytest.raises(ReadResponseError):
            read_response('{"error":"oops"}', int)

    @pytest.mark.parametrize("timestamp", ["[1]", "{}", "1e30", "99999999999999999999"])
    def test_malformed_timestamp(self, timestamp):
        """Test that a wrongly typed or out of range timestamp is a read error."""
        body = (
            '{"timestamp":%s,"last_update_version":1,"last_update_id":1,"asks":[],"bids":[]}'
            % timestamp
        )
        with pytest.raises(ReadResponseError):
            read_response(body, RespDepth)

    def test_malformed_millis_timestamp(self):
        with pytest.raises(ReadResponseError):
            read_response('{"created_at_in_ms":[1]}', RespOrder)


class TestEndpoints:
    """Test endpoint definitions."""

    def test_public_endpoint(self):
        req = GetDepth(market="btcusdt", limit=5).to_request()

        assert req.url == (
            "https://max-api.maicoin.com/api/v2/depth"
            "?market=btcusdt&limit=5&sort_by_price=true"
        )

    def test_custom_base_url(self):
        req = GetTimestamp().to_request(base_url="https://sandbox.example.com/")
        assert req.url == "https://sandbox.example.com/api/v2/timestamp"

    def test_path_params_not_sent(self):
        """Test that path parameters are excluded from the query."""
        assert GetTickersOfMarket(market="btctwd").to_request().url == (
            "https://max-api.maicoin.com/api/v2/tickers/btctwd"
        )
        assert GetVIPByLevel(level=3).to_request().url == (
            "https://max-api.maicoin.com/api/v2/vip_levels/3"
        )

    def test_private_path_param_is_signed(self, credentials):
        req = GetAccountOfCurrency(currency="btc").to_request(credentials)

        assert req.url == "https://max-api.maicoin.com/api/v2/members/accounts/btc?nonce=1000"
        assert signed_document(req) == {
            "nonce": 1000,
            "path": "/api/v2/members/accounts/btc",
        }

    def test_private_endpoint_requires_credentials(self):
        with pytest.raises(ValueError):
            GetAccountOfCurrency(currency="btc").to_request()

    def test_get_orders_states(self, credentials):
        req = GetOrders(
            market="btctwd", state=[OrderState.WAIT, OrderState.CONVERT]
        ).to_request(credentials)

        query = parse_qsl(urlsplit(req.url).query)
        assert query == [
            ("market", "btctwd"),
            ("state[]", "wait"),
            ("state[]", "convert"),
            ("nonce", "1000"),
        ]

    def test_empty_list_dropped(self):
        assert GetOrders(market="btctwd").params() == {"market": "btctwd"}

    def test_create_order(self, credentials):
        """Test that order creation is a signed POST with decimal strings."""
        api = CreateOrder(
            market="btctwd",
            side=OrderSide.BUY,
            volume=Decimal("0.5"),
            price=Decimal("1000000"),
            ord_type=OrderType.LIMIT,
        )
        req = api.to_request(credentials)

        assert req.method == "POST"
        assert json.loads(req.body) == {
            "market": "btctwd",
            "side": "buy",
            "volume": "0.5",
            "price": "1000000",
            "ord_type": "limit",
            "nonce": 1000,
        }
        assert signed_document(req)["path"] == "/api/v2/orders"

    def test_client_oid_length(self):
        with pytest.raises(ValidationError):
            CreateOrder(
                market="btctwd",
                side=OrderSide.SELL,
                volume=Decimal("1"),
                ord_type=OrderType.MARKET,
                client_oid="x" * 37,
            )

    def test_clear_orders(self, credentials):
        req = ClearOrders(market="btctwd", side=OrderSide.SELL).to_request(credentials)
        assert json.loads(req.body) == {"market": "btctwd", "side": "sell", "nonce": 1000}

    def test_endpoint_read_response(self):
        currencies = GetCurrencies.read_response(
            '[{"id":"btc","precision":8,"sygna_supported":true},{"id":"twd","precision":0}]'
        )
        assert [c.id for c in currencies] == ["btc", "twd"]
        assert currencies[1].sygna_supported is False

    def test_summary_response(self):
        body = json.dumps(
            {
                "tickers": {
                    "btctwd": {
                        "at": 1637998469,
                        "buy": "1",
                        "sell": "2",
                        "open": "1",
                        "low": "1",
                        "high": "2",
                        "last": "1.5",
                        "vol": "10",
                        "vol_in_btc": "10",
                    }
                },
                "coins": {
                    "btc": {"name": "Bitcoin", "withdraw": "ON", "deposit": "off", "trade": "ON"}
                },
            }
        )
        summary = GetMarketsSummary.read_response(body)

        ticker = summary.tickers["btctwd"]
        assert ticker.last_price == Decimal("1.5")
        assert ticker.time == datetime(2021, 11, 27, 7, 34, 29, tzinfo=timezone.utc)
        assert summary.coins["btc"].withdraw is True
        assert summary.coins["btc"].deposit is False

    def test_public_endpoint_must_be_get(self):
        """Test that a public endpoint declared as POST is refused, not sent as GET."""

        class PublicPost(RestApi):
            method: ClassVar[str] = "POST"
            path: ClassVar[str] = "/api/v2/example"

        with pytest.raises(ValueError, match="public POST"):
            PublicPost().to_request()

    def test_unsupported_method(self, credentials):
        class PrivatePut(RestApi):
            method: ClassVar[str] = "PUT"
            auth: ClassVar[bool] = True
            path: ClassVar[str] = "/api/v2/example"

        with pytest.raises(ValueError, match="private PUT"):
            PrivatePut().to_request(credentials)


class TestTradeEndpoints:
    """Test trade history endpoints."""

    def test_public_trades(self):
        """Test that the time bound is sent as seconds and ids as from/to."""
        api = GetPublicTrades(
            market="btctwd",
            timestamp_before=datetime(2021, 11, 27, 7, 34, 29, tzinfo=timezone.utc),
            from_trade_id=10,
            order_by=OrderBy.ASC,
        )
        req = api.to_request()

        assert parse_qsl(urlsplit(req.url).query) == [
            ("market", "btctwd"),
            ("timestamp", "1637998469"),
            ("from", "10"),
            ("order_by", "asc"),
        ]
        assert req.headers == {}

    def test_public_trades_accepts_seconds(self):
        api = GetPublicTrades(market="btctwd", timestamp_before=1637998469)
        assert api.params() == {"market": "btctwd", "timestamp": 1637998469}

    def test_my_trades(self, credentials):
        req = GetMyTrades(market="ethtwd", to_trade_id=99, limit=10).to_request(credentials)

        assert signed_document(req) == {
            "market": "ethtwd",
            "to": 99,
            "limit": 10,
            "nonce": 1000,
            "path": "/api/v2/trades/my",
        }

    def test_my_trades_of_order(self, credentials):
        req = GetMyTradesOfOrder(client_oid="my-order").to_request(credentials)

        assert req.url == (
            "https://max-api.maicoin.com/api/v2/trades/my/of_order?client_oid=my-order&nonce=1000"
        )

    def test_trade_records(self):
        """Test reading trade records, with and without maker info."""
        body = json.dumps(
            [
                {
                    "id": 68444,
                    "price": "21499.0",
                    "volume": "0.2658",
                    "funds": "5714.4",
                    "market": "ethtwd",
                    "market_name": "ETH/TWD",
                    "created_at": 1521726960,
                    "created_at_in_ms": 1521726960357,
                    "side": "self-trade",
                    "fee": "3.2",
                    "fee_currency": "twd",
                    "order_id": 18,
                    "info": {
                        "maker": "ask",
                        "ask": {"fee": "3.2", "fee_currency": "twd", "order_id": 18},
                        "bid": {"fee": "0.0001", "fee_currency": "eth", "order_id": 19},
                    },
                },
                {
                    "id": 68445,
                    "market": "ethtwd",
                    "created_at": 1521726961,
                    "created_at_in_ms": 1521726961000,
                    "side": "bid",
                },
            ]
        )
        own, public = GetMyTrades.read_response(body)

        assert own.side is TradeSide.SELF_TRADE
        assert own.info.maker is TradeSide.ASK
        assert own.info.bid.order_id == 19
        assert own.created_at_in_ms.microsecond == 357000
        assert public.price is None
        assert public.info is None
        assert public.side is TradeSide.BID

    def test_trade_record_bad_side(self):
        with pytest.raises(ReadResponseError):
            GetPublicTrades.read_response(
                '[{"id":1,"market":"btctwd","created_at":1,"created_at_in_ms":1,"side":"up"}]'
            )
