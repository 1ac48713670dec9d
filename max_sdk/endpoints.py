"""REST API v2 endpoints.

Each class holds the parameters of one endpoint; build the request with
``to_request`` and parse the body with ``read_response``.
"""

from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import Field

from .rest import RestApi
from .types import (
    CurrencyInfo,
    MarketInfo,
    OrderBy,
    OrderSide,
    OrderState,
    OrderType,
    RespAccountCurrencyInfo,
    RespDepth,
    RespOrder,
    RespSummary,
    RespTickerInfo,
    RespVIPLevel,
    SecondsParam,
    Symbol,
    TradeRecord,
)

# ============================================================================
# Public
# ============================================================================


class GetCurrencies(RestApi):
    """GET /api/v2/currencies: all available currencies."""

    path: ClassVar[str] = "/api/v2/currencies"
    response_type: ClassVar = list[CurrencyInfo]


class GetTimestamp(RestApi):
    """GET /api/v2/timestamp: server time in seconds since Unix epoch."""

    path: ClassVar[str] = "/api/v2/timestamp"
    response_type: ClassVar = int


class GetMarkets(RestApi):
    """GET /api/v2/markets: all available markets."""

    path: ClassVar[str] = "/api/v2/markets"
    response_type: ClassVar = list[MarketInfo]


class GetMarketsSummary(RestApi):
    """GET /api/v2/summary: overview of market data for all tickers."""

    path: ClassVar[str] = "/api/v2/summary"
    response_type: ClassVar = RespSummary


class GetDepth(RestApi):
    """GET /api/v2/depth: depth of a specified market."""

    path: ClassVar[str] = "/api/v2/depth"
    response_type: ClassVar = RespDepth

    market: Symbol
    # Returned price levels limit, default to maximum value
    limit: Optional[int] = None
    sort_by_price: bool = True


class GetPublicTrades(RestApi):
    """GET /api/v2/trades: recent trades of a market, newest first."""

    path: ClassVar[str] = "/api/v2/trades"
    response_type: ClassVar = list[TradeRecord]

    market: Symbol
    # Only trades executed before this time
    timestamp_before: SecondsParam = Field(serialization_alias="timestamp")
    from_trade_id: Optional[int] = Field(default=None, serialization_alias="from")
    to_trade_id: Optional[int] = Field(default=None, serialization_alias="to")
    order_by: Optional[OrderBy] = None
    pagination: Optional[bool] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class GetTickersOfMarket(RestApi):
    """GET /api/v2/tickers/{market}: ticker of a specific market."""

    response_type: ClassVar = RespTickerInfo

    market: Symbol = Field(exclude=True)

    def endpoint_path(self) -> str:
        return f"/api/v2/tickers/{self.market}"


class GetVIPByLevel(RestApi):
    """GET /api/v2/vip_levels/{level}: VIP level fee by level."""

    response_type: ClassVar = RespVIPLevel

    level: int = Field(exclude=True)

    def endpoint_path(self) -> str:
        return f"/api/v2/vip_levels/{self.level}"


# ============================================================================
# Private
# ============================================================================


class GetAccountOfCurrency(RestApi):
    """GET /api/v2/members/accounts/{currency}: personal account of a currency."""

    auth: ClassVar[bool] = True
    response_type: ClassVar = RespAccountCurrencyInfo

    currency: str = Field(exclude=True)

    def endpoint_path(self) -> str:
        return f"/api/v2/members/accounts/{self.currency}"


class GetOrder(RestApi):
    """GET /api/v2/order: a specific order, by id or client order id."""

    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/order"
    response_type: ClassVar = RespOrder

    id: Optional[int] = None
    client_oid: Optional[str] = None


class GetOrders(RestApi):
    """
    GET /api/v2/orders: your orders, paginated.

    ``state`` is sent as repeated ``state[]`` query pairs; the server
    defaults to ``wait`` and ``convert`` when it is empty.
    """

    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/orders"
    response_type: ClassVar = list[RespOrder]

    market: Symbol
    state: list[OrderState] = []
    order_by: Optional[OrderBy] = None
    group_id: Optional[int] = None
    pagination: Optional[bool] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class CreateOrder(RestApi):
    """POST /api/v2/orders: create a sell/buy order."""

    method: ClassVar[str] = "POST"
    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/orders"
    response_type: ClassVar = RespOrder

    market: Symbol
    side: OrderSide
    volume: Decimal
    price: Optional[Decimal] = None
    client_oid: Optional[str] = Field(default=None, max_length=36)
    stop_price: Optional[Decimal] = None
    ord_type: OrderType
    group_id: Optional[int] = None


class DeleteOrder(RestApi):
    """POST /api/v2/order/delete: cancel an order."""

    method: ClassVar[str] = "POST"
    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/order/delete"
    response_type: ClassVar = RespOrder

    id: Optional[int] = None
    client_oid: Optional[str] = None


class ClearOrders(RestApi):
    """POST /api/v2/orders/clear: cancel all orders of a market and side."""

    method: ClassVar[str] = "POST"
    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/orders/clear"
    response_type: ClassVar = list[RespOrder]

    market: Symbol
    side: OrderSide
    group_id: Optional[int] = None


class GetMyTrades(RestApi):
    """GET /api/v2/trades/my: your executed trades, newest first."""

    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/trades/my"
    response_type: ClassVar = list[TradeRecord]

    market: Symbol
    timestamp_before: Optional[SecondsParam] = Field(default=None, serialization_alias="timestamp")
    from_trade_id: Optional[int] = Field(default=None, serialization_alias="from")
    to_trade_id: Optional[int] = Field(default=None, serialization_alias="to")
    order_by: Optional[OrderBy] = None
    pagination: Optional[bool] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


class GetMyTradesOfOrder(RestApi):
    """GET /api/v2/trades/my/of_order: your executed trades of an order."""

    auth: ClassVar[bool] = True
    path: ClassVar[str] = "/api/v2/trades/my/of_order"
    response_type: ClassVar = list[TradeRecord]

    id: Optional[int] = None
    client_oid: Optional[str] = None
