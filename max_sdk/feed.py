"""Feed messages pushed by the websocket server.

MAX pushes the following feeds:

- Public orderbooks (``PublicOrderbookFeed``)
- Public trades (``PublicTradeFeed``)
- Public tickers (``PublicTickerFeed``)
- Public market status (``PublicMarketStatusFeed``)
- Private orders (``PrivateOrderbookFeed``)
- Private trades (``PrivateTradeFeed``)
- Private balance changes (``PrivateBalanceFeed``)

Every feed carries ``is_snapshot``: ``True`` when the message replaces the
whole state, ``False`` for an incremental update. Public feeds send the
literal ``snapshot``/``update`` in ``e``; private feeds send
``<kind>_snapshot``/``<kind>_update``.
"""

from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .exceptions import WsInvalidValueError
from .types import MillisTime, PriceLevel, Symbol


def parse_public_feed_type(value: Any) -> bool:
    """
    Parse the ``e`` field of a public feed.

    Returns:
        True for "snapshot", False for "update" (case-insensitive)

    Raises:
        WsInvalidValueError: Any other value
    """
    if not isinstance(value, str):
        raise WsInvalidValueError(repr(value), "snapshot/update")
    lowered = value.lower()
    if lowered == "snapshot":
        return True
    if lowered == "update":
        return False
    raise WsInvalidValueError(value, "snapshot/update")


def parse_private_feed_type(value: Any) -> bool:
    """
    Parse the ``e`` field of a private feed.

    Returns:
        True for "*_snapshot", False for "*_update" (case-insensitive)

    Raises:
        WsInvalidValueError: Any other value
    """
    if not isinstance(value, str):
        raise WsInvalidValueError(repr(value), "*_snapshot/*_update")
    lowered = value.lower()
    if lowered.endswith("_snapshot"):
        return True
    if lowered.endswith("_update"):
        return False
    raise WsInvalidValueError(value, "*_snapshot/*_update")


PublicFeedType = Annotated[bool, BeforeValidator(parse_public_feed_type)]
PrivateFeedType = Annotated[bool, BeforeValidator(parse_private_feed_type)]


class _FeedModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


# ============================================================================
# Public channels
# ============================================================================

OrderbookRec = PriceLevel


class PublicOrderbookFeed(_FeedModel):
    """Orderbook feed from the public ``book`` channel."""

    is_snapshot: PublicFeedType = Field(alias="e")
    market: Symbol = Field(alias="M")
    asks: list[OrderbookRec] = Field(alias="a")
    bids: list[OrderbookRec] = Field(alias="b")
    time: MillisTime = Field(alias="T")

    def records(self) -> tuple[list[OrderbookRec], list[OrderbookRec]]:
        return self.asks, self.bids


class PublicTradeRec(_FeedModel):
    price: Decimal = Field(alias="p")
    volume: Decimal = Field(alias="v")
    create_time: MillisTime = Field(alias="T")
    trend: str = Field(alias="tr")


class PublicTradeFeed(_FeedModel):
    """Trade feed from the public ``trade`` channel."""

    is_snapshot: PublicFeedType = Field(alias="e")
    market: Symbol = Field(alias="M")
    trades: list[PublicTradeRec] = Field(alias="t")
    time: MillisTime = Field(alias="T")

    def records(self) -> list[PublicTradeRec]:
        return self.trades


class TickerRec(_FeedModel):
    """OHLC and volume of a ticker."""

    open: Decimal = Field(alias="O")
    high: Decimal = Field(alias="H")
    low: Decimal = Field(alias="L")
    close: Decimal = Field(alias="C")
    volume: Decimal = Field(alias="v")


class PublicTickerFeed(_FeedModel):
    """Ticker feed from the public ``ticker`` channel."""

    is_snapshot: PublicFeedType = Field(alias="e")
    market: Symbol = Field(alias="M")
    tick: TickerRec = Field(alias="tk")
    time: MillisTime = Field(alias="T")

    def records(self) -> TickerRec:
        return self.tick


class MarketStatusInfo(_FeedModel):
    market: Symbol = Field(alias="M")
    status: str = Field(alias="st")
    base_unit: str = Field(alias="bu")
    base_unit_precision: int = Field(alias="bup")
    min_base_amount: Decimal = Field(alias="mba")
    quote_unit: str = Field(alias="qu")
    quote_unit_precision: int = Field(alias="qup")
    min_quote_amount: Decimal = Field(alias="mqa")
    m_wallet_supported: bool = Field(alias="mws")


class PublicMarketStatusFeed(_FeedModel):
    """Market status feed from the public ``market_status`` channel."""

    is_snapshot: PublicFeedType = Field(alias="e")
    markets: list[MarketStatusInfo] = Field(alias="ms")
    time: Optional[MillisTime] = Field(default=None, alias="T")

    def records(self) -> list[MarketStatusInfo]:
        return self.markets


# ============================================================================
# Private (authenticated) channels
# ============================================================================


class PrivateOrderRec(_FeedModel):
    oid: int = Field(alias="i")
    side: str = Field(alias="sd")
    ord_type: str = Field(alias="ot")
    price: Optional[Decimal] = Field(default=None, alias="p")
    stop_price: Optional[Decimal] = Field(default=None, alias="sp")
    avg_price: Optional[Decimal] = Field(default=None, alias="ap")
    state: str = Field(alias="S")
    market: Symbol = Field(alias="M")
    create_time: MillisTime = Field(alias="T")
    volume: Decimal = Field(alias="v")
    remaining_volume: Optional[Decimal] = Field(default=None, alias="rv")
    executed_volume: Optional[Decimal] = Field(default=None, alias="ev")
    trade_count: Optional[int] = Field(default=None, alias="tc")
    client_oid: Optional[str] = Field(default=None, alias="ci")
    group_id: Optional[int] = Field(default=None, alias="gi")


class PrivateOrderbookFeed(_FeedModel):
    """Order updates from the private ``user`` channel."""

    is_snapshot: PrivateFeedType = Field(alias="e")
    orders: list[PrivateOrderRec] = Field(alias="o")
    time: MillisTime = Field(alias="T")

    def records(self) -> list[PrivateOrderRec]:
        return self.orders


class PrivateTradeRec(_FeedModel):
    tid: int = Field(alias="i")
    side: str = Field(alias="sd")
    price: Decimal = Field(alias="p")
    volume: Decimal = Field(alias="v")
    market: Symbol = Field(alias="M")
    create_time: MillisTime = Field(alias="T")
    fee: Decimal = Field(alias="f")
    fee_currency: str = Field(alias="fc")
    is_maker: bool = Field(alias="m")


class PrivateTradeFeed(_FeedModel):
    """Filled trades from the private ``user`` channel."""

    is_snapshot: PrivateFeedType = Field(alias="e")
    trades: list[PrivateTradeRec] = Field(alias="t")
    time: MillisTime = Field(alias="T")

    def records(self) -> list[PrivateTradeRec]:
        return self.trades


class BalanceItem(_FeedModel):
    currency: str = Field(alias="cu")
    available: Decimal = Field(alias="av")
    locked: Decimal = Field(alias="l")


class PrivateBalanceFeed(_FeedModel):
    """Balance changes from the private ``user`` channel."""

    is_snapshot: PrivateFeedType = Field(alias="e")
    balances: list[BalanceItem] = Field(alias="B")
    time: MillisTime = Field(alias="T")

    def records(self) -> list[BalanceItem]:
        return self.balances

