"""Type definitions for the MAX SDK."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from .format import datetime_to_seconds, millis_to_datetime, parse_on_off, seconds_to_datetime

# Unique market id, check /api/v2/markets for available markets.
Symbol = str

MillisTime = Annotated[datetime, BeforeValidator(millis_to_datetime)]
SecondsTime = Annotated[datetime, BeforeValidator(seconds_to_datetime)]
OnOff = Annotated[bool, BeforeValidator(parse_on_off)]

# Request parameter sent as seconds since Unix epoch.
SecondsParam = Annotated[
    datetime,
    BeforeValidator(seconds_to_datetime),
    PlainSerializer(datetime_to_seconds, return_type=int),
]


# ============================================================================
# Enums
# ============================================================================


class OrderSide(str, Enum):
    """Side information used in orders."""

    SELL = "sell"
    BUY = "buy"
    UNKNOWN = "unknown"


class TradeSide(str, Enum):
    """Side information used in trade records."""

    ASK = "ask"
    BID = "bid"
    SELF_TRADE = "self-trade"
    UNKNOWN = "unknown"


class OrderType(str, Enum):
    """Order type."""

    LIMIT = "limit"
    MARKET = "market"
    STOP_LIMIT = "stop_limit"
    STOP_MARKET = "stop_market"
    POST_ONLY = "post_only"
    IOC_LIMIT = "ioc_limit"
    UNKNOWN = "unknown"


class OrderState(str, Enum):
    """Order state."""

    WAIT = "wait"
    DONE = "done"
    CANCEL = "cancel"
    CONVERT = "convert"
    FINALIZING = "finalizing"
    FAILED = "failed"
    UNKNOWN = "unknown"


class OrderBy(str, Enum):
    """Sort order on created time."""

    ASC = "asc"
    DESC = "desc"


class PrivFeedType(str, Enum):
    """Private feed filters accepted by the websocket auth request."""

    ORDER = "order"
    TRADE = "trade"
    ACCOUNT = "account"
    TRADE_UPDATE = "trade_update"


# ============================================================================
# REST Response Models
# ============================================================================


class _Record(BaseModel):
    """Response record; unknown fields from the server are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ErrorDetail(_Record):
    code: int
    message: str


class ErrorEnvelope(_Record):
    """Error body returned by the REST API."""

    error: ErrorDetail


class CurrencyInfo(_Record):
    """Response of GET /api/v2/currencies."""

    id: str = ""
    precision: int = 0
    sygna_supported: bool = False


class MarketInfo(_Record):
    """Market information."""

    id: Symbol = ""
    name: str = ""
    base_unit: str = ""
    base_unit_precision: int = 0
    min_base_amount: Decimal = Decimal(0)
    quote_unit: str = ""
    quote_unit_precision: int = 0
    min_quote_amount: Decimal = Decimal(0)


class CoinInfo(_Record):
    """Coin availability flags, pushed as "ON"/"OFF"."""

    name: str
    withdraw: OnOff
    deposit: OnOff
    trade: OnOff


class PriceLevel(_Record):
    """Orderbook price level, pushed as a ``[price, volume]`` pair."""

    price: Decimal
    volume: Decimal

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("price level must be a [price, volume] pair")
            return {"price": value[0], "volume": value[1]}
        return value


class RespDepth(_Record):
    """Depth of a market."""

    time: SecondsTime = Field(alias="timestamp")
    last_update_version: int
    last_update_id: int
    asks: list[PriceLevel]
    bids: list[PriceLevel]


class RespTickerInfo(_Record):
    """Ticker of a market."""

    time: SecondsTime = Field(alias="at")
    buy: Decimal
    sell: Decimal
    open: Decimal
    low: Decimal
    high: Decimal
    last_price: Decimal = Field(alias="last")
    volume: Decimal = Field(alias="vol")
    volume_in_btc: Decimal = Field(alias="vol_in_btc")


class RespSummary(_Record):
    """Overview of market data for all tickers."""

    tickers: dict[Symbol, RespTickerInfo] = {}
    coins: dict[str, CoinInfo] = {}


class RespVIPLevel(_Record):
    """VIP level fees."""

    level: int = 0
    minimum_trading_volume: Decimal = Decimal(0)
    minimum_staking_volume: Decimal = Decimal(0)
    maker_fee: Decimal = Decimal(0)
    taker_fee: Decimal = Decimal(0)


class RespAccountCurrencyInfo(_Record):
    """Personal account information of a currency."""

    currency: str
    balance: Decimal
    locked: Decimal
    wallet_type: str = Field(alias="type")
    fiat_currency: Optional[str] = None
    fiat_balance: Optional[Decimal] = None


class RespOrder(_Record):
    """Submitted order detail."""

    id: Optional[int] = None
    client_oid: Optional[str] = None
    side: OrderSide = OrderSide.UNKNOWN
    ord_type: OrderType = OrderType.UNKNOWN
    price: Optional[Decimal] = None
    stop_price: Optional[Decimal] = None
    avg_price: Optional[Decimal] = None
    state: OrderState = OrderState.UNKNOWN
    market: Symbol = ""
    created_at: Optional[SecondsTime] = None
    created_at_in_ms: Optional[MillisTime] = None
    updated_at: Optional[SecondsTime] = None
    updated_at_in_ms: Optional[MillisTime] = None
    volume: Optional[Decimal] = None
    remaining_volume: Optional[Decimal] = None
    executed_volume: Optional[Decimal] = None
    trades_count: Optional[int] = None
    group_id: Optional[int] = None


class TradeMakerInfo(_Record):
    """Fee and order of one side of your own trade."""

    fee: Decimal
    fee_currency: str
    order_id: int


class TradeInfo(_Record):
    """Maker side of a trade, with the details of your side(s)."""

    maker: TradeSide = TradeSide.UNKNOWN
    ask: Optional[TradeMakerInfo] = None
    bid: Optional[TradeMakerInfo] = None


class TradeRecord(_Record):
    """
    Trade record.

    ``side`` is the maker side for public trades, and the side of your order
    when querying your own trades.
    """

    id: int
    price: Optional[Decimal] = None
    volume: Optional[Decimal] = None
    funds: Optional[Decimal] = None
    market: Symbol
    market_name: str = ""
    created_at: SecondsTime
    created_at_in_ms: MillisTime
    side: TradeSide = TradeSide.UNKNOWN
    fee: Optional[Decimal] = None
    fee_currency: Optional[str] = None
    order_id: Optional[int] = None
    info: Optional[TradeInfo] = None
