"""MaiCoin MAX exchange SDK for Python."""

# Main unified client
from .sdk import MaxClient

# Credentials and signing
from .credentials import Credentials
from .signing import SignedPayload, sign_nonce, sign_payload

# REST
from .rest import (
    BASE_URL,
    RequestDescriptor,
    RestApi,
    build_auth_get,
    build_auth_post,
    build_unauth_get,
    read_response,
)
from .endpoints import (
    ClearOrders,
    CreateOrder,
    DeleteOrder,
    GetAccountOfCurrency,
    GetCurrencies,
    GetDepth,
    GetMarkets,
    GetMarketsSummary,
    GetMyTrades,
    GetMyTradesOfOrder,
    GetOrder,
    GetOrders,
    GetPublicTrades,
    GetTickersOfMarket,
    GetTimestamp,
    GetVIPByLevel,
)

# WebSocket
from .subscription import ChannelSubscriptionSet, PubChannelDetails, PubChannelType, SubRequest
from .websocket import (
    WS_BASE_URL,
    AuthAck,
    AuthRequest,
    ProtocolError,
    ServerPushEvent,
    SubscribeAck,
    UnsubscribeAck,
    parse_event,
)
from .feed import (
    BalanceItem,
    MarketStatusInfo,
    OrderbookRec,
    PrivateBalanceFeed,
    PrivateOrderbookFeed,
    PrivateOrderRec,
    PrivateTradeFeed,
    PrivateTradeRec,
    PublicMarketStatusFeed,
    PublicOrderbookFeed,
    PublicTickerFeed,
    PublicTradeFeed,
    PublicTradeRec,
    TickerRec,
)

# Services
from .logger import Logger, ConsoleLogger, NoopLogger, LogLevel

# Types
from .types import (
    CurrencyInfo,
    MarketInfo,
    OrderBy,
    OrderSide,
    OrderState,
    OrderType,
    PriceLevel,
    PrivFeedType,
    RespAccountCurrencyInfo,
    RespDepth,
    RespOrder,
    RespSummary,
    RespTickerInfo,
    RespVIPLevel,
    TradeInfo,
    TradeMakerInfo,
    TradeRecord,
    TradeSide,
)

# Exceptions
from .exceptions import (
    MaxError,
    ApiError,
    ReadResponseError,
    WsInvalidValueError,
    WsParseError,
    UnknownEventError,
)

__all__ = [
    # Main client
    "MaxClient",
    # Credentials and signing
    "Credentials",
    "SignedPayload",
    "sign_payload",
    "sign_nonce",
    # REST
    "BASE_URL",
    "RequestDescriptor",
    "RestApi",
    "build_unauth_get",
    "build_auth_get",
    "build_auth_post",
    "read_response",
    "GetCurrencies",
    "GetTimestamp",
    "GetMarkets",
    "GetMarketsSummary",
    "GetDepth",
    "GetPublicTrades",
    "GetTickersOfMarket",
    "GetVIPByLevel",
    "GetAccountOfCurrency",
    "GetOrder",
    "GetOrders",
    "CreateOrder",
    "DeleteOrder",
    "ClearOrders",
    "GetMyTrades",
    "GetMyTradesOfOrder",
    # WebSocket
    "WS_BASE_URL",
    "ChannelSubscriptionSet",
    "PubChannelDetails",
    "PubChannelType",
    "SubRequest",
    "AuthRequest",
    "ServerPushEvent",
    "ProtocolError",
    "SubscribeAck",
    "UnsubscribeAck",
    "AuthAck",
    "parse_event",
    # Feeds
    "PublicOrderbookFeed",
    "PublicTradeFeed",
    "PublicTickerFeed",
    "PublicMarketStatusFeed",
    "PrivateOrderbookFeed",
    "PrivateTradeFeed",
    "PrivateBalanceFeed",
    "OrderbookRec",
    "PublicTradeRec",
    "TickerRec",
    "MarketStatusInfo",
    "PrivateOrderRec",
    "PrivateTradeRec",
    "BalanceItem",
    # Logging
    "Logger",
    "ConsoleLogger",
    "NoopLogger",
    "LogLevel",
    # Domain types
    "OrderSide",
    "TradeSide",
    "OrderType",
    "OrderState",
    "OrderBy",
    "PrivFeedType",
    "PriceLevel",
    "CurrencyInfo",
    "MarketInfo",
    "RespDepth",
    "RespTickerInfo",
    "RespSummary",
    "RespVIPLevel",
    "RespAccountCurrencyInfo",
    "RespOrder",
    "TradeRecord",
    "TradeInfo",
    "TradeMakerInfo",
    # Exceptions
    "MaxError",
    "ApiError",
    "ReadResponseError",
    "WsInvalidValueError",
    "WsParseError",
    "UnknownEventError",
]

__version__ = "0.1.0"
