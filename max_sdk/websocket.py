"""Websocket control frames and server push event classification.

This module only builds outgoing frames and parses incoming text frames. The
caller owns the connection (connect, keep-alive pings, reconnects).

Example:
    ```python
    async with websockets.connect(WS_BASE_URL) as ws:
        await ws.send(AuthRequest.create(credentials).to_json())
        match parse_event(await ws.recv()):
            case AuthAck():
                ...
            case ProtocolError() as err:
                raise RuntimeError(err.msg)
    ```
"""

import json
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer

from .credentials import Credentials
from .exceptions import UnknownEventError, WsParseError
from .feed import (
    PrivateBalanceFeed,
    PrivateOrderbookFeed,
    PrivateTradeFeed,
    PublicMarketStatusFeed,
    PublicOrderbookFeed,
    PublicTickerFeed,
    PublicTradeFeed,
)
from .logger import Logger, NoopLogger
from .signing import sign_nonce
from .subscription import ChannelSubscriptionSet
from .types import MillisTime, PrivFeedType

WS_BASE_URL = "wss://max-stream.maicoin.com/ws"


# ============================================================================
# Client side requests
# ============================================================================


class AuthRequest(BaseModel):
    """
    Authentication request for private channels.

    The nonce is time-based: send the frame right after creating it.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    action: str = "auth"
    api_key: str = Field(serialization_alias="apiKey")
    nonce: int
    signature: str
    id: Optional[str] = None
    filters: Optional[list[PrivFeedType]] = None

    @classmethod
    def create(
        cls,
        credentials: Credentials,
        id: Optional[str] = None,
        filters: Optional[list[PrivFeedType]] = None,
    ) -> "AuthRequest":
        """
        Build an auth request with a fresh nonce from the credentials.

        Args:
            credentials: API credentials
            id: Client id echoed back in the response
            filters: Private feeds to receive; all feeds when omitted
        """
        return cls.with_nonce(
            credentials.access_key, credentials.secret_key, credentials.next_nonce(), id, filters
        )

    @classmethod
    def with_nonce(
        cls,
        api_key: str,
        secret_key: str,
        nonce: int,
        id: Optional[str] = None,
        filters: Optional[list[PrivFeedType]] = None,
    ) -> "AuthRequest":
        """Build an auth request for an explicit nonce."""
        return cls(
            api_key=api_key,
            nonce=nonce,
            signature=sign_nonce(secret_key, nonce),
            id=id,
            filters=filters,
        )

    @field_serializer("filters")
    def _serialize_filters(self, filters: Optional[list[PrivFeedType]]) -> Optional[list[str]]:
        if filters is None:
            return None
        return [f.value for f in filters]

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


# ============================================================================
# Server push events
# ============================================================================


class _PushModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ProtocolError(_PushModel):
    """Error pushed by the server (the ``E`` array), e.g. a rejected request."""

    msg: list[str] = Field(alias="E")
    id: str = Field(alias="i")
    time: MillisTime = Field(alias="T")


class _SubscriptionAck(_PushModel):
    event: Literal["subscribed", "unsubscribed"] = Field(alias="e")
    subscriptions: ChannelSubscriptionSet = Field(alias="s")
    id: str = Field(alias="i")
    time: MillisTime = Field(alias="T")

    @property
    def is_subscribe(self) -> bool:
        return self.event == "subscribed"


class SubscribeAck(_SubscriptionAck):
    """Response of a channel subscription."""


class UnsubscribeAck(_SubscriptionAck):
    """Response of a channel unsubscription."""


class AuthAck(_PushModel):
    """Authentication succeeded."""

    id: str = Field(alias="i")
    time: MillisTime = Field(alias="T")


ServerPushEvent = Union[
    ProtocolError,
    SubscribeAck,
    UnsubscribeAck,
    AuthAck,
    PublicOrderbookFeed,
    PublicTradeFeed,
    PublicTickerFeed,
    PublicMarketStatusFeed,
    PrivateOrderbookFeed,
    PrivateTradeFeed,
    PrivateBalanceFeed,
]

Rule = Callable[[str, str], bool]

# Ordered dispatch table on (event type, channel); the first match wins.
DISPATCH_RULES: list[tuple[Rule, type[BaseModel]]] = [
    # channel states
    (lambda e, c: e == "subscribed", SubscribeAck),
    (lambda e, c: e == "unsubscribed", UnsubscribeAck),
    (lambda e, c: e == "authenticated", AuthAck),
    # public channels
    (lambda e, c: c == "book", PublicOrderbookFeed),
    (lambda e, c: c == "trade", PublicTradeFeed),
    (lambda e, c: c == "ticker", PublicTickerFeed),
    (lambda e, c: c == "market_status", PublicMarketStatusFeed),
    # private channels
    (lambda e, c: c == "user" and e.startswith("order_"), PrivateOrderbookFeed),
    (lambda e, c: c == "user" and e.startswith("trade_"), PrivateTradeFeed),
    (lambda e, c: c == "user" and e.startswith("account_"), PrivateBalanceFeed),
]


def _discriminant(root: dict[str, Any], key: str) -> str:
    value = root.get(key)
    return value if isinstance(value, str) else "N/A"


def select_event_type(root: dict[str, Any]) -> type[BaseModel]:
    """
    Pick the event class of a decoded push message without parsing it.

    Raises:
        UnknownEventError: No dispatch rule matches
    """
    if isinstance(root.get("E"), list):
        return ProtocolError
    event_type = _discriminant(root, "e")
    channel = _discriminant(root, "c")
    for matches, event_cls in DISPATCH_RULES:
        if matches(event_type, channel):
            return event_cls
    raise UnknownEventError(event_type, channel)


def parse_event(
    raw: Union[str, bytes, dict[str, Any]], logger: Optional[Logger] = None
) -> ServerPushEvent:
    """
    Classify and parse a message pushed by the server.

    Args:
        raw: Text frame, or an already decoded JSON object
        logger: Logger for classification diagnostics

    Returns:
        One of the ``ServerPushEvent`` variants

    Raises:
        UnknownEventError: The (event type, channel) pair is not recognized
        WsParseError: The frame is not a JSON object, or its body does not
            match the selected event
    """
    logger = logger or NoopLogger()
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            root = json.loads(raw)
        except ValueError as err:
            raise WsParseError(f"Invalid JSON frame: {err}") from err
    else:
        root = raw
    if not isinstance(root, dict):
        raise WsParseError(f"Expected a JSON object, got {type(root).__name__}")

    event_type = _discriminant(root, "e")
    channel = _discriminant(root, "c")
    try:
        event_cls = select_event_type(root)
    except UnknownEventError:
        logger.warn(f"Unrecognized push event {{e: {event_type}, c: {channel}}}")
        raise

    try:
        event = event_cls.model_validate(root)
    except ValidationError as err:
        raise WsParseError(
            f"Failed to parse {event_cls.__name__}: {err}",
            event_type=event_type,
            channel=channel,
        ) from err

    logger.debug(f"Received {event_cls.__name__}")
    return event

