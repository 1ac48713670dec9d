"""Public channel subscriptions and the sub/unsub control frames."""

from enum import Enum
from typing import Any, Iterable, Iterator, Literal, Optional

from pydantic import BaseModel, Field, GetCoreSchemaHandler, NonNegativeInt
from pydantic_core import core_schema

from .exceptions import WsInvalidValueError
from .types import Symbol


class PubChannelType(str, Enum):
    """Public channels that can be subscribed; values are the wire names."""

    ORDERBOOK = "book"
    TRADE = "trade"
    TICKER = "ticker"

    @classmethod
    def parse(cls, name: str) -> "PubChannelType":
        """
        Parse a channel name (case-insensitive, "orderbook" is an alias of "book").

        Raises:
            WsInvalidValueError: Unknown channel name
        """
        lowered = name.lower()
        if lowered == "orderbook":
            return cls.ORDERBOOK
        try:
            return cls(lowered)
        except ValueError:
            raise WsInvalidValueError(name, "book/orderbook/trade/ticker") from None


class PubChannelDetails(BaseModel):
    """One subscription entry as it appears on the wire."""

    channel: str
    market: Symbol
    depth: Optional[NonNegativeInt] = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ChannelSubscriptionSet:
    """
    Set of public channel subscriptions, unique by (channel, market).

    Inserting an existing key replaces its details (e.g. a new orderbook
    depth). On the wire the set is a JSON array of ``{channel, market,
    depth?}`` objects in no particular order.
    """

    def __init__(self, entries: Optional[Iterable[PubChannelDetails]] = None):
        self._entries: dict[tuple[PubChannelType, Symbol], PubChannelDetails] = {}
        for entry in entries or ():
            self.insert_entry(entry)

    def _put(
        self, channel: PubChannelType, market: Symbol, depth: Optional[int] = None
    ) -> bool:
        key = (channel, market)
        is_new = key not in self._entries
        self._entries[key] = PubChannelDetails(
            channel=channel.value, market=market, depth=depth
        )
        return is_new

    def insert_orderbook(self, market: Symbol, depth: Optional[int] = None) -> bool:
        """Insert an orderbook subscription. Returns True if the key was new."""
        return self._put(PubChannelType.ORDERBOOK, market, depth)

    def insert_trade(self, market: Symbol) -> bool:
        """Insert a trade subscription. Returns True if the key was new."""
        return self._put(PubChannelType.TRADE, market)

    def insert_ticker(self, market: Symbol) -> bool:
        """Insert a ticker subscription. Returns True if the key was new."""
        return self._put(PubChannelType.TICKER, market)

    def insert_entry(self, entry: PubChannelDetails) -> bool:
        """
        Insert a wire entry, normalizing its channel name.

        Raises:
            WsInvalidValueError: The entry names an unknown channel
        """
        channel = PubChannelType.parse(entry.channel)
        return self._put(channel, entry.market, entry.depth)

    def remove_orderbook(self, market: Symbol) -> bool:
        return self._entries.pop((PubChannelType.ORDERBOOK, market), None) is not None

    def remove_trade(self, market: Symbol) -> bool:
        return self._entries.pop((PubChannelType.TRADE, market), None) is not None

    def remove_ticker(self, market: Symbol) -> bool:
        return self._entries.pop((PubChannelType.TICKER, market), None) is not None

    def get(self, channel: PubChannelType, market: Symbol) -> Optional[PubChannelDetails]:
        return self._entries.get((channel, market))

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PubChannelDetails]:
        return iter(list(self._entries.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChannelSubscriptionSet):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ChannelSubscriptionSet({[e.to_wire() for e in self]!r})"

    # ===== Wire format =====

    def to_list(self) -> list[dict[str, Any]]:
        """Wire array of subscription entries."""
        return [entry.to_wire() for entry in self._entries.values()]

    @classmethod
    def from_list(cls, items: Iterable[Any]) -> "ChannelSubscriptionSet":
        """
        Rebuild a set from a wire array; later entries win on duplicate keys.

        Raises:
            WsInvalidValueError: An entry names an unknown channel
        """
        subset = cls()
        for item in items:
            subset.insert_entry(PubChannelDetails.model_validate(item))
        return subset

    @classmethod
    def _validate(cls, value: Any) -> "ChannelSubscriptionSet":
        if isinstance(value, cls):
            return value
        if not isinstance(value, (list, tuple)):
            raise ValueError("subscriptions must be an array")
        return cls.from_list(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda subset: subset.to_list()
            ),
        )


class SubRequest(BaseModel):
    """
    Channel subscription/unsubscription request.

    Example:
        ```python
        req = SubRequest.subscribe("client-1")
        req.subscriptions.insert_ticker("btctwd")
        ws.send(req.to_json())
        ```
    """

    action: Literal["sub", "unsub"]
    subscriptions: ChannelSubscriptionSet = Field(default_factory=ChannelSubscriptionSet)
    id: str = ""

    @classmethod
    def subscribe(cls, id: str = "") -> "SubRequest":
        return cls(action="sub", id=id)

    @classmethod
    def unsubscribe(cls, id: str = "") -> "SubRequest":
        return cls(action="unsub", id=id)

    def to_json(self) -> str:
        return self.model_dump_json()
