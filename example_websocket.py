"""
Example: stream public tickers, or private trades after authenticating.

    python example_websocket.py ticker btctwd
    MAX_ACCESS_KEY=... MAX_SECRET_KEY=... python example_websocket.py trades

Requires the ``examples`` extra (``pip install max-sdk[examples]``).
"""

import asyncio
import sys

import websockets

from max_sdk import (
    AuthAck,
    ChannelSubscriptionSet,
    LogLevel,
    MaxClient,
    PrivateTradeFeed,
    PrivFeedType,
    ProtocolError,
    PublicTickerFeed,
    SubscribeAck,
    WsParseError,
)


async def stream_ticker(client: MaxClient, market: str) -> None:
    subscriptions = ChannelSubscriptionSet()
    subscriptions.insert_ticker(market)

    async with websockets.connect(client.ws_url, ping_interval=30) as ws:
        await ws.send(client.subscribe_frame(subscriptions, id="example"))

        async for raw in ws:
            try:
                event = client.parse_event(raw)
            except WsParseError as err:
                client.logger.error(f"Failed to parse server event: {err}")
                continue

            match event:
                case SubscribeAck():
                    client.logger.info(f"Subscribed to {len(event.subscriptions)} channels")
                case PublicTickerFeed():
                    tick = event.tick
                    print(f"{event.market} O:{tick.open} H:{tick.high} L:{tick.low} C:{tick.close}")
                case ProtocolError():
                    raise RuntimeError(f"Server error: {event.msg}")
                case _:
                    client.logger.warn(f"Unexpected event: {event!r}")


async def stream_private_trades(client: MaxClient) -> None:
    async with websockets.connect(client.ws_url, ping_interval=30) as ws:
        # The auth frame carries a time-based nonce: build it right before sending.
        await ws.send(client.auth_frame(id="example", filters=[PrivFeedType.TRADE]))

        async for raw in ws:
            try:
                event = client.parse_event(raw)
            except WsParseError as err:
                client.logger.error(f"Failed to parse server event: {err}")
                continue

            match event:
                case AuthAck():
                    client.logger.info("Authenticated")
                case PrivateTradeFeed():
                    for trade in event.trades:
                        print(f"{trade.market} {trade.side} {trade.volume} @ {trade.price}")
                case ProtocolError():
                    raise RuntimeError(f"Server error: {event.msg}")
                case _:
                    client.logger.warn(f"Unexpected event: {event!r}")


async def main() -> None:
    mode = sys.argv[1] if len(sys.argv) > 1 else "ticker"
    if mode == "trades":
        await stream_private_trades(MaxClient.from_env(log_level=LogLevel.DEBUG))
    else:
        market = sys.argv[2] if len(sys.argv) > 2 else "btctwd"
        await stream_ticker(MaxClient(log_level=LogLevel.DEBUG), market)


if __name__ == "__main__":
    asyncio.run(main())
