"""Main MAX SDK client with a unified interface."""

from typing import Any, Optional, Union

from .credentials import Credentials, resolve_credentials
from .logger import ConsoleLogger, Logger, LogLevel
from .rest import BASE_URL, RequestDescriptor, RestApi
from .subscription import ChannelSubscriptionSet, SubRequest
from .types import PrivFeedType
from .websocket import WS_BASE_URL, AuthRequest, ServerPushEvent, parse_event


class MaxClient:
    """
    MAX SDK client bundling credentials, endpoints and logging.

    The client never opens connections itself: it builds requests and frames
    for the caller's transport, and parses what the transport receives.

    Example:
        ```python
        client = MaxClient.from_env()

        req = client.request(GetAccountOfCurrency(currency="btc"))
        body = httpx.request(req.method, req.url, headers=req.headers).content
        account = client.read_response(GetAccountOfCurrency, body)

        await ws.send(client.auth_frame(filters=[PrivFeedType.TRADE]))
        event = client.parse_event(await ws.recv())
        ```
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        credentials: Optional[Credentials] = None,
        rest_url: str = BASE_URL,
        ws_url: str = WS_BASE_URL,
        log_level: LogLevel = LogLevel.INFO,
        logger: Optional[Logger] = None,
    ):
        """
        Initialize the MAX SDK.

        Args:
            access_key: API access key (used with secret_key)
            secret_key: API secret key (used with access_key)
            credentials: Prebuilt credentials, takes precedence over the keys
            rest_url: Base URL for REST API
            ws_url: WebSocket URL
            log_level: Minimum log level
            logger: Custom logger instance
        """
        if not rest_url:
            raise ValueError("rest_url is required")

        self.logger = logger or ConsoleLogger(level=log_level)
        self.credentials = resolve_credentials(credentials, access_key, secret_key)
        self.rest_url = rest_url
        self.ws_url = ws_url

    @classmethod
    def from_env(
        cls,
        access_var: str = "MAX_ACCESS_KEY",
        secret_var: str = "MAX_SECRET_KEY",
        **kwargs: Any,
    ) -> "MaxClient":
        """Create a client with credentials read from environment variables."""
        return cls(credentials=Credentials.from_env(access_var, secret_var), **kwargs)

    @property
    def log_level(self) -> LogLevel:
        return self.logger.get_level()

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self.logger.set_level(level)

    def _require_credentials(self) -> Credentials:
        if self.credentials is None:
            raise ValueError("Credentials are required for private APIs")
        return self.credentials

    # ========================================================================
    # REST API
    # ========================================================================

    def request(self, api: RestApi) -> RequestDescriptor:
        """
        Build the request descriptor of an endpoint, signed if private.

        Raises:
            ValueError: Private endpoint and no credentials configured
        """
        credentials = self._require_credentials() if api.auth else None
        req = api.to_request(credentials, base_url=self.rest_url)
        self.logger.debug(f"{req.method} {req.url.split('?', 1)[0]}")
        return req

    def read_response(self, api: Union[RestApi, type[RestApi]], body: Union[str, bytes]) -> Any:
        """Unwrap a response body with the endpoint's response type."""
        return api.read_response(body)

    # ========================================================================
    # WebSocket
    # ========================================================================

    def auth_frame(
        self,
        id: Optional[str] = None,
        filters: Optional[list[PrivFeedType]] = None,
    ) -> str:
        """
        Build an authentication frame; send it immediately.

        Raises:
            ValueError: No credentials configured
        """
        frame = AuthRequest.create(self._require_credentials(), id=id, filters=filters)
        self.logger.debug("Built websocket auth frame")
        return frame.to_json()

    def subscribe_frame(self, subscriptions: ChannelSubscriptionSet, id: str = "") -> str:
        """Build a subscription frame for the given channels."""
        return self._sub_frame(SubRequest(action="sub", subscriptions=subscriptions, id=id))

    def unsubscribe_frame(self, subscriptions: ChannelSubscriptionSet, id: str = "") -> str:
        """Build an unsubscription frame for the given channels."""
        return self._sub_frame(SubRequest(action="unsub", subscriptions=subscriptions, id=id))

    def _sub_frame(self, request: SubRequest) -> str:
        self.logger.debug(f"Built {request.action} frame for {len(request.subscriptions)} channels")
        return request.to_json()

    def parse_event(self, raw: Union[str, bytes, dict[str, Any]]) -> ServerPushEvent:
        """Classify a message pushed by the server."""
        return parse_event(raw, logger=self.logger)

