"""Exceptions raised by the MAX SDK."""

from typing import Optional


class MaxError(Exception):
    """Base class for all SDK errors."""


class ApiError(MaxError):
    """Error message returned by the REST API server."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"API error code {code}: {message}")


class ReadResponseError(MaxError):
    """Response body could not be read as either a result or an API error."""

    def __init__(self, reason: str = "Unable to read response"):
        super().__init__(reason)


class WsInvalidValueError(MaxError, ValueError):
    """A literal outside of a closed set of values was received."""

    def __init__(self, value: str, expected: Optional[str] = None):
        self.value = value
        self.expected = expected
        detail = f"Invalid value: {value!r}"
        if expected:
            detail += f" (expected {expected})"
        super().__init__(detail)


class WsParseError(MaxError):
    """A server pushed message could not be parsed."""

    def __init__(self, message: str, event_type: str = "N/A", channel: str = "N/A"):
        self.event_type = event_type
        self.channel = channel
        super().__init__(message)


class UnknownEventError(WsParseError):
    """No known event kind matches the (event type, channel) of a message."""

    def __init__(self, event_type: str, channel: str):
        super().__init__(
            f"Unknown event {{e: {event_type}, c: {channel}}}",
            event_type=event_type,
            channel=channel,
        )
