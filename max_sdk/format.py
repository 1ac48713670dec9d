"""Conversion helpers for values as they appear on the wire.

Timestamps are pushed as integers (milliseconds for websocket feeds, seconds
for most REST records) and converted to timezone-aware datetimes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from .exceptions import WsInvalidValueError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_epoch(value: Any, unit: str) -> Any:
    if isinstance(value, datetime) or value is None:
        return value
    if isinstance(value, bool):
        raise ValueError("timestamp must be a number")
    try:
        return EPOCH + timedelta(**{unit: int(value)})
    except (TypeError, ValueError, OverflowError) as err:
        raise ValueError(f"invalid timestamp {value!r}: {err}") from err


def millis_to_datetime(value: Any) -> Any:
    """
    Convert milliseconds since Unix epoch to a UTC datetime.

    Args:
        value: Integer (or integral string) millisecond timestamp

    Returns:
        Timezone-aware datetime; datetimes pass through untouched

    Raises:
        ValueError: Value is not a number or is out of the datetime range
    """
    return _from_epoch(value, "milliseconds")


def seconds_to_datetime(value: Any) -> Any:
    """Convert seconds since Unix epoch to a UTC datetime."""
    return _from_epoch(value, "seconds")


def datetime_to_millis(value: datetime) -> int:
    """Convert a datetime back to milliseconds since Unix epoch."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)


def datetime_to_seconds(value: datetime) -> int:
    """Convert a datetime back to whole seconds since Unix epoch."""
    return datetime_to_millis(value) // 1000


def parse_on_off(value: Any) -> bool:
    """
    Parse an "ON"/"OFF" flag (case-insensitive).

    Raises:
        WsInvalidValueError: Value is neither "on" nor "off"
    """
    if isinstance(value, bool):
        return value
    lowered = str(value).lower()
    if lowered == "on":
        return True
    if lowered == "off":
        return False
    raise WsInvalidValueError(str(value), "ON or OFF")
