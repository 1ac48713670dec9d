"""API credentials and the per-credential nonce clock."""

import os
import threading
import time
from typing import Callable, Optional


def clock() -> int:
    """Milliseconds since Unix epoch."""
    return time.time_ns() // 1_000_000


class Credentials:
    """
    Access/secret key pair used to sign private API calls.

    Each instance maintains a monotonic nonce clock. Data created from a
    ``Credentials`` (signed requests, auth frames) embeds a time-based nonce
    and must be sent to the server as soon as possible.
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        clock: Callable[[], int] = clock,
    ):
        """
        Initialize credentials.

        Args:
            access_key: API access key
            secret_key: API secret key
            clock: Millisecond clock, replaceable in tests
        """
        self.access_key = access_key
        self.secret_key = secret_key
        self._clock = clock
        self._nonce = clock() - 1
        self._nonce_lock = threading.Lock()

    @classmethod
    def from_env(
        cls,
        access_var: str = "MAX_ACCESS_KEY",
        secret_var: str = "MAX_SECRET_KEY",
    ) -> "Credentials":
        """
        Create credentials from environment variables.

        Missing variables are read as empty strings.
        """
        return cls(os.environ.get(access_var, ""), os.environ.get(secret_var, ""))

    def next_nonce(self) -> int:
        """
        Return the next nonce.

        The result is ``max(previous + 1, clock())``, so the sequence is
        strictly increasing even if the wall clock stalls or goes backward.
        """
        now = self._clock()
        with self._nonce_lock:
            self._nonce = max(self._nonce + 1, now)
            return self._nonce

    def __repr__(self) -> str:
        return f"Credentials(access_key={self.access_key!r}, secret_key='***')"


def resolve_credentials(
    credentials: Optional[Credentials],
    access_key: Optional[str],
    secret_key: Optional[str],
) -> Optional[Credentials]:
    """Pick explicit credentials, or build them from a key pair if both are given."""
    if credentials is not None:
        return credentials
    if access_key is not None and secret_key is not None:
        return Credentials(access_key, secret_key)
    return None
