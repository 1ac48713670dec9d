"""REST request construction and response unwrapping.

Requests are returned as transport-neutral ``RequestDescriptor`` objects; send
them with any HTTP client and pass the response body back to
``read_response``.

Example:
    ```python
    credentials = Credentials("access", "secret")
    req = GetAccountOfCurrency(currency="btc").to_request(credentials)
    resp = httpx.request(req.method, req.url, headers=req.headers, content=req.body)
    account = GetAccountOfCurrency.read_response(resp.content)
    ```
"""

import json
from functools import lru_cache
from typing import Any, ClassVar, Mapping, Optional
from urllib.parse import urlencode, urlsplit

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .credentials import Credentials
from .exceptions import ApiError, ReadResponseError
from .signing import SignedPayload, auth_params, canonical_json, sign_payload
from .types import ErrorEnvelope

BASE_URL = "https://max-api.maicoin.com"

HEADER_AUTH_ACCESS_KEY = "X-MAX-ACCESSKEY"
HEADER_AUTH_PAYLOAD = "X-MAX-PAYLOAD"
HEADER_AUTH_SIGNATURE = "X-MAX-SIGNATURE"


class RequestDescriptor(BaseModel):
    """Everything a transport needs to send one request."""

    model_config = ConfigDict(frozen=True)

    method: str
    url: str
    headers: dict[str, str] = {}
    body: Optional[bytes] = None


# ============================================================================
# Request builders
# ============================================================================


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        raise TypeError(f"unsupported nested query parameter: {value!r}")
    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """
    Encode parameters as a query string.

    List values are repeated as ``key[]=item`` pairs; ``None`` values are
    skipped.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", _query_value(item)) for item in value)
        else:
            pairs.append((key, _query_value(value)))
    return urlencode(pairs)


def _with_query(url: str, query: str) -> str:
    return f"{url}?{query}" if query else url


def _auth_headers(credentials: Credentials, signed: SignedPayload) -> dict[str, str]:
    return {
        HEADER_AUTH_ACCESS_KEY: credentials.access_key,
        HEADER_AUTH_PAYLOAD: signed.payload,
        HEADER_AUTH_SIGNATURE: signed.signature,
        "Content-Type": "application/json",
    }


def build_unauth_get(url: str, params: Mapping[str, Any]) -> RequestDescriptor:
    """Public GET request; parameters go to the query string unsigned."""
    return RequestDescriptor(method="GET", url=_with_query(url, encode_query(params)))


def build_auth_get(
    url: str, params: Mapping[str, Any], credentials: Credentials
) -> RequestDescriptor:
    """
    Signed GET request.

    ``{params, nonce, path}`` is signed; ``{params, nonce}`` is sent as the
    query string.
    """
    nonce = credentials.next_nonce()
    signed = sign_payload(credentials.secret_key, params, nonce, urlsplit(url).path)
    query = encode_query(auth_params(params, nonce))
    return RequestDescriptor(
        method="GET",
        url=_with_query(url, query),
        headers=_auth_headers(credentials, signed),
    )


def build_auth_post(
    url: str, params: Mapping[str, Any], credentials: Credentials
) -> RequestDescriptor:
    """
    Signed POST request.

    ``{params, nonce, path}`` is signed; ``{params, nonce}`` is sent as the
    JSON body.
    """
    nonce = credentials.next_nonce()
    signed = sign_payload(credentials.secret_key, params, nonce, urlsplit(url).path)
    body = canonical_json(auth_params(params, nonce)).encode("utf-8")
    return RequestDescriptor(
        method="POST",
        url=url,
        headers=_auth_headers(credentials, signed),
        body=body,
    )


# ============================================================================
# Response unwrapping
# ============================================================================


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _error_envelope(data: Any) -> Optional[ErrorEnvelope]:
    if not isinstance(data, dict) or "error" not in data:
        return None
    try:
        return ErrorEnvelope.model_validate(data)
    except ValidationError:
        return None


def read_response(body: str | bytes, response_type: Any) -> Any:
    """
    Parse a response body as an API error or as ``response_type``.

    Args:
        body: Raw response body
        response_type: Expected success type (model, list of models, ...)

    Returns:
        The validated success value

    Raises:
        ApiError: The server returned an error envelope
        ReadResponseError: The body is not JSON or matches neither shape
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError) as err:
        raise ReadResponseError(f"Unable to read response: {err}") from err

    envelope = _error_envelope(data)
    if envelope is not None:
        raise ApiError(envelope.error.code, envelope.error.message)

    try:
        return _adapter(response_type).validate_python(data)
    except ValidationError as err:
        raise ReadResponseError(f"Unable to read response: {err}") from err


# ============================================================================
# Endpoint base
# ============================================================================


class RestApi(BaseModel):
    """
    Base class of REST endpoint parameters.

    Subclasses declare their fields in the order the server documents them,
    plus the class-level ``method``, ``auth``, ``path`` and ``response_type``.
    Fields marked ``exclude=True`` are path parameters and never sent.
    """

    model_config = ConfigDict(populate_by_name=True)

    method: ClassVar[str] = "GET"
    auth: ClassVar[bool] = False
    path: ClassVar[str] = ""
    response_type: ClassVar[Any] = Any

    def endpoint_path(self) -> str:
        return self.path

    def params(self) -> dict[str, Any]:
        """JSON-ready parameters in declaration order, empty values dropped."""
        dumped = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        return {key: value for key, value in dumped.items() if value != []}

    def url(self, base_url: str = BASE_URL) -> str:
        return base_url.rstrip("/") + self.endpoint_path()

    def to_request(
        self,
        credentials: Optional[Credentials] = None,
        base_url: str = BASE_URL,
    ) -> RequestDescriptor:
        """
        Build the request for this endpoint.

        Raises:
            ValueError: Private endpoint called without credentials, or a
                public endpoint declared with a method other than GET
        """
        url = self.url(base_url)
        if self.method not in ("GET", "POST") or (not self.auth and self.method != "GET"):
            kind = "private" if self.auth else "public"
            raise ValueError(f"{type(self).__name__}: {kind} {self.method} is not supported")
        if not self.auth:
            return build_unauth_get(url, self.params())
        if credentials is None:
            raise ValueError(f"{type(self).__name__} requires credentials")
        if self.method == "POST":
            return build_auth_post(url, self.params(), credentials)
        return build_auth_get(url, self.params(), credentials)

    @classmethod
    def read_response(cls, body: str | bytes) -> Any:
        return read_response(body, cls.response_type)
