"""Payload signing for private REST calls and websocket authentication."""

import base64
import hashlib
import hmac
import json
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict


class SignedPayload(BaseModel):
    """Base64 payload and its hex HMAC-SHA256 signature."""

    model_config = ConfigDict(frozen=True)

    payload: str
    signature: str


def canonical_json(value: Any) -> str:
    """Serialize to the compact JSON form the server verifies against."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def hmac_sha256_hex(secret_key: str, message: bytes) -> str:
    return hmac.new(secret_key.encode("utf-8"), message, hashlib.sha256).hexdigest()


def auth_params(params: Mapping[str, Any], nonce: int) -> dict[str, Any]:
    """Request parameters followed by the nonce, as transmitted."""
    wrapped = dict(params)
    wrapped.pop("nonce", None)
    wrapped["nonce"] = nonce
    return wrapped


def sign_payload(
    secret_key: str,
    params: Mapping[str, Any],
    nonce: int,
    path: Optional[str] = None,
) -> SignedPayload:
    """
    Sign request parameters.

    The signed document is ``{...params, "nonce": nonce}`` with ``"path"``
    appended when given (REST calls). Key order is significant: parameters
    keep their declaration order, then nonce, then path.

    Args:
        secret_key: API secret key, used as the HMAC key
        params: JSON-ready request parameters, in declaration order
        nonce: Nonce drawn from the credentials
        path: URL path of the REST endpoint

    Returns:
        SignedPayload with the base64 payload and hex signature
    """
    document = auth_params(params, nonce)
    if path is not None:
        document["path"] = path
    payload = base64.b64encode(canonical_json(document).encode("utf-8")).decode("ascii")
    signature = hmac_sha256_hex(secret_key, payload.encode("ascii"))
    return SignedPayload(payload=payload, signature=signature)


def sign_nonce(secret_key: str, nonce: int) -> str:
    """Signature of the websocket auth handshake: HMAC over the decimal nonce."""
    return hmac_sha256_hex(secret_key, str(nonce).encode("ascii"))
