"""
Webhook signature generation and verification.

The gateway signs every callback with HMAC-SHA256 over the raw request body,
keyed by the merchant's API secret, and sends the lowercase hex digest in a
header. Verification must run on the body bytes exactly as received: parsing
and re-serializing the JSON changes key order or whitespace and breaks
legitimate signatures.
"""

import hashlib
import hmac
from typing import Optional, Union

import structlog

logger = structlog.get_logger(__name__)

SIGNATURE_HEADER = "X-Signature"
SIGNATURE_LENGTH = 64

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

Body = Union[bytes, bytearray, memoryview, str]


def _as_bytes(value: Body) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def compute_signature(secret: Union[str, bytes], body: Body) -> str:
    """Return the hex HMAC-SHA256 digest of ``body`` keyed by ``secret``."""
    return hmac.new(_as_bytes(secret), _as_bytes(body), hashlib.sha256).hexdigest()


def verify_signature(
    secret: Union[str, bytes],
    raw_body: Body,
    provided_signature: Optional[Union[str, bytes]] = None,
) -> bool:
    """
    Check that ``provided_signature`` authenticates ``raw_body``.

    Never raises. A missing signature fails before anything is hashed, and
    the digests are compared in constant time.

    Args:
        secret: Shared API secret
        raw_body: Request body exactly as received
        provided_signature: Hex digest from the signature header, as ``str``
            or as raw header ``bytes``

    Returns:
        True if the signature is valid; callers must reject the request otherwise
    """
    if not provided_signature:
        return False

    try:
        if isinstance(provided_signature, (bytes, bytearray)):
            provided_signature = provided_signature.decode("ascii")
        if len(provided_signature) != SIGNATURE_LENGTH or not _HEX_DIGITS.issuperset(provided_signature):
            logger.debug("Webhook signature is not a hex digest", signature_length=len(provided_signature))
            return False
        provided = bytes.fromhex(provided_signature)
        expected = bytes.fromhex(compute_signature(secret, raw_body))
    except (TypeError, ValueError):
        logger.debug("Webhook signature or body could not be encoded")
        return False

    return hmac.compare_digest(expected, provided)


class WebhookSignatureService:
    """Verifier bound to a single shared secret."""

    def __init__(self, secret: Union[str, bytes]):
        self._secret = secret

    def sign(self, body: Body) -> str:
        return compute_signature(self._secret, body)

    def verify(
        self, raw_body: Body, provided_signature: Optional[Union[str, bytes]] = None
    ) -> bool:
        return verify_signature(self._secret, raw_body, provided_signature)


__all__ = [
    "SIGNATURE_HEADER",
    "WebhookSignatureService",
    "compute_signature",
    "verify_signature",
]
