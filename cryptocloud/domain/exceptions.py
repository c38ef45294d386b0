"""
Domain-level exceptions for the CryptoCloud client.

Every failure surfaced by the client is a ``CryptocloudError``. The HTTP layer
fills in ``status_code`` and ``response`` when the gateway answered; network
level failures (DNS, refused connections, timeouts) carry no status code.
"""

from typing import Any, Optional


NON_RETRYABLE_STATUS_CODES = frozenset({400, 401, 403})


class CryptocloudError(Exception):
    """Classified error produced by a failed gateway call."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.response = response
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        """Client and auth faults are final; everything else is transient."""
        return self.status_code not in NON_RETRYABLE_STATUS_CODES

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r})"
        )


class InvoiceNotFoundError(CryptocloudError):
    """Raised when an invoice does not exist."""

    def __init__(self, identifier: str, response: Any = None):
        self.identifier = identifier
        super().__init__(
            f"Invoice {identifier} not found",
            code="INVOICE_NOT_FOUND",
            status_code=404,
            response=response,
        )


class WebhookSignatureError(CryptocloudError):
    """Raised when an inbound webhook fails signature verification."""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message, code="INVALID_SIGNATURE", status_code=401)


class WebhookPayloadError(CryptocloudError):
    """Raised when an authenticated webhook body cannot be parsed."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PAYLOAD", status_code=400)


class ConfigurationError(CryptocloudError):
    """Raised when client configuration is invalid or missing."""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")
