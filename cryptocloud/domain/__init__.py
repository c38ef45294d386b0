"""Domain layer: exceptions, retry policy and service interfaces."""

from cryptocloud.domain.exceptions import (
    NON_RETRYABLE_STATUS_CODES,
    ConfigurationError,
    CryptocloudError,
    InvoiceNotFoundError,
    WebhookPayloadError,
    WebhookSignatureError,
)
from cryptocloud.domain.interfaces import ICacheService, ICryptocloudGateway
from cryptocloud.domain.retry import (
    DEFAULT_RETRY_POLICY,
    AttemptOutcome,
    OutcomeKind,
    RetryPolicy,
)

__all__ = [
    "NON_RETRYABLE_STATUS_CODES",
    "ConfigurationError",
    "CryptocloudError",
    "InvoiceNotFoundError",
    "WebhookPayloadError",
    "WebhookSignatureError",
    "ICacheService",
    "ICryptocloudGateway",
    "DEFAULT_RETRY_POLICY",
    "AttemptOutcome",
    "OutcomeKind",
    "RetryPolicy",
]
