"""
Async client for the CryptoCloud crypto payment gateway.

Components:
- client: HTTP client with retry/backoff, and a read-through caching wrapper
- services.retry: retry executor and failure classification
- services.webhook: HMAC-SHA256 webhook verification and dispatch
- testing: in-memory gateway and test data factory
"""

from cryptocloud.client import CachedCryptocloudClient, CryptocloudClient
from cryptocloud.core import Settings, configure_logging, get_settings
from cryptocloud.domain import (
    DEFAULT_RETRY_POLICY,
    ConfigurationError,
    CryptocloudError,
    InvoiceNotFoundError,
    RetryPolicy,
    WebhookPayloadError,
    WebhookSignatureError,
)
from cryptocloud.infrastructure.cache import MemoryCache
from cryptocloud.services.retry import RetryExecutor, execute_with_retry
from cryptocloud.services.webhook import (
    WebhookHandler,
    WebhookService,
    compute_signature,
    verify_signature,
)

__version__ = "1.0.0"

__all__ = [
    "CachedCryptocloudClient",
    "CryptocloudClient",
    "Settings",
    "configure_logging",
    "get_settings",
    "DEFAULT_RETRY_POLICY",
    "ConfigurationError",
    "CryptocloudError",
    "InvoiceNotFoundError",
    "RetryPolicy",
    "WebhookPayloadError",
    "WebhookSignatureError",
    "MemoryCache",
    "RetryExecutor",
    "execute_with_retry",
    "WebhookHandler",
    "WebhookService",
    "compute_signature",
    "verify_signature",
]
