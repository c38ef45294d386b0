"""Webhook signature verification and dispatch."""

from cryptocloud.services.webhook.signature_service import (
    SIGNATURE_HEADER,
    WebhookSignatureService,
    compute_signature,
    verify_signature,
)
from cryptocloud.services.webhook.webhook_service import (
    WebhookHandler,
    WebhookService,
    parse_webhook,
)

__all__ = [
    "SIGNATURE_HEADER",
    "WebhookHandler",
    "WebhookService",
    "WebhookSignatureService",
    "compute_signature",
    "parse_webhook",
    "verify_signature",
]
