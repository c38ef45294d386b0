"""
Inbound webhook dispatch.

``WebhookService.handle_raw`` is the entry point for a webhook endpoint: it
authenticates the raw body, parses it, then fans the payload out to every
handler registered for the event.
"""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional, Union

import structlog
from pydantic import ValidationError

from cryptocloud.domain.exceptions import WebhookPayloadError, WebhookSignatureError
from cryptocloud.schemas.invoice_schemas import InvoiceStatus
from cryptocloud.schemas.webhook_schemas import WebhookPayload
from cryptocloud.services.webhook.signature_service import Body, verify_signature

logger = structlog.get_logger(__name__)


class WebhookHandler:
    """Base class for webhook handlers; every hook is a no-op by default."""

    async def on_invoice_paid(self, payload: WebhookPayload) -> None:
        pass

    async def on_invoice_failed(self, payload: WebhookPayload) -> None:
        pass

    async def on_invoice_canceled(self, payload: WebhookPayload) -> None:
        pass

    async def on_invoice_expired(self, payload: WebhookPayload) -> None:
        pass

    async def on_invoice_processing(self, payload: WebhookPayload) -> None:
        pass


_STATUS_HOOKS = {
    InvoiceStatus.PAID.value: "on_invoice_paid",
    InvoiceStatus.FAILED.value: "on_invoice_failed",
    InvoiceStatus.CANCELED.value: "on_invoice_canceled",
    InvoiceStatus.EXPIRED.value: "on_invoice_expired",
    InvoiceStatus.PROCESSING.value: "on_invoice_processing",
}


def parse_webhook(raw_body: Body) -> WebhookPayload:
    """Parse an already authenticated webhook body."""
    if not isinstance(raw_body, (str, bytes)):
        raw_body = bytes(raw_body)
    try:
        return WebhookPayload.model_validate_json(raw_body)
    except ValidationError as e:
        raise WebhookPayloadError(f"Malformed webhook payload: {e.error_count()} error(s)") from e


class WebhookService:
    """Registry of webhook handlers keyed by event name."""

    def __init__(self, secret: Union[str, bytes]):
        self._secret = secret
        self._handlers: Dict[str, List[WebhookHandler]] = {}

    def register_handler(self, event: str, handler: WebhookHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def registered_events(self) -> List[str]:
        return list(self._handlers.keys())

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    async def handle_raw(self, raw_body: Body, signature: Optional[str]) -> WebhookPayload:
        """
        Authenticate, parse and dispatch a webhook.

        Args:
            raw_body: Request body exactly as received, before any JSON parsing
            signature: Value of the signature header, if present

        Returns:
            The parsed payload

        Raises:
            WebhookSignatureError: If the signature is missing or wrong
            WebhookPayloadError: If the authenticated body is not a valid payload
        """
        if not verify_signature(self._secret, raw_body, signature):
            logger.warning(
                "Rejected webhook with invalid signature",
                signature_present=bool(signature),
                payload_length=len(raw_body),
            )
            raise WebhookSignatureError()

        payload = parse_webhook(raw_body)
        await self.process_webhook(payload)
        return payload

    async def process_webhook(self, payload: WebhookPayload) -> None:
        """Run every handler registered for ``payload.event`` concurrently."""
        handlers = self._handlers.get(payload.event, [])
        logger.info(
            "Processing webhook",
            webhook_event=payload.event,
            invoice_id=payload.invoice_id,
            status=payload.status,
            handler_count=len(handlers),
        )
        await asyncio.gather(*(self._run_handler(handler, payload) for handler in handlers))

    async def _run_handler(self, handler: WebhookHandler, payload: WebhookPayload) -> None:
        try:
            await self._call_handler_method(handler, payload)
        except Exception as e:
            logger.error(
                "Webhook handler failed",
                webhook_event=payload.event,
                invoice_id=payload.invoice_id,
                handler=type(handler).__name__,
                error=str(e),
                exc_info=True,
            )

    async def _call_handler_method(self, handler: WebhookHandler, payload: WebhookPayload) -> None:
        if payload.status == InvoiceStatus.PENDING.value:
            return

        hook_name = _STATUS_HOOKS.get(payload.status)
        if hook_name is None:
            logger.warning("Unknown webhook status", status=payload.status, webhook_event=payload.event)
            return

        await getattr(handler, hook_name)(payload)


__all__ = ["WebhookHandler", "WebhookService", "parse_webhook"]
