"""Webhook notification schemas."""

from typing import Optional

from cryptocloud.schemas.base import CryptocloudResponse
from cryptocloud.schemas.invoice_schemas import (
    is_failed_status,
    is_paid_status,
    is_pending_status,
)


class WebhookPayload(CryptocloudResponse):
    """Invoice status change pushed by the gateway."""

    event: str
    invoice_id: str
    uuid: Optional[str] = None
    status: str
    amount: float
    currency: str
    created_at: str
    order_id: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return is_paid_status(self.status)

    @property
    def is_failed(self) -> bool:
        return is_failed_status(self.status)

    @property
    def is_pending(self) -> bool:
        return is_pending_status(self.status)
