"""Request/response models for the CryptoCloud API."""

from cryptocloud.schemas.base import CryptocloudRequest, CryptocloudResponse
from cryptocloud.schemas.invoice_schemas import (
    ERROR_STATUSES,
    PENDING_STATUSES,
    SUCCESS_STATUSES,
    BalanceResponse,
    CreateInvoiceRequest,
    CurrencyBalance,
    CurrencyStatistics,
    Invoice,
    InvoiceInfoRequest,
    InvoiceInfoResponse,
    InvoiceStatus,
    ListInvoicesRequest,
    ListInvoicesResponse,
    PaymentMethod,
    StatisticsRequest,
    StatisticsResponse,
    is_failed_status,
    is_paid_status,
    is_pending_status,
)
from cryptocloud.schemas.wallet_schemas import (
    CreateStaticWalletRequest,
    ListStaticWalletsResponse,
    StaticWallet,
)
from cryptocloud.schemas.webhook_schemas import WebhookPayload

__all__ = [
    "CryptocloudRequest",
    "CryptocloudResponse",
    # Invoices
    "ERROR_STATUSES",
    "PENDING_STATUSES",
    "SUCCESS_STATUSES",
    "CreateInvoiceRequest",
    "Invoice",
    "InvoiceInfoRequest",
    "InvoiceInfoResponse",
    "InvoiceStatus",
    "ListInvoicesRequest",
    "ListInvoicesResponse",
    "PaymentMethod",
    "is_failed_status",
    "is_paid_status",
    "is_pending_status",
    # Balance and statistics
    "BalanceResponse",
    "CurrencyBalance",
    "CurrencyStatistics",
    "StatisticsRequest",
    "StatisticsResponse",
    # Static wallets
    "CreateStaticWalletRequest",
    "ListStaticWalletsResponse",
    "StaticWallet",
    # Webhooks
    "WebhookPayload",
]
