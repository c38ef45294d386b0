"""
Invoice schemas - request/response models for invoice, balance and
statistics endpoints.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from cryptocloud.schemas.base import CryptocloudRequest, CryptocloudResponse


class InvoiceStatus(str, Enum):
    """Invoice lifecycle status enumeration."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    CANCELED = "canceled"
    EXPIRED = "expired"
    PROCESSING = "processing"


class PaymentMethod(str, Enum):
    """Supported payment method enumeration."""
    BITCOIN = "bitcoin"
    ETHEREUM = "ethereum"
    USDT = "usdt"
    LITECOIN = "litecoin"
    BITCOIN_CASH = "bitcoin_cash"
    TRON = "tron"


# The gateway reports a few synonyms beyond InvoiceStatus
SUCCESS_STATUSES = frozenset({"paid", "success", "completed", "succeeded"})
ERROR_STATUSES = frozenset({"error", "failed", "canceled", "expired"})
PENDING_STATUSES = frozenset({"pending", "processing"})


class CreateInvoiceRequest(CryptocloudRequest):
    """Body of an invoice creation call."""

    amount: float = Field(..., gt=0, description="Invoice amount")
    currency: str = Field(..., min_length=1, description="Invoice currency code")
    description: Optional[str] = None
    order_id: Optional[str] = Field(default=None, description="Merchant order reference")
    callback_url: Optional[str] = None
    success_url: Optional[str] = None
    fail_url: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None


class Invoice(CryptocloudResponse):
    """Invoice record tracked by the gateway."""

    id: str
    uuid: Optional[str] = None
    status: str = Field(..., description="One of InvoiceStatus, or a gateway synonym")
    amount: float
    currency: str
    created_at: str
    updated_at: Optional[str] = None
    checkout_url: Optional[str] = None
    payment_url: Optional[str] = None
    payment_method: Optional[str] = None
    order_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_paid(self) -> bool:
        return is_paid_status(self.status)

    @property
    def is_failed(self) -> bool:
        return is_failed_status(self.status)

    @property
    def is_pending(self) -> bool:
        return is_pending_status(self.status)


class ListInvoicesRequest(CryptocloudRequest):
    """Filter and pagination for invoice listing."""

    start_date: str
    end_date: str
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=10, ge=1)
    status: Optional[InvoiceStatus] = None
    currency: Optional[str] = None


class ListInvoicesResponse(CryptocloudResponse):
    invoices: List[Invoice] = Field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 10


class InvoiceInfoRequest(CryptocloudRequest):
    uuids: List[str] = Field(..., min_length=1)


class InvoiceInfoResponse(CryptocloudResponse):
    invoices: List[Invoice] = Field(default_factory=list)


class CurrencyBalance(CryptocloudResponse):
    currency: str
    amount: float
    frozen: Optional[float] = None


class BalanceResponse(CryptocloudResponse):
    balances: List[CurrencyBalance] = Field(default_factory=list)

    def for_currency(self, currency: str) -> Optional[CurrencyBalance]:
        """Return the balance entry for ``currency`` (case-insensitive)."""
        wanted = currency.upper()
        for balance in self.balances:
            if balance.currency.upper() == wanted:
                return balance
        return None


class StatisticsRequest(CryptocloudRequest):
    start_date: str
    end_date: str


class CurrencyStatistics(CryptocloudResponse):
    total: float
    paid: float


class StatisticsResponse(CryptocloudResponse):
    total_invoices: int
    paid_invoices: int
    total_amount: float
    paid_amount: float
    currencies: Dict[str, CurrencyStatistics] = Field(default_factory=dict)


def _status_value(status: str) -> str:
    # str-valued enum members hash by name, not by value
    return status.value if isinstance(status, Enum) else status


def is_paid_status(status: str) -> bool:
    return _status_value(status) in SUCCESS_STATUSES


def is_failed_status(status: str) -> bool:
    return _status_value(status) in ERROR_STATUSES


def is_pending_status(status: str) -> bool:
    return _status_value(status) in PENDING_STATUSES
