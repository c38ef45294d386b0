"""Domain-layer interfaces.

These abstractions define the contracts the client layer relies on, while the
HTTP client, the caching wrapper and the in-memory cache provide concrete
implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from cryptocloud.domain.retry import RetryPolicy
    from cryptocloud.schemas import (
        BalanceResponse,
        CreateInvoiceRequest,
        CreateStaticWalletRequest,
        Invoice,
        InvoiceInfoRequest,
        InvoiceInfoResponse,
        ListInvoicesRequest,
        ListInvoicesResponse,
        ListStaticWalletsResponse,
        StaticWallet,
        StatisticsRequest,
        StatisticsResponse,
    )


class ICacheService(ABC):
    """Cache service interface."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache, ``None`` when missing or expired."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Set value in cache with TTL in seconds."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete key from cache."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key."""
        pass


class ICryptocloudGateway(ABC):
    """Operations offered by the remote payment gateway."""

    @abstractmethod
    async def create_invoice(
        self, request: CreateInvoiceRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        pass

    @abstractmethod
    async def get_invoice(
        self, invoice_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        pass

    @abstractmethod
    async def cancel_invoice(
        self, uuid: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        pass

    @abstractmethod
    async def list_invoices(
        self, request: ListInvoicesRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListInvoicesResponse:
        pass

    @abstractmethod
    async def get_invoice_info(
        self, request: InvoiceInfoRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> InvoiceInfoResponse:
        pass

    @abstractmethod
    async def get_balance(self, *, retry_policy: Optional[RetryPolicy] = None) -> BalanceResponse:
        pass

    @abstractmethod
    async def get_statistics(
        self, request: StatisticsRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StatisticsResponse:
        pass

    @abstractmethod
    async def create_static_wallet(
        self, request: CreateStaticWalletRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        pass

    @abstractmethod
    async def get_static_wallet(
        self, wallet_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        pass

    @abstractmethod
    async def list_static_wallets(
        self, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListStaticWalletsResponse:
        pass
