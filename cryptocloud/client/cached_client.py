"""
Read-through caching wrapper around any gateway client.

The wrapper owns a cache and a client; it does not subclass the client, so it
works the same over the real HTTP client and over a test double.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from cryptocloud.domain.interfaces import ICacheService, ICryptocloudGateway
from cryptocloud.domain.retry import RetryPolicy
from cryptocloud.infrastructure.cache import CacheKeys, MemoryCache
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

logger = structlog.get_logger(__name__)


class CachedCryptocloudClient(ICryptocloudGateway):
    """Caches invoice, balance and statistics reads of the wrapped client."""

    def __init__(self, client: ICryptocloudGateway, cache: Optional[ICacheService] = None):
        self._client = client
        self._cache = cache if cache is not None else MemoryCache()

    @property
    def client(self) -> ICryptocloudGateway:
        return self._client

    def __getattr__(self, name: str) -> Any:
        # webhook and status helpers of the wrapped client
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._client, name)

    async def __aenter__(self) -> CachedCryptocloudClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        aclose = getattr(self._client, "aclose", None)
        if aclose is not None:
            await aclose()

    # Cached reads

    async def get_invoice(
        self, invoice_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        key = CacheKeys.invoice(invoice_id)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        invoice = await self._client.get_invoice(invoice_id, retry_policy=retry_policy)
        await self._cache.set(key, invoice, CacheKeys.INVOICE_TTL)
        return invoice

    async def get_balance(self, *, retry_policy: Optional[RetryPolicy] = None) -> BalanceResponse:
        key = CacheKeys.balance()
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        balance = await self._client.get_balance(retry_policy=retry_policy)
        await self._cache.set(key, balance, CacheKeys.BALANCE_TTL)
        return balance

    async def get_statistics(
        self, request: StatisticsRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StatisticsResponse:
        key = CacheKeys.statistics(request.start_date, request.end_date)
        cached = await self._cache.get(key)
        if cached is not None:
            return cached

        statistics = await self._client.get_statistics(request, retry_policy=retry_policy)
        await self._cache.set(key, statistics, CacheKeys.STATISTICS_TTL)
        return statistics

    # Invalidation

    async def invalidate_invoice(self, invoice_id: str) -> None:
        await self._cache.delete(CacheKeys.invoice(invoice_id))

    async def invalidate_balance(self) -> None:
        await self._cache.delete(CacheKeys.balance())

    async def invalidate_statistics(self, start_date: str, end_date: str) -> None:
        await self._cache.delete(CacheKeys.statistics(start_date, end_date))

    async def clear_cache(self) -> None:
        await self._cache.clear()
        logger.info("Cleared CryptoCloud client cache")

    def cache_size(self) -> Optional[int]:
        """Number of cached entries, or None when the cache cannot tell."""
        if isinstance(self._cache, MemoryCache):
            return self._cache.size()
        return None

    # Pass-through

    async def create_invoice(
        self, request: CreateInvoiceRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        return await self._client.create_invoice(request, retry_policy=retry_policy)

    async def cancel_invoice(
        self, uuid: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        invoice = await self._client.cancel_invoice(uuid, retry_policy=retry_policy)
        await self.invalidate_invoice(invoice.id)
        return invoice

    async def list_invoices(
        self, request: ListInvoicesRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListInvoicesResponse:
        return await self._client.list_invoices(request, retry_policy=retry_policy)

    async def get_invoice_info(
        self, request: InvoiceInfoRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> InvoiceInfoResponse:
        return await self._client.get_invoice_info(request, retry_policy=retry_policy)

    async def create_static_wallet(
        self, request: CreateStaticWalletRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        return await self._client.create_static_wallet(request, retry_policy=retry_policy)

    async def get_static_wallet(
        self, wallet_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        return await self._client.get_static_wallet(wallet_id, retry_policy=retry_policy)

    async def list_static_wallets(
        self, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListStaticWalletsResponse:
        return await self._client.list_static_wallets(retry_policy=retry_policy)
