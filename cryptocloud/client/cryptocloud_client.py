"""
HTTP client for the CryptoCloud payment gateway.

Every outbound call is a single httpx request wrapped in the retry executor.
httpx failures are converted into ``CryptocloudError`` before the executor
classifies them, so callers only ever see the domain error type.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import quote

import httpx
import structlog

from cryptocloud.core.config import DEFAULT_BASE_URL, Settings
from cryptocloud.domain.exceptions import (
    ConfigurationError,
    CryptocloudError,
    InvoiceNotFoundError,
)
from cryptocloud.domain.interfaces import ICryptocloudGateway
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
    WebhookPayload,
    is_failed_status,
    is_paid_status,
    is_pending_status,
)
from cryptocloud.services.retry import RetryExecutor, extract_status_code
from cryptocloud.services.webhook import WebhookSignatureService, parse_webhook
from cryptocloud.services.webhook.signature_service import Body

logger = structlog.get_logger(__name__)

_NO_BODY = object()


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class CryptocloudClient(ICryptocloudGateway):
    """
    Async client for the CryptoCloud REST API.

    Use as an async context manager, or call ``aclose()`` when done::

        async with CryptocloudClient(api_key, api_secret) as client:
            invoice = await client.create_invoice(
                CreateInvoiceRequest(amount=10.5, currency="USDT")
            )

    Every method accepts ``retry_policy`` to override the client default for
    that call. Invoice and wallet creation are not idempotent on the gateway
    side: a retry after a lost response can create a duplicate, so pass
    ``RetryPolicy(max_retries=0)`` where that matters.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 10.0,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        executor: Optional[RetryExecutor] = None,
    ):
        if not api_key:
            raise ConfigurationError("api_key is required")
        if not api_secret:
            raise ConfigurationError("api_secret is required")
        if timeout_seconds < 1:
            raise ConfigurationError("timeout_seconds must be at least 1 second")

        self._signatures = WebhookSignatureService(api_secret)
        self._retry_policy = retry_policy
        self._executor = executor or RetryExecutor(on_retry=self._log_retry)
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers={
                "Content-Type": "application/json",
                "X-API-KEY": api_key,
            },
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> CryptocloudClient:
        """Build a client from loaded ``Settings``."""
        kwargs.setdefault("base_url", settings.BASE_URL)
        kwargs.setdefault("timeout_seconds", settings.timeout_seconds)
        kwargs.setdefault("retry_policy", settings.retry_policy())
        return cls(settings.API_KEY, settings.API_SECRET, **kwargs)

    async def __aenter__(self) -> CryptocloudClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # Transport

    @staticmethod
    def _log_retry(attempt: int, delay: float, error: Exception) -> None:
        logger.debug(
            "Retrying CryptoCloud request",
            attempt=attempt + 1,
            delay_seconds=delay,
            status_code=extract_status_code(error),
            error=str(error),
        )

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return _NO_BODY

    @staticmethod
    def _describe_error(response: httpx.Response, body: Any) -> Tuple[str, str]:
        message = f"CryptoCloud API returned HTTP {response.status_code}"
        code = "HTTP_ERROR"
        if isinstance(body, dict):
            message = str(body.get("message") or body.get("error") or body.get("detail") or message)
            code = str(body.get("code") or code)
        return message, code

    async def _send_once(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        logger.debug("Sending CryptoCloud request", method=method, path=path)
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            raise CryptocloudError(f"{method} {path} timed out", code="TIMEOUT") from e
        except httpx.RequestError as e:
            raise CryptocloudError(f"{method} {path} failed: {e}", code="NETWORK_ERROR") from e

        body = self._decode(response)

        if response.is_error:
            message, code = self._describe_error(response, body)
            raise CryptocloudError(
                message,
                code=code,
                status_code=response.status_code,
                response=response.text if body is _NO_BODY else body,
            )

        if body is _NO_BODY:
            raise CryptocloudError(
                "CryptoCloud API returned a non-JSON body",
                code="INVALID_RESPONSE",
                status_code=response.status_code,
                response=response.text,
            )

        return body

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ) -> Any:
        async def attempt() -> Any:
            return await self._send_once(method, path, json=json, params=params)

        try:
            return await self._executor.execute_with_retry(
                attempt, retry_policy or self._retry_policy
            )
        except CryptocloudError as e:
            logger.warning(
                "CryptoCloud request failed",
                method=method,
                path=path,
                code=e.code,
                status_code=e.status_code,
                error=e.message,
            )
            raise

    # Invoices

    async def create_invoice(
        self, request: CreateInvoiceRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        data = await self._request(
            "POST", "/v1/invoices", json=request.to_wire(), retry_policy=retry_policy
        )
        invoice = Invoice.model_validate(data)
        logger.info(
            "Created invoice",
            invoice_id=invoice.id,
            amount=invoice.amount,
            currency=invoice.currency,
            order_id=invoice.order_id,
        )
        return invoice

    async def get_invoice(
        self, invoice_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        try:
            data = await self._request(
                "GET", f"/v1/invoices/{_segment(invoice_id)}", retry_policy=retry_policy
            )
        except CryptocloudError as e:
            if e.status_code == 404:
                raise InvoiceNotFoundError(invoice_id, response=e.response) from e
            raise
        return Invoice.model_validate(data)

    async def cancel_invoice(
        self, uuid: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> Invoice:
        try:
            data = await self._request(
                "POST", f"/v1/invoices/{_segment(uuid)}/cancel", retry_policy=retry_policy
            )
        except CryptocloudError as e:
            if e.status_code == 404:
                raise InvoiceNotFoundError(uuid, response=e.response) from e
            raise
        logger.info("Canceled invoice", uuid=uuid)
        return Invoice.model_validate(data)

    async def list_invoices(
        self, request: ListInvoicesRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListInvoicesResponse:
        data = await self._request(
            "GET", "/v1/invoices", params=request.to_wire(), retry_policy=retry_policy
        )
        return ListInvoicesResponse.model_validate(data)

    async def get_invoice_info(
        self, request: InvoiceInfoRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> InvoiceInfoResponse:
        data = await self._request(
            "POST", "/v1/invoices/info", json=request.to_wire(), retry_policy=retry_policy
        )
        return InvoiceInfoResponse.model_validate(data)

    # Balance and statistics

    async def get_balance(self, *, retry_policy: Optional[RetryPolicy] = None) -> BalanceResponse:
        data = await self._request("GET", "/v1/balance", retry_policy=retry_policy)
        return BalanceResponse.model_validate(data)

    async def get_statistics(
        self, request: StatisticsRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StatisticsResponse:
        data = await self._request(
            "GET", "/v1/statistics", params=request.to_wire(), retry_policy=retry_policy
        )
        return StatisticsResponse.model_validate(data)

    # Static wallets

    async def create_static_wallet(
        self, request: CreateStaticWalletRequest, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        data = await self._request(
            "POST", "/v1/static-wallets", json=request.to_wire(), retry_policy=retry_policy
        )
        wallet = StaticWallet.model_validate(data)
        logger.info("Created static wallet", wallet_id=wallet.id, currency=wallet.currency)
        return wallet

    async def get_static_wallet(
        self, wallet_id: str, *, retry_policy: Optional[RetryPolicy] = None
    ) -> StaticWallet:
        data = await self._request(
            "GET", f"/v1/static-wallets/{_segment(wallet_id)}", retry_policy=retry_policy
        )
        return StaticWallet.model_validate(data)

    async def list_static_wallets(
        self, *, retry_policy: Optional[RetryPolicy] = None
    ) -> ListStaticWalletsResponse:
        data = await self._request("GET", "/v1/static-wallets", retry_policy=retry_policy)
        return ListStaticWalletsResponse.model_validate(data)

    # Webhooks

    def verify_callback(self, raw_body: Body, signature: Optional[Union[str, bytes]]) -> bool:
        """Check a webhook signature against the raw, unparsed request body."""
        return self._signatures.verify(raw_body, signature)

    def parse_webhook(self, raw_body: Body) -> WebhookPayload:
        return parse_webhook(raw_body)

    # Status helpers

    @staticmethod
    def is_invoice_paid(invoice: Invoice) -> bool:
        return is_paid_status(invoice.status)

    @staticmethod
    def is_invoice_failed(invoice: Invoice) -> bool:
        return is_failed_status(invoice.status)

    @staticmethod
    def is_invoice_pending(invoice: Invoice) -> bool:
        return is_pending_status(invoice.status)
