"""Lightning invoices via the Strike API, priced with the mempool.space rate feed."""

import logging
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

import httpx

from src.payments.dtos import (
    Invoice,
    InvoiceCreationFailedError,
    QuoteFailedError,
    RateUnavailableError,
)

logger = logging.getLogger(__name__)

SATOSHI = Decimal("0.00000001")
PAID_STATE = "PAID"


class InvoiceIssuer(ABC):
    @abstractmethod
    async def create_invoice(self, price: float) -> Invoice:
        """
        Create a payable invoice for a fiat price.

        Raises one of RateUnavailableError, InvoiceCreationFailedError or
        QuoteFailedError; nothing usable is returned on failure.
        """
        raise NotImplementedError

    @abstractmethod
    async def is_paid(self, invoice_id: str) -> bool:
        """True once the processor reports the invoice as settled. Never raises."""
        raise NotImplementedError


class StrikeConfig(Protocol):
    strike_api_key: str
    strike_api_url: str
    price_api_url: str
    fiat_currency: str
    invoice_description: str
    http_timeout_seconds: float


def btc_amount_for(price: float, rate: float | Decimal) -> str:
    """Convert a fiat price into a BTC amount string with satoshi precision."""
    amount = Decimal(str(price)) / Decimal(str(rate))
    return format(amount.quantize(SATOSHI, rounding=ROUND_HALF_UP), "f")


class StrikeInvoiceIssuer(InvoiceIssuer):
    def __init__(
        self,
        config: StrikeConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.strike_api_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return self._http_client_class(timeout=self._config.http_timeout_seconds)

    async def create_invoice(self, price: float) -> Invoice:
        async with self._client() as client:
            rate = await self._fetch_rate(client)
            btc_amount = btc_amount_for(price, rate)
            invoice_id = await self._request_invoice(client, btc_amount)
            payable = await self._request_quote(client, invoice_id)

        logger.info(f"Created invoice {invoice_id} for {price} {self._config.fiat_currency}")
        return Invoice(invoice_id=invoice_id, payable=payable)

    async def _fetch_rate(self, client: httpx.AsyncClient) -> Decimal:
        try:
            response = await client.get(self._config.price_api_url)
            response.raise_for_status()
            prices = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RateUnavailableError("Could not fetch Bitcoin price") from e

        raw_rate = prices.get(self._config.fiat_currency) if isinstance(prices, dict) else None
        try:
            rate = Decimal(str(raw_rate))
        except (TypeError, ArithmeticError) as e:
            raise RateUnavailableError("Could not fetch Bitcoin price") from e
        if not rate.is_finite() or rate <= 0:
            raise RateUnavailableError("Could not fetch Bitcoin price")
        return rate

    async def _request_invoice(self, client: httpx.AsyncClient, btc_amount: str) -> str:
        try:
            response = await client.post(
                f"{self._config.strike_api_url}/invoices",
                headers=self._auth_headers,
                json={
                    "amount": {"amount": btc_amount, "currency": "BTC"},
                    "description": self._config.invoice_description,
                },
            )
            response.raise_for_status()
            invoice_id = response.json().get("invoiceId")
        except (httpx.HTTPError, ValueError) as e:
            raise InvoiceCreationFailedError("Invoice ID not found") from e

        if not invoice_id:
            raise InvoiceCreationFailedError("Invoice ID not found")
        return invoice_id

    async def _request_quote(self, client: httpx.AsyncClient, invoice_id: str) -> str:
        try:
            response = await client.post(
                f"{self._config.strike_api_url}/invoices/{invoice_id}/quote",
                headers=self._auth_headers,
                json={},
            )
            response.raise_for_status()
            payable = response.json().get("lnInvoice")
        except (httpx.HTTPError, ValueError) as e:
            raise QuoteFailedError("Lightning invoice not found") from e

        if not payable:
            raise QuoteFailedError("Lightning invoice not found")
        return payable

    async def is_paid(self, invoice_id: str) -> bool:
        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self._config.strike_api_url}/invoices/{invoice_id}",
                    headers=self._auth_headers,
                )
                response.raise_for_status()
                state = response.json().get("state")
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Could not check invoice {invoice_id}: {e}")
            return False

        if not state:
            logger.warning(f"Invoice {invoice_id} has no state")
            return False
        return state == PAID_STATE
