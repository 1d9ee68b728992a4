"""Pending payments, keyed by invoice id, for the lifetime of the process."""

import asyncio
import contextlib
import dataclasses
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta

from src.payments.dtos import PendingPayment

logger = logging.getLogger(__name__)


class PaymentStore(ABC):
    @abstractmethod
    async def put(self, payment: PendingPayment) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get(self, invoice_id: str) -> PendingPayment | None:
        """The pending payment, or None when unknown or expired."""
        raise NotImplementedError

    @abstractmethod
    async def mark_paid(self, invoice_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def remove(self, invoice_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def prune_expired(self) -> int:
        """Drop abandoned payments and return how many were dropped."""
        raise NotImplementedError

    @abstractmethod
    def lock(self, invoice_id: str) -> contextlib.AbstractAsyncContextManager:
        """Exclusive access to one invoice's read-modify-write sequence."""
        raise NotImplementedError


class InMemoryPaymentStore(PaymentStore):
    """
    Dict-backed store for a single event loop.

    Unpaid payments older than `ttl` are treated as abandoned; a `ttl` of None
    keeps them forever. Paid payments never expire.
    """

    def __init__(self, ttl: timedelta | None = None) -> None:
        self._ttl = ttl
        self._payments: dict[str, PendingPayment] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._payments)

    def __contains__(self, invoice_id: str) -> bool:
        return invoice_id in self._payments

    def _is_expired(self, payment: PendingPayment, now: datetime) -> bool:
        # settled payments stay until the commit poll evicts them
        if payment.paid:
            return False
        return self._ttl is not None and now - payment.created_at > self._ttl

    async def put(self, payment: PendingPayment) -> None:
        await self.prune_expired()
        self._payments[payment.invoice_id] = payment

    async def get(self, invoice_id: str) -> PendingPayment | None:
        payment = self._payments.get(invoice_id)
        if payment is None:
            return None
        if self._is_expired(payment, datetime.now(UTC)):
            logger.info(f"Pending payment {invoice_id} expired")
            await self.remove(invoice_id)
            return None
        return payment

    async def mark_paid(self, invoice_id: str) -> None:
        payment = self._payments.get(invoice_id)
        if payment is not None:
            self._payments[invoice_id] = dataclasses.replace(payment, paid=True)

    async def remove(self, invoice_id: str) -> None:
        self._payments.pop(invoice_id, None)

    async def prune_expired(self) -> int:
        now = datetime.now(UTC)
        expired = [
            invoice_id
            for invoice_id, payment in self._payments.items()
            if self._is_expired(payment, now)
        ]
        for invoice_id in expired:
            await self.remove(invoice_id)
        if expired:
            logger.info(f"Pruned {len(expired)} abandoned payment(s)")
        return len(expired)

    @contextlib.asynccontextmanager
    async def lock(self, invoice_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(invoice_id, asyncio.Lock())
        self._lock_users[invoice_id] = self._lock_users.get(invoice_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            # a lock lives only while some request holds or awaits it
            self._lock_users[invoice_id] -= 1
            if not self._lock_users[invoice_id]:
                del self._lock_users[invoice_id]
                del self._locks[invoice_id]
