"""
Client-driven payment confirmation.

Each status poll advances a pending payment by at most one step:

    unpaid --(processor reports PAID)--> paid --(next poll)--> committed

Detection and commit happen on separate polls. Committing writes the RSVP
and evicts the pending payment even if the write fails, so a payment is
committed at most once.
"""

import logging

from src.events.repository.write_models import RsvpWriteModel
from src.payments.dtos import PaymentStatus, PendingPayment
from src.payments.invoice_issuer import InvoiceIssuer
from src.payments.store import PaymentStore

logger = logging.getLogger(__name__)


class PaymentStatusPoller:
    def __init__(
        self,
        store: PaymentStore,
        invoice_issuer: InvoiceIssuer,
        rsvp_write_model: RsvpWriteModel,
    ) -> None:
        self._store = store
        self._invoice_issuer = invoice_issuer
        self._rsvp_write_model = rsvp_write_model

    async def poll(self, invoice_id: str) -> PaymentStatus:
        async with self._store.lock(invoice_id):
            payment = await self._store.get(invoice_id)
            if payment is None:
                return PaymentStatus(paid=False)

            if payment.paid:
                confirmed = await self._commit(payment)
                return PaymentStatus(paid=True, confirmed=confirmed)

            if await self._invoice_issuer.is_paid(invoice_id):
                logger.info(f"Invoice {invoice_id} settled")
                await self._store.mark_paid(invoice_id)
                return PaymentStatus(paid=True)

            return PaymentStatus(paid=False)

    async def _commit(self, payment: PendingPayment) -> bool:
        invoice_id = payment.invoice_id
        try:
            await self._rsvp_write_model.add_rsvp(payment.rsvp)
        except Exception:
            logger.exception(f"Error processing RSVP after payment of invoice {invoice_id}")
            return False
        else:
            logger.info(f"RSVP for event {payment.rsvp.event_id} committed after payment")
            return True
        finally:
            await self._store.remove(invoice_id)
