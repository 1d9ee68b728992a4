from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.events.dependencies import get_payment_poller
from src.events.urls import PAYMENT_STATUS_URL
from src.payments.poller import PaymentStatusPoller

router = APIRouter()


class PaymentStatusResponse(BaseModel):
    paid: bool
    confirmed: bool = False


@router.get(PAYMENT_STATUS_URL, response_model=PaymentStatusResponse)
async def payment_status(
    invoice_id: str,
    poller: PaymentStatusPoller = Depends(get_payment_poller),
) -> PaymentStatusResponse:
    """
    Check a pending RSVP payment.

    Unknown or expired invoices report `paid: false`. Once settlement is
    detected, the following check saves the RSVP and reports `confirmed: true`.
    """
    status = await poller.poll(invoice_id)
    return PaymentStatusResponse(paid=status.paid, confirmed=status.confirmed)
