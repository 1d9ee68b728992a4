import logging
from typing import Annotated
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from pydantic import EmailStr

from src.config.settings import settings
from src.events.dependencies import (
    get_event_read_model,
    get_invoice_issuer,
    get_payment_store,
    get_rsvp_write_model,
)
from src.events.dtos import EventDTO, EventNotFoundError, RsvpCreate
from src.events.rendering import currency_symbol, templates
from src.events.repository.read_models import EventReadModel
from src.events.repository.write_models import RsvpWriteModel
from src.events.urls import PAYMENT_STATUS_URL, SUBMIT_RSVP_URL
from src.payments.dtos import PendingPayment, UpstreamError
from src.payments.invoice_issuer import InvoiceIssuer
from src.payments.qr import make_qr_data_url
from src.payments.store import PaymentStore

logger = logging.getLogger(__name__)

UNCONFIRMED_PAYMENT_MESSAGE = (
    "Your payment was received but we could not confirm your RSVP. "
    "Please contact the organiser with your invoice."
)

router = APIRouter()


@router.post(SUBMIT_RSVP_URL, response_model=None, status_code=201)
async def submit_rsvp(
    request: Request,
    rsvp_name: Annotated[str, Form(alias="rsvpName", min_length=1)],
    rsvp_email: Annotated[EmailStr, Form(alias="rsvpEmail")],
    event_id: Annotated[int, Form(alias="eventId", gt=0)],
    read_model: EventReadModel = Depends(get_event_read_model),
    write_model: RsvpWriteModel = Depends(get_rsvp_write_model),
    invoice_issuer: InvoiceIssuer = Depends(get_invoice_issuer),
    store: PaymentStore = Depends(get_payment_store),
) -> Response:
    """
    RSVP to an event.

    Free events are confirmed straight away. Priced events answer with a
    Lightning payment page; the RSVP is saved once the invoice is paid.
    """
    rsvp = RsvpCreate(rsvp_name=rsvp_name, rsvp_email=rsvp_email, event_id=event_id)

    event = await read_model.get_event(rsvp.event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")

    if event.is_priced:
        return await _request_payment(request, event, rsvp, invoice_issuer, store)

    try:
        await write_model.add_rsvp(rsvp)
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")

    redirect_url = settings.redirect_url(rsvp_success="true", event_id=rsvp.event_id)
    if redirect_url:
        return RedirectResponse(redirect_url, status_code=303)
    return JSONResponse(
        status_code=201,
        content={
            "message": "RSVP submitted successfully",
            "rsvp": rsvp.model_dump(by_alias=True, mode="json"),
        },
    )


async def _request_payment(
    request: Request,
    event: EventDTO,
    rsvp: RsvpCreate,
    invoice_issuer: InvoiceIssuer,
    store: PaymentStore,
) -> HTMLResponse:
    try:
        invoice = await invoice_issuer.create_invoice(event.price)
    except UpstreamError as e:
        logger.error(f"Could not generate invoice for event {event.id}: {e}")
        raise HTTPException(status_code=500, detail="Could not generate invoice")

    await store.put(
        PendingPayment(
            invoice_id=invoice.invoice_id,
            amount=event.price,
            rsvp=rsvp,
        )
    )

    return templates.TemplateResponse(
        request,
        "payment.html",
        {
            "amount": event.price,
            "currency_symbol": currency_symbol(settings.fiat_currency),
            "payable": invoice.payable,
            "qr_code": make_qr_data_url(invoice.payable),
            "status_url": PAYMENT_STATUS_URL.format(invoice_id=quote(invoice.invoice_id, safe="")),
            "success_url": settings.redirect_url(rsvp_success="true", event_id=event.id),
            "unconfirmed_message": UNCONFIRMED_PAYMENT_MESSAGE,
        },
    )
