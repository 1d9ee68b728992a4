"""Dependency providers shared by the event features. Override in tests."""

from fastapi import Depends, Request

from src.config.settings import settings
from src.email_service import get_email_service
from src.events.repository.read_models import EventReadModel, SqlEventReadModel
from src.events.repository.write_models import (
    EventWriteModel,
    RsvpWriteModel,
    SqlEventWriteModel,
    SqlRsvpWriteModel,
)
from src.payments.invoice_issuer import InvoiceIssuer, StrikeInvoiceIssuer
from src.payments.poller import PaymentStatusPoller
from src.payments.store import PaymentStore


def get_event_read_model() -> EventReadModel:
    return SqlEventReadModel()


def get_event_write_model() -> EventWriteModel:
    return SqlEventWriteModel()


def get_rsvp_write_model() -> RsvpWriteModel:
    return SqlRsvpWriteModel(
        email_service=get_email_service(),
        admin_email_receivers=settings.admin_email_receivers,
    )


def get_invoice_issuer() -> InvoiceIssuer:
    return StrikeInvoiceIssuer(config=settings)


def get_payment_store(request: Request) -> PaymentStore:
    """The process-wide store created at application startup."""
    return request.app.state.payment_store


def get_payment_poller(
    store: PaymentStore = Depends(get_payment_store),
    invoice_issuer: InvoiceIssuer = Depends(get_invoice_issuer),
    rsvp_write_model: RsvpWriteModel = Depends(get_rsvp_write_model),
) -> PaymentStatusPoller:
    return PaymentStatusPoller(
        store=store,
        invoice_issuer=invoice_issuer,
        rsvp_write_model=rsvp_write_model,
    )
