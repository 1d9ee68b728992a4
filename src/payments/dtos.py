from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.events.dtos import RsvpCreate


class UpstreamError(Exception):
    """A third-party service needed to take a payment did not answer usefully."""


class RateUnavailableError(UpstreamError):
    pass


class InvoiceCreationFailedError(UpstreamError):
    pass


class QuoteFailedError(UpstreamError):
    pass


@dataclass(frozen=True)
class Invoice:
    invoice_id: str
    # Wallet-scannable payment request (BOLT11), rendered as a QR code
    payable: str


@dataclass(frozen=True)
class PendingPayment:
    """An RSVP waiting for its Lightning invoice to be settled."""

    invoice_id: str
    amount: float
    rsvp: RsvpCreate
    paid: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class PaymentStatus:
    paid: bool
    # True only on the poll that wrote the RSVP to the database
    confirmed: bool = False
