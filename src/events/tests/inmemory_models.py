"""In-memory models for testing - no database required."""

from datetime import UTC, datetime

from src.email_service.base import EmailServiceBase
from src.events.dtos import (
    EventCreate,
    EventDTO,
    EventNotFoundError,
    EventRsvpsDTO,
    RsvpCreate,
    RsvpDTO,
)
from src.events.repository.read_models import EventReadModel
from src.events.repository.write_models import EventWriteModel, RsvpWriteModel
from src.payments.dtos import Invoice, InvoiceCreationFailedError
from src.payments.invoice_issuer import InvoiceIssuer


def make_event(event_id: int = 1, **overrides) -> EventDTO:
    values = {
        "id": event_id,
        "title": "Bitcoin Meetup",
        "description": "Monthly meetup",
        "date": "2026-11-07",
        "start_time": "18:30",
        "end_time": "21:00",
        "price": 0.0,
        "location": "The Crown, London",
        "created_at": datetime(2026, 10, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return EventDTO(**values)


class InMemoryEventStore:
    """Shared state behind the in-memory read and write models."""

    def __init__(self, events: list[EventDTO] | None = None):
        self.events: dict[int, EventDTO] = {event.id: event for event in events or []}
        self.rsvps: list[RsvpDTO] = []


class InMemoryEventReadModel(EventReadModel):
    def __init__(self, store: InMemoryEventStore):
        self._store = store

    async def get_latest_events(self, limit: int = 10) -> list[EventDTO]:
        events = sorted(
            self._store.events.values(),
            key=lambda event: (event.date, event.start_time),
            reverse=True,
        )
        return events[:limit]

    async def get_event(self, event_id: int) -> EventDTO | None:
        return self._store.events.get(event_id)

    async def get_rsvps_by_event(self) -> list[EventRsvpsDTO]:
        events = sorted(self._store.events.values(), key=lambda event: event.date, reverse=True)
        return [
            EventRsvpsDTO(
                event_id=event.id,
                title=event.title,
                date=event.date,
                rsvps=[rsvp for rsvp in reversed(self._store.rsvps) if rsvp.event_id == event.id],
            )
            for event in events
        ]


class InMemoryEventWriteModel(EventWriteModel):
    def __init__(self, store: InMemoryEventStore):
        self._store = store

    async def add_event(self, event: EventCreate) -> EventDTO:
        event_id = max(self._store.events, default=0) + 1
        created = EventDTO(
            id=event_id,
            title=event.event_title,
            description=event.event_description,
            date=event.event_date,
            start_time=event.event_start_time,
            end_time=event.event_end_time,
            price=event.event_price,
            location=event.event_location,
        )
        self._store.events[event_id] = created
        return created

    async def delete_event(self, event_id: int) -> None:
        self._store.events.pop(event_id, None)
        self._store.rsvps = [rsvp for rsvp in self._store.rsvps if rsvp.event_id != event_id]


class InMemoryRsvpWriteModel(RsvpWriteModel):
    def __init__(self, store: InMemoryEventStore, fail: bool = False):
        self._store = store
        self._fail = fail

    async def add_rsvp(self, rsvp: RsvpCreate) -> RsvpDTO:
        if self._fail:
            raise RuntimeError("database unavailable")
        if rsvp.event_id not in self._store.events:
            raise EventNotFoundError(rsvp.event_id)
        created = RsvpDTO(
            id=len(self._store.rsvps) + 1,
            name=rsvp.rsvp_name,
            email=str(rsvp.rsvp_email),
            event_id=rsvp.event_id,
            created_at=datetime.now(UTC),
        )
        self._store.rsvps.append(created)
        return created


class InMemoryInvoiceIssuer(InvoiceIssuer):
    """Issues sequential invoices; `settle` marks one as paid at the processor."""

    def __init__(self, fail: bool = False):
        self._fail = fail
        self.created: list[float] = []
        self.settled: set[str] = set()
        self.status_checks: list[str] = []

    async def create_invoice(self, price: float) -> Invoice:
        if self._fail:
            raise InvoiceCreationFailedError("Invoice ID not found")
        self.created.append(price)
        invoice_id = f"invoice-{len(self.created)}"
        return Invoice(invoice_id=invoice_id, payable=f"lnbc{len(self.created)}test")

    async def is_paid(self, invoice_id: str) -> bool:
        self.status_checks.append(invoice_id)
        return invoice_id in self.settled

    def settle(self, invoice_id: str) -> None:
        self.settled.add(invoice_id)


class InMemoryEmailService(EmailServiceBase):
    """Records emails instead of sending them."""

    def __init__(self, fail: bool = False):
        self._fail = fail
        self.sent_emails: list[dict] = []

    async def send_rsvp_notification(
        self,
        to_addresses: list[str],
        event_title: str,
        event_date: str,
        rsvp_name: str,
        rsvp_email: str,
    ) -> None:
        if self._fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent_emails.append(
            {
                "to_addresses": to_addresses,
                "event_title": event_title,
                "event_date": event_date,
                "rsvp_name": rsvp_name,
                "rsvp_email": rsvp_email,
            }
        )
