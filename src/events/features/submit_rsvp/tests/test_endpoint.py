import pytest

from src.config.settings import settings
from src.events.dependencies import (
    get_event_read_model,
    get_invoice_issuer,
    get_rsvp_write_model,
)
from src.events.tests.inmemory_models import (
    InMemoryEventReadModel,
    InMemoryEventStore,
    InMemoryInvoiceIssuer,
    InMemoryRsvpWriteModel,
    make_event,
)
from src.events.features.submit_rsvp.router import UNCONFIRMED_PAYMENT_MESSAGE
from src.events.urls import PAYMENT_STATUS_URL, SUBMIT_RSVP_URL
from src.main import app

FREE_EVENT_ID = 3
PRICED_EVENT_ID = 4


@pytest.fixture
def event_store() -> InMemoryEventStore:
    return InMemoryEventStore(
        [
            make_event(FREE_EVENT_ID, price=0),
            make_event(PRICED_EVENT_ID, title="Paid Workshop", price=12.5),
        ]
    )


@pytest.fixture
def issuer() -> InMemoryInvoiceIssuer:
    return InMemoryInvoiceIssuer()


@pytest.fixture
def overrides(event_store, issuer) -> dict:
    return {
        get_event_read_model: lambda: InMemoryEventReadModel(event_store),
        get_rsvp_write_model: lambda: InMemoryRsvpWriteModel(event_store),
        get_invoice_issuer: lambda: issuer,
    }


def rsvp_form(event_id: int, **overrides) -> dict:
    form = {"rsvpName": "Ada Lovelace", "rsvpEmail": "ada@example.com", "eventId": str(event_id)}
    form.update(overrides)
    return form


async def test_free_event_rsvp_is_saved(client_factory, overrides, event_store):
    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=rsvp_form(FREE_EVENT_ID))

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "RSVP submitted successfully"
    assert data["rsvp"] == {
        "rsvpName": "Ada Lovelace",
        "rsvpEmail": "ada@example.com",
        "eventId": FREE_EVENT_ID,
    }
    assert len(event_store.rsvps) == 1
    assert len(app.state.payment_store) == 0
    assert event_store.rsvps[0].event_id == FREE_EVENT_ID


async def test_free_event_rsvp_redirects_to_frontend(
    client_factory, overrides, event_store, monkeypatch
):
    monkeypatch.setattr(settings, "frontend_url", "https://events.example.com/")

    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=rsvp_form(FREE_EVENT_ID))

    assert response.status_code == 303
    assert response.headers["location"] == (
        f"https://events.example.com/?rsvp-success=true&event-id={FREE_EVENT_ID}"
    )
    assert len(event_store.rsvps) == 1
    assert len(app.state.payment_store) == 0


async def test_priced_event_returns_payment_page(client_factory, overrides, event_store, issuer):
    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=rsvp_form(PRICED_EVENT_ID))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Payment Required" in response.text
    assert "£12.50" in response.text
    assert "lnbc1test" in response.text
    assert "data:image/png;base64," in response.text
    assert "/payment-status/invoice-1" in response.text
    assert UNCONFIRMED_PAYMENT_MESSAGE in response.text
    assert issuer.created == [12.5]
    assert event_store.rsvps == []

    payment = await app.state.payment_store.get("invoice-1")
    assert payment.paid is False
    assert payment.amount == 12.5
    assert payment.rsvp.event_id == PRICED_EVENT_ID


async def test_priced_event_paid_flow_saves_rsvp_once(
    client_factory, overrides, event_store, issuer
):
    status_url = PAYMENT_STATUS_URL.format(invoice_id="invoice-1")

    async with client_factory(overrides) as client:
        await client.post(SUBMIT_RSVP_URL, data=rsvp_form(PRICED_EVENT_ID))

        before = await client.get(status_url)
        assert before.json()["paid"] is False

        issuer.settle("invoice-1")
        detected = await client.get(status_url)
        committed = await client.get(status_url)

    assert detected.json() == {"paid": True, "confirmed": False}
    assert committed.json() == {"paid": True, "confirmed": True}
    assert len(event_store.rsvps) == 1
    assert event_store.rsvps[0].event_id == PRICED_EVENT_ID
    assert "invoice-1" not in app.state.payment_store


async def test_invoice_failure_returns_500(client_factory, overrides, event_store):
    overrides[get_invoice_issuer] = lambda: InMemoryInvoiceIssuer(fail=True)

    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=rsvp_form(PRICED_EVENT_ID))

    assert response.status_code == 500
    assert response.json()["detail"] == "Could not generate invoice"
    assert len(app.state.payment_store) == 0
    assert event_store.rsvps == []


async def test_unknown_event_returns_404(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=rsvp_form(99))

    assert response.status_code == 404
    assert response.json()["detail"] == "Event not found"


@pytest.mark.parametrize(
    "form",
    [
        rsvp_form(FREE_EVENT_ID, rsvpName=""),
        rsvp_form(FREE_EVENT_ID, rsvpEmail="not-an-email"),
        rsvp_form(FREE_EVENT_ID, eventId="0"),
        rsvp_form(FREE_EVENT_ID, eventId="abc"),
        {"rsvpName": "Ada Lovelace", "eventId": str(FREE_EVENT_ID)},
    ],
)
async def test_invalid_input_returns_400(client_factory, overrides, event_store, form):
    async with client_factory(overrides) as client:
        response = await client.post(SUBMIT_RSVP_URL, data=form)

    assert response.status_code == 400
    assert event_store.rsvps == []
