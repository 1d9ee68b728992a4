from src.events.dependencies import get_event_read_model
from src.events.tests.inmemory_models import (
    InMemoryEventReadModel,
    InMemoryEventStore,
    make_event,
)
from src.events.urls import LIST_EVENTS_URL


async def test_list_events_uses_camel_case_fields(client_factory):
    store = InMemoryEventStore([make_event(1, price=12.5)])
    overrides = {get_event_read_model: lambda: InMemoryEventReadModel(store)}

    async with client_factory(overrides) as client:
        response = await client.get(LIST_EVENTS_URL)

    assert response.status_code == 200
    [event] = response.json()
    assert event["id"] == 1
    assert event["eventTitle"] == "Bitcoin Meetup"
    assert event["eventDescription"] == "Monthly meetup"
    assert event["eventDate"] == "2026-11-07"
    assert event["eventStartTime"] == "18:30"
    assert event["eventEndTime"] == "21:00"
    assert event["eventPrice"] == 12.5
    assert event["eventLocation"] == "The Crown, London"
    assert event["createdAt"].startswith("2026-10-01")


async def test_list_events_latest_first(client_factory):
    store = InMemoryEventStore(
        [
            make_event(1, date="2026-11-07"),
            make_event(2, date="2027-01-15"),
            make_event(3, date="2026-12-24"),
        ]
    )
    overrides = {get_event_read_model: lambda: InMemoryEventReadModel(store)}

    async with client_factory(overrides) as client:
        response = await client.get(LIST_EVENTS_URL)

    assert [event["id"] for event in response.json()] == [2, 3, 1]


async def test_list_events_empty(client_factory):
    overrides = {get_event_read_model: lambda: InMemoryEventReadModel(InMemoryEventStore())}

    async with client_factory(overrides) as client:
        response = await client.get(LIST_EVENTS_URL)

    assert response.status_code == 200
    assert response.json() == []


async def test_list_events_from_database(client):
    response = await client.get(LIST_EVENTS_URL)

    assert response.status_code == 200
    assert response.json() == []
