from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.events.dependencies import get_event_read_model
from src.events.dtos import EventDTO
from src.events.repository.read_models import EventReadModel
from src.events.urls import LIST_EVENTS_URL

router = APIRouter()


class EventResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    event_title: str
    event_description: str
    event_date: str
    event_start_time: str
    event_end_time: str
    event_price: float
    event_location: str
    created_at: datetime | None = None

    @classmethod
    def from_dto(cls, event: EventDTO) -> "EventResponse":
        return cls(
            id=event.id,
            event_title=event.title,
            event_description=event.description,
            event_date=event.date,
            event_start_time=event.start_time,
            event_end_time=event.end_time,
            event_price=event.price,
            event_location=event.location,
            created_at=event.created_at,
        )


@router.get(LIST_EVENTS_URL, response_model=list[EventResponse])
async def list_events(
    read_model: EventReadModel = Depends(get_event_read_model),
) -> list[EventResponse]:
    """Latest events, most recent date first."""
    events = await read_model.get_latest_events()
    return [EventResponse.from_dto(event) for event in events]
