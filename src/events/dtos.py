from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from src.events.repository.orm_models import Event, Rsvp

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"


class EventNotFoundError(Exception):
    """Raised when an RSVP or lookup references an event that does not exist."""

    def __init__(self, event_id: int) -> None:
        self.event_id = event_id
        super().__init__(f"Event {event_id} not found")


class EventCreate(BaseModel):
    """Validated payload for a new event."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    event_title: str = Field(min_length=1)
    event_description: str = ""
    event_date: str = Field(pattern=DATE_PATTERN)
    event_start_time: str = Field(pattern=TIME_PATTERN)
    event_end_time: str = Field(pattern=TIME_PATTERN)
    event_price: float = Field(ge=0)
    event_location: str = Field(min_length=1)

    @field_validator("event_date")
    @classmethod
    def date_exists(cls, value: str) -> str:
        """Reject well-formed dates that are not on the calendar, like 2026-02-30."""
        date.fromisoformat(value)
        return value


class RsvpCreate(BaseModel):
    """Validated payload for a new RSVP."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rsvp_name: str = Field(min_length=1)
    rsvp_email: EmailStr
    event_id: int = Field(gt=0)


@dataclass(frozen=True)
class EventDTO:
    id: int
    title: str
    description: str
    date: str
    start_time: str
    end_time: str
    price: float
    location: str
    created_at: datetime | None = None

    @property
    def is_priced(self) -> bool:
        return self.price > 0

    @classmethod
    def from_orm(cls, event: "Event") -> "EventDTO":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            date=event.date,
            start_time=event.start_time,
            end_time=event.end_time,
            price=event.price,
            location=event.location,
            created_at=event.created_at,
        )


@dataclass(frozen=True)
class RsvpDTO:
    id: int
    name: str
    email: str
    event_id: int
    created_at: datetime | None = None

    @classmethod
    def from_orm(cls, rsvp: "Rsvp") -> "RsvpDTO":
        return cls(
            id=rsvp.id,
            name=rsvp.name,
            email=rsvp.email,
            event_id=rsvp.event_id,
            created_at=rsvp.created_at,
        )


@dataclass(frozen=True)
class EventRsvpsDTO:
    """An event together with the RSVPs it has received, newest first."""

    event_id: int
    title: str
    date: str
    rsvps: list[RsvpDTO] = field(default_factory=list)
